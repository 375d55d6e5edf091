"""
models.py - 도메인 모델

순수 파이썬 데이터 클래스. 외부 의존성 없음.
저장소(JSON/Supabase)가 바뀌어도 이 파일은 그대로 사용 가능.
필드명은 저장소 테이블 컬럼명(snake_case)과 동일.
"""

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, List, Optional


def generate_id() -> str:
    """새 레코드 ID (128비트 랜덤 UUID4 문자열)"""
    return str(uuid.uuid4())


def _to_int(value: Any, default: int = 0) -> int:
    """NUMERIC 컬럼 값(문자열/실수 포함)을 정수로 변환"""
    if value is None or value == "":
        return default
    return int(float(value))


def _to_float(value: Any, default: float = 0.0) -> float:
    if value is None or value == "":
        return default
    return float(value)


@dataclass(frozen=True)
class Settings:
    """전역 가격 설정 (모든 점포 공용)

    계산 함수에는 항상 이 값이 인자로 전달됨. 변경은 새 인스턴스 생성으로만.
    """
    exchange_rate: float = 23               # CNY → JPY 환율
    international_shipping: int = 1000      # 국제 배송비 (엔)
    domestic_shipping: int = 1000           # 일본 국내 배송비 (엔)
    target_profit: int = 6000               # 목표 순이익 (엔)
    platform_fee_rate: float = 0.22         # 메르카리 수수료율 (0.22 = 22%)

    def merged(self, **changes) -> "Settings":
        """일부 필드만 바꾼 새 설정 반환 (None 값은 무시)"""
        changes = {k: v for k, v in changes.items() if v is not None}
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "exchange_rate": self.exchange_rate,
            "international_shipping": self.international_shipping,
            "domestic_shipping": self.domestic_shipping,
            "target_profit": self.target_profit,
            "platform_fee_rate": self.platform_fee_rate,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        defaults = cls()
        return cls(
            exchange_rate=_to_float(data.get("exchange_rate"), defaults.exchange_rate),
            international_shipping=_to_int(data.get("international_shipping"), defaults.international_shipping),
            domestic_shipping=_to_int(data.get("domestic_shipping"), defaults.domestic_shipping),
            target_profit=_to_int(data.get("target_profit"), defaults.target_profit),
            platform_fee_rate=_to_float(data.get("platform_fee_rate"), defaults.platform_fee_rate),
        )


DEFAULT_SETTINGS = Settings()


@dataclass
class InventoryItem:
    """재고 상품 (변형 단위: 색상/사이즈별 1행)"""
    id: str = field(default_factory=generate_id)
    store_id: str = ""
    photo: str = ""                     # 이미지 참조 (비어있을 수 있음)
    product_name: str = ""
    color: str = ""
    size: str = ""
    quantity: int = 1
    cost_price_cny: float = 0.0         # 원가 (위안)
    selling_price_jpy: int = 0          # 판매가 (엔) - 파생 필드

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "store_id": self.store_id,
            "photo": self.photo,
            "product_name": self.product_name,
            "color": self.color,
            "size": self.size,
            "quantity": self.quantity,
            "cost_price_cny": self.cost_price_cny,
            "selling_price_jpy": self.selling_price_jpy,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InventoryItem":
        return cls(
            id=data.get("id") or generate_id(),
            store_id=data.get("store_id", ""),
            photo=data.get("photo") or "",
            product_name=data.get("product_name", ""),
            color=data.get("color") or "",
            size=data.get("size") or "",
            quantity=_to_int(data.get("quantity"), 1),
            cost_price_cny=_to_float(data.get("cost_price_cny")),
            selling_price_jpy=_to_int(data.get("selling_price_jpy")),
        )


@dataclass
class OrderItem:
    """판매 완료 주문"""
    id: str = field(default_factory=generate_id)
    store_id: str = ""
    photo: str = ""
    product_name: str = ""
    color: str = ""
    size: str = ""
    cost_price_cny: float = 0.0         # 원가 (위안)
    actual_payment: int = 0             # 실제 입금액 (엔)
    converted_with_shipping: int = 0    # 환산 원가 + 배송비 (엔) - 파생 필드
    profit: int = 0                     # 이익 (엔, 음수 가능) - 파생 필드
    created_at: str = field(default_factory=lambda: datetime.now().isoformat())
    completed_at: Optional[str] = None  # 미지정 시 created_at

    def __post_init__(self):
        if not self.completed_at:
            self.completed_at = self.created_at

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "store_id": self.store_id,
            "photo": self.photo,
            "product_name": self.product_name,
            "color": self.color,
            "size": self.size,
            "cost_price_cny": self.cost_price_cny,
            "actual_payment": self.actual_payment,
            "converted_with_shipping": self.converted_with_shipping,
            "profit": self.profit,
            "created_at": self.created_at,
            "completed_at": self.completed_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OrderItem":
        created_at = data.get("created_at") or datetime.now().isoformat()
        return cls(
            id=data.get("id") or generate_id(),
            store_id=data.get("store_id", ""),
            photo=data.get("photo") or "",
            product_name=data.get("product_name", ""),
            color=data.get("color") or "",
            size=data.get("size") or "",
            cost_price_cny=_to_float(data.get("cost_price_cny")),
            actual_payment=_to_int(data.get("actual_payment")),
            converted_with_shipping=_to_int(data.get("converted_with_shipping")),
            profit=_to_int(data.get("profit")),
            created_at=created_at,
            completed_at=data.get("completed_at") or created_at,
        )


@dataclass
class Store:
    """점포 - 재고와 주문을 소유 (삭제 시 함께 삭제)"""
    id: str = field(default_factory=generate_id)
    name: str = ""
    inventory: List[InventoryItem] = field(default_factory=list)
    orders: List[OrderItem] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """점포 행 (하위 컬렉션 제외)"""
        return {
            "id": self.id,
            "name": self.name,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Store":
        return cls(
            id=data.get("id") or generate_id(),
            name=data.get("name", ""),
        )


@dataclass
class RecalculationReport:
    """가격 일괄 재계산 결과"""
    inventory_checked: int = 0
    inventory_updated: int = 0
    orders_checked: int = 0
    orders_updated: int = 0
    interrupted: bool = False

    @property
    def total_updated(self) -> int:
        return self.inventory_updated + self.orders_updated


@dataclass
class InventorySummary:
    """재고 요약"""
    product_kinds: int = 0              # 상품 종류 수
    total_quantity: int = 0             # 총 재고 수량
    total_cost_cny: float = 0.0         # 총 원가 (위안, 원가 x 수량)


@dataclass
class MonthlyOrderSummary:
    """월별 주문 요약"""
    year: int
    month: int
    order_count: int = 0
    total_revenue: int = 0              # 실제 입금액 합계
    total_cost: int = 0                 # 환산 원가 합계
    total_profit: int = 0               # 이익 합계
