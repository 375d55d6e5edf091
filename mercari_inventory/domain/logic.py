"""
logic.py - 핵심 가격 계산 로직

DDD 원칙: 외부 의존성 없는 순수 파이썬 코드
- 입력(원가, 설정)만으로 결과가 결정됨
- 설정(Settings)은 항상 인자로 전달, 전역 상태 없음
- 검증/로깅 없음. 검증은 입력 경계(서비스)의 책임

재고 판매가:
    ((원가CNY x 환율) + 국제배송비 + 국내배송비 + 목표이익) / (1 - 수수료율), 올림
주문 환산 원가:
    (원가CNY x 환율) + 정액 배송비(1000엔), 올림
"""

import math

from .models import Settings, generate_id
from ..core.config import DEFAULT_ORDER_SHIPPING

__all__ = [
    "calculate_selling_price",
    "calculate_converted_with_shipping",
    "calculate_profit",
    "generate_id",
]


def calculate_selling_price(cost_cny: float, settings: Settings) -> int:
    """재고 판매가 (엔)

    원가 회수선 아래로 내려가지 않도록 항상 올림 처리.
    platform_fee_rate >= 1 인 설정은 호출 전에 걸러져야 함.
    """
    base_cost = cost_cny * settings.exchange_rate
    total_cost = (
        base_cost +
        settings.international_shipping +
        settings.domestic_shipping +
        settings.target_profit
    )
    selling_price = total_cost / (1 - settings.platform_fee_rate)
    return math.ceil(selling_price)


def calculate_converted_with_shipping(
    cost_cny: float,
    exchange_rate: float,
    shipping: int = DEFAULT_ORDER_SHIPPING,
) -> int:
    """주문 환산 원가 + 배송비 (엔)

    주문은 정액 배송비 모델. 재고의 국제+국내 배송비 합과 통합하지 말 것.
    """
    return math.ceil(cost_cny * exchange_rate + shipping)


def calculate_profit(actual_payment: int, converted_with_shipping: int) -> int:
    """실제 입금액 - 환산 원가 (음수 가능)"""
    return actual_payment - converted_with_shipping
