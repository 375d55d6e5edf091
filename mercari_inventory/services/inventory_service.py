"""
inventory_service.py - 점포/재고/주문 애플리케이션 서비스

입력 검증 → 파생 필드 계산 → 저장 순서로 처리.
서비스는 레코드를 캐시하지 않으며 저장 실패 시 아무것도 바뀌지 않음.
설정은 호출 시점에 저장소에서 읽은 스냅샷을 사용하고 직접 바꾸지 않음
(update_settings 제외).
"""

import logging
import threading
from dataclasses import fields
from datetime import datetime
from typing import List, Optional

from ..core.config import DEFAULT_STORE_NAME
from ..core.exceptions import InvalidSettingsError, NotFoundError
from ..core.logging import PerformanceLogger
from ..domain.models import (
    InventoryItem,
    OrderItem,
    RecalculationReport,
    Settings,
    Store,
)
from ..domain.recalculation import (
    apply_inventory_update,
    apply_order_update,
    inventory_needs_update,
    order_needs_update,
    reprice_inventory_item,
    reprice_order,
)
from ..domain.reporting import MAX_ORDER_YEAR, MIN_ORDER_YEAR, default_order_date
from ..repository.base import InventoryRepository
from ..utils.validators import (
    DataValidator,
    require_valid_item,
    require_valid_settings,
    validate_inventory_input,
    validate_order_input,
)

SETTINGS_FIELDS = frozenset(f.name for f in fields(Settings))


class InventoryService:
    """점포/재고/주문 관리 서비스"""

    def __init__(
        self,
        repository: InventoryRepository,
        logger: Optional[logging.Logger] = None,
        default_store_name: str = DEFAULT_STORE_NAME,
    ):
        """
        Args:
            repository: 저장소 (JSON 또는 Supabase)
            logger: 로거. None이면 모듈 로거 사용
            default_store_name: 점포가 하나도 없을 때 생성할 점포명
        """
        self.repository = repository
        self.logger = logger or logging.getLogger(__name__)
        self.perf = PerformanceLogger(self.logger)
        self.default_store_name = default_store_name

    # ========== 설정 ==========

    def get_settings(self) -> Settings:
        """현재 전역 설정 스냅샷"""
        return self.repository.get_settings()

    def update_settings(self, recalculate: bool = False, **changes) -> Settings:
        """설정 일부 변경

        Args:
            recalculate: True면 저장 후 전체 가격 재계산
            **changes: exchange_rate, international_shipping, domestic_shipping,
                target_profit, platform_fee_rate 중 변경할 값

        Raises:
            InvalidSettingsError: 알 수 없는 필드 또는 유효하지 않은 값
        """
        unknown = set(changes) - SETTINGS_FIELDS
        if unknown:
            name = sorted(unknown)[0]
            raise InvalidSettingsError(f"알 수 없는 설정 항목입니다: {name}", field=name)

        new_settings = self.get_settings().merged(**changes)
        require_valid_settings(new_settings)

        saved = self.repository.save_settings(new_settings)
        self.logger.info(f"설정 변경: {changes}")

        if recalculate:
            self.recalculate_all_prices()
        return saved

    # ========== 점포 ==========

    def list_stores(self) -> List[Store]:
        """점포 목록 (재고/주문 포함)"""
        return self.repository.load_all_stores()

    def get_store(self, store_id: str) -> Store:
        """재고/주문을 포함한 점포"""
        store = self.repository.load_store(store_id)
        if store is None:
            raise NotFoundError(f"점포를 찾을 수 없습니다: {store_id}", entity="store", entity_id=store_id)
        return store

    def ensure_default_store(self) -> Store:
        """점포가 하나도 없으면 기본 점포 생성, 있으면 첫 번째 점포 반환"""
        stores = self.repository.get_stores()
        if stores:
            return stores[0]
        self.logger.info(f"기본 점포 생성: {self.default_store_name}")
        return self.repository.add_store(Store(name=self.default_store_name))

    def add_store(self, name: str) -> Store:
        """점포 추가"""
        self._require_store_name(name)
        store = self.repository.add_store(Store(name=name.strip()))
        self.logger.info(f"점포 추가: {store.name} ({store.id})")
        return store

    def rename_store(self, store_id: str, name: str) -> Store:
        """점포명 변경"""
        self._require_store_name(name)
        store = self._find_store(store_id)
        store.name = name.strip()
        return self.repository.update_store(store)

    def delete_store(self, store_id: str) -> bool:
        """점포 삭제 (재고/주문 함께 삭제)"""
        deleted = self.repository.delete_store(store_id)
        if deleted:
            self.logger.info(f"점포 삭제: {store_id}")
        return deleted

    def _find_store(self, store_id: str) -> Store:
        store = self.repository.get_store_by_id(store_id)
        if store is None:
            raise NotFoundError(f"점포를 찾을 수 없습니다: {store_id}", entity="store", entity_id=store_id)
        return store

    @staticmethod
    def _require_store_name(name: str):
        result = DataValidator.required(name, "name")
        require_valid_item(result, {"name": name})

    # ========== 재고 ==========

    def add_inventory_item(
        self,
        store_id: str,
        product_name: str,
        cost_price_cny: float,
        quantity: int = 1,
        color: str = "",
        size: str = "",
        photo: str = "",
    ) -> InventoryItem:
        """재고 추가 (판매가는 현재 설정으로 계산)

        Raises:
            InvalidItemInputError: 상품명 누락, 원가 <= 0, 수량 < 1
            NotFoundError: 점포 없음
        """
        data = {
            "product_name": product_name,
            "cost_price_cny": cost_price_cny,
            "quantity": quantity,
            "color": color,
            "size": size,
            "photo": photo,
        }
        require_valid_item(validate_inventory_input(data, creating=True), data)
        self._find_store(store_id)

        settings = require_valid_settings(self.get_settings())
        item = reprice_inventory_item(
            InventoryItem(
                store_id=store_id,
                photo=photo,
                product_name=product_name.strip(),
                color=color,
                size=size,
                quantity=int(quantity),
                cost_price_cny=cost_price_cny,
            ),
            settings,
        )
        saved = self.repository.add_inventory_item(item)
        self.logger.info(f"재고 추가: {saved.product_name} ({saved.selling_price_jpy:,}円)")
        return saved

    def update_inventory_item(self, item_id: str, **updates) -> InventoryItem:
        """재고 부분 수정. 원가 변경 시 판매가 재계산"""
        require_valid_item(validate_inventory_input(updates, creating=False), updates)

        item = self.repository.get_inventory_item_by_id(item_id)
        if item is None:
            raise NotFoundError(f"재고를 찾을 수 없습니다: {item_id}", entity="inventory_item", entity_id=item_id)

        settings = require_valid_settings(self.get_settings())
        updated = apply_inventory_update(item, updates, settings)
        saved = self.repository.update_inventory_item(updated)
        self.logger.debug(f"재고 수정: {item_id} {sorted(updates)}")
        return saved

    def delete_inventory_item(self, item_id: str) -> bool:
        """재고 삭제"""
        return self.repository.delete_inventory_item(item_id)

    # ========== 주문 ==========

    def add_order(
        self,
        store_id: str,
        product_name: str,
        cost_price_cny: float,
        actual_payment: int,
        color: str = "",
        size: str = "",
        photo: str = "",
        created_at: Optional[str] = None,
        completed_at: Optional[str] = None,
        year: Optional[int] = None,
        month: Optional[int] = None,
    ) -> OrderItem:
        """주문 추가

        주문일: created_at → (year, month)의 15일 → 현재 시각 순으로 결정.
        완료일 미지정 시 주문일과 동일.
        """
        data = {
            "product_name": product_name,
            "cost_price_cny": cost_price_cny,
            "actual_payment": actual_payment,
            "color": color,
            "size": size,
            "photo": photo,
            "created_at": created_at,
            "completed_at": completed_at,
        }
        result = validate_order_input(data, creating=True)
        if created_at is None and (year is not None or month is not None):
            if not isinstance(year, int) or not (MIN_ORDER_YEAR <= year <= MAX_ORDER_YEAR):
                result.add_error("year", "주문 연도가 올바르지 않습니다.")
            if not isinstance(month, int) or not (1 <= month <= 12):
                result.add_error("month", "주문 월이 올바르지 않습니다.")
        require_valid_item(result, {**data, "year": year, "month": month})
        self._find_store(store_id)

        if created_at:
            order_date = created_at
        elif year is not None and month is not None:
            order_date = default_order_date(year, month)
        else:
            order_date = datetime.now().isoformat()

        settings = require_valid_settings(self.get_settings())
        order = reprice_order(
            OrderItem(
                store_id=store_id,
                photo=photo,
                product_name=product_name.strip(),
                color=color,
                size=size,
                cost_price_cny=cost_price_cny,
                actual_payment=int(actual_payment),
                created_at=order_date,
                completed_at=completed_at or order_date,
            ),
            settings,
        )
        saved = self.repository.add_order(order)
        self.logger.info(f"주문 추가: {saved.product_name} (이익 {saved.profit:,}円)")
        return saved

    def update_order(self, order_id: str, **updates) -> OrderItem:
        """주문 부분 수정. 원가/입금액 변경 시에만 환산 원가와 이익 재계산"""
        require_valid_item(validate_order_input(updates, creating=False), updates)

        order = self.repository.get_order_by_id(order_id)
        if order is None:
            raise NotFoundError(f"주문을 찾을 수 없습니다: {order_id}", entity="order_item", entity_id=order_id)

        settings = require_valid_settings(self.get_settings())
        updated = apply_order_update(order, updates, settings)
        saved = self.repository.update_order(updated)
        self.logger.debug(f"주문 수정: {order_id} {sorted(updates)}")
        return saved

    def delete_order(self, order_id: str) -> bool:
        """주문 삭제"""
        return self.repository.delete_order(order_id)

    # ========== 재계산 ==========

    def recalculate_all_prices(
        self,
        cancel_event: Optional[threading.Event] = None,
    ) -> RecalculationReport:
        """전 점포의 재고 판매가와 주문 환산 원가/이익을 현재 설정으로 재계산

        파생 필드가 실제로 바뀐 레코드의 파생 컬럼만 저장하므로 재계산 중 수정된
        이름, 색상 등은 덮어쓰지 않음. 항목별 저장은 독립적이므로
        cancel_event가 설정되면 다음 항목 전에 중단해도 일관성이 유지됨.
        """
        settings = require_valid_settings(self.get_settings())
        report = RecalculationReport()
        stores = self.repository.load_all_stores()

        with self.perf.track("가격 일괄 재계산", stores=len(stores)):
            for store in stores:
                for item in store.inventory:
                    if cancel_event is not None and cancel_event.is_set():
                        report.interrupted = True
                        break
                    report.inventory_checked += 1
                    if inventory_needs_update(item, settings):
                        repriced = reprice_inventory_item(item, settings)
                        self.repository.update_inventory_price(item.id, repriced.selling_price_jpy)
                        report.inventory_updated += 1
                    else:
                        self.logger.debug(f"변경 없음: {item.id}")

                for order in store.orders:
                    if cancel_event is not None and cancel_event.is_set():
                        report.interrupted = True
                        break
                    report.orders_checked += 1
                    if order_needs_update(order, settings):
                        repriced = reprice_order(order, settings)
                        self.repository.update_order_amounts(
                            order.id, repriced.converted_with_shipping, repriced.profit
                        )
                        report.orders_updated += 1
                    else:
                        self.logger.debug(f"변경 없음: {order.id}")

                if report.interrupted:
                    self.logger.warning("가격 재계산이 중단되었습니다.")
                    break

        self.logger.info(
            f"재계산 결과: 재고 {report.inventory_updated}/{report.inventory_checked}, "
            f"주문 {report.orders_updated}/{report.orders_checked}"
        )
        return report
