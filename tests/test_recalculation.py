"""
test_recalculation.py - 파생 필드 재계산 규칙 테스트

- 원가 변경 → 판매가 재계산
- 원가/입금액 변경 → 환산 원가와 이익 재계산
- 그 외 필드 변경은 파생 필드 유지
- 전체 재계산 멱등성
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from mercari_inventory.domain.models import DEFAULT_SETTINGS, InventoryItem, OrderItem, Store
from mercari_inventory.domain.recalculation import (
    apply_inventory_update,
    apply_order_update,
    inventory_needs_update,
    order_needs_update,
    recalculate_store,
    recalculate_stores,
    reprice_inventory_item,
    reprice_order,
)


def make_item(cost=100, **kwargs):
    return reprice_inventory_item(
        InventoryItem(store_id="s1", product_name="ワンピース", color="黒", size="M", cost_price_cny=cost, **kwargs),
        DEFAULT_SETTINGS,
    )


def make_order(cost=50, payment=3000, **kwargs):
    return reprice_order(
        OrderItem(
            store_id="s1",
            product_name="バッグ",
            color="白",
            size="F",
            cost_price_cny=cost,
            actual_payment=payment,
            created_at="2026-01-15T00:00:00",
            **kwargs,
        ),
        DEFAULT_SETTINGS,
    )


class TestReprice:
    """단건 재계산 테스트"""

    def test_reprice_inventory(self):
        """판매가 계산"""
        assert make_item().selling_price_jpy == 13206

    def test_reprice_order(self):
        """환산 원가와 이익 함께 계산"""
        order = make_order()
        assert order.converted_with_shipping == 2150
        assert order.profit == 850

    def test_reprice_returns_new_object(self):
        """입력 레코드는 변경하지 않음"""
        item = InventoryItem(cost_price_cny=100)
        repriced = reprice_inventory_item(item, DEFAULT_SETTINGS)
        assert item.selling_price_jpy == 0
        assert repriced is not item


class TestInventoryUpdate:
    """재고 부분 수정 테스트"""

    def test_cost_change_reprices(self):
        """원가 변경 시 판매가 재계산"""
        item = make_item()
        updated = apply_inventory_update(item, {"cost_price_cny": 50}, DEFAULT_SETTINGS)
        # (1150 + 8000) / 0.78 = 11730.7...
        assert updated.selling_price_jpy == 11731

    def test_non_price_fields_keep_price(self):
        """이름/색상/사이즈/수량 변경은 판매가 유지"""
        item = make_item()
        stale = DEFAULT_SETTINGS.merged(exchange_rate=30)
        updated = apply_inventory_update(
            item,
            {"product_name": "スカート", "color": "赤", "size": "L", "quantity": 5},
            stale,
        )
        assert updated.selling_price_jpy == item.selling_price_jpy
        assert updated.product_name == "スカート"
        assert updated.quantity == 5

    def test_cost_change_uses_current_settings(self):
        """원가 변경 시 전달된 설정으로 계산"""
        item = make_item()
        settings = DEFAULT_SETTINGS.merged(exchange_rate=25)
        updated = apply_inventory_update(item, {"cost_price_cny": 100}, settings)
        assert updated.selling_price_jpy == 13462

    def test_derived_field_ignored(self):
        """판매가 직접 설정은 무시"""
        item = make_item()
        updated = apply_inventory_update(item, {"selling_price_jpy": 1}, DEFAULT_SETTINGS)
        assert updated.selling_price_jpy == 13206


class TestOrderUpdate:
    """주문 부분 수정 테스트"""

    def test_payment_change_reprices(self):
        """입금액 변경 시 이익 재계산"""
        order = make_order()
        updated = apply_order_update(order, {"actual_payment": 5000}, DEFAULT_SETTINGS)
        assert updated.converted_with_shipping == 2150
        assert updated.profit == 2850

    def test_cost_change_reprices_both(self):
        """원가 변경 시 환산 원가와 이익 모두 재계산"""
        order = make_order()
        updated = apply_order_update(order, {"cost_price_cny": 100}, DEFAULT_SETTINGS)
        assert updated.converted_with_shipping == 3300
        assert updated.profit == -300

    def test_date_change_keeps_derived(self):
        """주문일 변경은 파생 필드 유지"""
        order = make_order()
        stale = DEFAULT_SETTINGS.merged(exchange_rate=30)
        updated = apply_order_update(order, {"created_at": "2026-02-15T00:00:00"}, stale)
        assert updated.created_at == "2026-02-15T00:00:00"
        assert updated.converted_with_shipping == 2150
        assert updated.profit == 850

    def test_profit_not_settable(self):
        """이익 직접 설정은 무시"""
        order = make_order()
        updated = apply_order_update(order, {"profit": 99999}, DEFAULT_SETTINGS)
        assert updated.profit == 850


class TestRecalculateAll:
    """전체 재계산 테스트"""

    def make_store(self):
        return Store(
            id="s1",
            name="メルカリ店舗1",
            inventory=[make_item(100), make_item(30)],
            orders=[make_order(50, 3000), make_order(10, 1000)],
        )

    def test_exchange_rate_change(self):
        """환율 23 → 25 적용 시 모든 파생 필드 갱신, 나머지 유지"""
        store = self.make_store()
        settings = DEFAULT_SETTINGS.merged(exchange_rate=25)
        result = recalculate_store(store, settings)

        assert result.inventory[0].selling_price_jpy == 13462
        assert result.orders[0].converted_with_shipping == 2250
        assert result.orders[0].profit == 750

        for before, after in zip(store.inventory, result.inventory):
            assert (before.product_name, before.color, before.size) == (after.product_name, after.color, after.size)
        for before, after in zip(store.orders, result.orders):
            assert before.created_at == after.created_at
            assert before.completed_at == after.completed_at

    def test_idempotent(self):
        """두 번 실행해도 결과 동일"""
        settings = DEFAULT_SETTINGS.merged(exchange_rate=21.5, platform_fee_rate=0.1)
        once = recalculate_stores([self.make_store()], settings)
        twice = recalculate_stores(once, settings)
        assert once == twice

    def test_needs_update(self):
        """설정 변경 전후 갱신 필요 여부"""
        item = make_item()
        order = make_order()
        assert not inventory_needs_update(item, DEFAULT_SETTINGS)
        assert not order_needs_update(order, DEFAULT_SETTINGS)

        changed = DEFAULT_SETTINGS.merged(exchange_rate=25)
        assert inventory_needs_update(item, changed)
        assert order_needs_update(order, changed)

    def test_shipping_change_only_affects_inventory(self):
        """배송비 설정은 재고 판매가에만 영향 (주문은 정액 배송비)"""
        order = make_order()
        changed = DEFAULT_SETTINGS.merged(international_shipping=2000)
        assert inventory_needs_update(make_item(), changed)
        assert not order_needs_update(order, changed)
