"""
recalculation.py - 파생 필드 재계산 규칙

저장된 파생 필드(판매가, 환산 원가, 이익)를 원본 필드와 현재 설정에 맞춰 유지.
모든 함수는 새 레코드를 반환하고 입력은 변경하지 않음.

- 재고: cost_price_cny 변경 → selling_price_jpy 재계산
- 주문: cost_price_cny 또는 actual_payment 변경 → converted_with_shipping, profit 함께 재계산
- 이름/색상/사이즈/사진/수량/날짜 변경은 재계산하지 않음
"""

from dataclasses import replace
from typing import Any, Dict, Iterable, List

from .logic import (
    calculate_selling_price,
    calculate_converted_with_shipping,
    calculate_profit,
)
from .models import InventoryItem, OrderItem, Settings, Store


# 수정 가능한 필드 (파생 필드는 직접 설정 불가)
INVENTORY_EDITABLE_FIELDS = frozenset({
    "photo", "product_name", "color", "size", "quantity", "cost_price_cny",
})
ORDER_EDITABLE_FIELDS = frozenset({
    "photo", "product_name", "color", "size",
    "cost_price_cny", "actual_payment", "created_at", "completed_at",
})

# 재계산을 일으키는 필드
INVENTORY_PRICE_FIELDS = frozenset({"cost_price_cny"})
ORDER_PRICE_FIELDS = frozenset({"cost_price_cny", "actual_payment"})


def reprice_inventory_item(item: InventoryItem, settings: Settings) -> InventoryItem:
    """현재 설정으로 판매가 재계산"""
    return replace(
        item,
        selling_price_jpy=calculate_selling_price(item.cost_price_cny, settings),
    )


def reprice_order(order: OrderItem, settings: Settings) -> OrderItem:
    """현재 환율로 환산 원가와 이익을 함께 재계산"""
    converted = calculate_converted_with_shipping(order.cost_price_cny, settings.exchange_rate)
    return replace(
        order,
        converted_with_shipping=converted,
        profit=calculate_profit(order.actual_payment, converted),
    )


def _editable(updates: Dict[str, Any], allowed: Iterable[str]) -> Dict[str, Any]:
    return {k: v for k, v in updates.items() if k in allowed and v is not None}


def apply_inventory_update(
    item: InventoryItem,
    updates: Dict[str, Any],
    settings: Settings,
) -> InventoryItem:
    """부분 수정 적용. 원가가 바뀐 경우에만 판매가 재계산"""
    changes = _editable(updates, INVENTORY_EDITABLE_FIELDS)
    updated = replace(item, **changes)
    if INVENTORY_PRICE_FIELDS & changes.keys():
        updated = reprice_inventory_item(updated, settings)
    return updated


def apply_order_update(
    order: OrderItem,
    updates: Dict[str, Any],
    settings: Settings,
) -> OrderItem:
    """부분 수정 적용. 원가/입금액이 바뀐 경우에만 파생 필드 재계산"""
    changes = _editable(updates, ORDER_EDITABLE_FIELDS)
    updated = replace(order, **changes)
    if ORDER_PRICE_FIELDS & changes.keys():
        updated = reprice_order(updated, settings)
    return updated


def inventory_needs_update(item: InventoryItem, settings: Settings) -> bool:
    return calculate_selling_price(item.cost_price_cny, settings) != item.selling_price_jpy


def order_needs_update(order: OrderItem, settings: Settings) -> bool:
    repriced = reprice_order(order, settings)
    return (
        repriced.converted_with_shipping != order.converted_with_shipping
        or repriced.profit != order.profit
    )


def recalculate_store(store: Store, settings: Settings) -> Store:
    """점포의 모든 재고/주문 파생 필드 재계산 (멱등)"""
    return replace(
        store,
        inventory=[reprice_inventory_item(item, settings) for item in store.inventory],
        orders=[reprice_order(order, settings) for order in store.orders],
    )


def recalculate_stores(stores: Iterable[Store], settings: Settings) -> List[Store]:
    """전 점포 일괄 재계산. 항목 간 의존성이 없어 순서 무관"""
    return [recalculate_store(store, settings) for store in stores]
