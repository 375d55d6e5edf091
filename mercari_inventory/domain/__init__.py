"""도메인 모듈 - 순수 비즈니스 로직"""
from .models import (
    Settings,
    DEFAULT_SETTINGS,
    InventoryItem,
    OrderItem,
    Store,
    RecalculationReport,
    InventorySummary,
    MonthlyOrderSummary,
)
from .logic import (
    calculate_selling_price,
    calculate_converted_with_shipping,
    calculate_profit,
    generate_id,
)
from .recalculation import (
    reprice_inventory_item,
    reprice_order,
    apply_inventory_update,
    apply_order_update,
    recalculate_store,
    recalculate_stores,
)
from .reporting import (
    summarize_inventory,
    summarize_orders,
    filter_orders_by_month,
    available_years,
    default_order_date,
    shift_month,
)

__all__ = [
    # 모델
    "Settings",
    "DEFAULT_SETTINGS",
    "InventoryItem",
    "OrderItem",
    "Store",
    "RecalculationReport",
    "InventorySummary",
    "MonthlyOrderSummary",
    # 계산
    "calculate_selling_price",
    "calculate_converted_with_shipping",
    "calculate_profit",
    "generate_id",
    # 재계산
    "reprice_inventory_item",
    "reprice_order",
    "apply_inventory_update",
    "apply_order_update",
    "recalculate_store",
    "recalculate_stores",
    # 집계
    "summarize_inventory",
    "summarize_orders",
    "filter_orders_by_month",
    "available_years",
    "default_order_date",
    "shift_month",
]
