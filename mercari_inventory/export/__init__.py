"""내보내기 모듈 - CSV / Excel"""
from .exporters import (
    StoreExcelExporter,
    export_inventory_csv,
    export_orders_csv,
    inventory_dataframe,
    orders_dataframe,
)

__all__ = [
    "StoreExcelExporter",
    "export_inventory_csv",
    "export_orders_csv",
    "inventory_dataframe",
    "orders_dataframe",
]
