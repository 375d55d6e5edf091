"""
exporters.py - 재고/주문 내보내기

- CSV: UTF-8 BOM 포함 (엑셀에서 바로 열림)
- Excel: 재고/주문 시트 + 합계 행, 적자 주문 강조
"""

from datetime import date
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from ..core.exceptions import ExportError
from ..domain.models import InventoryItem, OrderItem, Store
from ..domain.reporting import filter_orders_by_month, parse_timestamp, summarize_inventory


# (필드, 헤더, 열 너비)
INVENTORY_COLUMNS: List[Tuple[str, str, int]] = [
    ("product_name", "商品名", 40),
    ("color", "カラー", 12),
    ("size", "サイズ", 10),
    ("quantity", "数量", 8),
    ("cost_price_cny", "原価 (CNY)", 12),
    ("selling_price_jpy", "販売価格 (JPY)", 15),
]

ORDER_COLUMNS: List[Tuple[str, str, int]] = [
    ("product_name", "商品名", 40),
    ("color", "カラー", 12),
    ("size", "サイズ", 10),
    ("cost_price_cny", "原価 (CNY)", 12),
    ("converted_with_shipping", "換算原価+送料 (JPY)", 18),
    ("actual_payment", "実入金 (JPY)", 14),
    ("profit", "利益 (JPY)", 12),
    ("created_at", "注文日", 12),
]


def _format_order_date(value: str) -> str:
    return parse_timestamp(value).strftime("%Y/%m/%d") if value else ""


def inventory_dataframe(items: Sequence[InventoryItem]) -> pd.DataFrame:
    """재고 → DataFrame (헤더는 표시용 라벨)"""
    rows = [{label: getattr(item, key) for key, label, _ in INVENTORY_COLUMNS} for item in items]
    return pd.DataFrame(rows, columns=[label for _, label, _ in INVENTORY_COLUMNS])


def orders_dataframe(orders: Sequence[OrderItem]) -> pd.DataFrame:
    """주문 → DataFrame (주문일은 YYYY/MM/DD)"""
    rows = []
    for order in orders:
        row = {label: getattr(order, key) for key, label, _ in ORDER_COLUMNS}
        row["注文日"] = _format_order_date(order.created_at)
        rows.append(row)
    return pd.DataFrame(rows, columns=[label for _, label, _ in ORDER_COLUMNS])


def _write_csv(df: pd.DataFrame, file_path: Path) -> Path:
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(file_path, index=False, encoding="utf-8-sig")
    except OSError as e:
        raise ExportError(
            f"CSV 저장 실패: {file_path}",
            file_path=str(file_path),
            export_format="csv",
            cause=e,
        ) from e
    return file_path


def export_inventory_csv(
    items: Sequence[InventoryItem],
    store_name: str,
    output_dir: str = "output",
    today: Optional[date] = None,
) -> Path:
    """재고 CSV 내보내기 → <점포명>_在庫_<YYYY-MM-DD>.csv"""
    today = today or date.today()
    file_path = Path(output_dir) / f"{store_name}_在庫_{today.isoformat()}.csv"
    return _write_csv(inventory_dataframe(items), file_path)


def export_orders_csv(
    orders: Sequence[OrderItem],
    store_name: str,
    output_dir: str = "output",
    year: Optional[int] = None,
    month: Optional[int] = None,
    today: Optional[date] = None,
) -> Path:
    """주문 CSV 내보내기. 연/월 지정 시 해당 월만 → <점포명>_<YYYY>年<M>月_注文_<YYYY-MM-DD>.csv"""
    today = today or date.today()
    prefix = store_name
    if year is not None and month is not None:
        orders = filter_orders_by_month(orders, year, month)
        prefix = f"{store_name}_{year}年{month}月"
    file_path = Path(output_dir) / f"{prefix}_注文_{today.isoformat()}.csv"
    return _write_csv(orders_dataframe(orders), file_path)


class StoreExcelExporter:
    """점포 재고/주문 엑셀 내보내기

    Usage:
        exporter = StoreExcelExporter()
        filepath = exporter.export(store, "output/store.xlsx")
    """

    def __init__(self):
        # 스타일 정의
        self.HEADER_FILL = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
        self.HEADER_FONT = Font(bold=True, color="FFFFFF", size=11)
        self.TOTAL_FONT = Font(bold=True)
        self.LOSS_FILL = PatternFill(start_color="FFC7CE", end_color="FFC7CE", fill_type="solid")

    def _write_header(self, sheet, columns: List[Tuple[str, str, int]]):
        for col_idx, (_, label, width) in enumerate(columns, start=1):
            cell = sheet.cell(row=1, column=col_idx, value=label)
            cell.fill = self.HEADER_FILL
            cell.font = self.HEADER_FONT
            cell.alignment = Alignment(horizontal="center", vertical="center")
            sheet.column_dimensions[get_column_letter(col_idx)].width = width
        sheet.freeze_panes = "A2"

    def _write_inventory_sheet(self, sheet, items: Sequence[InventoryItem]):
        sheet.title = "在庫"
        self._write_header(sheet, INVENTORY_COLUMNS)

        for row_idx, item in enumerate(items, start=2):
            for col_idx, (key, _, _) in enumerate(INVENTORY_COLUMNS, start=1):
                sheet.cell(row=row_idx, column=col_idx, value=getattr(item, key))

        summary = summarize_inventory(items)
        total_row = len(items) + 2
        sheet.cell(row=total_row, column=1, value=f"合計 ({summary.product_kinds}種類)").font = self.TOTAL_FONT
        sheet.cell(row=total_row, column=4, value=summary.total_quantity).font = self.TOTAL_FONT
        sheet.cell(row=total_row, column=5, value=round(summary.total_cost_cny, 2)).font = self.TOTAL_FONT

    def _write_order_sheet(self, sheet, orders: Sequence[OrderItem]):
        sheet.title = "注文"
        self._write_header(sheet, ORDER_COLUMNS)

        for row_idx, order in enumerate(orders, start=2):
            for col_idx, (key, _, _) in enumerate(ORDER_COLUMNS, start=1):
                value = getattr(order, key)
                if key == "created_at":
                    value = _format_order_date(value)
                cell = sheet.cell(row=row_idx, column=col_idx, value=value)
                if order.profit < 0:
                    cell.fill = self.LOSS_FILL

        total_row = len(orders) + 2
        sheet.cell(row=total_row, column=1, value=f"合計 ({len(orders)}件)").font = self.TOTAL_FONT
        totals = {
            5: sum(o.converted_with_shipping for o in orders),
            6: sum(o.actual_payment for o in orders),
            7: sum(o.profit for o in orders),
        }
        for col_idx, value in totals.items():
            sheet.cell(row=total_row, column=col_idx, value=value).font = self.TOTAL_FONT

    def export(
        self,
        store: Store,
        output_path: str,
        year: Optional[int] = None,
        month: Optional[int] = None,
    ) -> Path:
        """엑셀 파일 생성

        Args:
            store: 재고/주문이 로드된 점포
            output_path: 저장 경로 (.xlsx)
            year, month: 지정 시 해당 월 주문만 기록

        Returns:
            저장된 파일 경로
        """
        orders = store.orders
        if year is not None and month is not None:
            orders = filter_orders_by_month(orders, year, month)

        wb = Workbook()
        self._write_inventory_sheet(wb.active, store.inventory)
        self._write_order_sheet(wb.create_sheet(), orders)

        file_path = Path(output_path)
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            wb.save(file_path)
        except OSError as e:
            raise ExportError(
                f"엑셀 저장 실패: {file_path}",
                file_path=str(file_path),
                export_format="xlsx",
                cause=e,
            ) from e
        return file_path
