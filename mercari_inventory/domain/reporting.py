"""
reporting.py - 재고/주문 집계

재고 요약 카드, 월별 주문 필터와 합계, 주문일 기본값 계산
"""

from datetime import datetime
from typing import Iterable, List, Tuple

import pandas as pd

from .models import InventoryItem, InventorySummary, MonthlyOrderSummary, OrderItem
from ..core.config import DEFAULT_ORDER_DAY

# pandas Timestamp 표현 범위 안의 연도만 주문일로 허용
MIN_ORDER_YEAR = pd.Timestamp.min.year + 1
MAX_ORDER_YEAR = pd.Timestamp.max.year - 1


def parse_timestamp(value: str) -> datetime:
    """ISO 타임스탬프 파싱

    Supabase timestamptz는 소수 초 끝자리 0을 잘라서 반환함 (예: 55.12+00:00).
    끝의 'Z'도 허용.
    """
    timestamp = pd.Timestamp(value)
    if pd.isna(timestamp):
        raise ValueError(f"타임스탬프가 비어있습니다: {value!r}")
    return timestamp.to_pydatetime()


def default_order_date(year: int, month: int) -> str:
    """주문일 미지정 시 기본값: 선택 연/월의 15일"""
    return datetime(year, month, DEFAULT_ORDER_DAY).isoformat()


def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    """연/월 이동 (12월 → 다음해 1월 처리)"""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def summarize_inventory(items: Iterable[InventoryItem]) -> InventorySummary:
    """재고 요약: 상품 종류, 총 수량, 총 원가(CNY)"""
    summary = InventorySummary()
    for item in items:
        summary.product_kinds += 1
        summary.total_quantity += item.quantity
        summary.total_cost_cny += item.cost_price_cny * item.quantity
    return summary


def filter_orders_by_month(orders: Iterable[OrderItem], year: int, month: int) -> List[OrderItem]:
    """주문일(created_at) 기준 월별 필터"""
    result = []
    for order in orders:
        if not order.created_at:
            continue
        date = parse_timestamp(order.created_at)
        if date.year == year and date.month == month:
            result.append(order)
    return result


def summarize_orders(orders: Iterable[OrderItem], year: int, month: int) -> MonthlyOrderSummary:
    """월별 주문 수, 매출, 원가, 이익 합계"""
    summary = MonthlyOrderSummary(year=year, month=month)
    for order in filter_orders_by_month(orders, year, month):
        summary.order_count += 1
        summary.total_revenue += order.actual_payment
        summary.total_cost += order.converted_with_shipping
        summary.total_profit += order.profit
    return summary


def available_years(orders: Iterable[OrderItem]) -> List[int]:
    """주문이 존재하는 연도 (최신순)"""
    years = {parse_timestamp(o.created_at).year for o in orders if o.created_at}
    return sorted(years, reverse=True)
