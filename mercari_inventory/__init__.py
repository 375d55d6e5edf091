"""
Mercari Inventory - 중국 소싱 상품의 메르카리 판매가/주문 이익 관리

- 위안(CNY) 원가 → 엔(JPY) 판매가 계산
- 주문 환산 원가/이익 계산
- 설정 변경 시 재고/주문 일괄 재계산
"""

__version__ = "1.0.0"
