"""
test_pricing.py - 판매가/주문 이익 계산 테스트

1. 기본 설정 판매가 (원가 100위안 → 13206엔)
2. 주문 환산 원가와 이익
3. 수수료 0% 경계
4. 원가/환율 단조성
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from mercari_inventory.domain.models import DEFAULT_SETTINGS, Settings, generate_id
from mercari_inventory.domain.logic import (
    calculate_converted_with_shipping,
    calculate_profit,
    calculate_selling_price,
)


class TestSellingPrice:
    """재고 판매가 계산 테스트"""

    def test_default_settings_example(self):
        """기본 설정, 원가 100위안"""
        # (2300 + 1000 + 1000 + 6000) / 0.78 = 13205.128...
        assert calculate_selling_price(100, DEFAULT_SETTINGS) == 13206

    def test_zero_fee_is_total_cost(self):
        """수수료 0%면 총비용 그대로"""
        settings = DEFAULT_SETTINGS.merged(platform_fee_rate=0)
        assert calculate_selling_price(100, settings) == 10300

    def test_always_rounds_up(self):
        """소수점은 항상 올림"""
        settings = Settings(
            exchange_rate=1,
            international_shipping=0,
            domestic_shipping=0,
            target_profit=0,
            platform_fee_rate=0.5,
        )
        # 3 / 0.5 = 6 (정수), 3.5 / 0.5 = 7
        assert calculate_selling_price(3, settings) == 6
        assert calculate_selling_price(3.25, settings) == 7

    def test_not_below_converted_cost(self):
        """판매가 >= 원가 x 환율"""
        for cost in [0, 1, 12.5, 100, 999]:
            price = calculate_selling_price(cost, DEFAULT_SETTINGS)
            assert price >= cost * DEFAULT_SETTINGS.exchange_rate

    def test_monotonic_in_cost(self):
        """원가가 오르면 판매가도 내려가지 않음"""
        prices = [calculate_selling_price(c, DEFAULT_SETTINGS) for c in [0, 10, 50, 100, 500]]
        assert prices == sorted(prices)

    def test_monotonic_in_exchange_rate(self):
        """환율이 오르면 판매가도 내려가지 않음"""
        prices = [
            calculate_selling_price(100, DEFAULT_SETTINGS.merged(exchange_rate=rate))
            for rate in [18, 20, 23, 25, 30]
        ]
        assert prices == sorted(prices)

    def test_higher_rate_changes_price(self):
        """환율 25 적용"""
        settings = DEFAULT_SETTINGS.merged(exchange_rate=25)
        # (2500 + 8000) / 0.78 = 13461.53...
        assert calculate_selling_price(100, settings) == 13462

    def test_zero_cost(self):
        """원가 0이면 고정비만 반영"""
        # 8000 / 0.78 = 10256.41...
        assert calculate_selling_price(0, DEFAULT_SETTINGS) == 10257


class TestOrderCalculation:
    """주문 환산 원가/이익 테스트"""

    def test_converted_with_shipping_example(self):
        """원가 50위안, 환율 23 → 2150엔"""
        assert calculate_converted_with_shipping(50, 23) == 2150

    def test_converted_default_shipping(self):
        """정액 배송비 1000엔 기본값"""
        assert calculate_converted_with_shipping(10, 20) == 1200

    def test_converted_custom_shipping(self):
        """배송비 지정"""
        assert calculate_converted_with_shipping(10, 20, shipping=0) == 200

    def test_converted_rounds_up(self):
        """환산 원가 올림"""
        assert calculate_converted_with_shipping(10.5, 2.1) == 1023

    def test_profit(self):
        """입금액 3000엔 → 이익 850엔"""
        assert calculate_profit(3000, 2150) == 850

    def test_negative_profit(self):
        """적자 주문은 음수 이익"""
        assert calculate_profit(2000, 2150) == -150


class TestGenerateId:
    """ID 생성 테스트"""

    def test_unique(self):
        """연속 생성 시 중복 없음"""
        ids = {generate_id() for _ in range(1000)}
        assert len(ids) == 1000

    def test_format(self):
        """UUID 문자열"""
        new_id = generate_id()
        assert isinstance(new_id, str)
        assert len(new_id) == 36
