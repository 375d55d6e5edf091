"""검증 유틸리티 테스트"""

import math
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from mercari_inventory.core.exceptions import InvalidItemInputError, InvalidSettingsError
from mercari_inventory.domain.models import DEFAULT_SETTINGS, Settings
from mercari_inventory.utils.validators import (
    DataValidator,
    ValidationResult,
    ValidationSeverity,
    require_valid_item,
    require_valid_settings,
    validate_inventory_input,
    validate_order_input,
    validate_settings,
)


class TestValidationResult:
    """ValidationResult 테스트"""

    def test_default_valid(self):
        """기본값은 유효"""
        result = ValidationResult()
        assert result.is_valid
        assert result.errors == []

    def test_add_error(self):
        """에러 추가 시 무효"""
        result = ValidationResult()
        result.add_error("quantity", "오류")
        assert not result.is_valid
        assert result.first_error_field == "quantity"

    def test_add_warning_keeps_valid(self):
        """경고는 유효성에 영향 없음"""
        result = ValidationResult()
        result.add_warning("platform_fee_rate", "주의")
        assert result.is_valid
        assert result.issues[0].severity == ValidationSeverity.WARNING

    def test_merge(self):
        """병합"""
        a = ValidationResult()
        b = ValidationResult()
        b.add_error("x", "오류")
        a.merge(b)
        assert not a.is_valid
        assert a.errors == ["오류"]


class TestDataValidator:
    """DataValidator 테스트"""

    def test_required(self):
        """필수값"""
        assert DataValidator.required("a", "name").is_valid
        assert not DataValidator.required(None, "name").is_valid
        assert not DataValidator.required("   ", "name").is_valid

    def test_number_rejects_bool_and_nan(self):
        """bool, NaN, inf는 숫자가 아님"""
        assert not DataValidator.number(True, "x").is_valid
        assert not DataValidator.number(math.nan, "x").is_valid
        assert not DataValidator.number(math.inf, "x").is_valid
        assert not DataValidator.number("1", "x").is_valid
        assert DataValidator.number(1.5, "x").is_valid

    def test_integer(self):
        """정수"""
        assert DataValidator.integer(3, "x").is_valid
        assert DataValidator.integer(3.0, "x").is_valid
        assert not DataValidator.integer(3.5, "x").is_valid

    def test_rate(self):
        """비율 [0, 1)"""
        assert DataValidator.rate(0, "fee").is_valid
        assert DataValidator.rate(0.99, "fee").is_valid
        assert not DataValidator.rate(1, "fee").is_valid
        assert not DataValidator.rate(-0.1, "fee").is_valid

    def test_known_fields(self):
        """알 수 없는 필드"""
        result = DataValidator.known_fields({"a": 1, "b": 2}, {"a"})
        assert not result.is_valid
        assert result.first_error_field == "b"


class TestSettingsValidation:
    """설정 검증 테스트"""

    def test_defaults_valid(self):
        """기본 설정은 유효"""
        assert validate_settings(DEFAULT_SETTINGS).is_valid

    @pytest.mark.parametrize("changes,field_name", [
        ({"exchange_rate": 0}, "exchange_rate"),
        ({"exchange_rate": -1}, "exchange_rate"),
        ({"international_shipping": -100}, "international_shipping"),
        ({"domestic_shipping": 10.5}, "domestic_shipping"),
        ({"target_profit": -1}, "target_profit"),
        ({"platform_fee_rate": 1}, "platform_fee_rate"),
        ({"platform_fee_rate": 1.2}, "platform_fee_rate"),
    ])
    def test_invalid_settings(self, changes, field_name):
        """유효하지 않은 설정값"""
        result = validate_settings(DEFAULT_SETTINGS.merged(**changes))
        assert not result.is_valid
        assert result.first_error_field == field_name

    def test_high_fee_warning(self):
        """수수료율 50% 이상은 경고"""
        result = validate_settings(DEFAULT_SETTINGS.merged(platform_fee_rate=0.6))
        assert result.is_valid
        assert result.warnings

    def test_require_valid_settings_raises(self):
        """유효하지 않으면 InvalidSettingsError"""
        with pytest.raises(InvalidSettingsError) as exc_info:
            require_valid_settings(Settings(platform_fee_rate=1))
        assert exc_info.value.field == "platform_fee_rate"
        assert exc_info.value.error_code == "MIA_INVALID_SETTINGS"


class TestInventoryInputValidation:
    """재고 입력 검증 테스트"""

    def test_valid_create(self):
        """정상 생성 입력"""
        data = {"product_name": "シャツ", "cost_price_cny": 45, "quantity": 1}
        assert validate_inventory_input(data).is_valid

    def test_missing_name(self):
        """상품명 누락"""
        data = {"product_name": "", "cost_price_cny": 45, "quantity": 1}
        result = validate_inventory_input(data)
        assert result.first_error_field == "product_name"

    def test_zero_cost_on_create(self):
        """생성 시 원가 0 불가"""
        data = {"product_name": "シャツ", "cost_price_cny": 0, "quantity": 1}
        assert not validate_inventory_input(data).is_valid

    def test_zero_quantity_on_create(self):
        """생성 시 수량 0 불가"""
        data = {"product_name": "シャツ", "cost_price_cny": 10, "quantity": 0}
        assert not validate_inventory_input(data).is_valid

    def test_update_allows_zero(self):
        """수정 시 원가/수량 0 허용"""
        assert validate_inventory_input({"cost_price_cny": 0, "quantity": 0}, creating=False).is_valid

    def test_update_rejects_derived_field(self):
        """판매가는 직접 수정 불가"""
        result = validate_inventory_input({"selling_price_jpy": 100}, creating=False)
        assert result.first_error_field == "selling_price_jpy"

    def test_update_only_checks_given_fields(self):
        """수정 시 전달된 필드만 검증"""
        assert validate_inventory_input({"color": "青"}, creating=False).is_valid


class TestOrderInputValidation:
    """주문 입력 검증 테스트"""

    def test_valid_create(self):
        """정상 생성 입력"""
        data = {"product_name": "バッグ", "cost_price_cny": 50, "actual_payment": 3000}
        assert validate_order_input(data).is_valid

    def test_payment_must_be_integer(self):
        """입금액은 정수"""
        data = {"product_name": "バッグ", "cost_price_cny": 50, "actual_payment": 3000.5}
        assert validate_order_input(data).first_error_field == "actual_payment"

    def test_update_rejects_profit(self):
        """이익은 직접 수정 불가"""
        result = validate_order_input({"profit": 1}, creating=False)
        assert not result.is_valid

    def test_date_must_be_string(self):
        """주문일은 문자열"""
        result = validate_order_input({"created_at": 20260115}, creating=False)
        assert result.first_error_field == "created_at"

    def test_require_valid_item_raises(self):
        """검증 실패 시 InvalidItemInputError"""
        data = {"product_name": "", "cost_price_cny": 50, "actual_payment": 3000}
        with pytest.raises(InvalidItemInputError) as exc_info:
            require_valid_item(validate_order_input(data), data)
        assert exc_info.value.field == "product_name"
