"""
validators.py - 입력 경계 데이터 검증

- 설정 변경 (환율, 배송비, 목표이익, 수수료율)
- 재고/주문 생성 및 부분 수정
계산 함수는 검증하지 않으므로 모든 입력은 여기서 걸러진 뒤 전달됨.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from numbers import Real
from typing import Any, Dict, Iterable, List, Optional

from ..core.exceptions import InvalidItemInputError, InvalidSettingsError
from ..domain.models import Settings
from ..domain.recalculation import INVENTORY_EDITABLE_FIELDS, ORDER_EDITABLE_FIELDS
from ..domain.reporting import parse_timestamp


class ValidationSeverity(Enum):
    """검증 심각도"""
    ERROR = "error"
    WARNING = "warning"


@dataclass
class ValidationIssue:
    """검증 이슈"""
    field: str
    message: str
    severity: ValidationSeverity = ValidationSeverity.ERROR


@dataclass
class ValidationResult:
    """검증 결과"""
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    issues: List[ValidationIssue] = field(default_factory=list)

    def add_error(self, field_name: str, message: str):
        """에러 추가"""
        self.is_valid = False
        self.errors.append(message)
        self.issues.append(ValidationIssue(field=field_name, message=message, severity=ValidationSeverity.ERROR))

    def add_warning(self, field_name: str, message: str):
        """경고 추가"""
        self.warnings.append(message)
        self.issues.append(ValidationIssue(field=field_name, message=message, severity=ValidationSeverity.WARNING))

    def merge(self, other: "ValidationResult"):
        """다른 결과 병합"""
        if not other.is_valid:
            self.is_valid = False
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        self.issues.extend(other.issues)

    @property
    def first_error_field(self) -> Optional[str]:
        for issue in self.issues:
            if issue.severity == ValidationSeverity.ERROR:
                return issue.field
        return None


def _is_number(value: Any) -> bool:
    """유한한 실수 (bool, NaN, inf 제외)"""
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


class DataValidator:
    """데이터 검증기"""

    @staticmethod
    def required(value: Any, field_name: str) -> ValidationResult:
        """필수값 검증"""
        result = ValidationResult()
        if value is None:
            result.add_error(field_name, f"{field_name}은(는) 필수입니다.")
        elif isinstance(value, str) and not value.strip():
            result.add_error(field_name, f"{field_name}은(는) 비어있을 수 없습니다.")
        return result

    @staticmethod
    def number(value: Any, field_name: str) -> ValidationResult:
        """숫자 타입 검증"""
        result = ValidationResult()
        if not _is_number(value):
            result.add_error(field_name, f"{field_name}은(는) 숫자여야 합니다.")
        return result

    @staticmethod
    def integer(value: Any, field_name: str) -> ValidationResult:
        """정수 검증 (엔화는 소수 단위 없음)"""
        result = ValidationResult()
        if not _is_number(value) or float(value) != int(value):
            result.add_error(field_name, f"{field_name}은(는) 정수여야 합니다.")
        return result

    @staticmethod
    def positive_number(value: Any, field_name: str) -> ValidationResult:
        """양수 검증 (0 제외)"""
        result = DataValidator.number(value, field_name)
        if result.is_valid and value <= 0:
            result.add_error(field_name, f"{field_name}은(는) 0보다 커야 합니다.")
        return result

    @staticmethod
    def non_negative(value: Any, field_name: str) -> ValidationResult:
        """0 이상 검증"""
        result = DataValidator.number(value, field_name)
        if result.is_valid and value < 0:
            result.add_error(field_name, f"{field_name}은(는) 0 이상이어야 합니다.")
        return result

    @staticmethod
    def rate(value: Any, field_name: str) -> ValidationResult:
        """비율 검증 [0, 1)"""
        result = DataValidator.number(value, field_name)
        if result.is_valid and not (0 <= value < 1):
            result.add_error(field_name, f"{field_name}은(는) 0 이상 1 미만이어야 합니다.")
        return result

    @staticmethod
    def known_fields(data: Dict[str, Any], allowed: Iterable[str]) -> ValidationResult:
        """수정 불가/알 수 없는 필드 검증"""
        result = ValidationResult()
        allowed = set(allowed)
        for key in data:
            if key not in allowed:
                result.add_error(key, f"{key}은(는) 수정할 수 없는 필드입니다.")
        return result


def validate_settings(settings: Settings) -> ValidationResult:
    """전역 설정 검증"""
    result = ValidationResult()

    result.merge(DataValidator.positive_number(settings.exchange_rate, "exchange_rate"))

    for field_name in ("international_shipping", "domestic_shipping", "target_profit"):
        value = getattr(settings, field_name)
        r = DataValidator.non_negative(value, field_name)
        if r.is_valid:
            r.merge(DataValidator.integer(value, field_name))
        result.merge(r)

    result.merge(DataValidator.rate(settings.platform_fee_rate, "platform_fee_rate"))

    if result.is_valid and settings.platform_fee_rate >= 0.5:
        result.add_warning("platform_fee_rate", "수수료율이 50% 이상입니다. 확인해주세요.")

    return result


def _validate_product_fields(data: Dict[str, Any], creating: bool) -> ValidationResult:
    result = ValidationResult()

    if creating or "product_name" in data:
        result.merge(DataValidator.required(data.get("product_name"), "product_name"))

    if "cost_price_cny" in data or creating:
        cost = data.get("cost_price_cny")
        if creating:
            result.merge(DataValidator.positive_number(cost, "cost_price_cny"))
        else:
            result.merge(DataValidator.non_negative(cost, "cost_price_cny"))

    for text_field in ("color", "size", "photo"):
        value = data.get(text_field)
        if value is not None and not isinstance(value, str):
            result.add_error(text_field, f"{text_field}은(는) 문자열이어야 합니다.")

    return result


def validate_inventory_input(data: Dict[str, Any], creating: bool = True) -> ValidationResult:
    """재고 생성/수정 입력 검증

    생성 시: 상품명 필수, 원가 > 0, 수량 >= 1
    수정 시: 전달된 필드만 검증, 원가 >= 0, 수량 >= 0
    """
    result = ValidationResult()
    if not creating:
        result.merge(DataValidator.known_fields(data, INVENTORY_EDITABLE_FIELDS))

    result.merge(_validate_product_fields(data, creating))

    if "quantity" in data or creating:
        quantity = data.get("quantity")
        r = DataValidator.integer(quantity, "quantity")
        if r.is_valid:
            if creating:
                r.merge(DataValidator.positive_number(quantity, "quantity"))
            else:
                r.merge(DataValidator.non_negative(quantity, "quantity"))
        result.merge(r)

    return result


def validate_order_input(data: Dict[str, Any], creating: bool = True) -> ValidationResult:
    """주문 생성/수정 입력 검증"""
    result = ValidationResult()
    if not creating:
        result.merge(DataValidator.known_fields(data, ORDER_EDITABLE_FIELDS))

    result.merge(_validate_product_fields(data, creating))

    if "actual_payment" in data or creating:
        result.merge(DataValidator.integer(data.get("actual_payment"), "actual_payment"))

    for date_field in ("created_at", "completed_at"):
        value = data.get(date_field)
        if value is None:
            continue
        if not isinstance(value, str):
            result.add_error(date_field, f"{date_field}은(는) ISO 날짜 문자열이어야 합니다.")
            continue
        try:
            parse_timestamp(value)
        except ValueError:
            result.add_error(date_field, f"{date_field} 날짜 형식이 올바르지 않습니다: {value}")

    return result


def require_valid_settings(settings: Settings) -> Settings:
    """유효하지 않은 설정이면 InvalidSettingsError"""
    result = validate_settings(settings)
    if not result.is_valid:
        raise InvalidSettingsError(
            "설정값이 올바르지 않습니다: " + " ".join(result.errors),
            errors=result.errors,
            field=result.first_error_field,
        )
    return settings


def require_valid_item(result: ValidationResult, data: Dict[str, Any]) -> None:
    """검증 실패 시 InvalidItemInputError"""
    if not result.is_valid:
        field_name = result.first_error_field
        raise InvalidItemInputError(
            "입력값이 올바르지 않습니다: " + " ".join(result.errors),
            errors=result.errors,
            field=field_name,
            value=data.get(field_name) if field_name else None,
        )
