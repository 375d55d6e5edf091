"""유틸리티 모듈"""
from .validators import (
    DataValidator,
    ValidationResult,
    ValidationSeverity,
    validate_settings,
    validate_inventory_input,
    validate_order_input,
    require_valid_settings,
)

__all__ = [
    "DataValidator",
    "ValidationResult",
    "ValidationSeverity",
    "validate_settings",
    "validate_inventory_input",
    "validate_order_input",
    "require_valid_settings",
]
