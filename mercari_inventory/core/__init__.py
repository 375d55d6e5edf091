"""코어 모듈 - 예외, 설정, 로깅"""
from .exceptions import (
    InventoryAppError,
    ValidationError,
    InvalidSettingsError,
    InvalidItemInputError,
    ConfigurationError,
    NotFoundError,
    StorageError,
    SupabaseError,
    ExportError,
    ErrorCodes,
)
from .error_handler import RetryContext
from .config import (
    AppConfig,
    DEFAULT_ORDER_SHIPPING,
    DEFAULT_ORDER_DAY,
    DEFAULT_STORE_NAME,
)
from .logging import setup_logger, PerformanceLogger

__all__ = [
    # 예외
    "InventoryAppError",
    "ValidationError",
    "InvalidSettingsError",
    "InvalidItemInputError",
    "ConfigurationError",
    "NotFoundError",
    "StorageError",
    "SupabaseError",
    "ExportError",
    "ErrorCodes",
    "RetryContext",
    # 설정
    "AppConfig",
    "DEFAULT_ORDER_SHIPPING",
    "DEFAULT_ORDER_DAY",
    "DEFAULT_STORE_NAME",
    "setup_logger",
    "PerformanceLogger",
]
