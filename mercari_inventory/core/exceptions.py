"""
커스텀 예외 클래스

Mercari Inventory에서 사용하는 모든 커스텀 예외를 정의
"""

from typing import Optional, Dict, Any


class InventoryAppError(Exception):
    """기본 예외 클래스"""

    def __init__(
        self,
        message: str,
        error_code: str = None,
        details: Dict[str, Any] = None,
        cause: Exception = None
    ):
        """
        Args:
            message: 에러 메시지
            error_code: 에러 코드
            details: 추가 상세 정보
            cause: 원인 예외
        """
        self.message = message
        self.error_code = error_code or self._default_code()
        self.details = details or {}
        self.cause = cause
        super().__init__(self.message)

    def _default_code(self) -> str:
        return "MIA_UNKNOWN"

    def to_dict(self) -> Dict[str, Any]:
        """딕셔너리로 변환"""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
            "type": self.__class__.__name__
        }

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


class ValidationError(InventoryAppError):
    """데이터 검증 오류"""

    def __init__(
        self,
        message: str,
        field: str = None,
        value: Any = None,
        **kwargs
    ):
        self.field = field
        self.value = value
        details = kwargs.pop("details", {})
        details["field"] = field
        details["value"] = str(value)[:100]  # 값 길이 제한
        super().__init__(message, details=details, **kwargs)

    def _default_code(self) -> str:
        return "MIA_VALIDATION"


class InvalidSettingsError(ValidationError):
    """설정값 검증 오류 (수수료율 >= 1, 음수 배송비 등)"""

    def __init__(
        self,
        message: str,
        errors: Optional[list] = None,
        **kwargs
    ):
        self.errors = errors or [message]
        details = kwargs.pop("details", {})
        details["errors"] = self.errors
        super().__init__(message, details=details, **kwargs)

    def _default_code(self) -> str:
        return "MIA_INVALID_SETTINGS"


class InvalidItemInputError(ValidationError):
    """재고/주문 입력값 검증 오류"""

    def __init__(
        self,
        message: str,
        errors: Optional[list] = None,
        **kwargs
    ):
        self.errors = errors or [message]
        details = kwargs.pop("details", {})
        details["errors"] = self.errors
        super().__init__(message, details=details, **kwargs)

    def _default_code(self) -> str:
        return "MIA_INVALID_ITEM"


class ConfigurationError(InventoryAppError):
    """설정 오류"""

    def __init__(
        self,
        message: str,
        config_key: str = None,
        **kwargs
    ):
        self.config_key = config_key
        details = kwargs.pop("details", {})
        details["config_key"] = config_key
        super().__init__(message, details=details, **kwargs)

    def _default_code(self) -> str:
        return "MIA_CONFIG"


class NotFoundError(InventoryAppError):
    """존재하지 않는 레코드"""

    def __init__(
        self,
        message: str,
        entity: str = None,
        entity_id: str = None,
        **kwargs
    ):
        self.entity = entity
        self.entity_id = entity_id
        details = kwargs.pop("details", {})
        details["entity"] = entity
        details["entity_id"] = entity_id
        super().__init__(message, details=details, **kwargs)

    def _default_code(self) -> str:
        return "MIA_NOT_FOUND"


class StorageError(InventoryAppError):
    """저장소 쓰기/읽기 오류"""

    def __init__(
        self,
        message: str,
        operation: str = None,
        **kwargs
    ):
        self.operation = operation
        details = kwargs.pop("details", {})
        details["operation"] = operation
        super().__init__(message, details=details, **kwargs)

    def _default_code(self) -> str:
        return "MIA_STORAGE"


class SupabaseError(StorageError):
    """Supabase 오류"""

    def __init__(
        self,
        message: str,
        table: str = None,
        operation: str = None,
        **kwargs
    ):
        self.table = table
        details = kwargs.pop("details", {})
        details["table"] = table
        super().__init__(message, operation=operation, details=details, **kwargs)

    def _default_code(self) -> str:
        return "MIA_SUPABASE"


class ExportError(InventoryAppError):
    """내보내기(CSV/Excel) 오류"""

    def __init__(
        self,
        message: str,
        file_path: str = None,
        export_format: str = None,
        **kwargs
    ):
        self.file_path = file_path
        self.export_format = export_format
        details = kwargs.pop("details", {})
        details["file_path"] = file_path
        details["export_format"] = export_format
        super().__init__(message, details=details, **kwargs)

    def _default_code(self) -> str:
        return "MIA_EXPORT"


# 에러 코드 상수
class ErrorCodes:
    """에러 코드 상수"""

    # 일반
    UNKNOWN = "MIA_UNKNOWN"
    VALIDATION = "MIA_VALIDATION"
    CONFIG = "MIA_CONFIG"
    NOT_FOUND = "MIA_NOT_FOUND"

    # 입력 검증
    INVALID_SETTINGS = "MIA_INVALID_SETTINGS"
    INVALID_ITEM = "MIA_INVALID_ITEM"

    # 저장소
    STORAGE = "MIA_STORAGE"
    SUPABASE = "MIA_SUPABASE"

    # 내보내기
    EXPORT = "MIA_EXPORT"
