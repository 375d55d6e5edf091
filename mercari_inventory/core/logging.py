"""
logging.py - 로깅 설정

- Rich 콘솔 로거
- 성능 추적 (실행 시간 측정)
"""

import logging
import time
from contextlib import contextmanager

from rich.logging import RichHandler


def setup_logger(name: str = "mercari_inventory", level=logging.INFO) -> logging.Logger:
    """Rich 포맷 로거 설정

    Args:
        name: 로거 이름
        level: 로그 레벨 (int 또는 "DEBUG" 같은 문자열)
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        handler = RichHandler(rich_tracebacks=True)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)

    return logger


class PerformanceLogger:
    """성능 추적 로거"""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    @contextmanager
    def track(self, operation: str, **context):
        """
        작업 실행 시간 추적

        사용법:
            with perf_logger.track("가격 재계산", stores=3):
                recalculate()
        """
        start_time = time.perf_counter()
        self.logger.info(f"시작: {operation}", extra={"context": context})

        try:
            yield
        except Exception as e:
            elapsed = time.perf_counter() - start_time
            self.logger.error(
                f"실패: {operation} ({elapsed:.3f}s) - {str(e)}",
                extra={"context": {**context, "error": str(e), "duration_ms": elapsed * 1000}},
                exc_info=True
            )
            raise
        else:
            elapsed = time.perf_counter() - start_time
            self.logger.info(
                f"완료: {operation} ({elapsed:.3f}s)",
                extra={"context": {**context, "duration_ms": elapsed * 1000}}
            )
