"""
에러 핸들러

저장소 호출 재시도 로직
"""

import logging
import time
from typing import Tuple, Type


class RetryContext:
    """재시도 상태 (시도 횟수, 지수 백오프)

    사용법:
        retry = RetryContext(max_retries=2, exceptions=(ConnectionError,))
        while True:
            try:
                return call()
            except Exception as e:
                if not retry.should_retry(e):
                    raise
    """

    def __init__(
        self,
        max_retries: int = 3,
        exceptions: Tuple[Type[Exception], ...] = (Exception,),
        backoff_factor: float = 2.0,
        initial_delay: float = 1.0,
        max_delay: float = 60.0,
        logger: logging.Logger = None
    ):
        self.max_retries = max_retries
        self.exceptions = exceptions
        self.backoff_factor = backoff_factor
        self.initial_delay = initial_delay
        self.max_delay = max_delay
        self.logger = logger or logging.getLogger(__name__)
        self.attempt = 0

    def should_retry(self, exception: Exception) -> bool:
        """재시도 여부 결정"""
        if not isinstance(exception, self.exceptions):
            return False

        self.attempt += 1
        if self.attempt > self.max_retries:
            return False

        delay = min(
            self.initial_delay * (self.backoff_factor ** (self.attempt - 1)),
            self.max_delay
        )

        self.logger.warning(
            f"Retry attempt {self.attempt}/{self.max_retries} in {delay:.1f}s"
        )
        time.sleep(delay)
        return True
