"""
config.py - 애플리케이션 설정

환경변수(.env) 기반 설정과 가격 계산에 쓰이는 고정 상수를 중앙 관리
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from dotenv import load_dotenv

from .exceptions import ConfigurationError

load_dotenv()


# 프로젝트 루트 디렉토리
ROOT_DIR = Path(__file__).parent.parent.parent
DATA_DIR = ROOT_DIR / "data"
OUTPUT_DIR = ROOT_DIR / "output"


# ============================================================
# 가격 계산 상수
# ============================================================

# 주문 원가 계산용 정액 배송비 (엔). 재고 판매가의 국제+국내 배송비와는 별개
DEFAULT_ORDER_SHIPPING: int = 1000

# 주문일 미지정 시 선택 월의 15일로 기록
DEFAULT_ORDER_DAY: int = 15

DEFAULT_STORE_NAME = "メルカリ店舗1"

STORAGE_BACKENDS = ("json", "supabase")


@dataclass
class AppConfig:
    """애플리케이션 설정"""

    # --- 저장소 ---
    storage_backend: str = "json"               # json | supabase
    data_dir: Path = field(default_factory=lambda: DATA_DIR)

    # --- Supabase (환경변수에서 로드) ---
    supabase_url: str = ""
    supabase_key: str = ""

    # --- 기타 ---
    default_store_name: str = DEFAULT_STORE_NAME
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "AppConfig":
        """환경변수에서 설정 로드"""
        return cls(
            storage_backend=os.getenv("STORAGE_BACKEND", "json").lower(),
            data_dir=Path(os.getenv("DATA_DIR", str(DATA_DIR))),
            supabase_url=os.getenv("SUPABASE_URL", ""),
            supabase_key=os.getenv("SUPABASE_KEY", ""),
            default_store_name=os.getenv("DEFAULT_STORE_NAME", DEFAULT_STORE_NAME),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> List[str]:
        """설정 유효성 검사"""
        errors = []

        if self.storage_backend not in STORAGE_BACKENDS:
            errors.append(f"STORAGE_BACKEND는 {', '.join(STORAGE_BACKENDS)} 중 하나여야 합니다.")

        if self.storage_backend == "supabase":
            if not self.supabase_url:
                errors.append("SUPABASE_URL이 설정되지 않았습니다.")
            if not self.supabase_key:
                errors.append("SUPABASE_KEY가 설정되지 않았습니다.")

        if not self.default_store_name.strip():
            errors.append("기본 점포명은 비어있을 수 없습니다.")

        return errors

    def require_valid(self) -> "AppConfig":
        """유효하지 않으면 ConfigurationError 발생"""
        errors = self.validate()
        if errors:
            raise ConfigurationError(
                "; ".join(errors),
                config_key="STORAGE_BACKEND" if self.storage_backend not in STORAGE_BACKENDS else None,
                details={"errors": errors},
            )
        return self
