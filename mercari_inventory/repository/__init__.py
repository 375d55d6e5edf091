"""저장소 모듈 - 로컬 JSON / Supabase"""
from typing import Optional

from .base import InventoryRepository
from .json_repository import JsonInventoryRepository
from .supabase_repository import SupabaseInventoryRepository
from ..core.config import AppConfig


def create_repository(config: Optional[AppConfig] = None) -> InventoryRepository:
    """설정에 맞는 저장소 생성 (STORAGE_BACKEND=json | supabase)"""
    config = (config or AppConfig.from_env()).require_valid()

    if config.storage_backend == "supabase":
        return SupabaseInventoryRepository(url=config.supabase_url, key=config.supabase_key)
    return JsonInventoryRepository(data_dir=config.data_dir)


__all__ = [
    "InventoryRepository",
    "JsonInventoryRepository",
    "SupabaseInventoryRepository",
    "create_repository",
]
