"""서비스 모듈"""
from .inventory_service import InventoryService

__all__ = ["InventoryService"]
