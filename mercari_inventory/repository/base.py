"""
base.py - 저장소 인터페이스

JSON 파일 저장소와 Supabase 저장소가 동일한 인터페이스 제공.
모든 쓰기는 레코드 단위로 원본 필드와 파생 필드를 함께 저장.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..domain.models import InventoryItem, OrderItem, Settings, Store


class InventoryRepository(ABC):
    """점포/재고/주문/설정 저장소"""

    # ========== 설정 ==========

    @abstractmethod
    def get_settings(self) -> Settings:
        """전역 설정 조회 (없으면 기본값)"""

    @abstractmethod
    def save_settings(self, settings: Settings) -> Settings:
        """전역 설정 저장"""

    # ========== 점포 ==========

    @abstractmethod
    def get_stores(self) -> List[Store]:
        """점포 목록 (재고/주문 미포함, 생성순)"""

    @abstractmethod
    def get_store_by_id(self, store_id: str) -> Optional[Store]:
        """ID로 점포 조회"""

    @abstractmethod
    def add_store(self, store: Store) -> Store:
        """점포 추가"""

    @abstractmethod
    def update_store(self, store: Store) -> Store:
        """점포 업데이트 (이름)"""

    @abstractmethod
    def delete_store(self, store_id: str) -> bool:
        """점포 삭제 (재고/주문 함께 삭제)"""

    # ========== 재고 ==========

    @abstractmethod
    def get_inventory_items(self, store_id: Optional[str] = None) -> List[InventoryItem]:
        """재고 목록 (store_id 미지정 시 전체)"""

    @abstractmethod
    def get_inventory_item_by_id(self, item_id: str) -> Optional[InventoryItem]:
        """ID로 재고 조회"""

    @abstractmethod
    def add_inventory_item(self, item: InventoryItem) -> InventoryItem:
        """재고 추가"""

    @abstractmethod
    def update_inventory_item(self, item: InventoryItem) -> InventoryItem:
        """재고 업데이트"""

    @abstractmethod
    def update_inventory_price(self, item_id: str, selling_price_jpy: int) -> None:
        """판매가만 저장 (다른 필드는 건드리지 않음)"""

    @abstractmethod
    def delete_inventory_item(self, item_id: str) -> bool:
        """재고 삭제"""

    # ========== 주문 ==========

    @abstractmethod
    def get_orders(self, store_id: Optional[str] = None) -> List[OrderItem]:
        """주문 목록 (store_id 미지정 시 전체)"""

    @abstractmethod
    def get_order_by_id(self, order_id: str) -> Optional[OrderItem]:
        """ID로 주문 조회"""

    @abstractmethod
    def add_order(self, order: OrderItem) -> OrderItem:
        """주문 추가"""

    @abstractmethod
    def update_order(self, order: OrderItem) -> OrderItem:
        """주문 업데이트"""

    @abstractmethod
    def update_order_amounts(self, order_id: str, converted_with_shipping: int, profit: int) -> None:
        """환산 원가와 이익만 저장 (다른 필드는 건드리지 않음)"""

    @abstractmethod
    def delete_order(self, order_id: str) -> bool:
        """주문 삭제"""

    # ========== 조합 ==========

    def load_store(self, store_id: str) -> Optional[Store]:
        """재고/주문을 포함한 점포 조회"""
        store = self.get_store_by_id(store_id)
        if store is None:
            return None
        store.inventory = self.get_inventory_items(store_id)
        store.orders = self.get_orders(store_id)
        return store

    def load_all_stores(self) -> List[Store]:
        """재고/주문을 포함한 전체 점포"""
        stores = self.get_stores()
        inventory = self.get_inventory_items()
        orders = self.get_orders()
        for store in stores:
            store.inventory = [i for i in inventory if i.store_id == store.id]
            store.orders = [o for o in orders if o.store_id == store.id]
        return stores
