"""
supabase_repository.py - Supabase 기반 저장소

장점:
- 멀티 디바이스/멀티 세션 공유 (최종 쓰기 우선)
- 데이터 백업 자동화

테이블: stores, inventory_items, order_items, settings
(inventory_items/order_items.store_id 는 stores.id ON DELETE CASCADE)

사용법:
    # 환경변수 설정 필요
    # SUPABASE_URL=https://xxx.supabase.co
    # SUPABASE_KEY=eyJxxx...

    repo = SupabaseInventoryRepository()
    stores = repo.get_stores()
"""

import logging
import os
from typing import Any, Dict, List, Optional

import httpx
from supabase import create_client, Client

from .base import InventoryRepository
from ..core.error_handler import RetryContext
from ..core.exceptions import ConfigurationError, NotFoundError, SupabaseError
from ..domain.models import InventoryItem, OrderItem, Settings, Store

logger = logging.getLogger(__name__)


class SupabaseInventoryRepository(InventoryRepository):
    """Supabase 기반 점포/재고/주문 저장소

    JsonInventoryRepository와 동일한 인터페이스 제공
    환경변수 SUPABASE_URL, SUPABASE_KEY 필요
    """

    TABLE_STORES = "stores"
    TABLE_INVENTORY = "inventory_items"
    TABLE_ORDERS = "order_items"
    TABLE_SETTINGS = "settings"

    def __init__(
        self,
        url: str = None,
        key: str = None,
        client: Optional[Client] = None,
        max_retries: int = 2,
    ):
        """
        Args:
            url: Supabase 프로젝트 URL
            key: Supabase anon/service key
            client: 이미 생성된 클라이언트 (테스트용)
            max_retries: 네트워크 오류 재시도 횟수
        """
        self.max_retries = max_retries
        self._settings_id: Optional[str] = None

        if client is not None:
            self.client = client
            return

        self.url = url or os.getenv("SUPABASE_URL")
        self.key = key or os.getenv("SUPABASE_KEY")

        if not self.url or not self.key:
            raise ConfigurationError(
                "SUPABASE_URL과 SUPABASE_KEY 환경변수가 필요합니다.",
                config_key="SUPABASE_URL",
            )

        self.client: Client = create_client(self.url, self.key)

    def _execute(self, query, table: str, operation: str):
        """쿼리 실행. 네트워크 오류는 재시도, 그 외 오류는 SupabaseError로 변환"""
        retry = RetryContext(
            max_retries=self.max_retries,
            exceptions=(httpx.TransportError,),
            initial_delay=0.5,
            logger=logger,
        )
        while True:
            try:
                return query.execute()
            except Exception as e:
                if retry.should_retry(e):
                    continue
                logger.error(f"Supabase {operation} 실패 ({table}): {e}")
                raise SupabaseError(
                    f"Supabase {operation} 실패: {table}",
                    table=table,
                    operation=operation,
                    cause=e,
                ) from e

    def _require_row(self, response, table: str, row_id: str) -> Dict[str, Any]:
        if not response.data:
            raise NotFoundError(f"{table}에서 레코드를 찾을 수 없습니다: {row_id}", entity=table, entity_id=row_id)
        return response.data[0]

    # ========== 설정 ==========

    def get_settings(self) -> Settings:
        """전역 설정 조회 (행이 없으면 기본값으로 생성)"""
        query = self.client.table(self.TABLE_SETTINGS).select("*").limit(1)
        response = self._execute(query, self.TABLE_SETTINGS, "select")

        if response.data:
            row = response.data[0]
            self._settings_id = row.get("id")
            return Settings.from_dict(row)

        settings = Settings()
        query = self.client.table(self.TABLE_SETTINGS).insert(settings.to_dict())
        response = self._execute(query, self.TABLE_SETTINGS, "insert")
        if response.data:
            self._settings_id = response.data[0].get("id")
        return settings

    def save_settings(self, settings: Settings) -> Settings:
        """전역 설정 저장"""
        if self._settings_id is None:
            self.get_settings()

        query = (
            self.client.table(self.TABLE_SETTINGS)
            .update(settings.to_dict())
            .eq("id", self._settings_id)
        )
        response = self._execute(query, self.TABLE_SETTINGS, "update")
        return Settings.from_dict(response.data[0]) if response.data else settings

    # ========== 점포 관리 ==========

    def get_stores(self) -> List[Store]:
        """점포 목록 (생성순)"""
        query = self.client.table(self.TABLE_STORES).select("*").order("created_at")
        response = self._execute(query, self.TABLE_STORES, "select")
        return [Store.from_dict(row) for row in response.data]

    def get_store_by_id(self, store_id: str) -> Optional[Store]:
        """ID로 점포 조회"""
        query = self.client.table(self.TABLE_STORES).select("*").eq("id", store_id)
        response = self._execute(query, self.TABLE_STORES, "select")
        return Store.from_dict(response.data[0]) if response.data else None

    def add_store(self, store: Store) -> Store:
        """점포 추가"""
        query = self.client.table(self.TABLE_STORES).insert(store.to_dict())
        response = self._execute(query, self.TABLE_STORES, "insert")
        return Store.from_dict(response.data[0]) if response.data else store

    def update_store(self, store: Store) -> Store:
        """점포 이름 업데이트"""
        query = self.client.table(self.TABLE_STORES).update({"name": store.name}).eq("id", store.id)
        response = self._execute(query, self.TABLE_STORES, "update")
        return Store.from_dict(self._require_row(response, self.TABLE_STORES, store.id))

    def delete_store(self, store_id: str) -> bool:
        """점포 삭제 (FK CASCADE와 별개로 하위 행도 명시적으로 삭제)"""
        for table in (self.TABLE_INVENTORY, self.TABLE_ORDERS):
            query = self.client.table(table).delete().eq("store_id", store_id)
            self._execute(query, table, "delete")

        query = self.client.table(self.TABLE_STORES).delete().eq("id", store_id)
        response = self._execute(query, self.TABLE_STORES, "delete")
        return len(response.data) > 0

    # ========== 재고 관리 ==========

    def get_inventory_items(self, store_id: Optional[str] = None) -> List[InventoryItem]:
        """재고 목록"""
        query = self.client.table(self.TABLE_INVENTORY).select("*")
        if store_id:
            query = query.eq("store_id", store_id)
        response = self._execute(query.order("created_at"), self.TABLE_INVENTORY, "select")
        return [InventoryItem.from_dict(row) for row in response.data]

    def get_inventory_item_by_id(self, item_id: str) -> Optional[InventoryItem]:
        """ID로 재고 조회"""
        query = self.client.table(self.TABLE_INVENTORY).select("*").eq("id", item_id)
        response = self._execute(query, self.TABLE_INVENTORY, "select")
        return InventoryItem.from_dict(response.data[0]) if response.data else None

    def add_inventory_item(self, item: InventoryItem) -> InventoryItem:
        """재고 추가"""
        query = self.client.table(self.TABLE_INVENTORY).insert(item.to_dict())
        response = self._execute(query, self.TABLE_INVENTORY, "insert")
        return InventoryItem.from_dict(response.data[0]) if response.data else item

    def update_inventory_item(self, item: InventoryItem) -> InventoryItem:
        """재고 업데이트 (원본/파생 필드를 한 번의 update로 저장)"""
        data = item.to_dict()
        # id, store_id는 업데이트에서 제외
        del data["id"]
        del data["store_id"]

        query = self.client.table(self.TABLE_INVENTORY).update(data).eq("id", item.id)
        response = self._execute(query, self.TABLE_INVENTORY, "update")
        return InventoryItem.from_dict(self._require_row(response, self.TABLE_INVENTORY, item.id))

    def update_inventory_price(self, item_id: str, selling_price_jpy: int) -> None:
        """판매가 컬럼만 업데이트"""
        query = (
            self.client.table(self.TABLE_INVENTORY)
            .update({"selling_price_jpy": selling_price_jpy})
            .eq("id", item_id)
        )
        response = self._execute(query, self.TABLE_INVENTORY, "update")
        self._require_row(response, self.TABLE_INVENTORY, item_id)

    def delete_inventory_item(self, item_id: str) -> bool:
        """재고 삭제"""
        query = self.client.table(self.TABLE_INVENTORY).delete().eq("id", item_id)
        response = self._execute(query, self.TABLE_INVENTORY, "delete")
        return len(response.data) > 0

    # ========== 주문 관리 ==========

    def get_orders(self, store_id: Optional[str] = None) -> List[OrderItem]:
        """주문 목록 (주문일순)"""
        query = self.client.table(self.TABLE_ORDERS).select("*")
        if store_id:
            query = query.eq("store_id", store_id)
        response = self._execute(query.order("created_at"), self.TABLE_ORDERS, "select")
        return [OrderItem.from_dict(row) for row in response.data]

    def get_order_by_id(self, order_id: str) -> Optional[OrderItem]:
        """ID로 주문 조회"""
        query = self.client.table(self.TABLE_ORDERS).select("*").eq("id", order_id)
        response = self._execute(query, self.TABLE_ORDERS, "select")
        return OrderItem.from_dict(response.data[0]) if response.data else None

    def add_order(self, order: OrderItem) -> OrderItem:
        """주문 추가"""
        query = self.client.table(self.TABLE_ORDERS).insert(order.to_dict())
        response = self._execute(query, self.TABLE_ORDERS, "insert")
        return OrderItem.from_dict(response.data[0]) if response.data else order

    def update_order(self, order: OrderItem) -> OrderItem:
        """주문 업데이트 (원본/파생 필드를 한 번의 update로 저장)"""
        data = order.to_dict()
        del data["id"]
        del data["store_id"]

        query = self.client.table(self.TABLE_ORDERS).update(data).eq("id", order.id)
        response = self._execute(query, self.TABLE_ORDERS, "update")
        return OrderItem.from_dict(self._require_row(response, self.TABLE_ORDERS, order.id))

    def update_order_amounts(self, order_id: str, converted_with_shipping: int, profit: int) -> None:
        """환산 원가, 이익 컬럼만 업데이트"""
        data = {"converted_with_shipping": converted_with_shipping, "profit": profit}
        query = self.client.table(self.TABLE_ORDERS).update(data).eq("id", order_id)
        response = self._execute(query, self.TABLE_ORDERS, "update")
        self._require_row(response, self.TABLE_ORDERS, order_id)

    def delete_order(self, order_id: str) -> bool:
        """주문 삭제"""
        query = self.client.table(self.TABLE_ORDERS).delete().eq("id", order_id)
        response = self._execute(query, self.TABLE_ORDERS, "delete")
        return len(response.data) > 0
