"""
json_repository.py - 로컬 JSON 저장소

Supabase 미설정 시 로컬 JSON 파일로 데이터 저장
테이블별 파일 1개 (stores / inventory_items / order_items / settings)
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional

from .base import InventoryRepository
from ..core.config import DATA_DIR
from ..core.exceptions import NotFoundError, StorageError
from ..domain.models import InventoryItem, OrderItem, Settings, Store


class JsonInventoryRepository(InventoryRepository):
    """점포/재고/주문 저장소 (로컬 JSON)"""

    def __init__(self, data_dir: str = None):
        """
        Args:
            data_dir: 데이터 저장 디렉토리 (기본: project_root/data)
        """
        self.data_dir = Path(data_dir) if data_dir else DATA_DIR
        self.data_dir.mkdir(parents=True, exist_ok=True)

        # 파일 경로
        self.stores_file = self.data_dir / "stores.json"
        self.inventory_file = self.data_dir / "inventory_items.json"
        self.orders_file = self.data_dir / "order_items.json"
        self.settings_file = self.data_dir / "settings.json"

        # 초기 파일 생성
        self._init_files()

    def _init_files(self):
        """초기 파일 생성"""
        for file_path in [self.stores_file, self.inventory_file, self.orders_file]:
            if not file_path.exists():
                self._save_json(file_path, [])

    def _load_json(self, file_path: Path, default: Any = None) -> Any:
        """JSON 파일 로드"""
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except FileNotFoundError:
            return [] if default is None else default
        except json.JSONDecodeError as e:
            raise StorageError(
                f"JSON 파일이 손상되었습니다: {file_path.name}",
                operation="load",
                details={"file": str(file_path)},
                cause=e,
            )

    def _save_json(self, file_path: Path, data: Any):
        """JSON 파일 저장 (임시 파일에 쓴 뒤 교체)"""
        tmp_path = None
        try:
            fd, tmp_path = tempfile.mkstemp(dir=self.data_dir, suffix=".tmp")
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, file_path)
        except OSError as e:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise StorageError(
                f"JSON 파일 저장 실패: {file_path.name}",
                operation="save",
                details={"file": str(file_path)},
                cause=e,
            )

    def _replace_row(self, file_path: Path, row: Dict[str, Any], entity: str):
        data = self._load_json(file_path)
        for i, d in enumerate(data):
            if d.get("id") == row["id"]:
                data[i] = {**d, **row}
                break
        else:
            raise NotFoundError(f"{entity}을(를) 찾을 수 없습니다: {row['id']}", entity=entity, entity_id=row["id"])
        self._save_json(file_path, data)

    def _delete_row(self, file_path: Path, row_id: str) -> bool:
        data = self._load_json(file_path)
        original_len = len(data)
        data = [d for d in data if d.get("id") != row_id]
        if len(data) == original_len:
            return False
        self._save_json(file_path, data)
        return True

    def _find_row(self, file_path: Path, row_id: str) -> Optional[Dict[str, Any]]:
        for d in self._load_json(file_path):
            if d.get("id") == row_id:
                return d
        return None

    # ========== 설정 ==========

    def get_settings(self) -> Settings:
        """전역 설정 조회"""
        data = self._load_json(self.settings_file, default={})
        return Settings.from_dict(data) if data else Settings()

    def save_settings(self, settings: Settings) -> Settings:
        """전역 설정 저장"""
        self._save_json(self.settings_file, settings.to_dict())
        return settings

    # ========== 점포 관리 ==========

    def get_stores(self) -> List[Store]:
        """점포 목록 (생성순)"""
        return [Store.from_dict(d) for d in self._load_json(self.stores_file)]

    def get_store_by_id(self, store_id: str) -> Optional[Store]:
        """ID로 점포 조회"""
        row = self._find_row(self.stores_file, store_id)
        return Store.from_dict(row) if row else None

    def add_store(self, store: Store) -> Store:
        """점포 추가"""
        data = self._load_json(self.stores_file)
        data.append(store.to_dict())
        self._save_json(self.stores_file, data)
        return store

    def update_store(self, store: Store) -> Store:
        """점포 업데이트"""
        self._replace_row(self.stores_file, store.to_dict(), "store")
        return store

    def delete_store(self, store_id: str) -> bool:
        """점포 삭제 (재고/주문 함께 삭제)"""
        deleted = self._delete_row(self.stores_file, store_id)
        if deleted:
            for file_path in [self.inventory_file, self.orders_file]:
                data = self._load_json(file_path)
                self._save_json(file_path, [d for d in data if d.get("store_id") != store_id])
        return deleted

    # ========== 재고 관리 ==========

    def get_inventory_items(self, store_id: Optional[str] = None) -> List[InventoryItem]:
        """재고 목록"""
        items = [InventoryItem.from_dict(d) for d in self._load_json(self.inventory_file)]
        if store_id:
            items = [i for i in items if i.store_id == store_id]
        return items

    def get_inventory_item_by_id(self, item_id: str) -> Optional[InventoryItem]:
        """ID로 재고 조회"""
        row = self._find_row(self.inventory_file, item_id)
        return InventoryItem.from_dict(row) if row else None

    def add_inventory_item(self, item: InventoryItem) -> InventoryItem:
        """재고 추가"""
        data = self._load_json(self.inventory_file)
        data.append(item.to_dict())
        self._save_json(self.inventory_file, data)
        return item

    def update_inventory_item(self, item: InventoryItem) -> InventoryItem:
        """재고 업데이트"""
        self._replace_row(self.inventory_file, item.to_dict(), "inventory_item")
        return item

    def update_inventory_price(self, item_id: str, selling_price_jpy: int) -> None:
        """판매가만 저장"""
        row = {"id": item_id, "selling_price_jpy": selling_price_jpy}
        self._replace_row(self.inventory_file, row, "inventory_item")

    def delete_inventory_item(self, item_id: str) -> bool:
        """재고 삭제"""
        return self._delete_row(self.inventory_file, item_id)

    # ========== 주문 관리 ==========

    def get_orders(self, store_id: Optional[str] = None) -> List[OrderItem]:
        """주문 목록"""
        orders = [OrderItem.from_dict(d) for d in self._load_json(self.orders_file)]
        if store_id:
            orders = [o for o in orders if o.store_id == store_id]
        return orders

    def get_order_by_id(self, order_id: str) -> Optional[OrderItem]:
        """ID로 주문 조회"""
        row = self._find_row(self.orders_file, order_id)
        return OrderItem.from_dict(row) if row else None

    def add_order(self, order: OrderItem) -> OrderItem:
        """주문 추가"""
        data = self._load_json(self.orders_file)
        data.append(order.to_dict())
        self._save_json(self.orders_file, data)
        return order

    def update_order(self, order: OrderItem) -> OrderItem:
        """주문 업데이트"""
        self._replace_row(self.orders_file, order.to_dict(), "order_item")
        return order

    def update_order_amounts(self, order_id: str, converted_with_shipping: int, profit: int) -> None:
        """환산 원가와 이익만 저장"""
        row = {"id": order_id, "converted_with_shipping": converted_with_shipping, "profit": profit}
        self._replace_row(self.orders_file, row, "order_item")

    def delete_order(self, order_id: str) -> bool:
        """주문 삭제"""
        return self._delete_row(self.orders_file, order_id)
