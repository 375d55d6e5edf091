"""Supabase 저장소 테스트 (클라이언트 Mock)"""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import httpx
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from mercari_inventory.core.exceptions import ConfigurationError, NotFoundError, SupabaseError
from mercari_inventory.domain.models import InventoryItem, OrderItem, Settings, Store
from mercari_inventory.repository.supabase_repository import SupabaseInventoryRepository


def make_client(*responses):
    """execute() 결과를 순서대로 돌려주는 fluent 쿼리 Mock"""
    query = MagicMock()
    for method in ["select", "insert", "update", "delete", "eq", "order", "limit"]:
        getattr(query, method).return_value = query
    query.execute.side_effect = [MagicMock(data=data) for data in responses]

    client = MagicMock()
    client.table.return_value = query
    return client, query


class TestInit:
    """초기화 테스트"""

    def test_missing_credentials(self, monkeypatch):
        """URL/KEY 없으면 ConfigurationError"""
        monkeypatch.delenv("SUPABASE_URL", raising=False)
        monkeypatch.delenv("SUPABASE_KEY", raising=False)
        with pytest.raises(ConfigurationError):
            SupabaseInventoryRepository()


class TestSettings:
    """설정 테스트"""

    def test_existing_row(self):
        """기존 설정 행 로드"""
        client, query = make_client([{"id": "cfg", "exchange_rate": "25", "platform_fee_rate": "0.1"}])
        repo = SupabaseInventoryRepository(client=client)

        settings = repo.get_settings()
        assert settings.exchange_rate == 25
        assert settings.platform_fee_rate == 0.1
        query.limit.assert_called_with(1)

    def test_missing_row_inserts_defaults(self):
        """설정 행이 없으면 기본값 삽입"""
        client, query = make_client([], [{"id": "cfg"}])
        repo = SupabaseInventoryRepository(client=client)

        assert repo.get_settings() == Settings()
        query.insert.assert_called_once_with(Settings().to_dict())

    def test_save_updates_singleton(self):
        """설정 저장은 단일 행 업데이트"""
        client, query = make_client([{"id": "cfg"}], [{"id": "cfg", "exchange_rate": 21}])
        repo = SupabaseInventoryRepository(client=client)

        saved = repo.save_settings(Settings(exchange_rate=21))
        assert saved.exchange_rate == 21
        query.eq.assert_called_with("id", "cfg")


class TestStores:
    """점포 테스트"""

    def test_get_stores(self):
        """점포 목록 생성순"""
        client, query = make_client([{"id": "s1", "name": "A"}, {"id": "s2", "name": "B"}])
        repo = SupabaseInventoryRepository(client=client)

        stores = repo.get_stores()
        assert [s.id for s in stores] == ["s1", "s2"]
        query.order.assert_called_with("created_at")

    def test_delete_store_deletes_children(self):
        """재고/주문 행 삭제 후 점포 삭제"""
        client, query = make_client([], [], [{"id": "s1"}])
        repo = SupabaseInventoryRepository(client=client)

        assert repo.delete_store("s1")
        tables = [c.args[0] for c in client.table.call_args_list]
        assert tables == ["inventory_items", "order_items", "stores"]

    def test_update_missing_store(self):
        """없는 점포 수정"""
        client, _ = make_client([])
        repo = SupabaseInventoryRepository(client=client)
        with pytest.raises(NotFoundError):
            repo.update_store(Store(id="missing", name="x"))


class TestItems:
    """재고/주문 테스트"""

    def test_update_item_excludes_keys(self):
        """업데이트 데이터에서 id, store_id 제외"""
        item = InventoryItem(id="i1", store_id="s1", product_name="シャツ", selling_price_jpy=13206)
        client, query = make_client([item.to_dict()])
        repo = SupabaseInventoryRepository(client=client)

        saved = repo.update_inventory_item(item)
        data = query.update.call_args.args[0]
        assert "id" not in data
        assert "store_id" not in data
        assert data["selling_price_jpy"] == 13206
        assert saved == item

    def test_update_order_amounts_payload(self):
        """파생 컬럼만 업데이트"""
        client, query = make_client([{"id": "o1"}])
        repo = SupabaseInventoryRepository(client=client)

        repo.update_order_amounts("o1", 2250, 750)
        query.update.assert_called_once_with({"converted_with_shipping": 2250, "profit": 750})
        query.eq.assert_called_with("id", "o1")

    def test_update_inventory_price_missing(self):
        """없는 재고의 판매가 업데이트"""
        client, query = make_client([])
        repo = SupabaseInventoryRepository(client=client)

        with pytest.raises(NotFoundError):
            repo.update_inventory_price("missing", 13462)
        query.update.assert_called_once_with({"selling_price_jpy": 13462})

    def test_get_orders_filtered(self):
        """점포별 주문"""
        order = OrderItem(id="o1", store_id="s1", created_at="2026-01-15T00:00:00")
        client, query = make_client([order.to_dict()])
        repo = SupabaseInventoryRepository(client=client)

        orders = repo.get_orders("s1")
        assert orders == [order]
        query.eq.assert_called_with("store_id", "s1")


class TestErrors:
    """오류 처리 테스트"""

    def test_api_error_wrapped(self):
        """쿼리 오류는 SupabaseError로 변환"""
        client, query = make_client()
        query.execute.side_effect = RuntimeError("permission denied")
        repo = SupabaseInventoryRepository(client=client)

        with pytest.raises(SupabaseError) as exc_info:
            repo.get_stores()
        assert exc_info.value.table == "stores"
        assert isinstance(exc_info.value.cause, RuntimeError)

    def test_network_error_retried(self, monkeypatch):
        """네트워크 오류는 재시도"""
        monkeypatch.setattr("mercari_inventory.core.error_handler.time.sleep", lambda _: None)
        client, query = make_client()
        query.execute.side_effect = [
            httpx.ConnectError("connection refused"),
            MagicMock(data=[{"id": "s1", "name": "A"}]),
        ]
        repo = SupabaseInventoryRepository(client=client)

        assert repo.get_stores()[0].name == "A"
        assert query.execute.call_count == 2

    def test_network_error_exhausted(self, monkeypatch):
        """재시도 초과 시 SupabaseError"""
        monkeypatch.setattr("mercari_inventory.core.error_handler.time.sleep", lambda _: None)
        client, query = make_client()
        query.execute.side_effect = httpx.ConnectError("connection refused")
        repo = SupabaseInventoryRepository(client=client, max_retries=1)

        with pytest.raises(SupabaseError):
            repo.get_stores()
        assert query.execute.call_count == 2
