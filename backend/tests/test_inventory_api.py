import pytest
from sqlalchemy.exc import OperationalError

from routers.deps import get_category_store, parse_branch_id, resolve_branch_id

CATEGORIES = "/inventory/categories/"
ITEMS = "/inventory/items/"


async def _create_category(client, **body):
    payload = {"branch_id": 1, "name": "Dairy", "category_type": "Inventory"}
    payload.update(body)
    res = await client.post(CATEGORIES, json=payload)
    assert res.status_code == 201, res.text
    return res.json()["data"]["id"]


class TestCategoryRoutes:
    @pytest.mark.asyncio
    async def test_crud_round(self, client, user):
        """Test create, list, get, update, delete through the API."""
        new_id = await _create_category(client, icon="dairy")

        listed = (await client.get(CATEGORIES, params={"branch_id": 1})).json()
        assert listed["success"] is True
        assert [c["id"] for c in listed["data"]] == [new_id]
        assert listed["data"][0]["active"] is True
        assert listed["data"][0]["encoded_by"] == str(user.id)

        res = await client.put(f"{CATEGORIES}{new_id}", json={"name": "Dairy & Eggs", "category_type": "Others"})
        assert res.status_code == 200
        assert res.json() == {"success": True, "data": None, "message": "Category updated successfully", "error": None}

        one = (await client.get(f"{CATEGORIES}{new_id}")).json()["data"]
        assert one["name"] == "Dairy & Eggs"
        assert one["category_type"] == "Others"
        assert one["edited_by"] == str(user.id)

        res = await client.delete(f"{CATEGORIES}{new_id}")
        assert res.status_code == 200

        assert (await client.get(CATEGORIES)).json()["data"] == []

    @pytest.mark.asyncio
    async def test_missing_category_is_404_envelope(self, client):
        """Test the not-found envelope for get, update and delete."""
        for method, kwargs in (("get", {}), ("put", {"json": {"name": "X"}}), ("delete", {})):
            res = await getattr(client, method)(f"{CATEGORIES}777", **kwargs)
            assert res.status_code == 404
            assert res.json() == {"success": False, "data": None, "message": None, "error": "Category not found"}

    @pytest.mark.asyncio
    async def test_second_delete_is_404(self, client):
        new_id = await _create_category(client)

        assert (await client.delete(f"{CATEGORIES}{new_id}")).status_code == 200
        assert (await client.delete(f"{CATEGORIES}{new_id}")).status_code == 404

    @pytest.mark.asyncio
    async def test_blank_name_is_validation_error(self, client):
        """Test that an empty name is rejected before storage."""
        res = await client.post(CATEGORIES, json={"branch_id": 1, "name": "   "})

        assert res.status_code == 422
        body = res.json()
        assert body["success"] is False
        assert "Category name is required" in body["error"]

    @pytest.mark.asyncio
    async def test_non_string_text_fields_are_validation_errors(self, client):
        """Test that numbers sent for text fields are rejected with 422, not a server error."""
        for extra in ({"description": 5}, {"icon": 3}):
            res = await client.post(CATEGORIES, json={"branch_id": 1, "name": "Dairy", **extra})

            assert res.status_code == 422, extra
            assert res.json()["success"] is False

        assert (await client.get(CATEGORIES)).json()["data"] == []

    @pytest.mark.asyncio
    async def test_list_defaults_to_user_branch(self, client, user):
        """Test branch resolution: query first, 'all' for every branch, else the user's branch."""
        await _create_category(client, branch_id=1, name="Meat")
        await _create_category(client, branch_id=2, name="Pasta")

        mine = (await client.get(CATEGORIES)).json()["data"]
        other = (await client.get(CATEGORIES, params={"branch_id": 2})).json()["data"]
        everything = (await client.get(CATEGORIES, params={"branch_id": "all"})).json()["data"]

        assert [c["name"] for c in mine] == ["Meat"]
        assert [c["name"] for c in other] == ["Pasta"]
        assert len(everything) == 2

    @pytest.mark.asyncio
    async def test_metrics(self, client):
        """Test the rollup endpoint joins items by id and by name."""
        dairy = await _create_category(client, name="Dairy")
        await _create_category(client, name="Oils")
        await client.post(ITEMS, json={"item_name": "Milk", "category_id": dairy, "stock_qty": 10, "unit_cost": 2.5})
        await client.post(ITEMS, json={"item_name": "Butter", "category_name": "dairy ", "stock_qty": 4, "unit_cost": 1})
        await client.post(ITEMS, json={"item_name": "Chips", "category_name": "Snacks", "stock_qty": 9, "unit_cost": 9})

        res = await client.get(f"{CATEGORIES}metrics")
        rows = {r["name"]: r for r in res.json()["data"]}

        assert res.status_code == 200
        assert rows["Dairy"]["total_items"] == 2
        assert rows["Dairy"]["total_value"] == pytest.approx(29)
        assert rows["Oils"]["total_items"] == 0
        assert rows["Oils"]["total_value"] == 0

    @pytest.mark.asyncio
    async def test_storage_failure_is_generic_500(self, client):
        """Test that driver errors are not leaked to the caller."""
        from main import app

        class BrokenStore:
            async def get_all(self, branch_id=None):
                raise OperationalError("SELECT", {}, Exception("connection refused on 10.0.0.5"))

        app.dependency_overrides[get_category_store] = lambda: BrokenStore()
        res = await client.get(CATEGORIES)

        assert res.status_code == 500
        assert res.json()["success"] is False
        assert res.json()["error"] == "Internal server error"
        assert "10.0.0.5" not in res.text


class TestItemRoutes:
    @pytest.mark.asyncio
    async def test_create_uses_user_branch(self, client):
        res = await client.post(ITEMS, json={"ITEM_NAME": "Rice", "CATEGORY_NAME": "Grains", "UNIT_COST": "1.25"})
        new_id = res.json()["data"]["id"]

        item = (await client.get(f"{ITEMS}{new_id}")).json()["data"]

        assert res.status_code == 201
        assert item["branch_id"] == 1
        assert item["unit_cost"] == 1.25
        assert item["unit"] == "pcs"

    @pytest.mark.asyncio
    async def test_create_without_any_branch_is_400(self, client, user):
        user.branch_id = None

        res = await client.post(ITEMS, json={"item_name": "Rice"})

        assert res.status_code == 400
        assert res.json()["error"] == "Branch ID is required"

    @pytest.mark.asyncio
    async def test_non_positive_query_branch_falls_back_to_user(self, client):
        res = await client.post(ITEMS, params={"branch_id": "-3"}, json={"item_name": "Rice"})
        new_id = res.json()["data"]["id"]

        assert res.status_code == 201
        assert (await client.get(f"{ITEMS}{new_id}")).json()["data"]["branch_id"] == 1

    @pytest.mark.asyncio
    async def test_malformed_fields_are_validation_errors(self, client):
        """Test wrong types and non-finite numbers are rejected before storage."""
        for extra in ({"unit": 1}, {"category_name": 7}, {"stock_qty": "inf"}, {"reorder_level": "nan"}):
            res = await client.post(ITEMS, json={"item_name": "Rice", **extra})

            assert res.status_code == 422, extra
            assert res.json()["success"] is False

        assert (await client.get(ITEMS)).json()["data"] == []

    @pytest.mark.asyncio
    async def test_cost_history_route(self, client):
        new_id = (await client.post(ITEMS, json={"item_name": "Rice", "unit_cost": 1})).json()["data"]["id"]
        await client.put(f"{ITEMS}{new_id}", json={"item_name": "Rice", "unit_cost": 2})

        history = (await client.get(f"{ITEMS}{new_id}/cost-history")).json()["data"]

        assert sorted(h["change_type"] for h in history) == ["INCREASE", "INITIAL"]
        assert (await client.get(f"{ITEMS}999/cost-history")).status_code == 404

    @pytest.mark.asyncio
    async def test_delete_item(self, client):
        new_id = (await client.post(ITEMS, json={"item_name": "Rice"})).json()["data"]["id"]

        assert (await client.delete(f"{ITEMS}{new_id}")).status_code == 200
        assert (await client.get(f"{ITEMS}{new_id}")).status_code == 404
        assert (await client.put(f"{ITEMS}{new_id}", json={"item_name": "Rice"})).status_code == 404


class TestBranchResolution:
    def test_parse_branch_id(self):
        assert parse_branch_id("3") == 3
        assert parse_branch_id("") is None
        assert parse_branch_id("all") is None
        assert parse_branch_id("north") is None
        assert parse_branch_id(None) is None
        assert parse_branch_id("-3") is None
        assert parse_branch_id("0") is None

    def test_resolve_branch_id(self):
        class U:
            branch_id = 5

        assert resolve_branch_id("2", U()) == 2
        assert resolve_branch_id(None, U()) == 5
        assert resolve_branch_id("ALL", U()) is None
        assert resolve_branch_id(None, object()) is None
