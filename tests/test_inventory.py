"""
Integration tests for the inventory router.
"""
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from flowops.models import InventoryItem, InventoryLog, TimelineEvent


def create_item(client: TestClient, headers: dict, **overrides) -> dict:
    payload = {"name": "Tomatoes", "icon": "🍅", "category": "Food/Produce", "quantity": 10, "unit": "kg"}
    payload.update(overrides)
    response = client.post("/api/inventory", headers=headers, json=payload)
    assert response.status_code == 201, response.text
    return response.json()


class TestCreateInventory:
    """Tests for POST /api/inventory."""

    def test_create_sets_server_fields(self, client: TestClient, db: Session, manager, manager_headers: dict):
        item = create_item(client, manager_headers, establishment="Trailblazer Café")

        assert item["establishment"] == "Bison Den"  # payload establishment ignored
        assert item["updated_by"] == manager.name
        assert item["status"] == "OK"
        assert item["quantity"] == 10

        event = db.query(TimelineEvent).one()
        assert event.text == "Added new item: Tomatoes"
        assert event.type == "info"

    def test_system_admin_picks_establishment(self, client: TestClient, admin_headers: dict):
        item = create_item(client, admin_headers, establishment="Trailblazer Café")

        assert item["establishment"] == "Trailblazer Café"

    def test_category_is_canonicalised(self, client: TestClient, manager_headers: dict):
        item = create_item(client, manager_headers, category="  Food > Dairy //  Cheese ")

        assert item["category"] == "Food/Dairy/Cheese"

    def test_invalid_status_is_rejected(self, client: TestClient, manager_headers: dict):
        response = client.post(
            "/api/inventory", headers=manager_headers, json={"name": "Salt", "status": "EMPTY"}
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "status"

    def test_missing_name_is_rejected(self, client: TestClient, manager_headers: dict):
        response = client.post("/api/inventory", headers=manager_headers, json={"icon": "🧂"})

        assert response.status_code == 400


class TestListInventory:
    """Tests for GET /api/inventory."""

    def test_sorted_by_name_and_fenced(self, client: TestClient, manager_headers: dict, other_headers: dict):
        create_item(client, manager_headers, name="Onions")
        create_item(client, manager_headers, name="Beef")
        create_item(client, other_headers, name="Coffee Beans")

        response = client.get("/api/inventory", headers=manager_headers)

        assert [i["name"] for i in response.json()] == ["Beef", "Onions"]

    def test_system_admin_sees_all(self, client: TestClient, manager_headers: dict, other_headers: dict,
                                   admin_headers: dict):
        create_item(client, manager_headers, name="Onions")
        create_item(client, other_headers, name="Coffee Beans")

        response = client.get("/api/inventory", headers=admin_headers)

        assert {i["establishment"] for i in response.json()} == {"Bison Den", "Trailblazer Café"}

    def test_category_filter_includes_subfolders(self, client: TestClient, manager_headers: dict):
        create_item(client, manager_headers, name="Milk", category="Food/Dairy")
        create_item(client, manager_headers, name="Brie", category="Food/Dairy/Cheese")
        create_item(client, manager_headers, name="Foodie Magazine", category="Foodstuff")
        create_item(client, manager_headers, name="Cola", category="Drink")

        response = client.get("/api/inventory", params={"category": "Food"}, headers=manager_headers)
        dairy = client.get("/api/inventory", params={"category": "Food/Dairy/Cheese"}, headers=manager_headers)

        assert [i["name"] for i in response.json()] == ["Brie", "Milk"]
        assert [i["name"] for i in dairy.json()] == ["Brie"]

    def test_status_filter(self, client: TestClient, manager_headers: dict):
        create_item(client, manager_headers, name="Salt")
        create_item(client, manager_headers, name="Pepper", status="OUT")

        response = client.get("/api/inventory", params={"status": "OUT"}, headers=manager_headers)

        assert [i["name"] for i in response.json()] == ["Pepper"]


class TestCategories:
    """Tests for GET /api/inventory/categories."""

    def test_folder_tree(self, client: TestClient, manager_headers: dict):
        create_item(client, manager_headers, name="Milk", category="Food/Dairy")
        create_item(client, manager_headers, name="Brie", category="Food/Dairy/Cheese")
        create_item(client, manager_headers, name="Beef", category="Food/Meat")
        create_item(client, manager_headers, name="Napkins", category=None)

        response = client.get("/api/inventory/categories", headers=manager_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["uncategorized_count"] == 1
        [food] = data["categories"]
        assert food["path"] == "Food"
        assert food["total_count"] == 3
        assert food["item_count"] == 0
        assert [c["name"] for c in food["children"]] == ["Dairy", "Meat"]
        dairy = food["children"][0]
        assert dairy["item_count"] == 1
        assert dairy["total_count"] == 2
        assert dairy["children"][0]["path"] == "Food/Dairy/Cheese"


class TestUpdateInventory:
    """Tests for PATCH /api/inventory/{id}."""

    def test_mark_low_posts_warning(self, client: TestClient, db: Session, manager_headers: dict):
        item = create_item(client, manager_headers)

        response = client.patch(
            f"/api/inventory/{item['id']}",
            headers=manager_headers,
            json={"status": "LOW", "low_comment": "Order Friday"},
        )

        assert response.status_code == 200
        assert response.json()["low_comment"] == "Order Friday"
        event = db.query(TimelineEvent).filter(TimelineEvent.type == "warning").one()
        assert event.text == "Tomatoes marked LOW"
        assert event.comment == "Order Friday"

    def test_mark_out_posts_alert(self, client: TestClient, db: Session, manager_headers: dict):
        item = create_item(client, manager_headers)

        client.patch(f"/api/inventory/{item['id']}", headers=manager_headers, json={"status": "OUT"})

        event = db.query(TimelineEvent).filter(TimelineEvent.type == "alert").one()
        assert event.text == "Tomatoes marked OUT"

    def test_leaving_low_clears_comment(self, client: TestClient, manager_headers: dict):
        item = create_item(client, manager_headers, status="LOW", low_comment="Running out")
        assert item["low_comment"] == "Running out"

        response = client.patch(f"/api/inventory/{item['id']}", headers=manager_headers, json={"status": "OK"})

        assert response.json()["low_comment"] is None

    def test_low_comment_dropped_when_not_low(self, client: TestClient, manager_headers: dict):
        item = create_item(client, manager_headers, low_comment="ignored")

        assert item["low_comment"] is None

    def test_quantity_change_is_logged(self, client: TestClient, db: Session, manager_headers: dict):
        item = create_item(client, manager_headers, quantity=10)

        client.patch(f"/api/inventory/{item['id']}", headers=manager_headers, json={"quantity": 25})

        log = db.query(InventoryLog).one()
        assert float(log.change) == 15
        assert log.reason == "adjustment"

    def test_other_establishment_is_not_found(self, client: TestClient, manager_headers: dict,
                                              other_headers: dict):
        item = create_item(client, other_headers)

        response = client.patch(f"/api/inventory/{item['id']}", headers=manager_headers, json={"name": "Mine"})

        assert response.status_code == 404


class TestDeleteInventory:
    """Tests for DELETE /api/inventory/{id}."""

    def test_delete_twice_is_not_an_error(self, client: TestClient, db: Session, manager_headers: dict):
        item = create_item(client, manager_headers)

        first = client.delete(f"/api/inventory/{item['id']}", headers=manager_headers)
        second = client.delete(f"/api/inventory/{item['id']}", headers=manager_headers)

        assert first.status_code == 200
        assert second.status_code == 200
        assert db.query(InventoryItem).count() == 0

    def test_delete_from_other_establishment_is_a_no_op(self, client: TestClient, db: Session,
                                                        manager_headers: dict, other_headers: dict):
        item = create_item(client, other_headers)

        client.delete(f"/api/inventory/{item['id']}", headers=manager_headers)

        assert db.query(InventoryItem).count() == 1


class TestInventoryLogs:
    """Tests for GET /api/inventory-logs."""

    def test_logs_are_fenced(self, client: TestClient, manager_headers: dict, other_headers: dict):
        mine = create_item(client, manager_headers, quantity=1)
        theirs = create_item(client, other_headers, quantity=1)
        client.patch(f"/api/inventory/{mine['id']}", headers=manager_headers, json={"quantity": 2})
        client.patch(f"/api/inventory/{theirs['id']}", headers=other_headers, json={"quantity": 3})

        response = client.get("/api/inventory-logs", headers=manager_headers)

        assert response.status_code == 200
        logs = response.json()
        assert len(logs) == 1
        assert logs[0]["inventory_item_id"] == mine["id"]
