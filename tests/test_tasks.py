"""
Tests for weekly tasks and photo-proof completions.
"""
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from flowops.models import TaskCompletion, TimelineEvent

PHOTO = "data:image/jpeg;base64,/9j/4AAQSkZJRg=="


class TestWeeklyTasks:

    def _create(self, client: TestClient, headers: dict, **overrides) -> dict:
        payload = {"text": "Deep clean fridge", "assigned_to": "Hunter"}
        payload.update(overrides)
        response = client.post("/api/tasks", headers=headers, json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    def test_create_posts_info_event(self, client: TestClient, db: Session, manager_headers: dict):
        task = self._create(client, manager_headers)

        assert task["completed"] is False
        event = db.query(TimelineEvent).one()
        assert event.text == "New Weekly Task: Deep clean fridge (Assigned to Hunter)"

    def test_assigned_to_is_required(self, client: TestClient, manager_headers: dict):
        response = client.post("/api/tasks", headers=manager_headers, json={"text": "Mop"})

        assert response.status_code == 400

    def test_complete_with_photo(self, client: TestClient, db: Session, employee, employee_headers: dict):
        task = self._create(client, employee_headers)

        response = client.post(f"/api/tasks/{task['id']}/complete", headers=employee_headers, json={"photo": PHOTO})

        assert response.status_code == 201
        completion = response.json()
        assert completion["completed_by"] == employee.name
        assert completion["photo"] == PHOTO

        refreshed = client.get("/api/tasks", headers=employee_headers).json()[0]
        assert refreshed["completed"] is True
        assert refreshed["completed_at"] is not None

        event = db.query(TimelineEvent).filter(TimelineEvent.type == "success").one()
        assert event.text == f"Weekly task completed: Deep clean fridge by {employee.name}"
        assert event.photo == PHOTO

    def test_photo_is_required(self, client: TestClient, employee_headers: dict):
        task = self._create(client, employee_headers)

        response = client.post(f"/api/tasks/{task['id']}/complete", headers=employee_headers, json={})

        assert response.status_code == 400

    def test_completion_history(self, client: TestClient, employee_headers: dict):
        task = self._create(client, employee_headers)
        client.post(f"/api/tasks/{task['id']}/complete", headers=employee_headers, json={"photo": "first"})
        client.post(f"/api/tasks/{task['id']}/complete", headers=employee_headers, json={"photo": "second"})

        response = client.get(f"/api/tasks/{task['id']}/completions", headers=employee_headers)

        assert [c["photo"] for c in response.json()] == ["second", "first"]

    def test_other_establishment_cannot_complete(self, client: TestClient, employee_headers: dict,
                                                 other_headers: dict):
        task = self._create(client, other_headers)

        response = client.post(f"/api/tasks/{task['id']}/complete", headers=employee_headers, json={"photo": PHOTO})

        assert response.status_code == 404

    def test_delete_removes_history(self, client: TestClient, db: Session, employee_headers: dict):
        task = self._create(client, employee_headers)
        client.post(f"/api/tasks/{task['id']}/complete", headers=employee_headers, json={"photo": PHOTO})

        client.delete(f"/api/tasks/{task['id']}", headers=employee_headers)

        assert db.query(TaskCompletion).count() == 0

    def test_patch_uncomplete(self, client: TestClient, employee_headers: dict):
        task = self._create(client, employee_headers)
        client.post(f"/api/tasks/{task['id']}/complete", headers=employee_headers, json={"photo": PHOTO})

        response = client.patch(f"/api/tasks/{task['id']}", headers=employee_headers, json={"completed": False})

        assert response.json()["completed"] is False
        assert response.json()["completed_at"] is None
