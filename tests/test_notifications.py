"""
Tests for the notification mailbox.
"""
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from flowops.models.enums import NotificationType
from flowops.services.notifications import Mailbox


def notify(db: Session, user, title: str = "Heads up"):
    notification = Mailbox(db).create(user.id, NotificationType.SYSTEM, title, "Something happened")
    db.commit()
    return notification


class TestNotifications:

    def test_list_own_only(self, client: TestClient, db: Session, manager, employee, manager_headers: dict):
        notify(db, manager, "for manager")
        notify(db, employee, "for employee")

        response = client.get("/api/notifications", headers=manager_headers)

        assert [n["title"] for n in response.json()] == ["for manager"]

    def test_unread_count(self, client: TestClient, db: Session, manager, manager_headers: dict):
        notify(db, manager)
        notify(db, manager)

        response = client.get("/api/notifications/count", headers=manager_headers)

        assert response.json() == {"count": 2}

    def test_mark_read(self, client: TestClient, db: Session, manager, manager_headers: dict):
        notification = notify(db, manager)

        response = client.post(f"/api/notifications/{notification.id}/read", headers=manager_headers)

        assert response.status_code == 200
        assert response.json()["is_read"] is True
        assert client.get("/api/notifications/count", headers=manager_headers).json() == {"count": 0}

    def test_cannot_mark_someone_elses(self, client: TestClient, db: Session, employee, manager_headers: dict):
        notification = notify(db, employee)

        response = client.post(f"/api/notifications/{notification.id}/read", headers=manager_headers)

        assert response.status_code == 404

    def test_mark_all_read(self, client: TestClient, db: Session, manager, employee, manager_headers: dict,
                           employee_headers: dict):
        notify(db, manager)
        notify(db, manager)
        notify(db, employee)

        response = client.post("/api/notifications/read-all", headers=manager_headers)

        assert response.json()["message"] == "2 notification(s) marked as read"
        assert client.get("/api/notifications/count", headers=employee_headers).json() == {"count": 1}
