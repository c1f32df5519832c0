"""
Tests for user management and the approval workflow.
"""
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from flowops.models import TimelineEvent
from flowops.models.user import User


class TestListUsers:
    """Tests for GET /api/users."""

    def test_list_is_fenced_by_establishment(
        self, client: TestClient, manager: User, other_manager: User, manager_headers: dict
    ):
        response = client.get("/api/users", headers=manager_headers)

        assert response.status_code == 200
        names = [u["name"] for u in response.json()]
        assert manager.name in names
        assert other_manager.name not in names

    def test_system_admin_sees_everyone(
        self, client: TestClient, manager: User, other_manager: User, admin_headers: dict
    ):
        response = client.get("/api/users", headers=admin_headers)

        establishments = {u["establishment"] for u in response.json()}
        assert {"Bison Den", "Trailblazer Café", "Global"} <= establishments

    def test_system_admin_accounts_are_hidden(self, client: TestClient, make_user, manager: User,
                                              manager_headers: dict):
        """A system admin attached to the establishment is not listed to its staff."""
        make_user(name="Hidden Admin", role="admin", is_system_admin=True)

        response = client.get("/api/users", headers=manager_headers)

        names = [u["name"] for u in response.json()]
        assert names == [manager.name]

    def test_system_admin_sees_other_system_admins(self, client: TestClient, make_user, admin_headers: dict):
        make_user(name="Second Admin", role="admin", is_system_admin=True)

        response = client.get("/api/users", headers=admin_headers)

        assert sum(1 for u in response.json() if u["is_system_admin"]) == 2

    def test_requires_authentication(self, client: TestClient):
        assert client.get("/api/users").status_code == 401


class TestPendingUsers:
    """Tests for GET /api/users/pending."""

    def test_lead_sees_only_pending_employees_of_own_establishment(
        self, client: TestClient, make_user, lead: User, auth
    ):
        mine = make_user(name="Pending Employee", status="pending")
        make_user(name="Pending Lead", role="lead", status="pending")
        make_user(name="Foreign Employee", status="pending", establishment="Trailblazer Café")
        make_user(name="Active Employee")

        response = client.get("/api/users/pending", headers=auth(lead))

        assert response.status_code == 200
        assert [u["id"] for u in response.json()] == [str(mine.id)]

    def test_employee_sees_nothing(self, client: TestClient, make_user, employee_headers: dict):
        make_user(status="pending")

        response = client.get("/api/users/pending", headers=employee_headers)

        assert response.json() == []


class TestApprove:
    """Tests for POST /api/users/{id}/approve."""

    def test_lead_approves_employee(self, client: TestClient, db: Session, make_user, lead: User, auth):
        applicant = make_user(name="Nina New", status="pending")

        response = client.post(f"/api/users/{applicant.id}/approve", headers=auth(lead))

        assert response.status_code == 200
        assert response.json()["status"] == "active"
        event = db.query(TimelineEvent).one()
        assert event.text == "Approved Nina New as employee"
        assert event.type == "success"
        assert event.author == lead.name
        assert event.establishment == "Bison Den"

    def test_role_outside_hierarchy_is_forbidden(self, client: TestClient, make_user, manager_headers: dict):
        """A manager approves supervisors, not employees, whatever the establishment."""
        applicant = make_user(status="pending")

        response = client.post(f"/api/users/{applicant.id}/approve", headers=manager_headers)

        assert response.status_code == 403

    def test_other_establishment_is_forbidden(self, client: TestClient, make_user, auth):
        lead = make_user(role="lead", establishment="Trailblazer Café")
        applicant = make_user(status="pending")

        response = client.post(f"/api/users/{applicant.id}/approve", headers=auth(lead))

        assert response.status_code == 403
        assert "establishment" in response.json()["detail"]

    def test_system_admin_approves_manager_anywhere(self, client: TestClient, make_user, admin_headers: dict):
        applicant = make_user(role="manager", status="pending", establishment="Trailblazer Café")

        response = client.post(f"/api/users/{applicant.id}/approve", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["role"] == "manager"

    def test_approver_may_not_grant_roles_above_its_reach(self, client: TestClient, make_user, lead: User, auth):
        applicant = make_user(status="pending")

        response = client.post(
            f"/api/users/{applicant.id}/approve", headers=auth(lead), json={"role": "manager"}
        )

        assert response.status_code == 403

    def test_approve_active_user_is_invalid(self, client: TestClient, employee: User, lead: User, auth):
        response = client.post(f"/api/users/{employee.id}/approve", headers=auth(lead))

        assert response.status_code == 400

    def test_approve_missing_user(self, client: TestClient, manager_headers: dict):
        response = client.post(
            "/api/users/00000000-0000-0000-0000-000000000000/approve", headers=manager_headers
        )

        assert response.status_code == 404


class TestReject:
    """Tests for POST /api/users/{id}/reject."""

    def test_reject_then_login_is_deactivated(self, client: TestClient, make_user, lead: User, auth):
        applicant = make_user(status="pending")

        response = client.post(f"/api/users/{applicant.id}/reject", headers=auth(lead))

        assert response.status_code == 200
        assert response.json()["status"] == "removed"

        login = client.post(
            "/api/auth/login",
            json={"username_or_email": applicant.username, "password": "password123"},
        )
        assert login.status_code == 403
        assert login.json()["detail"] == "Account deactivated"

    def test_reject_respects_establishment_fence(self, client: TestClient, make_user, auth):
        lead = make_user(role="lead", establishment="Trailblazer Café")
        applicant = make_user(status="pending")

        response = client.post(f"/api/users/{applicant.id}/reject", headers=auth(lead))

        assert response.status_code == 403


class TestCreateUser:
    """Tests for POST /api/users (system admin direct create)."""

    PAYLOAD = {
        "name": "Direct Hire",
        "email": "direct@example.com",
        "username": "direct",
        "password": "password123",
        "role": "lead",
        "establishment": "Trailblazer Café",
    }

    def test_system_admin_creates_active_user(self, client: TestClient, admin_headers: dict):
        response = client.post("/api/users", headers=admin_headers, json=self.PAYLOAD)

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "active"
        assert data["role"] == "lead"
        assert data["is_system_admin"] is False

    def test_admin_role_cannot_be_assigned(self, client: TestClient, admin_headers: dict):
        response = client.post("/api/users", headers=admin_headers, json=dict(self.PAYLOAD, role="admin"))

        assert response.status_code == 400

    def test_manager_cannot_create(self, client: TestClient, manager_headers: dict):
        response = client.post("/api/users", headers=manager_headers, json=self.PAYLOAD)

        assert response.status_code == 403


class TestUpdateUser:
    """Tests for PATCH /api/users/{id}."""

    def test_manager_changes_role(self, client: TestClient, employee: User, manager_headers: dict):
        response = client.patch(f"/api/users/{employee.id}", headers=manager_headers, json={"role": "lead"})

        assert response.status_code == 200
        assert response.json()["role"] == "lead"

    def test_lead_edits_employee_contact_but_not_role(self, client: TestClient, employee: User, lead: User, auth):
        ok = client.patch(f"/api/users/{employee.id}", headers=auth(lead), json={"phone_number": "555-0101"})
        denied = client.patch(f"/api/users/{employee.id}", headers=auth(lead), json={"role": "lead"})

        assert ok.status_code == 200
        assert ok.json()["phone_number"] == "555-0101"
        assert denied.status_code == 403

    def test_employee_cannot_edit_others(self, client: TestClient, lead: User, employee_headers: dict):
        response = client.patch(f"/api/users/{lead.id}", headers=employee_headers, json={"name": "Hacked"})

        assert response.status_code == 403

    def test_other_establishment_is_not_found(self, client: TestClient, other_manager: User, manager_headers: dict):
        response = client.patch(f"/api/users/{other_manager.id}", headers=manager_headers, json={"name": "X"})

        assert response.status_code == 404


class TestDeactivate:
    """Tests for DELETE /api/users/{id}."""

    def test_manager_deactivates_employee(self, client: TestClient, db: Session, employee: User, manager_headers: dict):
        response = client.delete(f"/api/users/{employee.id}", headers=manager_headers)

        assert response.status_code == 200
        db.expire_all()
        assert db.get(User, employee.id).status == "removed"

    def test_lead_cannot_deactivate(self, client: TestClient, employee: User, lead: User, auth):
        response = client.delete(f"/api/users/{employee.id}", headers=auth(lead))

        assert response.status_code == 403

    def test_cannot_deactivate_self(self, client: TestClient, manager: User, manager_headers: dict):
        response = client.delete(f"/api/users/{manager.id}", headers=manager_headers)

        assert response.status_code == 403

    def test_cannot_deactivate_system_admin(self, client: TestClient, system_admin: User, manager_headers: dict):
        response = client.delete(f"/api/users/{system_admin.id}", headers=manager_headers)

        assert response.status_code == 403

    def test_cannot_cross_establishment(self, client: TestClient, other_manager: User, manager_headers: dict):
        response = client.delete(f"/api/users/{other_manager.id}", headers=manager_headers)

        assert response.status_code == 403
