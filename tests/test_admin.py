"""
Tests for system-admin maintenance, bootstrap and demo seeding.
"""
from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from flowops.core.config import Settings
from flowops.core.security import blacklist_token, create_access_token, is_token_blacklisted
from flowops.models import InventoryItem, MenuItem, User
from flowops.scripts.seed import seed_database
from flowops.services.bootstrap import bootstrap_system_admin


class TestDbStatus:

    def test_counts_rows(self, client: TestClient, system_admin, manager, admin_headers: dict):
        response = client.get("/api/admin/db-status", headers=admin_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["tables"]["users"] == 2
        assert data["tables"]["sales"] == 0

    def test_requires_system_admin(self, client: TestClient, manager_headers: dict):
        response = client.get("/api/admin/db-status", headers=manager_headers)

        assert response.status_code == 403
        assert response.json()["detail"] == "System admin access required"


class TestPruneTokens:

    def test_removes_expired_only(self, client: TestClient, db: Session, admin_headers: dict):
        expired = create_access_token("someone")
        live = create_access_token("someone-else")
        now = datetime.now(timezone.utc)
        blacklist_token(expired, now - timedelta(minutes=1), db)
        blacklist_token(live, now + timedelta(hours=1), db)

        response = client.post("/api/admin/prune-tokens", headers=admin_headers)

        assert response.json() == {"removed": 1}
        assert not is_token_blacklisted(expired, db)
        assert is_token_blacklisted(live, db)


class TestBootstrap:

    def _settings(self, **overrides) -> Settings:
        values = {"SYSTEM_ADMIN_PASSWORD": "bootstrap-password"}
        values.update(overrides)
        return Settings(**values)

    def test_skipped_without_password(self, db: Session):
        assert bootstrap_system_admin(db, self._settings(SYSTEM_ADMIN_PASSWORD=None)) is None
        assert db.query(User).count() == 0

    def test_creates_once(self, db: Session):
        settings = self._settings()

        first = bootstrap_system_admin(db, settings)
        second = bootstrap_system_admin(db, settings)

        assert first.id == second.id
        assert db.query(User).count() == 1
        assert first.is_system_admin is True
        assert first.role == "admin"
        assert first.establishment == "Global"

    def test_promotes_existing_account(self, db: Session, make_user):
        user = make_user(role="manager", status="pending")

        promoted = bootstrap_system_admin(db, self._settings(SYSTEM_ADMIN_USERNAME=user.username))

        assert promoted.id == user.id
        assert promoted.is_system_admin is True
        assert promoted.status == "active"
        assert db.query(User).count() == 1


class TestSeed:

    def test_seeds_once(self, db: Session):
        assert seed_database(db) is True
        assert seed_database(db) is False

        assert db.query(User).filter(User.establishment == "Trailblazer Café").count() == 1
        assert db.query(InventoryItem).count() == 6
        burger = db.query(MenuItem).one()
        linked = [i for i in burger.ingredients if i.inventory_item_id is not None]
        assert len(linked) == 4
