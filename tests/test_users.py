"""Owner staff-management endpoint tests."""

from datetime import datetime, timezone
from pathlib import Path

from fastapi.testclient import TestClient
from sqlalchemy import create_engine, select
from sqlalchemy.orm import sessionmaker

from homebake.core.security import get_password_hash
from homebake.db import session as db_session
from homebake.db.base import Base
from homebake.main import app
from homebake.models import ActivityLog, Batch, BreadType, User


def _prepare_db(tmp_path: Path, monkeypatch):
    engine = create_engine(f"sqlite:///{tmp_path / 'users.db'}", connect_args={"check_same_thread": False})
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    monkeypatch.setattr(db_session, "engine", engine)
    monkeypatch.setattr(db_session, "SessionLocal", testing_session_local)
    return testing_session_local


def _seed_staff(session_local) -> dict[str, int]:
    with session_local() as db:
        owner = User(name="Ada", email="owner@homebake.ng", password_hash=get_password_hash("pass123"), role="owner")
        manager = User(name="Bayo", email="manager@homebake.ng", password_hash=get_password_hash("pass123"), role="manager")
        rep = User(name="Chika", email="rep@homebake.ng", password_hash=get_password_hash("pass123"), role="sales_rep")
        db.add_all([owner, manager, rep])
        db.commit()
        return {"owner": owner.id, "manager": manager.id, "rep": rep.id}


def _login(client: TestClient, email: str) -> dict[str, str]:
    response = client.post("/api/v1/auth/login", json={"email": email, "password": "pass123"})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


def test_list_users_is_limited_to_supervisors(tmp_path: Path, monkeypatch) -> None:
    session_local = _prepare_db(tmp_path, monkeypatch)
    _seed_staff(session_local)

    with TestClient(app) as client:
        manager_response = client.get("/api/v1/users", headers=_login(client, "manager@homebake.ng"))
        rep_response = client.get("/api/v1/users", headers=_login(client, "rep@homebake.ng"))

    assert manager_response.status_code == 200
    assert [user["name"] for user in manager_response.json()] == ["Ada", "Bayo", "Chika"]
    assert rep_response.status_code == 403


def test_owner_changes_staff_role_and_logs_activity(tmp_path: Path, monkeypatch) -> None:
    session_local = _prepare_db(tmp_path, monkeypatch)
    ids = _seed_staff(session_local)

    with TestClient(app) as client:
        response = client.patch(
            f"/api/v1/users/{ids['rep']}/role",
            json={"role": "manager"},
            headers=_login(client, "owner@homebake.ng"),
        )

    assert response.status_code == 200
    assert response.json()["role"] == "manager"

    with session_local() as db:
        activity = db.scalar(select(ActivityLog).where(ActivityLog.action_type == "staff_role_changed"))
        assert activity is not None
        assert activity.details["old_role"] == "sales_rep"
        assert activity.details["new_role"] == "manager"


def test_role_change_rules(tmp_path: Path, monkeypatch) -> None:
    session_local = _prepare_db(tmp_path, monkeypatch)
    ids = _seed_staff(session_local)

    with TestClient(app) as client:
        headers = _login(client, "owner@homebake.ng")
        owner_change = client.patch(f"/api/v1/users/{ids['owner']}/role", json={"role": "manager"}, headers=headers)
        promote = client.patch(f"/api/v1/users/{ids['rep']}/role", json={"role": "owner"}, headers=headers)
        same = client.patch(f"/api/v1/users/{ids['manager']}/role", json={"role": "manager"}, headers=headers)
        invalid = client.patch(f"/api/v1/users/{ids['manager']}/role", json={"role": "baker"}, headers=headers)
        missing = client.patch("/api/v1/users/999/role", json={"role": "manager"}, headers=headers)
        by_manager = client.patch(
            f"/api/v1/users/{ids['rep']}/role",
            json={"role": "manager"},
            headers=_login(client, "manager@homebake.ng"),
        )

    assert owner_change.status_code == 400
    assert owner_change.json()["detail"] == "Cannot change owner role"
    assert promote.status_code == 400
    assert promote.json()["detail"] == "Cannot assign owner role to other users"
    assert same.status_code == 400
    assert same.json()["detail"] == "User already has this role"
    assert invalid.status_code == 400
    assert invalid.json()["detail"] == "Invalid role specified"
    assert missing.status_code == 404
    assert by_manager.status_code == 403


def test_deactivate_and_reactivate_staff(tmp_path: Path, monkeypatch) -> None:
    session_local = _prepare_db(tmp_path, monkeypatch)
    ids = _seed_staff(session_local)

    with TestClient(app) as client:
        headers = _login(client, "owner@homebake.ng")
        deactivated = client.post(f"/api/v1/users/{ids['rep']}/deactivate", headers=headers)
        denied_login = client.post("/api/v1/auth/login", json={"email": "rep@homebake.ng", "password": "pass123"})
        reactivated = client.post(f"/api/v1/users/{ids['rep']}/reactivate", headers=headers)
        owner_deactivate = client.post(f"/api/v1/users/{ids['owner']}/deactivate", headers=headers)

    assert deactivated.status_code == 200
    assert deactivated.json()["is_active"] is False
    assert denied_login.status_code == 401
    assert reactivated.json()["is_active"] is True
    assert owner_deactivate.status_code == 400


def test_delete_user_without_history(tmp_path: Path, monkeypatch) -> None:
    session_local = _prepare_db(tmp_path, monkeypatch)
    ids = _seed_staff(session_local)

    with TestClient(app) as client:
        headers = _login(client, "owner@homebake.ng")
        response = client.delete(f"/api/v1/users/{ids['rep']}", headers=headers)
        owner_delete = client.delete(f"/api/v1/users/{ids['owner']}", headers=headers)

    assert response.status_code == 200
    assert owner_delete.status_code == 409

    with session_local() as db:
        assert db.get(User, ids["rep"]) is None


def test_delete_user_with_batches_is_refused(tmp_path: Path, monkeypatch) -> None:
    session_local = _prepare_db(tmp_path, monkeypatch)
    ids = _seed_staff(session_local)
    with session_local() as db:
        bread = BreadType(name="Family Loaf", size="large", unit_price=1500)
        db.add(bread)
        db.flush()
        db.add(
            Batch(
                bread_type_id=bread.id,
                batch_number="001",
                actual_quantity=40,
                shift="morning",
                created_by=ids["manager"],
                created_at=datetime(2025, 6, 15, 8, 0, tzinfo=timezone.utc),
            )
        )
        db.commit()

    with TestClient(app) as client:
        response = client.delete(f"/api/v1/users/{ids['manager']}", headers=_login(client, "owner@homebake.ng"))

    assert response.status_code == 409
    assert "deactivate" in response.json()["detail"]
