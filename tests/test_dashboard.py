"""Owner dashboard endpoint tests."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from pathlib import Path

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from homebake.core.security import get_password_hash
from homebake.db import session as db_session
from homebake.db.base import Base
from homebake.main import app
from homebake.models import BreadType, User


def _prepare_db(tmp_path: Path, monkeypatch):
    engine = create_engine(f"sqlite:///{tmp_path / 'dashboard.db'}", connect_args={"check_same_thread": False})
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    monkeypatch.setattr(db_session, "engine", engine)
    monkeypatch.setattr(db_session, "SessionLocal", testing_session_local)
    return testing_session_local


def _seed_staff(session_local) -> dict[str, int]:
    stale_login = datetime.now(timezone.utc) - timedelta(hours=3)
    with session_local() as db:
        owner = User(name="Ada", email="owner@homebake.ng", password_hash=get_password_hash("pass123"), role="owner")
        manager = User(name="Bayo", email="manager@homebake.ng", password_hash=get_password_hash("pass123"), role="manager")
        rep = User(name="Chika", email="rep@homebake.ng", password_hash=get_password_hash("pass123"), role="sales_rep")
        idle = User(
            name="Dayo",
            email="dayo@homebake.ng",
            password_hash=get_password_hash("pass123"),
            role="sales_rep",
            last_login_at=stale_login,
        )
        retired = User(
            name="Efe",
            email="efe@homebake.ng",
            password_hash=get_password_hash("pass123"),
            role="sales_rep",
            is_active=False,
            last_login_at=datetime.now(timezone.utc),
        )
        db.add_all([owner, manager, rep, idle, retired])
        db.flush()
        bread = BreadType(name="Family Loaf", size="large", unit_price=Decimal("1500.00"))
        db.add(bread)
        db.commit()
        return {"owner": owner.id, "rep": rep.id, "bread": bread.id}


def _login(client: TestClient, email: str) -> dict[str, str]:
    response = client.post("/api/v1/auth/login", json={"email": email, "password": "pass123"})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


def test_staff_online_counts_recent_logins(tmp_path: Path, monkeypatch) -> None:
    session_local = _prepare_db(tmp_path, monkeypatch)
    _seed_staff(session_local)

    with TestClient(app) as client:
        owner_headers = _login(client, "owner@homebake.ng")
        _login(client, "rep@homebake.ng")
        response = client.get("/api/v1/dashboard/staff-online", headers=owner_headers)
        rep_response = client.get("/api/v1/dashboard/staff-online", headers=_login(client, "rep@homebake.ng"))

    assert response.status_code == 200
    body = response.json()
    assert body["online"] == 2
    assert body["total"] == 4
    assert body["by_role"] == {"owner": 1, "manager": 0, "sales_rep": 1}
    assert rep_response.status_code == 403


def test_activity_feed_is_owner_only(tmp_path: Path, monkeypatch) -> None:
    session_local = _prepare_db(tmp_path, monkeypatch)
    ids = _seed_staff(session_local)

    with TestClient(app) as client:
        rep_headers = _login(client, "rep@homebake.ng")
        client.post(
            "/api/v1/sales",
            json={"bread_type_id": ids["bread"], "quantity": 2, "shift": "night"},
            headers=rep_headers,
        )
        client.post(
            "/api/v1/sales",
            json={"bread_type_id": ids["bread"], "quantity": 5, "shift": "night"},
            headers=rep_headers,
        )
        owner_headers = _login(client, "owner@homebake.ng")
        feed = client.get("/api/v1/dashboard/activities", params={"limit": 1}, headers=owner_headers)
        manager_feed = client.get("/api/v1/dashboard/activities", headers=_login(client, "manager@homebake.ng"))
        too_many = client.get("/api/v1/dashboard/activities", params={"limit": 500}, headers=owner_headers)

    assert feed.status_code == 200
    entries = feed.json()
    assert len(entries) == 1
    assert entries[0]["action_type"] == "sale_recorded"
    assert entries[0]["actor_user_id"] == ids["rep"]
    assert entries[0]["details"] == {"bread_type": "Family Loaf", "quantity": 5}
    assert entries[0]["shift"] == "night"
    assert manager_feed.status_code == 403
    assert too_many.status_code == 422
