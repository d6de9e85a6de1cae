"""Role normalization tests for staff account creation."""

from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from homebake.db.base import Base
from homebake.models.user import normalize_user_role
from homebake.services.user_service import create_user


def test_create_user_normalizes_role_aliases() -> None:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    Base.metadata.create_all(bind=engine)

    with Session(engine) as session:
        user = create_user(
            db=session,
            name=" Funmi ",
            email="Funmi@HomeBake.ng",
            hashed_password="hash",
            role="Sales-Rep",
        )

    assert user.role == "sales_rep"
    assert user.email == "funmi@homebake.ng"
    assert user.name == "Funmi"


def test_normalize_user_role_accepts_short_aliases() -> None:
    assert normalize_user_role("salesrep") == "sales_rep"
    assert normalize_user_role("SALES") == "sales_rep"
    assert normalize_user_role(" Manager ") == "manager"


def test_create_user_rejects_unknown_role() -> None:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    Base.metadata.create_all(bind=engine)

    with Session(engine) as session:
        try:
            create_user(
                db=session,
                name="Baker",
                email="baker@homebake.ng",
                hashed_password="hash",
                role="baker",
            )
            assert False, "Expected ValueError for unknown role"
        except ValueError as exc:
            assert "Invalid role" in str(exc)
