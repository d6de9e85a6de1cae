"""Shared SQLAlchemy base declarative class and model imports."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for ORM models."""


# Import model modules so metadata is populated before create_all.
from homebake.models import activity_log as _activity_log  # noqa: E402,F401
from homebake.models import batch as _batch  # noqa: E402,F401
from homebake.models import bread_type as _bread_type  # noqa: E402,F401
from homebake.models import sales as _sales  # noqa: E402,F401
from homebake.models import shift_report as _shift_report  # noqa: E402,F401
from homebake.models import user as _user  # noqa: E402,F401
