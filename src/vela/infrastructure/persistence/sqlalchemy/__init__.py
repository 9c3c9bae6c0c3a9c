"""SQLAlchemy persistence foundation shared by all bounded contexts."""

from vela.infrastructure.persistence.sqlalchemy.base import Base, TimestampMixin
from vela.infrastructure.persistence.sqlalchemy.engine import (
    build_engine,
    build_session_maker,
    create_tables,
    drop_tables,
)

__all__ = [
    "Base",
    "TimestampMixin",
    "build_engine",
    "build_session_maker",
    "create_tables",
    "drop_tables",
]
