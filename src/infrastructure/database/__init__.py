"""Async PostgreSQL persistence for tax records.

- **base**: declarative base and common model fields
- **models**: the ``TaxRecord`` table
- **repository**: generic repository and ``TaxRecordRepository``
- **session**: engine, sessions, schema bootstrap and health check
- **dependencies**: FastAPI dependency helpers
"""

from src.infrastructure.database.base import Base, BaseModel
from src.infrastructure.database.dependencies import (
    DatabaseSession,
    TaxRecords,
    get_db,
    get_tax_record_repository,
)
from src.infrastructure.database.models import TaxRecord
from src.infrastructure.database.repository import BaseRepository, TaxRecordRepository
from src.infrastructure.database.session import (
    check_database_connection,
    close_database,
    create_database_engine,
    create_tables,
    get_async_session,
    get_engine,
    get_session_factory,
)

__all__ = [
    "Base",
    "BaseModel",
    "BaseRepository",
    "DatabaseSession",
    "TaxRecord",
    "TaxRecordRepository",
    "TaxRecords",
    "check_database_connection",
    "close_database",
    "create_database_engine",
    "create_tables",
    "get_async_session",
    "get_db",
    "get_engine",
    "get_session_factory",
    "get_tax_record_repository",
]
