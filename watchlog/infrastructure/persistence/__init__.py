"""
Persistance du catalogue.

- database : engine, sessions et creation des tables
- models : tables SQLModel
- transaction : frontiere transactionnelle imbricable
- repositories : implementations des ports de stockage
"""

from watchlog.infrastructure.persistence.database import (
    create_session,
    get_engine,
    init_db,
)
from watchlog.infrastructure.persistence.transaction import SQLModelTransactionManager

__all__ = [
    "SQLModelTransactionManager",
    "create_session",
    "get_engine",
    "init_db",
]
