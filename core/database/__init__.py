"""Evidence Integrity - Database Module
ORM tables, async sessions and the SQLAlchemy evidence ledger.
"""

from .models import (
    Base,
    Evidence,
    EvidenceHash,
    VerificationLog,
    YouTubeComparison,
)
from .repository import SQLAlchemyLedger, get_ledger
from .session import (
    close_db,
    get_async_session,
    get_db,
    init_db_async,
)


__all__ = [
    # Models
    "Base",
    "Evidence",
    "EvidenceHash",
    "VerificationLog",
    "YouTubeComparison",
    # Session
    "close_db",
    "get_async_session",
    "get_db",
    "init_db_async",
    # Ledger
    "SQLAlchemyLedger",
    "get_ledger",
]
