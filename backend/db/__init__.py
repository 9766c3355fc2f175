from .session import Base, Database
from .history_store import HistoryStore

__all__ = [
    "Base",
    "Database",
    "HistoryStore",
]
