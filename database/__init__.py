from database.connection import DatabasePool, db
from database.db_manager import DatabaseManager
from database.repositories import CompetitionRepositoryDB, TourRepositoryDB
from database.exceptions import DatabaseError, RowConversionError

__all__ = [
    "DatabasePool",
    "db",
    "DatabaseManager",
    "CompetitionRepositoryDB",
    "TourRepositoryDB",
    "DatabaseError",
    "RowConversionError",
]
