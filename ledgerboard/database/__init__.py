from ledgerboard.database.base import Base
from ledgerboard.database.engine import engine, init_db
from ledgerboard.database.session import SessionLocal, database_reachable, session_scope

__all__ = ["Base", "SessionLocal", "database_reachable", "engine", "init_db", "session_scope"]
