from __future__ import annotations

from sqlalchemy import create_engine, event
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

from workin.config import settings
from workin.errors import Conflict, StorageError


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str, **kwargs):
    """Create an engine, applying the SQLite specifics the app relies on."""
    if database_url.startswith("sqlite"):
        connect_args = kwargs.pop("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
        engine = create_engine(database_url, connect_args=connect_args, **kwargs)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine
    return create_engine(database_url, pool_pre_ping=True, **kwargs)


engine = build_engine(settings.database_url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def commit(db, conflict_message: str = "Conflict") -> None:
    """Commit the session, mapping unique-constraint violations to Conflict."""
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise Conflict(conflict_message) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        raise StorageError() from exc
