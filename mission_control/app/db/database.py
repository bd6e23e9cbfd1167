import threading
from typing import Iterator, Optional

from loguru import logger
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from mission_control.app.core.config import settings
from mission_control.errors import StoreNotConfiguredError

Base = declarative_base()

_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None
_init_lock = threading.Lock()


def init_engine(url: Optional[str] = None, **engine_kwargs) -> Engine:
    """
    Create the store engine and session factory, and create missing tables.
    Called on first use; may be called again to point at another database.
    """
    global _engine, _session_factory

    url = url if url is not None else settings.DATABASE_URL
    if not url:
        raise StoreNotConfiguredError(
            "Store URL not configured. Set MISSION_CONTROL_DATABASE_URL environment variable."
        )

    if url.startswith("sqlite"):
        engine_kwargs.setdefault("connect_args", {"check_same_thread": False})

    # Import models so their tables are registered on Base.metadata
    from mission_control.app.models import agent  # noqa: F401

    _engine = create_engine(url, **engine_kwargs)
    _session_factory = sessionmaker(autocommit=False, autoflush=False, bind=_engine)
    Base.metadata.create_all(bind=_engine)
    logger.info(f"[Store] Engine initialised for {_engine.url.render_as_string(hide_password=True)}")
    return _engine


def get_engine() -> Engine:
    if _engine is None:
        # Only the first caller builds the engine
        with _init_lock:
            if _engine is None:
                init_engine()
    return _engine


def get_db() -> Iterator[Session]:
    get_engine()
    db = _session_factory()
    try:
        yield db
    finally:
        db.close()
