# db.py
"""
Primary store handle.

Wraps a SQLAlchemy engine and remembers whether the last contact with the
database succeeded. `connected` never touches the network: it reports the
state recorded by the most recent connect / ping / failed insert, so it can
lag behind the real server by up to one probe interval.
"""

import logging
from typing import Any, Dict, List

from sqlalchemy import create_engine, text
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from models import Base, FormSubmission

logger = logging.getLogger(__name__)


def make_engine(database_url: str, connect_timeout: int = 5):
    # sqlite needs check_same_thread off since handlers run in a threadpool
    if database_url.startswith("sqlite"):
        return create_engine(database_url, connect_args={"check_same_thread": False})
    return create_engine(
        database_url,
        pool_pre_ping=True,
        connect_args={"connect_timeout": connect_timeout},
    )


class PrimaryStore:
    def __init__(self, database_url: str, connect_timeout: int = 5):
        self.database_url = database_url
        self.engine = make_engine(database_url, connect_timeout)
        self.SessionLocal = sessionmaker(bind=self.engine, autocommit=False, autoflush=False)
        self._connected = False

    @property
    def connected(self) -> bool:
        return self._connected

    def connect(self) -> bool:
        """
        Open a connection, create the table if needed and record the result.
        Never raises; failures leave the store marked offline.
        """
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            Base.metadata.create_all(bind=self.engine)
        except (SQLAlchemyError, ImportError) as e:
            if self._connected:
                logger.warning("Lost connection to primary store: %s", e)
            else:
                logger.warning("Primary store unavailable: %s", e)
            self._connected = False
            return False

        if not self._connected:
            logger.info("Connected to primary store")
        self._connected = True
        return True

    def ping(self) -> bool:
        return self.connect()

    def disconnect(self) -> None:
        self.engine.dispose()
        if self._connected:
            logger.info("Disconnected from primary store")
        self._connected = False

    def insert(self, collection: str, document: Dict[str, Any]) -> int:
        db = self.SessionLocal()
        try:
            obj = FormSubmission(
                collection=collection,
                document=document,
                created_at=document.get("createdAt", ""),
            )
            db.add(obj)
            db.commit()
            db.refresh(obj)
            return obj.id
        except DBAPIError as e:
            db.rollback()
            if e.connection_invalidated:
                logger.warning("Primary store connection invalidated during insert")
                self._connected = False
            raise
        except SQLAlchemyError:
            db.rollback()
            raise
        finally:
            db.close()

    def find_all(self, collection: str) -> List[Dict[str, Any]]:
        """Documents of `collection`, newest first."""
        db = self.SessionLocal()
        try:
            rows = (
                db.query(FormSubmission)
                .filter(FormSubmission.collection == collection)
                .order_by(FormSubmission.created_at.desc(), FormSubmission.id.desc())
                .all()
            )
            return [dict(r.document) for r in rows]
        finally:
            db.close()
