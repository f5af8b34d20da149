"""
Database - Memory Link Storage

Stores for memory links. The wave functions never call these; callers load
a link, run it through the algorithm, and hand the result back to put().

- MemoryStore: the get/put/list contract every store satisfies
- InMemoryStore: dict-backed, for tests and offline use
- SqlMemoryStore: SQLAlchemy ORM backed (Postgres or SQLite)
"""

from __future__ import annotations
from dataclasses import replace
from typing import Iterable, Optional, Protocol

from sqlalchemy import create_engine, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session

from core.retention.config import get_database_url
from core.retention.memory_state import MemoryLink, copy_tags
from core.retention.models import Base, MemoryLinkRecord


class MemoryStore(Protocol):
    """Storage contract consumed by the ping planner."""

    def get(self, link_id: str) -> Optional[MemoryLink]: ...

    def put(self, link: MemoryLink) -> None: ...

    def put_many(self, links: Iterable[MemoryLink]) -> None: ...

    def list_all(self) -> list[MemoryLink]: ...


class InMemoryStore:
    """Dict-backed store. Last write wins."""

    def __init__(self, links: Optional[Iterable[MemoryLink]] = None):
        self._links: dict[str, MemoryLink] = {}
        if links:
            self.put_many(links)

    def get(self, link_id: str) -> Optional[MemoryLink]:
        link = self._links.get(link_id)
        return _copy_link(link) if link is not None else None

    def put(self, link: MemoryLink) -> None:
        self._links[link.link_id] = _copy_link(link)

    def put_many(self, links: Iterable[MemoryLink]) -> None:
        for link in links:
            self.put(link)

    def list_all(self) -> list[MemoryLink]:
        return [_copy_link(link) for link in self._links.values()]

    def __len__(self) -> int:
        return len(self._links)


def _copy_link(link: MemoryLink) -> MemoryLink:
    return replace(link, context_tags=copy_tags(link.context_tags))


def get_engine(url: Optional[str] = None) -> Engine:
    """
    Get SQLAlchemy engine for the memory link store.

    Args:
        url: Database URL (default: from configuration)

    Returns:
        SQLAlchemy Engine instance
    """
    db_url = url or get_database_url()
    if db_url.startswith("sqlite"):
        return create_engine(db_url, echo=False)
    return create_engine(
        db_url,
        pool_size=5,           # Keep 5 connections open
        max_overflow=10,       # Allow up to 10 extra connections
        pool_pre_ping=True,    # Verify connections before use
        echo=False
    )


class SqlMemoryStore:
    """
    Memory link store on top of SQLAlchemy.

    Each call opens and closes its own session; upserts are last-write-wins.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self._session_factory = sessionmaker(bind=engine, expire_on_commit=False)

    @classmethod
    def from_url(cls, url: Optional[str] = None) -> "SqlMemoryStore":
        return cls(get_engine(url))

    def _session(self) -> Session:
        return self._session_factory()

    def init_db(self) -> None:
        """
        Create the memory_links table if it doesn't exist.

        Safe to call multiple times.
        """
        inspector = inspect(self.engine)
        if 'memory_links' not in inspector.get_table_names():
            Base.metadata.create_all(self.engine)

    def reset_db(self) -> None:
        """
        DANGEROUS: Delete all memory links and recreate the table.
        """
        Base.metadata.drop_all(self.engine)
        print("[RETENTION DB] memory_links dropped")
        self.init_db()

    def get(self, link_id: str) -> Optional[MemoryLink]:
        """
        Load a link by id.

        Returns:
            MemoryLink if found, None otherwise
        """
        session = self._session()
        try:
            db_link = session.get(MemoryLinkRecord, link_id)
            if db_link is None:
                return None
            return _to_link(db_link)
        finally:
            session.close()

    def put(self, link: MemoryLink) -> None:
        """Insert or update a single link."""
        self.put_many([link])

    def put_many(self, links: Iterable[MemoryLink]) -> None:
        """
        Insert or update several links in a single transaction.
        """
        session = self._session()
        try:
            for link in links:
                db_link = session.get(MemoryLinkRecord, link.link_id)
                if db_link is None:
                    db_link = MemoryLinkRecord(link_id=link.link_id)
                    session.add(db_link)
                _copy_into(db_link, link)
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def list_all(self) -> list[MemoryLink]:
        """All stored links, weakest stored wave first."""
        session = self._session()
        try:
            db_links = session.query(MemoryLinkRecord).order_by(
                MemoryLinkRecord.wave.asc(),
                MemoryLinkRecord.link_id.asc()
            ).all()
            return [_to_link(db_link) for db_link in db_links]
        finally:
            session.close()


def _copy_into(db_link: MemoryLinkRecord, link: MemoryLink) -> None:
    db_link.phrase = link.phrase
    db_link.script_id = link.script_id
    db_link.step_index = link.step_index
    db_link.last_seen = link.last_seen
    db_link.wave = link.wave
    db_link.decay_alpha = link.decay_alpha
    db_link.success_count = link.success_count
    db_link.fail_count = link.fail_count
    db_link.use_in_wild_count = link.use_in_wild_count
    db_link.emotional_resonance = link.emotional_resonance
    db_link.context_tags = copy_tags(link.context_tags)


def _to_link(db_link: MemoryLinkRecord) -> MemoryLink:
    return MemoryLink(
        phrase=db_link.phrase,
        script_id=db_link.script_id,
        step_index=db_link.step_index,
        last_seen=db_link.last_seen,
        wave=db_link.wave,
        decay_alpha=db_link.decay_alpha,
        success_count=db_link.success_count,
        fail_count=db_link.fail_count,
        use_in_wild_count=db_link.use_in_wild_count,
        emotional_resonance=db_link.emotional_resonance,
        context_tags=copy_tags(db_link.context_tags)
    )
