"""
SQLAlchemy ORM Models for the memory link store.

One row per memory link, keyed by its link id.
"""

from sqlalchemy import JSON, Column, Float, Integer, BigInteger, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class MemoryLinkRecord(Base):
    """
    Persistent wave state for a single (script_id, step_index, phrase) link.
    """
    __tablename__ = 'memory_links'

    link_id = Column(String(512), primary_key=True, nullable=False)

    # Identity
    phrase = Column(String(255), nullable=False)
    script_id = Column(String(255), nullable=False)
    step_index = Column(Integer, nullable=False)

    # Wave state
    last_seen = Column(BigInteger, nullable=False)  # ms since epoch
    wave = Column(Float, nullable=False, index=True)
    decay_alpha = Column(Float, nullable=False)

    # Counters
    success_count = Column(Float, nullable=False, default=0.0)
    fail_count = Column(Integer, nullable=False, default=0)
    use_in_wild_count = Column(Integer, nullable=False, default=0)

    # Optional signals
    emotional_resonance = Column(Float, nullable=True)
    context_tags = Column(JSON, nullable=True)

    def __repr__(self):
        return f"<MemoryLinkRecord({self.link_id}, wave={self.wave:.3f})>"
