"""
Pydantic models for memory links crossing the storage boundary.

A storage layer or import file hands over plain dicts; these models check
them before they become MemoryLink values.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from core.retention.memory_state import MemoryLink


class MemoryLinkDocument(BaseModel):
    """Serialized form of a MemoryLink."""
    phrase: str = Field(..., min_length=1, description="Phrase text")
    script_id: str = Field(..., description="Scenario the phrase came from")
    step_index: int = Field(..., ge=0, description="Step inside the scenario")
    last_seen: int = Field(..., description="Last interaction, ms since epoch")
    wave: float = Field(..., ge=0.0, le=1.0, allow_inf_nan=False)
    decay_alpha: float = Field(..., gt=0.0, le=1.0, allow_inf_nan=False)
    success_count: float = Field(default=0.0, ge=0.0)
    fail_count: int = Field(default=0, ge=0)
    use_in_wild_count: int = Field(default=0, ge=0)
    emotional_resonance: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    context_tags: Optional[list[str]] = None

    def to_link(self) -> MemoryLink:
        return MemoryLink(**self.model_dump())

    @classmethod
    def from_link(cls, link: MemoryLink) -> "MemoryLinkDocument":
        return cls(
            phrase=link.phrase,
            script_id=link.script_id,
            step_index=link.step_index,
            last_seen=link.last_seen,
            wave=link.wave,
            decay_alpha=link.decay_alpha,
            success_count=link.success_count,
            fail_count=link.fail_count,
            use_in_wild_count=link.use_in_wild_count,
            emotional_resonance=link.emotional_resonance,
            context_tags=list(link.context_tags) if link.context_tags is not None else None
        )


def parse_memory_link(data: dict) -> MemoryLink:
    """
    Validate a raw dict and convert it to a MemoryLink.

    Raises:
        pydantic.ValidationError: if any field is missing or out of range
    """
    return MemoryLinkDocument.model_validate(data).to_link()


def dump_memory_link(link: MemoryLink) -> dict:
    """Convert a MemoryLink into a JSON-ready dict."""
    return MemoryLinkDocument.from_link(link).model_dump()
