"""Data models for smartmsg plans.

Contains:
- PlanItem: One commit and its replacement message
- Plan: The persisted rewrite plan for a commit range
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class PlanItem(BaseModel):
    """One commit to rewrite."""

    sha: str = Field(min_length=1)
    old_message: str
    new_message: str
    author_name: str
    author_email: str
    author_date: str  # ISO 8601 with fixed offset

    @field_validator("author_date")
    @classmethod
    def author_date_must_have_offset(cls, v: str) -> str:
        """Ensure author_date is an ISO 8601 timestamp with a UTC offset."""
        try:
            parsed = datetime.fromisoformat(v)
        except ValueError:
            raise ValueError(f"author_date is not an ISO 8601 timestamp: {v!r}")
        if parsed.tzinfo is None:
            raise ValueError(f"author_date has no UTC offset: {v!r}")
        return v

    @property
    def short_sha(self) -> str:
        return self.sha[:7]

    def effective_message(self) -> str:
        """Return the replacement message, or the original subject if blank."""
        if self.new_message.strip():
            return self.new_message
        return self.old_message


class Plan(BaseModel):
    """A complete, self-describing rewrite plan (items oldest first)."""

    repo_path: str
    base: str  # Exclusive lower bound, empty if unresolved
    head: str  # Inclusive upper bound
    created_at: str  # ISO format timestamp
    model: str
    allow_merges: bool
    items: list[PlanItem] = Field(min_length=1)
