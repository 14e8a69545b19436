"""Note resources used by the notes API."""

from datetime import datetime, timezone
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from jsonguard.utils.mapping import Mapper

TITLE_MAX_LENGTH = 80
BODY_MAX_LENGTH = 160
MAX_TAGS = 5


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _reject_blank(value: str | None) -> str | None:
    if value is not None and not value.strip():
        raise PydanticCustomError("blank_title", "Title must not be blank")
    return value


class Note(BaseModel):
    """A stored note."""

    model_config = ConfigDict(extra="forbid")

    id: UUID = Field(default_factory=uuid4)
    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    body: str = Field(default="", max_length=BODY_MAX_LENGTH)
    priority: int = Field(default=3, ge=1, le=5)
    tags: list[str] = Field(default_factory=list, max_length=MAX_TAGS)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value):
        return _reject_blank(value)


class NoteCreate(BaseModel, Mapper[Note]):
    """Request body for creating a note."""

    model_config = ConfigDict(extra="forbid")

    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    body: str = Field(default="", max_length=BODY_MAX_LENGTH)
    priority: int = Field(default=3, ge=1, le=5)
    tags: list[str] = Field(default_factory=list, max_length=MAX_TAGS)

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value):
        return _reject_blank(value)

    def map(self) -> Note:
        return Note(
            title=self.title,
            body=self.body,
            priority=self.priority,
            tags=list(self.tags),
        )


class NoteUpdate(BaseModel, Mapper[Note]):
    """Request body for replacing fields of a note.

    Only the fields present in the request are applied by ``map_to``.
    """

    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, min_length=1, max_length=TITLE_MAX_LENGTH)
    body: str | None = Field(default=None, max_length=BODY_MAX_LENGTH)
    priority: int | None = Field(default=None, ge=1, le=5)
    tags: list[str] | None = Field(default=None, max_length=MAX_TAGS)

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value):
        return _reject_blank(value)

    def map(self) -> Note:
        # Unvalidated: a missing title only surfaces once the note is validated.
        changes = self.model_dump(exclude_none=True)
        return Note.model_construct(**changes)

    def map_to(self, destination: Note) -> Note:
        changes = self.model_dump(exclude_unset=True, exclude_none=True)
        if not changes:
            return destination
        changes["updated_at"] = _utcnow()
        return destination.model_copy(update=changes)
