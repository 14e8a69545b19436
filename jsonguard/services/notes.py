"""In-memory note storage."""

import logging
from uuid import UUID

from jsonguard.models.notes import Note

logger = logging.getLogger(__name__)


class NoteStore:
    """Keeps notes for the lifetime of the process."""

    def __init__(self) -> None:
        self._notes: dict[UUID, Note] = {}

    def add(self, note: Note) -> Note:
        self._notes[note.id] = note
        logger.info(f"Stored note {note.id}")
        return note

    def get(self, note_id: UUID) -> Note | None:
        return self._notes.get(note_id)

    def put(self, note_id: UUID, note: Note) -> Note:
        """Store ``note`` under ``note_id``, replacing any previous note."""
        if note.id != note_id:
            note = note.model_copy(update={"id": note_id})
        self._notes[note_id] = note
        return note

    def clear(self) -> None:
        self._notes.clear()


note_store = NoteStore()
