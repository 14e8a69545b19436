"""
Notes API.

POST /api/notes       - create a note from a JSON body, or from plain text
GET  /api/notes/{id}  - fetch a note
PUT  /api/notes/{id}  - merge a JSON update into a note, creating it if missing

JSON routes use JsonRoute, so a non-JSON POST falls through to the
plain-text handler registered on ``router``. A non-JSON PUT has no such
handler and is forwarded, which ends in a plain 404.
"""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request

from config import settings
from jsonguard.models.notes import Note, NoteCreate, NoteUpdate
from jsonguard.routers.json_route import JsonRoute
from jsonguard.services.notes import note_store
from jsonguard.utils.errors import RequestForwarded
from jsonguard.utils.json_body import json_body, read_body_or_fail
from jsonguard.utils.validation import perform_validation

logger = logging.getLogger(__name__)

json_router = APIRouter(prefix="/api/notes", tags=["notes"], route_class=JsonRoute)
router = APIRouter(prefix="/api/notes", tags=["notes"])


@json_router.post("", response_model=Note, status_code=201)
async def create_note(payload: Annotated[NoteCreate, Depends(json_body(NoteCreate))]) -> Note:
    """Create a note from a guarded JSON body."""
    return note_store.add(payload.map())


@json_router.put("/{note_id}", response_model=Note)
async def put_note(
    note_id: UUID, payload: Annotated[NoteUpdate, Depends(json_body(NoteUpdate))]
) -> Note:
    """
    Apply the fields of the update to an existing note.

    Unknown ids get a new note built from the update alone, which then
    needs at least a title to pass validation.
    """
    existing = note_store.get(note_id)
    if existing is None:
        note = payload.map()
    else:
        note = payload.map_to(existing)
    return note_store.put(note_id, perform_validation(note))


@router.post("", response_model=Note, status_code=201)
async def create_note_from_text(request: Request) -> Note:
    """Create a note whose title is the first line of a plain-text body."""
    text = await read_body_or_fail(request, settings.json_body_limit)

    lines = text.strip().splitlines()
    title = lines[0].strip() if lines else ""
    payload = perform_validation(NoteCreate.model_construct(title=title))
    return note_store.add(payload.map())


@router.get("/{note_id}", response_model=Note)
async def get_note(note_id: UUID) -> Note:
    note = note_store.get(note_id)
    if note is None:
        raise HTTPException(status_code=404, detail="Note not found.")
    return note


@router.put("/{note_id}", include_in_schema=False)
async def put_note_not_json(note_id: UUID, request: Request):
    # Without this route the GET above turns a non-JSON PUT into a 405.
    raise RequestForwarded(request.headers.get("content-type"))
