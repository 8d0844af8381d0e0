"""The note editor behind the week modal.

Every keystroke is posted to /api/editor/edit; the session saves once the
text has been quiet for the configured period. Opening another week,
switching year or closing commits a pending edit for the week it was typed in.
"""
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from yeeks.api.routes.notes import get_note_session, session_lock, check_week
from yeeks.logic.notes.session import NoteSession, EditorClosedError
from yeeks.utilities.validators import NoteInput

router = APIRouter(prefix="/api/editor")


class OpenWeek(BaseModel):
    year: int
    week: int = Field(..., ge=1)


def _state(session: NoteSession):
    week = session.active_week
    return {
        "year": session.year,
        "week": week,
        "content": session.draft,
        "pending": session.pending,
        "has_note": session.has_note(week) if week is not None else False,
    }


@router.get("")
def editor_state(session: NoteSession = Depends(get_note_session)):
    with session_lock:
        return _state(session)


@router.post("/open")
def open_week(payload: OpenWeek, session: NoteSession = Depends(get_note_session)):
    check_week(payload.year, payload.week)
    with session_lock:
        session.ensure_year(payload.year)
        session.open_week(payload.week)
        return _state(session)


@router.post("/edit")
def edit(payload: NoteInput, session: NoteSession = Depends(get_note_session)):
    with session_lock:
        try:
            session.edit(payload.content)
        except EditorClosedError as e:
            raise HTTPException(status_code=409, detail=str(e))
        return _state(session)


@router.post("/close")
def close(session: NoteSession = Depends(get_note_session)):
    """Commit any pending edit and close the editor; reports the closed week's marking."""
    with session_lock:
        week = session.active_week
        session.close()
        return {
            "year": session.year,
            "week": week,
            "has_note": session.has_note(week) if week is not None else False,
        }
