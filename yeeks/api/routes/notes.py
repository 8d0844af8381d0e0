from threading import Lock
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from yeeks.domain.Week_Note import WeekNote
from yeeks.infra.Note_Backends import JsonFileNoteBackend
from yeeks.infra.Note_Store import NoteStore
from yeeks.infra.paths import NOTES_FILE
from yeeks.logic.calendar.partition import partition_year
from yeeks.logic.notes.session import NoteSession
from yeeks.utilities.config import WEEK_START
from yeeks.utilities.validators import NoteInput, NoteOutput

router = APIRouter(prefix="/api/notes")

# One editing session for the process (single local user, one edit surface);
# requests take turns on it.
session_lock = Lock()
_session: Optional[NoteSession] = None


def get_note_session() -> NoteSession:
    global _session
    with session_lock:
        if _session is None:
            _session = NoteSession(NoteStore(JsonFileNoteBackend(NOTES_FILE)))
    return _session


def note_out(year: int, week: int, note: WeekNote) -> NoteOutput:
    return NoteOutput(
        year=year,
        week=week,
        content=note.content,
        lastModified=note.last_modified,
        has_content=note.has_content,
    )


def check_week(year: int, week: int) -> None:
    try:
        weeks = partition_year(year, WEEK_START)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not 1 <= week <= len(weeks):
        raise HTTPException(status_code=400, detail=f"Year {year} has weeks 1..{len(weeks)}")


@router.get("/{year}")
def list_notes(year: int, session: NoteSession = Depends(get_note_session)):
    """All notes of a year, keyed by week number."""
    with session_lock:
        notes = dict(session.ensure_year(year))
    return {
        "year": year,
        "count": len(notes),
        "notes": {str(week): note_out(year, week, note) for week, note in sorted(notes.items())},
    }


@router.get("/{year}/{week}", response_model=NoteOutput)
def get_note(year: int, week: int, session: NoteSession = Depends(get_note_session)):
    check_week(year, week)
    with session_lock:
        note = NoteStore.get(session.ensure_year(year), week)
    if note is None:
        raise HTTPException(status_code=404, detail="No note for this week")
    return note_out(year, week, note)


@router.put("/{year}/{week}", response_model=NoteOutput)
def put_note(year: int, week: int, payload: NoteInput, session: NoteSession = Depends(get_note_session)):
    """Save right away, bypassing the editor's quiet period."""
    check_week(year, week)
    with session_lock:
        note = session.save_now(year, week, payload.content)
    return note_out(year, week, note)
