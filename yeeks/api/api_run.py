from fastapi import FastAPI, Request, Query, HTTPException, Depends
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from datetime import date as _date
from typing import Optional
import logging

from yeeks.api.routes import notes, editor
from yeeks.logic.calendar.partition import (
    partition_year, classify, find_current_week, grid_rows, week_label, year_choices
)
from yeeks.logic.notes.session import NoteSession
from yeeks.infra.paths import TEMPLATES_DIR
from yeeks.utilities.config import WEEK_START, YEAR_PICKER_BACK, YEAR_PICKER_FORWARD
from yeeks.utilities.constants import WEEKS_PER_ROW

# Logging
logger = logging.getLogger("yeeks_app")

# Initialize FastAPI app
app = FastAPI(title="Yeeks: your year in weeks")
app.include_router(notes.router)
app.include_router(editor.router)

# Templates
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


# -------------------- Helpers --------------------
def _weeks_or_400(year: int):
    try:
        return partition_year(year, WEEK_START)
    except ValueError as e:
        logger.warning(f"Rejected year {year}: {e}")
        raise HTTPException(status_code=400, detail=str(e))


def _week_payload(weeks, today: _date):
    return [
        {**w.to_dict(), "label": week_label(w), "status": classify(w, today).value}
        for w in weeks
    ]


# -------------------- UI PAGES --------------------
@app.get("/", response_class=HTMLResponse)
def year_page(request: Request, year: Optional[int] = Query(default=None),
              session: NoteSession = Depends(notes.get_note_session)):
    today = _date.today()
    if year is None:
        year = today.year
    weeks = _weeks_or_400(year)
    with notes.session_lock:
        year_notes = dict(session.ensure_year(year))
    marked = {week for week, note in year_notes.items() if note.has_content}
    rows = [
        [{"week": w, "label": week_label(w), "status": classify(w, today).value, "marked": w.week_number in marked}
         for w in row]
        for row in grid_rows(weeks, WEEKS_PER_ROW)
    ]
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "year": year,
            "rows": rows,
            "years": year_choices(today.year, YEAR_PICKER_BACK, YEAR_PICKER_FORWARD),
        }
    )


# -------------------- API: calendar --------------------
@app.get('/api/years')
def api_years():
    current = _date.today().year
    return {"current": current, "years": year_choices(current, YEAR_PICKER_BACK, YEAR_PICKER_FORWARD)}


@app.get('/api/weeks')
def api_weeks(year: Optional[int] = Query(default=None)):
    """The year's clipped weeks with their past/current/future status."""
    today = _date.today()
    if year is None:
        year = today.year
    weeks = _weeks_or_400(year)
    current = find_current_week(weeks, today)
    return {
        "year": year,
        "count": len(weeks),
        "current_week": current.week_number if current else None,
        "weeks": _week_payload(weeks, today),
    }
