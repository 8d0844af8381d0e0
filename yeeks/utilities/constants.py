from typing import Final

WEEKS_PER_ROW: Final[int] = 7
NOTE_MAX_LENGTH: Final[int] = 20000
NOTES_KEY_PREFIX: Final[str] = "notes-"
DEFAULT_WEEK_START: Final[str] = "monday"
DEFAULT_SAVE_DEBOUNCE_MS: Final[int] = 500
