from yeeks.utilities.config import DATA_DIR, TEMPLATES_DIR

# Centralized paths for data files (single source of truth)
NOTES_FILE = DATA_DIR / 'notes.json'

__all__ = ['DATA_DIR', 'NOTES_FILE', 'TEMPLATES_DIR']
