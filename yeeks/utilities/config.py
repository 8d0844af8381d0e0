"""Configuration management for the Yeeks application."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

from yeeks.utilities.constants import DEFAULT_WEEK_START, DEFAULT_SAVE_DEBOUNCE_MS

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '127.0.0.1')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'INFO').upper()

# Calendar
WEEK_START: Final[str] = os.getenv('WEEK_START', DEFAULT_WEEK_START)
YEAR_PICKER_BACK: Final[int] = int(os.getenv('YEAR_PICKER_BACK', '5'))
YEAR_PICKER_FORWARD: Final[int] = int(os.getenv('YEAR_PICKER_FORWARD', '5'))

# Notes: quiet period before an edit is written
SAVE_DEBOUNCE_MS: Final[int] = int(os.getenv('SAVE_DEBOUNCE_MS', str(DEFAULT_SAVE_DEBOUNCE_MS)))

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = Path(os.getenv('YEEKS_DATA_DIR', str(BASE_DIR.parent / 'data'))).resolve()
TEMPLATES_DIR: Final[Path] = BASE_DIR / 'templates'
