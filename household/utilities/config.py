"""Configuration management for the household ledger application."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'DEBUG' if DEBUG else 'INFO').upper()

# Ledger defaults
DEFAULT_REWARD_CURRENCY: Final[str] = os.getenv('DEFAULT_REWARD_CURRENCY', 'USD').strip().upper() or 'USD'

# Events
MAX_RECENT_EVENTS: Final[int] = int(os.getenv('MAX_RECENT_EVENTS', '300'))

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = Path(os.getenv('HOUSEHOLD_DATA_DIR', str(BASE_DIR / 'data'))).resolve()
