"""Configuration management for the AgroIO application."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# AI Configuration
OPENAI_API_KEY: Final[str] = os.getenv('OPENAI_API_KEY', '')
OPENAI_TEXT_MODEL: Final[str] = os.getenv('OPENAI_TEXT_MODEL', 'gpt-4o-mini')
OPENAI_IMAGE_MODEL: Final[str] = os.getenv('OPENAI_IMAGE_MODEL', 'gpt-image-1')

# Forecast API
FORECAST_API_URL: Final[str] = os.getenv('FORECAST_API_URL', 'https://api.open-meteo.com/v1/forecast')
FORECAST_TIMEOUT: Final[float] = float(os.getenv('FORECAST_TIMEOUT', '10'))
FORECAST_DAYS: Final[int] = 7

# Fallback location (Rome) when geolocation is unavailable
FALLBACK_LAT: Final[float] = float(os.getenv('FALLBACK_LAT', '41.9028'))
FALLBACK_LNG: Final[float] = float(os.getenv('FALLBACK_LNG', '12.4964'))

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'INFO').upper()

# Date Format
DATE_FORMAT: Final[str] = "%Y-%m-%d"

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = BASE_DIR / 'data'
TEMPLATES_DIR: Final[Path] = BASE_DIR / 'templates'
SESSION_FILE: Final[Path] = Path(os.getenv('SESSION_FILE', str(DATA_DIR / 'session.json')))
