"""
Configuration settings for the YouTube notes generator application.
"""

import os
from typing import Dict
from pathlib import Path
from dotenv import load_dotenv


# Ensure environment variables are loaded
load_dotenv()


def _env_flag(name: str, default: bool = False) -> bool:
    """Read a boolean flag from the environment."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Base configuration class."""

    # Application info
    APP_NAME = "YouTube Notes Generator"
    APP_VERSION = "0.2.0"

    # Data directories
    BASE_DIR = Path(__file__).resolve().parent.parent.absolute()
    DATA_DIR = Path(os.getenv("DATA_DIR", BASE_DIR / "data"))
    IMAGES_DIR = Path(os.getenv("IMAGES_DIR", DATA_DIR / "images"))
    SETTINGS_FILE = Path(os.getenv("SETTINGS_FILE", DATA_DIR / "settings.json"))

    # API keys and credentials
    GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
    SEARCH_ENGINE_ID = os.getenv("SEARCH_ENGINE_ID")
    GOOGLE_DOCS_TOKEN = os.getenv("GOOGLE_DOCS_TOKEN")
    GOOGLE_SERVICE_ACCOUNT_FILE = os.getenv("GOOGLE_SERVICE_ACCOUNT_FILE")

    # Run defaults
    GOOGLE_DOC_ID = os.getenv("GOOGLE_DOC_ID")
    SUMMARY_MODE = os.getenv("SUMMARY_MODE", "chunked")
    DOWNLOAD_IMAGES = _env_flag("DOWNLOAD_IMAGES")

    # Endpoints
    GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-1.5-flash-latest")
    GEMINI_API_URL = (
        f"https://generativelanguage.googleapis.com/v1beta/models/{GEMINI_MODEL}:generateContent"
    )
    CUSTOM_SEARCH_URL = "https://www.googleapis.com/customsearch/v1"
    DOCS_API_URL = "https://docs.googleapis.com/v1/documents"
    DOCS_SCOPE = "https://www.googleapis.com/auth/documents"
    DOCS_EDIT_URL = "https://docs.google.com/document/d/{document_id}/edit"

    # Limits
    CHUNK_SIZE = int(os.getenv("CHUNK_SIZE", "5000"))
    DETAILED_CHAR_BUDGET = 100_000
    QUERY_CHAR_BUDGET = 4_000
    MAX_OUTPUT_TOKENS = 8192
    MAX_IMAGE_QUERIES = 3
    REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "60"))

    # Transcript polling
    TRANSCRIPT_TIMEOUT = float(os.getenv("TRANSCRIPT_TIMEOUT", "5"))
    TRANSCRIPT_POLL_INTERVAL = 0.5

    PUBLIC_URL = os.getenv("PUBLIC_URL", "http://localhost:8000")

    # Create data directories if they don't exist
    @classmethod
    def initialize(cls):
        """Initialize the application configuration."""
        cls.DATA_DIR.mkdir(parents=True, exist_ok=True)
        cls.IMAGES_DIR.mkdir(parents=True, exist_ok=True)

        # Validate required environment variables
        if not cls.GEMINI_API_KEY:
            print("WARNING: GEMINI_API_KEY environment variable not set.")
            print("Set it in the .env file, the settings file, or pass --api-key.")

    @classmethod
    def get_paths(cls) -> Dict[str, Path]:
        """Get all application paths."""
        return {
            "base_dir": cls.BASE_DIR,
            "data_dir": cls.DATA_DIR,
            "images_dir": cls.IMAGES_DIR,
            "settings_file": cls.SETTINGS_FILE,
        }


class DevelopmentConfig(Config):
    """Development configuration."""

    DEBUG = True
    LOG_LEVEL = "DEBUG"


class ProductionConfig(Config):
    """Production configuration."""

    DEBUG = False
    LOG_LEVEL = "INFO"


# Determine which configuration to use based on environment
def get_config():
    """Get the appropriate configuration based on environment."""
    env = os.getenv("ENVIRONMENT", "development").lower()
    if env == "production":
        return ProductionConfig
    else:
        return DevelopmentConfig


# Create a config instance
config = get_config()
config.initialize()
