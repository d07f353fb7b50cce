"""App-wide configuration and environment settings."""

import logging
import os
from pathlib import Path

import streamlit as st
from dotenv import load_dotenv

load_dotenv()  # Load from .env file

ROOT_DIR = Path(__file__).resolve().parents[1]


def get_secret(key, default=None):
    """Try st.secrets first, then os.getenv."""
    try:
        # Accessing st.secrets raises when there is no secrets.toml locally
        if key in st.secrets:
            return st.secrets[key]
    except (FileNotFoundError, AttributeError, KeyError):
        pass
    return os.getenv(key, default)


def _flag(value) -> bool:
    return str(value).strip().lower() in ("true", "1", "yes", "on")


# Draft persistence
DATA_DIR = Path(get_secret("VISA_INTAKE_DATA_DIR", str(ROOT_DIR / "data")))
DRAFT_KEY = "visa-form-data"

# Locales
SUPPORTED_LOCALES = ("ja", "en", "zh", "vi")
DEFAULT_LOCALE = get_secret("VISA_INTAKE_DEFAULT_LOCALE", "ja")

# Simulated network latency (seconds)
SUBMIT_DELAY_SECONDS = float(get_secret("VISA_INTAKE_SUBMIT_DELAY", "1.5"))
LOGIN_DELAY_SECONDS = float(get_secret("VISA_INTAKE_LOGIN_DELAY", "1.0"))

# Clear the draft once the final submission went through
CLEAR_DRAFT_ON_COMPLETE = _flag(get_secret("VISA_INTAKE_CLEAR_ON_COMPLETE", "true"))

# Unicode TTF for PDF export in non-CJK locales (Vietnamese diacritics)
PDF_FONT_PATH = get_secret("VISA_INTAKE_PDF_FONT", "")

LOG_LEVEL = get_secret("VISA_INTAKE_LOG_LEVEL", "INFO")


def configure_logging(level=None) -> None:
    """Configure root logging once for the Streamlit process."""
    logging.basicConfig(
        level=(level or LOG_LEVEL).upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
