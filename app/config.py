# -*- coding: utf-8 -*-


from pathlib import Path
from dataclasses import dataclass
from typing import Dict, Tuple
import os

# ============================================================================
# Load .env file for local environment configuration
# ============================================================================
from dotenv import load_dotenv

load_dotenv()  # Load from .env file in project root

# ============================================================================
# Read settings from environment variables (from .env or system)
# ============================================================================
# API Settings
_API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:5000")
_API_TIMEOUT = int(os.getenv("API_TIMEOUT", "30"))
_API_VERIFY_SSL = os.getenv("API_VERIFY_SSL", "true").lower() in ("true", "1", "yes")

# Draft persistence
_DRAFT_STORE_PATH = os.getenv("DRAFT_STORE_PATH", None)
_DRAFT_STORE_KEY = os.getenv("DRAFT_STORE_KEY", "tenancy-wizard-store")

# Language of user-facing messages
_LANGUAGE = os.getenv("LANGUAGE_CODE", "en")

_PROJECT_ROOT = Path(__file__).parent.parent
_DATA_DIR = Path(os.getenv("DATA_DIR", str(_PROJECT_ROOT / "data")))
_LOGS_DIR = Path(os.getenv("LOGS_DIR", str(_PROJECT_ROOT / "logs")))
_CONSOLE_LOG_LEVEL = os.getenv("CONSOLE_LOG_LEVEL", "INFO").upper()


def _default_clauses() -> Tuple[Dict[str, str], ...]:
    return (
        {
            "key": "rent_payment",
            "text": (
                "The tenant agrees to pay the monthly rent of ₹[AMOUNT] on or before "
                "the [DAY] of each month. Late payments will incur a penalty of "
                "₹[PENALTY] per day after the due date."
            ),
        },
        {
            "key": "maintenance",
            "text": (
                "The tenant is responsible for maintaining the property in good "
                "condition and reporting any damages or necessary repairs to the "
                "landlord promptly. Normal wear and tear is expected."
            ),
        },
    )


@dataclass
class Config:
    """Application configuration."""

    # Application Info
    APP_NAME: str = "Rental Manager"
    APP_TITLE: str = "Rental Property Management"
    VERSION: str = "1.0.0"

    # HTTP API Backend Settings
    # Reads from .env file (API_BASE_URL, API_TIMEOUT, API_VERIFY_SSL)
    API_BASE_URL: str = _API_BASE_URL
    API_TIMEOUT: int = _API_TIMEOUT
    API_VERIFY_SSL: bool = _API_VERIFY_SSL

    # Paths
    PROJECT_ROOT: Path = _PROJECT_ROOT
    DATA_DIR: Path = _DATA_DIR
    LOGS_DIR: Path = _LOGS_DIR

    # Logging
    LOG_FILE: str = "app.log"
    LOG_PATH: Path = _LOGS_DIR / LOG_FILE
    LOG_MAX_BYTES: int = 5 * 1024 * 1024  # 5MB
    LOG_BACKUP_COUNT: int = 3
    CONSOLE_LOG_LEVEL: str = _CONSOLE_LOG_LEVEL

    # Wizard draft persistence (best effort, survives reloads)
    DRAFT_STORE_PATH: Path = Path(_DRAFT_STORE_PATH) if _DRAFT_STORE_PATH else _DATA_DIR / "tenancy_wizard_store.json"
    DRAFT_STORE_KEY: str = _DRAFT_STORE_KEY

    # i18n
    LANGUAGE: str = _LANGUAGE

    # Tenancy Wizard
    SIGNATURE_METHOD: str = "manual"  # esign, otp, manual
    TENANT_LOOKUP_LIMIT: int = 100
    DEFAULT_TEMPLATE_NAME: str = "standard"
    DEFAULT_CLAUSES: tuple = _default_clauses()

    # Rent / deposit vocabularies
    RENT_CYCLES: tuple = ("monthly", "quarterly", "yearly")
    DEPOSIT_STATUSES: tuple = ("upcoming", "held", "returned", "disputed")
    DUE_DATE_DAY_MIN: int = 1
    DUE_DATE_DAY_MAX: int = 28
