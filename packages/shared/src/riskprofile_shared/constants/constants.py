"""Shared constants for riskprofile."""

from pathlib import Path

# ─── Exit Codes ────────────────────────────────────────────────────────────────
EXIT_SUCCESS = 0
EXIT_GENERAL_ERROR = 1
EXIT_CONFIG_ERROR = 2
EXIT_VALIDATION_ERROR = 3
EXIT_NOT_FOUND = 4

# ─── Life Events (optional tag on a submission, not scored) ────────────────────
KNOWN_LIFE_EVENTS: list[str] = [
    "marriage",
    "divorce",
    "birth",
    "job_change",
    "retirement",
    "inheritance",
    "health_issue",
    "other",
]

# ─── Default Configuration Values ──────────────────────────────────────────────
DEFAULT_DB_PATH = str(Path.home() / ".riskprofile" / "assessments.db")

DEFAULT_CONFIG = {
    "storage": {
        "db_path": DEFAULT_DB_PATH,
    },
    "reassessment": {
        "annual_months": 12,
        "advisory_months": 6,
    },
    "reports": {
        "default_format": "json",
        "include_history": True,
    },
    "logging": {
        "level": "WARNING",
    },
}

# ─── Config File Names ────────────────────────────────────────────────────────
CONFIG_FILE_NAME = ".riskprofile.yaml"
CONFIG_ENV_VAR = "RISKPROFILE_CONFIG"
DB_ENV_VAR = "RISKPROFILE_DB"

# ─── Supported Output Formats ─────────────────────────────────────────────────
SUPPORTED_FORMATS = ["json", "html"]
