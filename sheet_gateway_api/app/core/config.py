"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields, so the
gateway starts with the in-memory backend or with Google Sheets once
the service account variables are set.  Field names used by the
contact rules default to the column headers of the production
``Companies`` worksheet.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Sheet Gateway API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Storage backend: ``google`` talks to the spreadsheet identified by
    # ``GOOGLE_SHEET_ID``; ``memory`` keeps rows in process memory and is
    # meant for local development.
    sheets_backend: str = os.getenv("SHEETS_BACKEND", "google").lower()

    # Service account credentials.  Hosting dashboards usually store the
    # private key on one line with literal ``\n`` sequences; see
    # ``private_key`` below.
    google_client_email: str = os.getenv("GOOGLE_CLIENT_EMAIL", "")
    google_private_key_raw: str = os.getenv("GOOGLE_PRIVATE_KEY", "")
    google_sheet_id: str = os.getenv("GOOGLE_SHEET_ID", "")

    # Contact rules
    contact_collection: str = os.getenv("CONTACT_COLLECTION", "Companies")
    contact_role: str = os.getenv("CONTACT_ROLE", "TMer")
    agent_field: str = os.getenv("AGENT_FIELD", "담당 전문위원")
    message_field: str = os.getenv("MESSAGE_FIELD", "메세지생성")
    call_notes_field: str = os.getenv("CALL_NOTES_FIELD", "통화내용_TMer")
    call_time_field: str = os.getenv("CALL_TIME_FIELD", "통화일시")
    last_contact_field: str = os.getenv("LAST_CONTACT_FIELD", "lastContactDate")
    local_utc_offset_hours: int = int(os.getenv("LOCAL_UTC_OFFSET_HOURS", "9"))

    default_page_limit: int = int(os.getenv("DEFAULT_PAGE_LIMIT", "15"))

    @property
    def private_key(self) -> str:
        """Service account key with escaped newlines restored."""
        return self.google_private_key_raw.replace("\\n", "\n")


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
