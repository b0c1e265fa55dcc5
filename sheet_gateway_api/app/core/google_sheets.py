"""
Google Sheets backend.

Each worksheet of the configured spreadsheet is a collection whose
first row holds the headers.  Snapshots come from
``Worksheet.get_all_values``; the row number of a data row is its
1-based sheet row, so the first data row is row 2.

Authentication uses a service account built from the email and
private key in settings.  The spreadsheet handle is opened on first
use and reused afterwards; worksheet contents are always re-read.
Errors raised by ``gspread`` or ``google-auth`` surface as
``ServiceError`` without retrying.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator, List, Mapping, Optional, Tuple

import gspread
from google.auth.exceptions import GoogleAuthError
from google.oauth2.service_account import Credentials
from gspread.exceptions import GSpreadException, WorksheetNotFound
from gspread.utils import rowcol_to_a1

from .errors import CollectionNotFoundError, GatewayError, ServiceError
from .sheets import SheetCollection, SheetRow, SheetStore, cell_value, row_at

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]
TOKEN_URI = "https://oauth2.googleapis.com/token"

logger = logging.getLogger(__name__)


@contextmanager
def service_errors() -> Iterator[None]:
    """Translate client library failures into ``ServiceError``."""
    try:
        yield
    except GatewayError:
        raise
    except (GSpreadException, GoogleAuthError) as exc:
        logger.error("Google Sheets call failed: %s", exc)
        raise ServiceError(str(exc) or exc.__class__.__name__) from exc


class GoogleSheetCollection(SheetCollection):
    """Collection backed by a ``gspread.Worksheet``."""

    def __init__(self, worksheet: gspread.Worksheet) -> None:
        self._worksheet = worksheet
        self.name = worksheet.title

    def _read(self) -> Tuple[List[str], List[SheetRow]]:
        values = self._worksheet.get_all_values()
        if not values:
            return [], []
        headers = values[0]
        rows: List[SheetRow] = []
        for offset, raw in enumerate(values[1:]):
            padded = list(raw) + [""] * (len(headers) - len(raw))
            rows.append(
                SheetRow(
                    row_number=offset + 2,
                    values={header: padded[col] for col, header in enumerate(headers) if header},
                )
            )
        return headers, rows

    def _ensure_headers(self, headers: List[str], fields: Mapping[str, Any]) -> List[str]:
        """Append header cells for fields the sheet does not have yet."""
        missing = [name for name in fields if name not in headers]
        if not missing:
            return headers
        extended = headers + missing
        if len(extended) > self._worksheet.col_count:
            self._worksheet.add_cols(len(extended) - self._worksheet.col_count)
        self._worksheet.update(range_name="A1", values=[extended])
        logger.info("Extended headers of '%s' with %s", self.name, missing)
        return extended

    def fetch_all(self) -> List[SheetRow]:
        with service_errors():
            _, rows = self._read()
        return rows

    def add(self, fields: Mapping[str, Any]) -> None:
        with service_errors():
            headers = self._ensure_headers(self._worksheet.row_values(1), fields)
            self._worksheet.append_row(
                [cell_value(fields.get(header)) for header in headers],
                value_input_option="RAW",
                table_range="A1",
            )
        logger.info("Appended row to '%s'", self.name)

    def update_at(self, index: int, fields: Mapping[str, Any]) -> None:
        with service_errors():
            headers, rows = self._read()
            row = row_at(rows, index)
            headers = self._ensure_headers(headers, fields)
            # Only the named cells are written; formulas and number
            # formats in the rest of the row stay as they are.
            cells = [
                {
                    "range": rowcol_to_a1(row.row_number, headers.index(name) + 1),
                    "values": [[cell_value(value)]],
                }
                for name, value in fields.items()
            ]
            if cells:
                self._worksheet.batch_update(cells, value_input_option="RAW")
        logger.info("Updated row %s (index %s) of '%s'", row.row_number, index, self.name)

    def delete_at(self, index: int) -> None:
        with service_errors():
            _, rows = self._read()
            row = row_at(rows, index)
            self._worksheet.delete_rows(row.row_number)
        logger.info("Deleted row %s (index %s) of '%s'", row.row_number, index, self.name)


class GoogleSheetStore(SheetStore):
    """Store resolving worksheet titles inside one spreadsheet."""

    backend_name = "google"

    def __init__(self, client_email: str, private_key: str, sheet_id: str) -> None:
        self._client_email = client_email
        self._private_key = private_key
        self._sheet_id = sheet_id
        self._spreadsheet: Optional[gspread.Spreadsheet] = None

    def _credentials(self) -> Credentials:
        if not (self._client_email and self._private_key and self._sheet_id):
            raise ServiceError("Google Sheets credentials are not configured")
        info = {
            "type": "service_account",
            "client_email": self._client_email,
            "private_key": self._private_key,
            "token_uri": TOKEN_URI,
        }
        return Credentials.from_service_account_info(info, scopes=SCOPES)

    def _open(self) -> gspread.Spreadsheet:
        if self._spreadsheet is None:
            with service_errors():
                try:
                    client = gspread.authorize(self._credentials())
                except ValueError as exc:
                    # Malformed private keys are reported by the signer as ValueError.
                    raise ServiceError(f"Invalid service account key: {exc}") from exc
                self._spreadsheet = client.open_by_key(self._sheet_id)
        return self._spreadsheet

    def collection(self, name: str) -> SheetCollection:
        spreadsheet = self._open()
        with service_errors():
            try:
                worksheet = spreadsheet.worksheet(name)
            except WorksheetNotFound:
                raise CollectionNotFoundError(name) from None
        return GoogleSheetCollection(worksheet)
