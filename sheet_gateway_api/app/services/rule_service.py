"""
Business rules guarding writes to the contact collection.

The rules only apply when the target is the contact collection
(``settings.contact_collection``), the caller declares the
telemarketing role (``settings.contact_role``) and the payload names an
agent.  Two rules run before anything is written:

* **Daily contact guard.**  If the payload records a contact (a
  generated message or call notes) and the caller did not set
  ``forceSave``, the current rows are scanned.  Another row with the
  same agent and today's ``lastContactDate`` declines the write
  softly.  Otherwise ``lastContactDate`` is set to today.
* **Call timestamp.**  When call notes are present, the call time
  field is stamped with the local date and time.  For updates the
  stamp is only written if the notes differ from the stored ones, so
  resubmitting the same notes keeps the original time.

"Today" and "now" are taken in a fixed UTC offset (KST by default).
The contact state is recomputed from a full scan on every request.
This service reads the spreadsheet but never writes to it.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Union

from ..core import clock
from ..core.config import settings
from ..core.sheets import SheetCollection, cell_value
from ..schemas.results import SoftDecline

CONTACTED_TODAY_MESSAGE = "해당 전문위원은 오늘 이미 다른 기업에 연락 기록이 있습니다."

logger = logging.getLogger(__name__)


class ContactRuleService:
    """Applies the contact rules to ``write`` and ``update`` payloads."""

    @classmethod
    def applies(cls, collection_name: str, user_role: Optional[str], data: Mapping[str, Any]) -> bool:
        return (
            collection_name == settings.contact_collection
            and user_role == settings.contact_role
            and bool(data.get(settings.agent_field))
        )

    @classmethod
    async def apply(
        cls,
        action: str,
        collection: SheetCollection,
        data: Mapping[str, Any],
        row_index: Optional[int] = None,
        force_save: bool = False,
    ) -> Union[SoftDecline, Dict[str, Any]]:
        """Check and augment ``data``.

        Returns a ``SoftDecline`` when the daily guard trips, otherwise
        a copy of ``data`` with the derived fields set.  Callers must
        check ``applies`` first.
        """
        now = clock.local_now()
        today = clock.format_date(now)
        augmented = dict(data)
        agent = cell_value(data.get(settings.agent_field))

        signalled = bool(data.get(settings.message_field)) or bool(data.get(settings.call_notes_field))
        if signalled and not force_save:
            if cls.contacted_today(action, collection, agent, today, row_index):
                logger.info("Declined %s on '%s': agent %s already contacted today", action, collection.name, agent)
                return SoftDecline(message=CONTACTED_TODAY_MESSAGE)
        augmented[settings.last_contact_field] = today

        notes = data.get(settings.call_notes_field)
        if notes and cls._notes_changed(action, collection, cell_value(notes), row_index):
            augmented[settings.call_time_field] = clock.format_datetime(now)

        return augmented

    @classmethod
    def contacted_today(
        cls,
        action: str,
        collection: SheetCollection,
        agent: str,
        today: str,
        row_index: Optional[int] = None,
    ) -> bool:
        """Scan a fresh snapshot for another contact by ``agent`` today.

        On ``update`` the row being edited is skipped so that saving it
        twice in one day is not a duplicate.
        """
        for index, row in enumerate(collection.fetch_all()):
            if action == "update" and index == row_index:
                continue
            if row.get(settings.agent_field) == agent and row.get(settings.last_contact_field) == today:
                return True
        return False

    @classmethod
    def _notes_changed(
        cls,
        action: str,
        collection: SheetCollection,
        notes: str,
        row_index: Optional[int],
    ) -> bool:
        if action != "update":
            return True
        rows = collection.fetch_all()
        if row_index is None or not 0 <= row_index < len(rows):
            logger.debug("No row at index %s of '%s'; call time not stamped", row_index, collection.name)
            return False
        return rows[row_index].get(settings.call_notes_field) != notes
