"""
Host collaborators used by the conversation submitter

The submitter never talks to the form engine or the entry store directly.
It is handed objects implementing the protocols below. The default adapters
cover a plain dict of field values, Supabase-backed entry storage and
environment-based settings.
"""
from typing import Protocol, Dict, List, Tuple, Optional, Any
import logging

from helpdesk_bridge.config import Settings, get_settings
from helpdesk_bridge.models.forms import Submission
from helpdesk_bridge.models.helpdesk import HelpdeskSettings

logger = logging.getLogger(__name__)


class FieldResolver(Protocol):
    def resolve(self, submission: Submission, field_ref: str) -> str: ...


class ResultStore(Protocol):
    def persist_result_key(self, submission_id: str, key: str, value: Any) -> None: ...


class NoteWriter(Protocol):
    def append_note(self, submission_id: str, text: str, kind: str) -> None: ...


class SettingsProvider(Protocol):
    def get_effective_settings(self) -> HelpdeskSettings: ...


class SubmissionFieldResolver:
    """
    Resolve field references against ``Submission.field_values``

    A whole-field reference ("2") with no value of its own is assembled from
    its sub-inputs ("2.3", "2.6", ...) in input order, joined by a space.
    """

    def resolve(self, submission: Submission, field_ref: str) -> str:
        field_ref = str(field_ref or "").strip()
        if not field_ref:
            return ""

        values = submission.field_values
        value = values.get(field_ref)
        if value not in (None, ""):
            return str(value)

        if "." in field_ref:
            return ""

        prefix = f"{field_ref}."
        parts: List[Tuple[int, str]] = []
        for key, sub_value in values.items():
            if not key.startswith(prefix) or sub_value in (None, ""):
                continue
            suffix = key[len(prefix):]
            if suffix.isdigit():
                parts.append((int(suffix), str(sub_value).strip()))

        parts.sort()
        return " ".join(part for _, part in parts if part)


class InMemoryEntryStore:
    """Keeps result keys and notes in memory"""

    def __init__(self):
        self.meta: Dict[str, Dict[str, Any]] = {}
        self.notes: List[Dict[str, str]] = []

    def persist_result_key(self, submission_id: str, key: str, value: Any) -> None:
        self.meta.setdefault(submission_id, {})[key] = value

    def append_note(self, submission_id: str, text: str, kind: str) -> None:
        self.notes.append({"submission_id": submission_id, "note": text, "note_type": kind})

    def get_meta(self, submission_id: str, key: str) -> Optional[Any]:
        return self.meta.get(submission_id, {}).get(key)


class SupabaseEntryStore:
    """Stores result keys and notes in Supabase tables"""

    META_TABLE = "form_submission_meta"
    NOTES_TABLE = "form_submission_notes"

    def __init__(self, client):
        self.client = client

    def persist_result_key(self, submission_id: str, key: str, value: Any) -> None:
        self.client.table(self.META_TABLE).upsert({
            "submission_id": submission_id,
            "meta_key": key,
            "meta_value": "" if value is None else str(value)
        }, on_conflict="submission_id,meta_key").execute()

    def append_note(self, submission_id: str, text: str, kind: str) -> None:
        self.client.table(self.NOTES_TABLE).insert({
            "submission_id": submission_id,
            "note": text,
            "note_type": kind
        }).execute()


class EnvSettingsProvider:
    """Helpdesk settings from the application environment"""

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings

    def get_effective_settings(self) -> HelpdeskSettings:
        settings = self._settings or get_settings()
        return HelpdeskSettings(
            vendor=settings.helpdesk_vendor,
            base_url=settings.helpdesk_url,
            api_key=settings.helpdesk_api_key,
            api_secret=settings.helpdesk_api_secret,
            default_mailbox_id=settings.default_mailbox_id,
            site_url=settings.site_url,
        )
