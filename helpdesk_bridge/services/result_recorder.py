"""Record the outcome of a submission run against the submission"""
import logging

from helpdesk_bridge.services.collaborators import NoteWriter, ResultStore
from helpdesk_bridge.services.errors import ApiError, HelpdeskError, TransportError
from helpdesk_bridge.services.vendors import ConversationIdentifiers, HelpdeskVendor

logger = logging.getLogger(__name__)


def failure_note(error: HelpdeskError) -> str:
    """Human readable note text for a failed run"""
    if isinstance(error, ApiError):
        return f"API error: HTTP {error.status_code} - {error.body}"
    if isinstance(error, TransportError):
        return f"API request failed: {error.message}"
    return error.message


class ResultRecorder:
    """Writes conversation identifiers and notes through the host's entry store"""

    def __init__(self, store: ResultStore, notes: NoteWriter):
        self.store = store
        self.notes = notes

    def record_success(
        self,
        submission_id: str,
        vendor: HelpdeskVendor,
        identifiers: ConversationIdentifiers,
    ) -> None:
        for key, value in identifiers.meta.items():
            self.store.persist_result_key(submission_id, key, value)

        primary = identifiers.primary if identifiers.primary not in (None, "") else 0
        self.notes.append_note(
            submission_id,
            f"{vendor.display_name} conversation created successfully. Conversation ID: {primary}",
            "success"
        )

    def record_failure(self, submission_id: str, error: HelpdeskError) -> None:
        self.notes.append_note(submission_id, failure_note(error), "error")
