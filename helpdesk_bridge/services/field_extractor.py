"""Pull typed values out of a submission using a feed's field references"""
import re
from typing import List, Tuple

from helpdesk_bridge.models.forms import ExtraFieldMapping, FeedMapping, Submission
from helpdesk_bridge.services.collaborators import FieldResolver

# "3" or "2.3" (sub-input of a compound field)
FIELD_ID_PATTERN = re.compile(r"^\d+(\.\d+)?$")


def looks_like_field_id(value: str) -> bool:
    return bool(FIELD_ID_PATTERN.match((value or "").strip()))


class FieldExtractor:
    """Reads field values through the host's field resolver"""

    def __init__(self, resolver: FieldResolver):
        self.resolver = resolver

    def extract(self, submission: Submission, field_ref) -> str:
        """Trimmed value of a field, or "" for an empty reference"""
        if field_ref is None or not str(field_ref).strip():
            return ""
        value = self.resolver.resolve(submission, str(field_ref).strip())
        return (value or "").strip()

    def resolve_extra_value(self, submission: Submission, mapping: ExtraFieldMapping) -> str:
        if mapping.value_type == "literal":
            return (mapping.value or "").strip()
        if mapping.value_type == "field" or looks_like_field_id(mapping.value):
            return self.extract(submission, mapping.value)
        return (mapping.value or "").strip()

    def extract_extra_fields(self, feed: FeedMapping, submission: Submission) -> List[Tuple[str, str]]:
        """
        (label, value) pairs in mapping order

        Entries with an empty label or an empty resolved value are dropped.
        Repeated labels are all kept.
        """
        extras: List[Tuple[str, str]] = []
        for mapping in feed.extra_fields:
            label = (mapping.label or "").strip()
            if not label:
                continue
            value = self.resolve_extra_value(submission, mapping)
            if value:
                extras.append((label, value))
        return extras
