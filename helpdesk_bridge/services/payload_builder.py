"""
Conversation payload builder

Turns extracted submission values into the vendor independent
ConversationFields: customer name split, subject with merge tags replaced,
and the full message body with extra fields and submission provenance.
Vendor JSON shaping happens afterwards in services.vendors.
"""
import re
from datetime import datetime, timezone
from typing import List, NamedTuple, Optional, Sequence, Tuple
from urllib.parse import urlparse

from helpdesk_bridge.models.forms import FeedMapping, FormInfo, Submission
from helpdesk_bridge.models.helpdesk import ConversationFields
from helpdesk_bridge.services.field_extractor import FieldExtractor

DEFAULT_SUBJECT = "Contact Form: {form_title}"
SEPARATOR = "\n\n---\n"

MERGE_TAG = re.compile(r"\{[^{}]*\}")
# {Label:3} or {Label:2.3}
FIELD_MERGE_TAG = re.compile(r"^\{[^{}:]*:(\d+(?:\.\d+)?)\}$")


class NameParts(NamedTuple):
    first: str
    last: str


def split_name(name: Optional[str]) -> NameParts:
    """
    Split a full name at the first run of whitespace

    "Jane Marie Smith" -> ("Jane", "Marie Smith"), "Prince" -> ("Prince", "")
    """
    name = (name or "").strip()
    if not name:
        return NameParts("", "")

    parts = re.split(r"\s+", name, maxsplit=1)
    return NameParts(parts[0], parts[1] if len(parts) > 1 else "")


def to_utc(value: datetime) -> datetime:
    # Naive timestamps from the form engine are UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_created_at(value: datetime) -> str:
    """RFC 3339 timestamp, e.g. 2025-01-15T10:30:00+00:00"""
    return to_utc(value).isoformat(timespec="seconds")


def site_host(site_url: Optional[str]) -> str:
    if not site_url:
        return ""
    return urlparse(site_url).hostname or ""


def replace_merge_tags(
    text: str,
    form: FormInfo,
    submission: Submission,
    extractor: Optional[FieldExtractor] = None,
) -> str:
    """
    Replace form-level and field merge tags in one pass

    Substituted values are inserted literally and never re-scanned for tags.
    Unknown tags are left as they are.
    """
    if not text:
        return ""

    replacements = {
        "{form_title}": form.title,
        "{form_id}": str(form.id),
        "{entry_id}": str(submission.id),
        "{source_url}": submission.source_url or "",
        "{date_created}": to_utc(submission.created_at).strftime("%Y-%m-%d %H:%M:%S"),
    }

    def _replace(match: re.Match) -> str:
        tag = match.group(0)
        if tag in replacements:
            return replacements[tag]
        field_tag = FIELD_MERGE_TAG.match(tag)
        if field_tag and extractor is not None:
            return extractor.extract(submission, field_tag.group(1))
        return tag

    return MERGE_TAG.sub(_replace, text)


def resolve_subject(
    feed: FeedMapping,
    form: FormInfo,
    submission: Submission,
    extractor: Optional[FieldExtractor] = None,
) -> str:
    template = feed.subject if (feed.subject or "").strip() else DEFAULT_SUBJECT
    return replace_merge_tags(template, form, submission, extractor)


def build_message_body(
    message: str,
    extras: Sequence[Tuple[str, str]],
    form: FormInfo,
    submission: Submission,
    host: str = "",
) -> str:
    """Message, then an extra fields block (if any), then a provenance block"""
    body = message

    lines: List[str] = [f"{label}: {value}" for label, value in extras if label and value]
    if lines:
        body += SEPARATOR + "\n".join(lines)

    body += SEPARATOR + "\n".join([
        f"Submitted via: {host}",
        f"Form: {form.title}",
        f"Source URL: {submission.source_url or ''}",
        f"Entry ID: {submission.id}",
    ])
    return body


def build_conversation_fields(
    *,
    email: str,
    name: str,
    message: str,
    extras: Sequence[Tuple[str, str]],
    feed: FeedMapping,
    form: FormInfo,
    submission: Submission,
    mailbox_id: int,
    site_url: str = "",
    extractor: Optional[FieldExtractor] = None,
) -> ConversationFields:
    """Everything a vendor payload is shaped from"""
    first, last = split_name(name)
    return ConversationFields(
        email=email,
        first_name=first,
        last_name=last,
        subject=resolve_subject(feed, form, submission, extractor),
        message=build_message_body(message, extras, form, submission, site_host(site_url)),
        mailbox_id=mailbox_id,
        created_at=format_created_at(submission.created_at),
    )
