"""
Conversation submitter

Creates one helpdesk conversation from one form submission:

    resolve config -> extract fields -> validate -> build payload -> send -> record

Any failing step ends the run with a recorded error note and a
ConversationFailure; no request is sent unless configuration and data are
valid, and at most one request is sent per run. The submitter keeps no state
between runs, so hosts may call process() concurrently.
"""
from typing import Any, Dict, Optional
import logging

import httpx
from email_validator import EmailNotValidError, validate_email

from helpdesk_bridge.models.forms import FeedMapping, FormInfo, Submission
from helpdesk_bridge.models.helpdesk import (
    ConversationFailure,
    ConversationFields,
    ConversationResult,
    ConversationSuccess,
    EffectiveConfig,
)
from helpdesk_bridge.services.collaborators import (
    FieldResolver,
    NoteWriter,
    ResultStore,
    SettingsProvider,
)
from helpdesk_bridge.services.config_resolver import resolve_config
from helpdesk_bridge.services.errors import ApiError, HelpdeskError, ValidationError
from helpdesk_bridge.services.field_extractor import FieldExtractor
from helpdesk_bridge.services.payload_builder import build_conversation_fields
from helpdesk_bridge.services.result_recorder import ResultRecorder
from helpdesk_bridge.services.transport import post_json
from helpdesk_bridge.services.vendors import get_vendor

logger = logging.getLogger(__name__)

def normalize_email(value: str) -> Optional[str]:
    """
    Bare, normalised address, or None when the value is not one

    Display-name forms ("John Doe <john@example.com>") are rejected.
    """
    if not value:
        return None
    try:
        result = validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return None
    return result.normalized


class ConversationSubmitter:
    """Stateless service turning form submissions into helpdesk conversations"""

    def __init__(
        self,
        settings_provider: SettingsProvider,
        field_resolver: FieldResolver,
        result_store: ResultStore,
        note_writer: NoteWriter,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.settings_provider = settings_provider
        self.extractor = FieldExtractor(field_resolver)
        self.recorder = ResultRecorder(result_store, note_writer)
        self.http_client = http_client

    def build_fields(
        self,
        feed: FeedMapping,
        submission: Submission,
        form: FormInfo,
        config: EffectiveConfig,
        site_url: str = "",
    ) -> ConversationFields:
        """
        Extract and validate submission values

        Raises:
            ValidationError: Missing/invalid email or empty message
        """
        email = normalize_email(self.extractor.extract(submission, feed.email_field))
        if email is None:
            raise ValidationError("Invalid or missing customer email address.", kind="invalid_email")

        name = self.extractor.extract(submission, feed.name_field)

        message = self.extractor.extract(submission, feed.message_field)
        if not message:
            raise ValidationError("Message field is empty.", kind="empty_message")

        extras = self.extractor.extract_extra_fields(feed, submission)

        return build_conversation_fields(
            email=email,
            name=name,
            message=message,
            extras=extras,
            feed=feed,
            form=form,
            submission=submission,
            mailbox_id=config.mailbox_id,
            site_url=site_url,
            extractor=self.extractor,
        )

    def build_payload(
        self,
        feed: FeedMapping,
        submission: Submission,
        form: FormInfo,
    ) -> Dict[str, Any]:
        """Vendor payload for a submission, without sending it"""
        settings = self.settings_provider.get_effective_settings()
        config = resolve_config(settings, feed)
        fields = self.build_fields(feed, submission, form, config, settings.site_url)
        return get_vendor(config.vendor).shape_payload(fields)

    async def process(
        self,
        feed: FeedMapping,
        submission: Submission,
        form: FormInfo,
    ) -> ConversationResult:
        """Create a conversation for a submission and record the outcome"""
        try:
            settings = self.settings_provider.get_effective_settings()
            config = resolve_config(settings, feed)
            vendor = get_vendor(config.vendor)

            fields = self.build_fields(feed, submission, form, config, settings.site_url)
            payload = vendor.shape_payload(fields)

            logger.debug(f"Sending request to {vendor.display_name}: {payload}")

            response = await post_json(
                f"{config.base_url}{vendor.conversation_path}",
                payload,
                vendor.headers_for(config),
                client=self.http_client,
            )
        except HelpdeskError as e:
            logger.error(f"Feed '{feed.name}' failed for submission {submission.id}: {e}")
            self.recorder.record_failure(submission.id, e)
            return ConversationFailure(
                kind=e.kind,
                message=e.message,
                status_code=e.status_code if isinstance(e, ApiError) else None,
            )

        identifiers = vendor.extract_identifiers(response.data)
        self.recorder.record_success(submission.id, vendor, identifiers)

        logger.info(
            f"{vendor.display_name} conversation {identifiers.primary} created "
            f"for submission {submission.id}"
        )

        return ConversationSuccess(
            submission=submission,
            conversation_id=None if identifiers.primary in (None, 0, "") else str(identifiers.primary),
            conversation_reference=None if identifiers.reference in (None, "") else str(identifiers.reference),
            identifiers=identifiers.meta,
        )
