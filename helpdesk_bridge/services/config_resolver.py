"""Resolve the effective helpdesk configuration for one feed"""
import re
from typing import Optional

from helpdesk_bridge.models.forms import FeedMapping
from helpdesk_bridge.models.helpdesk import EffectiveConfig, HelpdeskSettings
from helpdesk_bridge.services.errors import ConfigurationError
from helpdesk_bridge.services.vendors import HelpdeskVendor, get_vendor

FALLBACK_MAILBOX_ID = 1
NOT_CONFIGURED_MESSAGE = "Helpdesk API is not configured. Please check plugin settings."

_LEADING_INT = re.compile(r"^\s*(\d+)")


def coerce_mailbox_id(value: Optional[str]) -> Optional[int]:
    """Leading integer of a mailbox/inbox id, or None when there is none"""
    if value is None:
        return None
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else None


def resolve_mailbox_id(feed: FeedMapping, settings: HelpdeskSettings) -> int:
    """Feed override, then the global default, then mailbox 1; 0 counts as unset"""
    for candidate in (feed.mailbox_id, settings.default_mailbox_id):
        mailbox_id = coerce_mailbox_id(candidate)
        if mailbox_id:
            return mailbox_id
    return FALLBACK_MAILBOX_ID


def resolve_config(settings: HelpdeskSettings, feed: FeedMapping) -> EffectiveConfig:
    """
    Merge global settings with a feed's overrides

    Raises:
        ConfigurationError: If the URL or a credential the vendor needs is empty
    """
    try:
        vendor: HelpdeskVendor = get_vendor(settings.vendor)
    except ValueError as e:
        raise ConfigurationError(str(e))

    base_url = (settings.base_url or "").strip().rstrip("/")
    if not base_url:
        raise ConfigurationError(NOT_CONFIGURED_MESSAGE)

    for credential in vendor.required_credentials:
        if not (getattr(settings, credential) or "").strip():
            raise ConfigurationError(NOT_CONFIGURED_MESSAGE)

    return EffectiveConfig(
        vendor=vendor.name,
        base_url=base_url,
        api_key=settings.api_key.strip(),
        api_secret=(settings.api_secret or "").strip(),
        mailbox_id=resolve_mailbox_id(feed, settings),
    )
