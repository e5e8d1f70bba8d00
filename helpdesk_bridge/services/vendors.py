"""
Helpdesk vendor adapters

Everything vendor specific lives here: endpoint paths, auth headers, the
JSON shape of a new conversation and where the created conversation's
identifiers are found in the response.

Supported vendors:
  - freescout  POST /api/conversations, X-FreeScout-API-Key header
  - libredesk  POST /api/v1/conversations, "Authorization: token key:secret"

Adding a vendor:
  1. Write shape/identifier/header functions for it.
  2. Register a HelpdeskVendor in _VENDORS.
  3. Set HELPDESK_VENDOR=<name>.
"""
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple

from helpdesk_bridge.models.helpdesk import ConversationFields, EffectiveConfig


@dataclass(frozen=True)
class ConversationIdentifiers:
    """Identifiers of a created conversation, and the entry meta to store"""
    primary: Optional[Any] = None
    reference: Optional[Any] = None
    meta: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class HelpdeskVendor:
    name: str
    display_name: str
    conversation_path: str
    probe_path: str
    required_credentials: Tuple[str, ...]
    auth_headers: Callable[[str, str], Dict[str, str]]
    shape_payload: Callable[[ConversationFields], Dict[str, Any]]
    extract_identifiers: Callable[[Any], ConversationIdentifiers]
    entry_meta: Dict[str, str] = field(default_factory=dict)

    def headers_for(self, config: EffectiveConfig) -> Dict[str, str]:
        headers = self.auth_headers(config.api_key, config.api_secret)
        headers["Content-Type"] = "application/json"
        headers["Accept"] = "application/json"
        return headers


# ---------------------------------------------------------------------------
# FreeScout
# ---------------------------------------------------------------------------

def freescout_headers(api_key: str, api_secret: str = "") -> Dict[str, str]:
    return {"X-FreeScout-API-Key": api_key}


def shape_freescout(fields: ConversationFields) -> Dict[str, Any]:
    """
    Build a FreeScout conversation.

    The thread is marked imported so FreeScout does not email the customer
    an auto-reply for a message they sent through a web form.
    """
    customer: Dict[str, Any] = {"email": fields.email}
    if fields.first_name:
        customer["firstName"] = fields.first_name
    if fields.last_name:
        customer["lastName"] = fields.last_name

    return {
        "type": "email",
        "mailboxId": fields.mailbox_id,
        "subject": fields.subject,
        "customer": customer,
        "threads": [
            {
                "type": "customer",
                "text": fields.message,
                "createdAt": fields.created_at,
            }
        ],
        "imported": True,
        "status": "active",
    }


def freescout_identifiers(data: Any) -> ConversationIdentifiers:
    if not isinstance(data, dict) or data.get("id") is None:
        return ConversationIdentifiers(primary=0)

    number = data.get("number", "")
    return ConversationIdentifiers(
        primary=data["id"],
        reference=number,
        meta={
            "freescout_conversation_id": data["id"],
            "freescout_conversation_number": number,
        },
    )


# ---------------------------------------------------------------------------
# LibreDesk
# ---------------------------------------------------------------------------

def libredesk_headers(api_key: str, api_secret: str = "") -> Dict[str, str]:
    return {"Authorization": f"token {api_key}:{api_secret}"}


def shape_libredesk(fields: ConversationFields) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "subject": fields.subject,
        "content": fields.message,
        "inbox_id": fields.mailbox_id,
        "contact_email": fields.email,
        "initiator": "contact",
    }
    if fields.first_name:
        payload["first_name"] = fields.first_name
    if fields.last_name:
        payload["last_name"] = fields.last_name
    return payload


def libredesk_identifiers(data: Any) -> ConversationIdentifiers:
    conversation = data.get("data") if isinstance(data, dict) else None
    if not isinstance(conversation, dict) or "uuid" not in conversation:
        return ConversationIdentifiers()

    reference = conversation.get("reference_number", "")
    return ConversationIdentifiers(
        primary=conversation["uuid"],
        reference=reference,
        meta={
            "libredesk_conversation_uuid": conversation["uuid"],
            "libredesk_reference_number": reference,
        },
    )


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

_VENDORS: Dict[str, HelpdeskVendor] = {
    "freescout": HelpdeskVendor(
        name="freescout",
        display_name="FreeScout",
        conversation_path="/api/conversations",
        probe_path="/api/mailboxes",
        required_credentials=("api_key",),
        auth_headers=freescout_headers,
        shape_payload=shape_freescout,
        extract_identifiers=freescout_identifiers,
        entry_meta={
            "freescout_conversation_id": "FreeScout Conversation ID",
            "freescout_conversation_number": "FreeScout Conversation #",
        },
    ),
    "libredesk": HelpdeskVendor(
        name="libredesk",
        display_name="LibreDesk",
        conversation_path="/api/v1/conversations",
        probe_path="/api/v1/conversations/search?query=0",
        required_credentials=("api_key", "api_secret"),
        auth_headers=libredesk_headers,
        shape_payload=shape_libredesk,
        extract_identifiers=libredesk_identifiers,
        entry_meta={
            "libredesk_conversation_uuid": "LibreDesk Conversation UUID",
            "libredesk_reference_number": "LibreDesk Reference #",
        },
    ),
}


def get_vendor(name: Optional[str]) -> HelpdeskVendor:
    """
    Look up a vendor by name (case-insensitive).

    Raises ValueError for unknown vendor names.
    """
    resolved = (name or "freescout").lower().strip()

    vendor = _VENDORS.get(resolved)
    if vendor is None:
        raise ValueError(
            f"Unknown helpdesk vendor {resolved!r}. "
            f"Supported vendors: {sorted(_VENDORS)}"
        )
    return vendor


def supported_vendors() -> Tuple[str, ...]:
    return tuple(sorted(_VENDORS))
