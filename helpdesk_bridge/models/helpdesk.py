"""Helpdesk connection and conversation Pydantic models"""
from pydantic import BaseModel, ConfigDict
from typing import Optional, Dict, Any, Union, Literal

from helpdesk_bridge.models.forms import Submission


class HelpdeskSettings(BaseModel):
    """Global helpdesk settings as stored by the host"""
    model_config = ConfigDict(frozen=True)

    vendor: str = "freescout"
    base_url: str = ""
    api_key: str = ""
    api_secret: str = ""
    default_mailbox_id: str = "1"
    site_url: str = ""


class EffectiveConfig(BaseModel):
    """Settings merged with a feed's overrides, ready for one run"""
    model_config = ConfigDict(frozen=True)

    vendor: str
    base_url: str
    api_key: str
    api_secret: str = ""
    mailbox_id: int


class ConversationFields(BaseModel):
    """Vendor independent values a conversation is built from"""
    model_config = ConfigDict(frozen=True)

    email: str
    first_name: str = ""
    last_name: str = ""
    subject: str
    message: str
    mailbox_id: int
    created_at: str


class ConversationSuccess(BaseModel):
    """Conversation created; identifiers as returned by the vendor"""
    ok: Literal[True] = True
    submission: Submission
    conversation_id: Optional[str] = None
    conversation_reference: Optional[str] = None
    identifiers: Dict[str, Any] = {}


class ConversationFailure(BaseModel):
    """Conversation not created"""
    ok: Literal[False] = False
    kind: str
    message: str
    status_code: Optional[int] = None


ConversationResult = Union[ConversationSuccess, ConversationFailure]
