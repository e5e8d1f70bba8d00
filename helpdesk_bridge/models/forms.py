"""Form, feed and submission Pydantic models"""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List, Dict, Literal
from datetime import datetime


class ExtraFieldMapping(BaseModel):
    """One labelled extra value appended to the conversation body"""
    model_config = ConfigDict(frozen=True)

    label: str = ""
    value: str = ""
    # auto: field-id shaped values ("3", "2.3") resolve through the submission
    value_type: Literal["auto", "field", "literal"] = "auto"


class ConditionRule(BaseModel):
    """Single conditional logic rule"""
    model_config = ConfigDict(frozen=True)

    field_ref: str
    operator: Literal[
        "is", "isnot", "contains", "starts_with", "ends_with", "greater_than", "less_than"
    ] = "is"
    value: str = ""


class FeedCondition(BaseModel):
    """Conditional logic deciding whether a feed runs for a submission"""
    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    logic_type: Literal["all", "any"] = "all"
    rules: List[ConditionRule] = []


class FeedMapping(BaseModel):
    """Per-form binding of form fields to helpdesk conversation slots"""
    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    name: str
    is_active: bool = True
    mailbox_id: Optional[str] = Field(None, description="Overrides the default mailbox/inbox")
    email_field: str = ""
    name_field: Optional[str] = None
    subject: str = "Contact Form: {form_title}"
    message_field: str = ""
    extra_fields: List[ExtraFieldMapping] = []
    condition: Optional[FeedCondition] = None


class FormInfo(BaseModel):
    """The form a submission belongs to"""
    model_config = ConfigDict(frozen=True)

    id: str
    title: str


class Submission(BaseModel):
    """One filled-in form"""
    model_config = ConfigDict(frozen=True)

    id: str
    form_id: str
    created_at: datetime
    source_url: str = ""
    field_values: Dict[str, str] = {}


class FormSubmitRequest(BaseModel):
    """Form submission request"""
    form_id: str
    field_values: Dict[str, str]
    source_url: str = ""


class FeedOutcome(BaseModel):
    """What happened to one feed for a submission"""
    feed_id: Optional[str] = None
    feed_name: str
    status: Literal["created", "skipped", "failed"]
    conversation_id: Optional[str] = None
    error_kind: Optional[str] = None
    error: Optional[str] = None


class FormSubmitResponse(BaseModel):
    """Form submission response"""
    submission_id: str
    success: bool
    feeds: List[FeedOutcome] = []
    error: Optional[str] = None
