"""
Shared fixtures. All helpdesk HTTP goes through httpx.MockTransport and
the entry store is in memory; no network or Supabase access.
"""
import os
from datetime import datetime

import httpx
import pytest

# Settings are read from the environment; set them before any app import
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("HELPDESK_URL", "https://support.example.com")
os.environ.setdefault("HELPDESK_API_KEY", "test-api-key")

from helpdesk_bridge.models.forms import FeedMapping, FormInfo, Submission
from helpdesk_bridge.models.helpdesk import HelpdeskSettings
from helpdesk_bridge.services.collaborators import InMemoryEntryStore, SubmissionFieldResolver
from helpdesk_bridge.services.submitter import ConversationSubmitter


class StaticSettingsProvider:
    def __init__(self, settings: HelpdeskSettings):
        self.settings = settings

    def get_effective_settings(self) -> HelpdeskSettings:
        return self.settings


class RecordingHandler:
    """MockTransport handler that answers with a canned response and keeps requests"""

    def __init__(self, response=None, error: Exception = None):
        self.response = response if response is not None else httpx.Response(200, json={"id": 1})
        self.error = error
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.response


def make_settings(**overrides) -> HelpdeskSettings:
    values = {
        "vendor": "freescout",
        "base_url": "https://support.example.com",
        "api_key": "test-api-key",
        "default_mailbox_id": "1",
        "site_url": "https://www.example.org",
    }
    values.update(overrides)
    return HelpdeskSettings(**values)


def make_feed(**overrides) -> FeedMapping:
    values = {
        "id": "1",
        "name": "Test Feed",
        "email_field": "1",
        "name_field": "2",
        "subject": "Contact Form: {form_title}",
        "message_field": "3",
        "mailbox_id": "1",
    }
    values.update(overrides)
    return FeedMapping(**values)


def make_submission(field_values=None, **overrides) -> Submission:
    values = {
        "1": "customer@example.com",
        "2": "John Doe",
        "3": "This is my message.",
    }
    values.update(field_values or {})
    data = {
        "id": "123",
        "form_id": "1",
        "created_at": datetime(2025, 1, 15, 10, 30, 0),
        "source_url": "https://example.com/contact",
        "field_values": values,
    }
    data.update(overrides)
    return Submission(**data)


@pytest.fixture
def form():
    return FormInfo(id="1", title="Contact Form")


@pytest.fixture
def store():
    return InMemoryEntryStore()


@pytest.fixture
def make_submitter(store):
    """Factory: submitter wired to the in-memory store and a mock transport"""

    def _make(settings: HelpdeskSettings = None, handler: RecordingHandler = None):
        handler = handler or RecordingHandler()
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        submitter = ConversationSubmitter(
            settings_provider=StaticSettingsProvider(settings or make_settings()),
            field_resolver=SubmissionFieldResolver(),
            result_store=store,
            note_writer=store,
            http_client=client,
        )
        return submitter, handler

    return _make
