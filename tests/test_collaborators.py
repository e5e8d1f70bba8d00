"""Tests for the default host collaborator adapters"""
from unittest.mock import MagicMock

from helpdesk_bridge.config import Settings
from helpdesk_bridge.services.collaborators import EnvSettingsProvider, SupabaseEntryStore


def test_supabase_store_upserts_meta():
    client = MagicMock()
    store = SupabaseEntryStore(client)

    store.persist_result_key("sub-1", "freescout_conversation_id", 456)

    client.table.assert_called_with("form_submission_meta")
    client.table.return_value.upsert.assert_called_once_with(
        {"submission_id": "sub-1", "meta_key": "freescout_conversation_id", "meta_value": "456"},
        on_conflict="submission_id,meta_key",
    )


def test_supabase_store_inserts_note():
    client = MagicMock()
    store = SupabaseEntryStore(client)

    store.append_note("sub-1", "API error: HTTP 401 - Unauthorized", "error")

    client.table.assert_called_with("form_submission_notes")
    client.table.return_value.insert.assert_called_once_with({
        "submission_id": "sub-1",
        "note": "API error: HTTP 401 - Unauthorized",
        "note_type": "error",
    })


def test_env_settings_provider_maps_settings():
    settings = Settings(
        helpdesk_vendor="libredesk",
        helpdesk_url="https://desk.example.com",
        helpdesk_api_key="k",
        helpdesk_api_secret="s",
        default_mailbox_id="3",
        site_url="https://www.example.org",
    )

    effective = EnvSettingsProvider(settings).get_effective_settings()

    assert effective.vendor == "libredesk"
    assert effective.base_url == "https://desk.example.com"
    assert effective.api_secret == "s"
    assert effective.default_mailbox_id == "3"
