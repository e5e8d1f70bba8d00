"""FastAPI dependencies wiring the submitter to its collaborators"""
from fastapi import Depends

from helpdesk_bridge.database import get_supabase_admin
from helpdesk_bridge.services.collaborators import (
    EnvSettingsProvider,
    SubmissionFieldResolver,
    SupabaseEntryStore,
)
from helpdesk_bridge.services.submitter import ConversationSubmitter


def get_supabase():
    """Service role Supabase client"""
    return get_supabase_admin()


def get_settings_provider() -> EnvSettingsProvider:
    return EnvSettingsProvider()


def get_entry_store(supabase=Depends(get_supabase)) -> SupabaseEntryStore:
    return SupabaseEntryStore(supabase)


def get_submitter(
    settings_provider: EnvSettingsProvider = Depends(get_settings_provider),
    store: SupabaseEntryStore = Depends(get_entry_store),
) -> ConversationSubmitter:
    return ConversationSubmitter(
        settings_provider=settings_provider,
        field_resolver=SubmissionFieldResolver(),
        result_store=store,
        note_writer=store,
    )
