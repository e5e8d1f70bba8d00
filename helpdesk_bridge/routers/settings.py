"""Helpdesk settings endpoints - connection checks for the settings UI"""
from fastapi import APIRouter, Depends
from typing import Dict, Optional
from pydantic import BaseModel
import logging

from helpdesk_bridge.dependencies import get_settings_provider
from helpdesk_bridge.middleware.auth import get_current_admin
from helpdesk_bridge.models.helpdesk import HelpdeskSettings
from helpdesk_bridge.services.collaborators import EnvSettingsProvider
from helpdesk_bridge.services.transport import validate_credentials, validate_helpdesk_url
from helpdesk_bridge.services.vendors import get_vendor, supported_vendors

logger = logging.getLogger(__name__)
router = APIRouter()


class UrlCheckRequest(BaseModel):
    url: str


class CredentialCheckRequest(BaseModel):
    """Values to check; anything omitted comes from saved settings"""
    vendor: Optional[str] = None
    url: Optional[str] = None
    api_key: Optional[str] = None
    api_secret: Optional[str] = None


@router.post("/validate-url", response_model=Dict)
async def check_helpdesk_url(
    request: UrlCheckRequest,
    auth_data: Dict = Depends(get_current_admin)
):
    """Check the helpdesk URL format"""
    return {"valid": validate_helpdesk_url(request.url)}


@router.post("/validate-credentials", response_model=Dict)
async def check_helpdesk_credentials(
    request: CredentialCheckRequest,
    auth_data: Dict = Depends(get_current_admin),
    settings_provider: EnvSettingsProvider = Depends(get_settings_provider)
):
    """Validate helpdesk credentials with a read-only probe request"""
    saved = settings_provider.get_effective_settings()
    candidate = HelpdeskSettings(
        vendor=request.vendor or saved.vendor,
        base_url=request.url if request.url is not None else saved.base_url,
        api_key=request.api_key if request.api_key is not None else saved.api_key,
        api_secret=request.api_secret if request.api_secret is not None else saved.api_secret,
        default_mailbox_id=saved.default_mailbox_id,
    )

    try:
        vendor = get_vendor(candidate.vendor)
    except ValueError as e:
        return {"valid": False, "message": str(e)}

    valid = await validate_credentials(candidate)
    if valid is None:
        return {"valid": None, "message": "Helpdesk URL is not set"}
    if valid:
        return {"valid": True, "message": f"{vendor.display_name} credentials are valid"}
    return {"valid": False, "message": f"Could not authenticate with {vendor.display_name}"}


@router.get("/entry-meta", response_model=Dict)
async def get_entry_meta(
    auth_data: Dict = Depends(get_current_admin),
    settings_provider: EnvSettingsProvider = Depends(get_settings_provider)
):
    """Labels for the conversation identifiers stored against submissions"""
    vendor = get_vendor(settings_provider.get_effective_settings().vendor)
    return {
        "vendor": vendor.name,
        "supported_vendors": list(supported_vendors()),
        "entry_meta": vendor.entry_meta
    }
