"""Authentication middleware and dependencies"""
from fastapi import HTTPException, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Optional, Dict
from helpdesk_bridge.config import get_settings
import httpx
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


async def verify_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> Optional[Dict]:
    """
    Verify Supabase JWT token via Supabase Auth API
    """
    if not credentials:
        return None

    token = credentials.credentials
    settings = get_settings()

    try:
        async with httpx.AsyncClient() as client:
            response = await client.get(
                f"{settings.supabase_url}/auth/v1/user",
                headers={
                    "Authorization": f"Bearer {token}",
                    "apikey": settings.supabase_anon_key
                }
            )

        if response.status_code != 200:
            logger.warning(f"Supabase auth failed: {response.status_code}")
            raise HTTPException(status_code=401, detail="Invalid authentication token")

        user_data = response.json()

        return {
            "user_id": user_data.get("id"),
            "role": user_data.get("role"),
            "email": user_data.get("email"),
            "is_admin": user_data.get("app_metadata", {}).get("is_admin", False),
        }
    except httpx.RequestError:
        raise HTTPException(status_code=401, detail="Authentication service unavailable")
    except HTTPException:
        raise
    except Exception:
        raise HTTPException(status_code=401, detail="Invalid authentication token")


async def get_current_admin(
    auth_data: Optional[Dict] = Depends(verify_token)
) -> Dict:
    """
    Get current authenticated admin (helpdesk settings access)

    Raises:
        HTTPException: If not authenticated or not an admin
    """
    if not auth_data:
        raise HTTPException(status_code=401, detail="Not authenticated")

    if not auth_data.get("is_admin"):
        raise HTTPException(
            status_code=403,
            detail="Admin access required for this endpoint"
        )

    return auth_data
