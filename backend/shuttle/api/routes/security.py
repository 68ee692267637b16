"""API Security — token login for the protected resources.

Invariants:
    - POST /api-security/login issues a token only for the configured user
    - Bad credentials -> 401 AUTHENTICATION_REQUIRED
"""

import logging

from fastapi import APIRouter, Depends

from shuttle.api.dependencies import get_token_service
from shuttle.schemas.resources import LoginRequest
from shuttle.services.api_tokens import TokenService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api-security", tags=["security"])


@router.post("/login")
async def login(body: LoginRequest, tokens: TokenService = Depends(get_token_service)):
    """Exchange demo credentials for an API token."""
    issued = tokens.login(body.username, body.password)
    logger.info("API token issued", extra={"record_id": tokens.user.id})
    return {
        "success": True,
        "message": "Login successful",
        "token": issued["token"],
        "user": tokens.user.public(),
    }
