# services/auth_service.py
import logging
from typing import Any, Dict, Optional

import jwt

from config import Settings
from database import USERS
from models.employee import Identity, Role
from utils.exceptions import Unauthorized

logger = logging.getLogger(__name__)


class AuthService:
    """Verifies bearer tokens and looks up the caller's profile and role."""

    def __init__(self, store, settings: Settings):
        self.store = store
        self.settings = settings

    def verify_token(self, token: Optional[str]) -> Identity:
        if not token:
            raise Unauthorized("Missing authentication token")
        if not self.settings.jwt_secret:
            logger.error("JWT secret key not configured")
            raise Unauthorized("Authentication is not configured")

        try:
            payload = jwt.decode(
                token,
                self.settings.jwt_secret,
                algorithms=[self.settings.jwt_algorithm],
                options={"verify_signature": True, "verify_exp": True},
            )
        except jwt.ExpiredSignatureError:
            raise Unauthorized("Token has expired")
        except jwt.InvalidTokenError as e:
            logger.info("Invalid token: %s", e)
            raise Unauthorized("Invalid token")

        uid = payload.get("uid") or payload.get("sub")
        if not uid:
            raise Unauthorized("Token has no subject")
        return Identity(uid=str(uid), name=payload.get("name"), email=payload.get("email"))

    async def get_profile(self, uid: str) -> Optional[Dict[str, Any]]:
        return await self.store.get(USERS, uid)

    async def require_admin(self, token: Optional[str]) -> Identity:
        identity = self.verify_token(token)
        profile = await self.get_profile(identity.uid)
        if not profile or profile.get("role") != Role.ADMIN.value:
            raise Unauthorized("Unauthorized", status_code=403)
        return identity
