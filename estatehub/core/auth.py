from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi.security import HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from estatehub.core.config import settings
from estatehub.core.exceptions import AuthError
import logging

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# auto_error=False so a missing header surfaces as our 401 instead of FastAPI's 403
bearer_scheme = HTTPBearer(auto_error=False)


class AuthService:
    """Password hashing and JWT issuance/verification"""

    @staticmethod
    def get_password_hash(password: str) -> str:
        return pwd_context.hash(password)

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        try:
            return pwd_context.verify(plain_password, hashed_password)
        except ValueError:
            # Malformed stored hash
            return False

    @staticmethod
    def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
        to_encode = data.copy()
        expire = datetime.now(timezone.utc) + (
            expires_delta or timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS)
        )
        to_encode.update({"exp": expire})
        return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

    @staticmethod
    def decode_access_token(token: str) -> Dict[str, Any]:
        """Decode a token, raising AuthError if it is invalid or expired"""
        try:
            payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        except ExpiredSignatureError:
            raise AuthError("Not authorized, token expired")
        except JWTError as e:
            logger.debug(f"Token verification failed: {e}")
            raise AuthError("Not authorized, token failed")

        if not payload.get("sub"):
            raise AuthError("Not authorized, token failed")
        return payload

    @staticmethod
    def token_for_admin(admin_id: str) -> str:
        return AuthService.create_access_token(data={"sub": admin_id})


# Verified against when the email is unknown so both login failures cost the same
DUMMY_PASSWORD_HASH = AuthService.get_password_hash("estatehub-dummy-password")
