from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from estatehub.core.auth import AuthService, DUMMY_PASSWORD_HASH
from estatehub.core.exceptions import AuthError, ConflictError, NotFoundError, ValidationError
from estatehub.db.models import Admin as DBAdmin
from estatehub.models.admin import (
    AdminLogin, AdminProfile, AdminProfileUpdate, AdminRegistration, AdminToken
)
from estatehub.models.common import is_blank, normalize_email
import logging

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def _checked_email(value: str) -> str:
    try:
        return normalize_email(value)
    except ValueError as e:
        raise ValidationError(str(e))


def _check_password(password: str) -> None:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")


class AdminService:
    """Admin registration, login, token verification and profile updates"""

    def __init__(self, db: Session):
        self.db = db

    def _find_by_email(self, email: str) -> Optional[DBAdmin]:
        return self.db.query(DBAdmin).filter(DBAdmin.email == email).first()

    def _get(self, admin_id: str) -> Optional[DBAdmin]:
        if not admin_id:
            return None
        return self.db.query(DBAdmin).filter(DBAdmin.id == str(admin_id)).first()

    @staticmethod
    def _token_response(db_admin: DBAdmin) -> AdminToken:
        return AdminToken(
            id=db_admin.id,
            name=db_admin.name,
            email=db_admin.email,
            token=AuthService.token_for_admin(db_admin.id)
        )

    async def register(self, registration: AdminRegistration) -> AdminToken:
        """Create a new admin with a hashed password"""
        if any(is_blank(value) for value in (registration.name, registration.email, registration.password)):
            raise ValidationError("Please provide all required fields")

        _check_password(registration.password)
        email = _checked_email(registration.email)

        if self._find_by_email(email):
            raise ConflictError("Admin already exists with this email")

        db_admin = DBAdmin(
            name=registration.name.strip(),
            email=email,
            hashed_password=AuthService.get_password_hash(registration.password)
        )
        try:
            self.db.add(db_admin)
            self.db.commit()
            self.db.refresh(db_admin)
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("Admin already exists with this email")
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create admin: {e}")
            raise

        logger.info(f"Registered admin {db_admin.id}")
        return self._token_response(db_admin)

    async def login(self, credentials: AdminLogin) -> AdminToken:
        """Authenticate an admin; unknown email and wrong password look the same"""
        if is_blank(credentials.email) or is_blank(credentials.password):
            raise ValidationError("Please provide email and password")

        db_admin = self._find_by_email(str(credentials.email).strip().lower())
        hashed = db_admin.hashed_password if db_admin else DUMMY_PASSWORD_HASH
        password_ok = AuthService.verify_password(credentials.password, hashed)

        if not db_admin or not password_ok:
            raise AuthError("Invalid email or password")

        return self._token_response(db_admin)

    async def verify_token(self, token: str) -> DBAdmin:
        """Resolve a bearer token to an existing admin"""
        payload = AuthService.decode_access_token(token)
        db_admin = self._get(payload["sub"])
        if not db_admin:
            raise AuthError("Admin not found")
        return db_admin

    async def get_profile(self, admin_id: str) -> AdminProfile:
        db_admin = self._get(admin_id)
        if not db_admin:
            raise NotFoundError("Admin not found")
        return AdminProfile.model_validate(db_admin)

    async def update_profile(self, admin_id: str, patch: AdminProfileUpdate) -> AdminToken:
        """Update name, email and/or password; returns a fresh token"""
        db_admin = self._get(admin_id)
        if not db_admin:
            raise NotFoundError("Admin not found")

        if not is_blank(patch.password):
            _check_password(patch.password)

        if not is_blank(patch.email):
            email = _checked_email(patch.email)
            if email != db_admin.email:
                existing = self._find_by_email(email)
                if existing and existing.id != db_admin.id:
                    raise ConflictError("Admin already exists with this email")
                db_admin.email = email

        if not is_blank(patch.name):
            db_admin.name = patch.name.strip()

        if not is_blank(patch.password):
            db_admin.hashed_password = AuthService.get_password_hash(patch.password)

        try:
            self.db.commit()
            self.db.refresh(db_admin)
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("Admin already exists with this email")
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to update admin {admin_id}: {e}")
            raise

        logger.info(f"Updated profile for admin {db_admin.id}")
        return self._token_response(db_admin)
