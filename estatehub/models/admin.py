from typing import Optional
from datetime import datetime

from estatehub.models.common import CamelModel, RawInput


class AdminRegistration(RawInput):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class AdminLogin(RawInput):
    email: Optional[str] = None
    password: Optional[str] = None


class AdminProfileUpdate(RawInput):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class AdminToken(CamelModel):
    id: str
    name: str
    email: str
    token: str


class AdminProfile(CamelModel):
    id: str
    name: str
    email: str
    created_at: datetime
