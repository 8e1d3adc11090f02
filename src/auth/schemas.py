from pydantic import Field
from typing import Optional, List
from datetime import datetime
from enum import Enum

from src.schemas import CamelModel

class AdminRole(str, Enum):
    """Operator role enumeration"""
    SUPER_ADMIN = "SUPER_ADMIN"
    ADMIN = "ADMIN"
    STAFF = "STAFF"

class AdminRegister(CamelModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[AdminRole] = None

class LoginRequest(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None

class AdminOut(CamelModel):
    """Operator profile; the password hash is never serialized"""
    id: str
    first_name: str
    last_name: str
    full_name: str
    email: str
    role: AdminRole
    permissions: List[str] = Field(default_factory=list)
    is_active: bool = True
    last_login_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class AuthResponse(CamelModel):
    token: str
    admin: AdminOut

class AdminProfile(CamelModel):
    admin: AdminOut
