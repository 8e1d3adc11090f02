from datetime import datetime, timedelta, timezone
from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
import logging

from src.models import AdminUser
from src.auth.schemas import AdminRegister, AdminRole, LoginRequest
from src.auth.utils import get_password_hash, verify_password, create_access_token
from src.exceptions import (
    AccountDisabledError, AccountLockedError, AuthenticationError,
    ConflictError, InvalidInputError
)

logger = logging.getLogger(__name__)

MAX_LOGIN_ATTEMPTS = 5
LOCK_TIME = timedelta(minutes=30)
MIN_PASSWORD_LENGTH = 8


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands back naive datetimes
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class AdminAuthService:
    @staticmethod
    def get_admin_by_email(db: Session, email: str) -> Optional[AdminUser]:
        """Get admin by email"""
        return db.query(AdminUser).filter(AdminUser.email == email.strip().lower()).first()
    
    @staticmethod
    def get_admin_by_id(db: Session, admin_id: str) -> Optional[AdminUser]:
        """Get admin by ID"""
        return db.query(AdminUser).filter(AdminUser.id == admin_id).first()
    
    @staticmethod
    def is_locked(admin: AdminUser) -> bool:
        lock_until = _as_utc(admin.lock_until)
        return bool(lock_until and lock_until > datetime.now(timezone.utc))
    
    @staticmethod
    def issue_token(admin: AdminUser) -> str:
        return create_access_token(
            data={"sub": str(admin.id), "role": admin.role, "email": admin.email}
        )
    
    @staticmethod
    def register_admin(db: Session, data: AdminRegister) -> AdminUser:
        """Create a new operator account"""
        if not data.first_name or not data.last_name or not data.email or not data.password:
            raise InvalidInputError("firstName, lastName, email, password are required")
        if len(data.password) < MIN_PASSWORD_LENGTH:
            raise InvalidInputError("Password must be at least 8 characters")
        
        admin = AdminUser(
            first_name=data.first_name.strip(),
            last_name=data.last_name.strip(),
            email=data.email.strip().lower(),
            password_hash=get_password_hash(data.password),
            role=(data.role or AdminRole.ADMIN).value,
            permissions=[],
            is_active=True,
            login_attempts=0
        )
        
        try:
            db.add(admin)
            db.commit()
            db.refresh(admin)
        except IntegrityError:
            db.rollback()
            raise ConflictError("Email already registered")
        
        logger.info("Registered operator %s (%s)", admin.email, admin.role)
        return admin
    
    @staticmethod
    def authenticate(db: Session, login_data: LoginRequest) -> AdminUser:
        """Check credentials, tracking failed attempts and lockouts"""
        if not login_data.email or not login_data.password:
            raise InvalidInputError("email and password are required")
        
        admin = AdminAuthService.get_admin_by_email(db, login_data.email)
        if not admin:
            raise AuthenticationError("Invalid credentials")
        if AdminAuthService.is_locked(admin):
            raise AccountLockedError()
        if not admin.is_active:
            raise AccountDisabledError()
        
        if not verify_password(login_data.password, admin.password_hash):
            AdminAuthService._record_failed_login(db, admin)
            raise AuthenticationError("Invalid credentials")
        
        admin.last_login_at = datetime.now(timezone.utc)
        admin.login_attempts = 0
        admin.lock_until = None
        db.commit()
        db.refresh(admin)
        return admin
    
    @staticmethod
    def _record_failed_login(db: Session, admin: AdminUser):
        now = datetime.now(timezone.utc)
        lock_until = _as_utc(admin.lock_until)
        
        if lock_until and lock_until < now:
            # Lock expired: start counting again
            admin.login_attempts = 1
            admin.lock_until = None
        else:
            admin.login_attempts = (admin.login_attempts or 0) + 1
            if admin.login_attempts >= MAX_LOGIN_ATTEMPTS and not AdminAuthService.is_locked(admin):
                admin.lock_until = now + LOCK_TIME
                logger.warning("Operator %s locked after %s failed logins", admin.email, admin.login_attempts)
        db.commit()
