from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
from typing import Optional
from src.database import get_db
from src.auth.utils import verify_token
from src.auth.service import AdminAuthService
from src.models import AdminUser

bearer_scheme = HTTPBearer(auto_error=False)

def get_current_operator(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db)
) -> AdminUser:
    """Require a bearer token belonging to an active operator"""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid token",
        headers={"WWW-Authenticate": "Bearer"},
    )
    
    payload = verify_token(credentials.credentials, credentials_exception)
    
    admin = AdminAuthService.get_admin_by_id(db, payload["sub"])
    if admin is None or not admin.is_active:
        raise credentials_exception
    
    return admin
