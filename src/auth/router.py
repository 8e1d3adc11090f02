from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from src.database import get_db
from src.auth.schemas import AdminRegister, AdminRole, LoginRequest, AuthResponse, AdminOut, AdminProfile
from src.auth.service import AdminAuthService
from src.auth.dependencies import get_current_operator
from src.config import settings
from src.exceptions import (
    AccountDisabledError, AccountLockedError, AuthenticationError,
    ConflictError, InvalidInputError
)

router = APIRouter()

@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register_admin(data: AdminRegister, db: Session = Depends(get_db)):
    """Register a new operator"""
    if not settings.ALLOW_ADMIN_REGISTRATION:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Registration is disabled"
        )
    if data.role == AdminRole.SUPER_ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="SUPER_ADMIN accounts cannot be self-registered"
        )
    try:
        admin = AdminAuthService.register_admin(db, data)
    except InvalidInputError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message
        )
    except ConflictError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=e.message
        )
    
    return AuthResponse(
        token=AdminAuthService.issue_token(admin),
        admin=AdminOut.model_validate(admin)
    )

@router.post("/login", response_model=AuthResponse)
def login(login_data: LoginRequest, db: Session = Depends(get_db)):
    """Operator login"""
    try:
        admin = AdminAuthService.authenticate(db, login_data)
    except InvalidInputError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message
        )
    except AccountLockedError as e:
        raise HTTPException(
            status_code=status.HTTP_423_LOCKED,
            detail=e.message
        )
    except AccountDisabledError as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=e.message
        )
    except AuthenticationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        )
    
    return AuthResponse(
        token=AdminAuthService.issue_token(admin),
        admin=AdminOut.model_validate(admin)
    )

@router.get("/me", response_model=AdminProfile)
def read_current_admin(current_admin = Depends(get_current_operator)):
    """Get current operator profile"""
    return AdminProfile(admin=AdminOut.model_validate(current_admin))
