from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
import logging

from src.database import get_db
from src.auth.dependencies import get_current_operator
from src.packages.schemas import (
    PackageCreate, PackageUpdate, PackageOut, PackageCreated, PackageDeleted
)
from src.packages.service import PackageService
from src.exceptions import ConflictError, InvalidInputError, NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("", response_model=List[PackageOut])
def list_packages(db: Session = Depends(get_db)):
    """List all packages, newest first"""
    return PackageService(db).list_packages()

@router.get("/{slug}", response_model=PackageOut)
def get_package(slug: str, db: Session = Depends(get_db)):
    """Get a package by slug"""
    package = PackageService(db).get_package(slug)
    if not package:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Package not found"
        )
    return package

@router.post("", response_model=PackageCreated, status_code=status.HTTP_201_CREATED)
def create_package(
    data: PackageCreate,
    operator = Depends(get_current_operator),
    db: Session = Depends(get_db)
):
    """Create a package"""
    try:
        package = PackageService(db).create_package(data)
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
    except Exception:
        logger.exception("Package creation failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error"
        )
    return PackageCreated(id=package.id, slug=package.slug)

@router.patch("/{slug}")
def update_package(
    slug: str,
    data: PackageUpdate,
    operator = Depends(get_current_operator),
    db: Session = Depends(get_db)
):
    """Update whitelisted package fields"""
    try:
        PackageService(db).update_package(slug, data)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=e.message
        )
    except InvalidInputError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message
        )
    return {"ok": True}

@router.delete("/{slug}", response_model=PackageDeleted)
def delete_package(
    slug: str,
    operator = Depends(get_current_operator),
    db: Session = Depends(get_db)
):
    """Delete a package; its bookings are kept"""
    try:
        return PackageService(db).delete_package(slug)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=e.message
        )
    except Exception:
        logger.exception("Failed to delete package %s", slug)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete package"
        )
