"""
Package Catalogue Module

CRUD for sellable tour packages. Bookings reference packages by id and keep
a title snapshot, so catalogue edits and deletions never rewrite booking
history.
"""

from .router import router
from .service import PackageService

__all__ = [
    "router",
    "PackageService"
]
