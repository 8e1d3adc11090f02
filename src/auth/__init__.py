"""
Operator Authentication Module

Password hashing, JWT issuance/verification, operator registration and
login with lockout, and the ``get_current_operator`` dependency guarding
every operator endpoint.
"""

from .router import router
from .dependencies import get_current_operator
from .service import AdminAuthService

__all__ = [
    "router",
    "get_current_operator",
    "AdminAuthService"
]
