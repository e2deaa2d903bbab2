"""Admin oversight services and models."""

from .exceptions import AdminAlreadyExistsError, AdminRequiredError, UserPrincipalRequiredError
from .models import Admin, DashboardStats, RecentActivity, UserDetail
from .service import AdminService

__all__ = [
    "Admin",
    "AdminService",
    "DashboardStats",
    "RecentActivity",
    "UserDetail",
    "AdminAlreadyExistsError",
    "AdminRequiredError",
    "UserPrincipalRequiredError",
]
