"""HTTP interface: routers, dependencies and exception handlers."""

from .api import create_api_router
from .errors import register_exception_handlers

__all__ = ["create_api_router", "register_exception_handlers"]
