from fastapi import APIRouter

from balance_server.interfaces.http.routers import admin, auth, health, transactions


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(auth.router, prefix="/auth", tags=["auth"])
    router.include_router(transactions.router, prefix="/transactions", tags=["transactions"])
    router.include_router(admin.router, prefix="/admin", tags=["admin"])
    router.include_router(health.router, tags=["health"])
    return router


__all__ = [
    "create_api_router",
]
