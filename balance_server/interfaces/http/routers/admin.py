"""Administrative endpoints for managing users, devices and the dashboard."""
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from balance_server.interfaces.http.deps import get_admin_service, get_current_admin, get_db_session
from balance_server.modules.admins import Admin, AdminService
from balance_server.schemas import (
    AdminLoginRequest,
    AdminLoginResponse,
    DashboardStatsResponse,
    DeviceResponse,
    UserDetailResponse,
    UserListResponse,
    UserResponse,
    UserStatusUpdate,
    VerifyDeviceRequest,
    VerifyDeviceResponse,
)

router = APIRouter()


@router.post("/login", response_model=AdminLoginResponse, summary="Admin login")
async def admin_login(
    payload: AdminLoginRequest,
    admin_service: AdminService = Depends(get_admin_service),
    db: AsyncSession = Depends(get_db_session),
) -> AdminLoginResponse:
    admin, token = await admin_service.login(payload.username, payload.password)
    await db.commit()
    return AdminLoginResponse.from_domain(admin, token)


@router.get("/users", response_model=UserListResponse, summary="List and search users")
async def list_users(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    search: Optional[str] = None,
    admin: Admin = Depends(get_current_admin),
    admin_service: AdminService = Depends(get_admin_service),
) -> UserListResponse:
    users = await admin_service.list_users(page, limit, search)
    return UserListResponse.from_domain(users)


@router.get("/users/{user_id}", response_model=UserDetailResponse, summary="User detail with recent transactions")
async def get_user(
    user_id: str,
    admin: Admin = Depends(get_current_admin),
    admin_service: AdminService = Depends(get_admin_service),
) -> UserDetailResponse:
    detail = await admin_service.get_user_detail(user_id)
    return UserDetailResponse.from_domain(detail)


@router.patch("/users/{user_id}", response_model=UserResponse, summary="Activate or deactivate a user")
async def update_user_status(
    user_id: str,
    payload: UserStatusUpdate,
    admin: Admin = Depends(get_current_admin),
    admin_service: AdminService = Depends(get_admin_service),
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    user = await admin_service.set_user_active(user_id, payload.is_active)
    await db.commit()
    return UserResponse.from_domain(user)


@router.post("/users/{user_id}/verify-device", response_model=VerifyDeviceResponse, summary="Verify a user's device")
async def verify_device(
    user_id: str,
    payload: VerifyDeviceRequest,
    admin: Admin = Depends(get_current_admin),
    admin_service: AdminService = Depends(get_admin_service),
    db: AsyncSession = Depends(get_db_session),
) -> VerifyDeviceResponse:
    device, user = await admin_service.verify_device(user_id, payload.device_id)
    await db.commit()
    return VerifyDeviceResponse(
        message="Device verified successfully",
        device=DeviceResponse.from_domain(device),
        user=UserResponse.from_domain(user),
    )


@router.get("/dashboard/stats", response_model=DashboardStatsResponse, summary="Dashboard statistics")
async def dashboard_stats(
    admin: Admin = Depends(get_current_admin),
    admin_service: AdminService = Depends(get_admin_service),
) -> DashboardStatsResponse:
    stats = await admin_service.dashboard_stats()
    return DashboardStatsResponse.from_domain(stats)
