"""Registration and login endpoints for end users."""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from balance_server.interfaces.http.deps import get_auth_service, get_db_session
from balance_server.modules.auth import AuthService
from balance_server.modules.users import RegistrationInput
from balance_server.schemas import LoginRequest, LoginResponse, RegisterRequest, RegisterResponse, UserResponse

router = APIRouter()


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED, summary="Register a user")
async def register(
    payload: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
    db: AsyncSession = Depends(get_db_session),
) -> RegisterResponse:
    user = await auth_service.register(
        RegistrationInput(
            first_name=payload.first_name,
            last_name=payload.last_name,
            email=payload.email,
            phone=payload.phone,
            password=payload.password,
            device_id=payload.device_id,
        )
    )
    await db.commit()
    return RegisterResponse(
        message="Registration successful. Please wait for device verification.",
        user_id=user.id,
    )


@router.post("/login", response_model=LoginResponse, summary="Log in from a device")
async def login(
    payload: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
    db: AsyncSession = Depends(get_db_session),
) -> LoginResponse:
    result = await auth_service.login(payload.email, payload.password, payload.device_id)
    await db.commit()
    return LoginResponse(
        token=result.token,
        device_verified=result.device_verified,
        user=UserResponse.from_domain(result.user),
    )
