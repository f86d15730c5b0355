from fastapi import APIRouter, Depends

from code_helper.api.dependencies import get_settings, get_user_store
from code_helper.api.schemas import LoginRequest, LoginResponse, MessageResponse, PublicUser, SignupRequest
from code_helper.config import Settings
from code_helper.core.auth import login as _login
from code_helper.core.auth import signup as _signup
from code_helper.core.ports.users import UserStore

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=MessageResponse)
async def signup(
    body: SignupRequest,
    store: UserStore = Depends(get_user_store),
    settings: Settings = Depends(get_settings),
) -> MessageResponse:
    await _signup(store, body.name, body.email, body.password, rounds=settings.bcrypt_rounds)
    return MessageResponse(success=True, message="Account created successfully!")


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest,
    store: UserStore = Depends(get_user_store),
) -> LoginResponse:
    user = await _login(store, body.email, body.password)
    return LoginResponse(success=True, message="Login successful!", user=PublicUser(**user.public()))
