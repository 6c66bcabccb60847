from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession

from practice_tracker.config import logger
from practice_tracker.db.main import get_session
from practice_tracker.errors import (
    ConflictException,
    DatabaseException,
    ResourceNotFoundException,
    ValidationException,
)
from practice_tracker.schemas import MessageResponse

from .dependency import get_token_issuer, get_user_service, require_user_id
from .schemas import (
    LoginResponseModel,
    UserCreateModel,
    UserLoginModel,
    UserResponseModel,
)
from .service import UserService
from .util import TokenIssuer, verify_password

auth_logger = logger.getChild("auth")

auth_router = APIRouter()

INVALID_CREDENTIALS = "Invalid email or password"


@auth_router.post(
    "/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED
)
async def register(
    user_data: UserCreateModel,
    user_service: UserService = Depends(get_user_service),
    session: AsyncSession = Depends(get_session),
):
    auth_logger.info(f"Registration attempt for email: {user_data.email}")

    try:
        new_user = await user_service.register_user(user_data, session)
    except ConflictException:
        auth_logger.warning(
            f"Registration failed: User already exists: {user_data.email}"
        )
        raise
    except ValidationException:
        auth_logger.warning("Registration failed: Required fields are missing")
        raise
    except SQLAlchemyError as db_error:
        auth_logger.error(f"Database error during user creation: {str(db_error)}")
        raise DatabaseException(detail="Server error while registering user")

    auth_logger.info(
        f"User registered successfully: {new_user.username} (ID: {new_user.id})"
    )
    return {"message": "User registered successfully"}


@auth_router.post("/login", response_model=LoginResponseModel)
async def login(
    login_data: UserLoginModel,
    user_service: UserService = Depends(get_user_service),
    issuer: TokenIssuer = Depends(get_token_issuer),
    session: AsyncSession = Depends(get_session),
):
    if not login_data.email or not login_data.password:
        auth_logger.warning("Login failed: Required fields are missing")
        raise ValidationException(detail="Email and password are required")

    auth_logger.info(f"Login attempt for email: {login_data.email}")

    try:
        user = await user_service.get_user_by_email(login_data.email, session)
    except SQLAlchemyError as db_error:
        auth_logger.error(f"Database error during user lookup: {str(db_error)}")
        raise DatabaseException(detail="Server error while logging in")

    if not user:
        auth_logger.warning(f"Login failed: User not found: {login_data.email}")
        raise ValidationException(detail=INVALID_CREDENTIALS)

    if not verify_password(login_data.password, user.password_hash):
        auth_logger.warning(f"Login failed: Invalid password for: {login_data.email}")
        raise ValidationException(detail=INVALID_CREDENTIALS)

    token = issuer.issue(user.id)
    auth_logger.info(f"User logged in successfully: {user.username} (ID: {user.id})")

    return {"message": "Login successful", "token": token}


@auth_router.get("/profile", response_model=UserResponseModel)
async def profile(
    user_id: str = Depends(require_user_id),
    user_service: UserService = Depends(get_user_service),
    session: AsyncSession = Depends(get_session),
):
    auth_logger.debug(f"Profile requested for user ID: {user_id}")

    try:
        user = await user_service.get_user_by_id(user_id, session)
    except SQLAlchemyError as db_error:
        auth_logger.error(f"Database error during profile lookup: {str(db_error)}")
        raise DatabaseException(detail="Server error while fetching profile")

    if not user:
        auth_logger.warning(f"Profile lookup failed: User not found: ID {user_id}")
        raise ResourceNotFoundException(detail="User not found")

    return user
