import uuid
from typing import Optional, Union

from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from practice_tracker.errors import ConflictException, ValidationException

from .model import User
from .schemas import UserCreateModel
from .util import generate_password_hash


class UserService:
    @staticmethod
    async def get_user_by_id(
        id: Union[uuid.UUID, str], session: AsyncSession
    ) -> Optional[User]:
        if not isinstance(id, uuid.UUID):
            try:
                id = uuid.UUID(str(id))
            except ValueError:
                return None
        statement = select(User).where(User.id == id)
        result = await session.exec(statement)
        return result.first()

    @staticmethod
    async def get_user_by_email(email: str, session: AsyncSession) -> Optional[User]:
        statement = select(User).where(User.email == email)
        result = await session.exec(statement)
        return result.first()

    @staticmethod
    async def register_user(user_data: UserCreateModel, session: AsyncSession) -> User:
        """Create a user, hashing the password before it is stored.

        Raises ValidationException when a field is missing or empty and
        ConflictException when the email (or username) is already taken.
        """
        if not user_data.username or not user_data.email or not user_data.password:
            raise ValidationException(detail="Username, email and password are required")

        if await UserService.get_user_by_email(user_data.email, session):
            raise ConflictException(detail="User already exists")

        new_user = User(
            username=user_data.username,
            email=user_data.email,
            password_hash=generate_password_hash(user_data.password),
        )

        session.add(new_user)
        try:
            await session.commit()
        except IntegrityError:
            # lost a race on the email, or the username is taken
            await session.rollback()
            raise ConflictException(detail="User already exists")
        await session.refresh(new_user)

        return new_user
