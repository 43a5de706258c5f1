"""
User Service - accounts, remember-me tokens, availability checks,
search and the verified-badge workflow.
"""

from datetime import datetime, timedelta
from typing import Optional, List, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, func, or_

from sportsapp.core.config import settings
from sportsapp.core.exceptions import (
    AuthenticationError,
    DuplicateError,
    UserNotFoundError,
    ValidationError,
)
from sportsapp.core.logging_config import logger
from sportsapp.core.security import (
    generate_remember_token,
    get_password_hash,
    hash_token,
    verify_password,
)
from sportsapp.models.notification import NotificationType
from sportsapp.models.remember_token import RememberToken
from sportsapp.models.user import User, VerificationStatus
from sportsapp.schemas.user import UserRegister, UserUpdate
from sportsapp.services.notification_service import NotificationService


MAX_USERNAME_SUGGESTIONS = 2
SEARCH_TIER_LIMIT = 5
SEARCH_RESULT_LIMIT = 8

VERIFIED_MESSAGE = "You are now a verified user"
VERIFICATION_REJECTED_MESSAGE = (
    "Your verification request was rejected by admin, Please try again after some days"
)


class UserService:
    """User accounts and profile operations"""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    async def get(self, user_id: int) -> Optional[User]:
        return await self.db.get(User, user_id)

    async def get_or_404(self, user_id: int) -> User:
        user = await self.get(user_id)
        if not user:
            raise UserNotFoundError(user_id)
        return user

    async def get_by_username(self, username: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def get_by_phone(self, phone: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.phone == phone))
        return result.scalar_one_or_none()

    # ------------------------------------------------------------------
    # Registration and login
    # ------------------------------------------------------------------

    async def register(self, data: UserRegister) -> User:
        """
        Create an account.

        Raises:
            DuplicateError: username, email or phone already in use
        """
        if await self.get_by_username(data.username):
            raise DuplicateError("Username already exists", field="username")
        if await self.get_by_email(data.email):
            raise DuplicateError("Email already exists", field="email")
        if await self.get_by_phone(data.phone):
            raise DuplicateError("Phone number already exists", field="phone")

        user = User(
            full_name=data.full_name,
            username=data.username,
            user_type=data.user_type,
            email=data.email,
            phone=data.phone,
            password=get_password_hash(data.password),
        )
        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)

        logger.info(f"Registered user @{user.username} (id={user.id})")
        return user

    async def authenticate(self, username: str, password: str) -> User:
        user = await self.get_by_username(username)
        if not user or not verify_password(password, user.password):
            raise AuthenticationError("Invalid username or password")
        return user

    async def issue_remember_token(self, user: User) -> str:
        """Replace the user's remember-me tokens with a fresh one; returns the raw token"""
        await self.db.execute(delete(RememberToken).where(RememberToken.user_id == user.id))

        token = generate_remember_token()
        self.db.add(RememberToken(
            user_id=user.id,
            token_hash=hash_token(token),
            expires_at=datetime.utcnow() + timedelta(days=settings.REMEMBER_TOKEN_EXPIRE_DAYS),
        ))
        await self.db.commit()
        return token

    async def quick_login(self, token: Optional[str]) -> User:
        """Resolve a remember-me token to its user, discarding stale tokens"""
        if not token:
            raise ValidationError("Remember token is required", field="remember_token")

        result = await self.db.execute(
            select(RememberToken).where(RememberToken.token_hash == hash_token(token))
        )
        stored = result.scalar_one_or_none()
        if not stored:
            raise AuthenticationError("Invalid token")

        if stored.is_expired:
            await self.db.delete(stored)
            await self.db.commit()
            raise AuthenticationError("Token expired")

        user = await self.get(stored.user_id)
        if not user:
            await self.db.delete(stored)
            await self.db.commit()
            raise AuthenticationError("User not found")

        return user

    # ------------------------------------------------------------------
    # Availability
    # ------------------------------------------------------------------

    async def _username_taken(self, username: str, exclude_user_id: Optional[int] = None) -> bool:
        query = select(User.id).where(User.username == username)
        if exclude_user_id is not None:
            query = query.where(User.id != exclude_user_id)
        result = await self.db.execute(query)
        return result.first() is not None

    async def check_username(self, username: str) -> Tuple[bool, List[str]]:
        """Availability plus up to two free alternatives when taken"""
        if not await self._username_taken(username):
            return True, []

        suggestions: List[str] = []
        for suffix in ("01", "02"):
            candidate = f"{username}{suffix}"
            if not await self._username_taken(candidate):
                suggestions.append(candidate)

        if len(suggestions) < MAX_USERNAME_SUGGESTIONS:
            candidate = f"{username}i"
            if not await self._username_taken(candidate):
                suggestions.append(candidate)

        return False, suggestions[:MAX_USERNAME_SUGGESTIONS]

    async def check_username_for_update(self, username: str, current_user_id: int) -> Tuple[bool, List[str]]:
        """Same as check_username but the caller's own name counts as free"""
        if not await self._username_taken(username, exclude_user_id=current_user_id):
            return True, []

        suggestions = [
            f"{username}{suffix}" for suffix in ("01", "02")
            if not await self._username_taken(f"{username}{suffix}", exclude_user_id=current_user_id)
        ]
        return False, suggestions

    async def email_available(self, email: str) -> bool:
        return await self.get_by_email(email) is None

    async def phone_available(self, phone: str) -> bool:
        return await self.get_by_phone(phone) is None

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    async def search(self, query: str, current_user_id: int) -> List[User]:
        """
        Ranked user search on username / full name (case-insensitive).

        Tiers, up to five users each: exact username, exact full name,
        starts-with, contains. First occurrence wins; eight results max.
        """
        q = query.strip().lower()
        if not q:
            return []

        username = func.lower(User.username)
        full_name = func.lower(User.full_name)
        tiers = [
            username == q,
            full_name == q,
            or_(username.startswith(q, autoescape=True), full_name.startswith(q, autoescape=True)),
            or_(username.contains(q, autoescape=True), full_name.contains(q, autoescape=True)),
        ]

        seen = set()
        ranked: List[User] = []
        for condition in tiers:
            result = await self.db.execute(
                select(User)
                .where(condition, User.id != current_user_id)
                .order_by(User.username)
                .limit(SEARCH_TIER_LIMIT)
            )
            for user in result.scalars().all():
                if user.id not in seen:
                    seen.add(user.id)
                    ranked.append(user)

        return ranked[:SEARCH_RESULT_LIMIT]

    # ------------------------------------------------------------------
    # Profile
    # ------------------------------------------------------------------

    async def update_profile(self, user: User, data: UserUpdate) -> User:
        changes = data.model_dump(exclude_unset=True)

        new_username = changes.get("username")
        if new_username and new_username != user.username:
            if await self._username_taken(new_username, exclude_user_id=user.id):
                raise DuplicateError("Username already exists", field="username")

        for field, value in changes.items():
            if value is None and field in ("full_name", "username", "user_type"):
                continue
            setattr(user, field, value)

        await self.db.commit()
        await self.db.refresh(user)
        logger.info(f"Updated profile of @{user.username}", extra={"fields": list(changes)})
        return user

    async def set_profile_picture(self, user: User, url: str) -> User:
        user.profile_picture = url
        await self.db.commit()
        return user

    # ------------------------------------------------------------------
    # Verification badge
    # ------------------------------------------------------------------

    async def request_verification(self, user: User) -> User:
        user.verification_status = VerificationStatus.PENDING
        user.verification_request_date = datetime.utcnow()
        await self.db.commit()
        logger.info(f"Verification requested by @{user.username}")
        return user

    async def verification_requests(self) -> List[User]:
        result = await self.db.execute(
            select(User)
            .where(User.verification_status == VerificationStatus.PENDING)
            .order_by(User.verification_request_date.asc())
        )
        return list(result.scalars().all())

    async def verify(self, user_id: int) -> User:
        user = await self.get_or_404(user_id)
        user.is_verified = True
        user.verification_status = VerificationStatus.VERIFIED

        await NotificationService(self.db).notify(
            user_id=user.id,
            type=NotificationType.VERIFICATION_APPROVED,
            message=VERIFIED_MESSAGE,
        )
        await self.db.commit()
        return user

    async def reject_verification(self, user_id: int) -> User:
        user = await self.get_or_404(user_id)
        user.is_verified = False
        user.verification_status = VerificationStatus.REJECTED

        await NotificationService(self.db).notify(
            user_id=user.id,
            type=NotificationType.VERIFICATION_REJECTED,
            message=VERIFICATION_REJECTED_MESSAGE,
        )
        await self.db.commit()
        return user

    # ------------------------------------------------------------------
    # Admin
    # ------------------------------------------------------------------

    async def list_all(self) -> List[User]:
        result = await self.db.execute(select(User).order_by(User.created_at.desc(), User.id.desc()))
        return list(result.scalars().all())

    async def delete(self, user_id: int) -> None:
        """Delete a user; dependent rows go with it via ON DELETE CASCADE"""
        user = await self.get_or_404(user_id)
        await self.db.delete(user)
        await self.db.commit()
        logger.info(f"Deleted user {user_id}")
