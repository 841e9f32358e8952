"""Auth service for the demo identity store."""

import logging
import uuid
from datetime import UTC, datetime

from canteen_mate.models.result_models import ErrorCode, ServiceResult
from canteen_mate.models.user_models import User
from canteen_mate.observability import traced
from canteen_mate.observability.metrics import record_store_write_failure
from canteen_mate.repositories.canteen_repositories import UserRepository
from canteen_mate.services.latency import LatencySimulator
from canteen_mate.services.session import SessionContext

logger = logging.getLogger(__name__)

PLACEHOLDER_NAME = "Demo User"
EMAIL_REQUIRED = "Email is required"


def _new_user_id() -> str:
    return f"usr_{uuid.uuid4().hex[:12]}"


class AuthService:
    """Service for login, registration and the current identity.

    Passwords are accepted but never checked: login signs in any existing
    account by email and creates a placeholder account for unknown emails.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        session: SessionContext,
        latency: LatencySimulator | None = None,
    ) -> None:
        """Initialize the AuthService.

        Args:
            user_repository: Repository for registered users
            session: Session context receiving the logged-in identity
            latency: Simulated network latency (none by default)
        """
        self.user_repository = user_repository
        self.session = session
        self.latency = latency or LatencySimulator()

    @traced("auth.login")
    async def login(self, email: str, password: str) -> ServiceResult[User]:  # noqa: ARG002
        """Sign in as the user with this email, creating one if needed.

        Args:
            email: Account email
            password: Accepted but not verified

        Returns:
            ServiceResult with the logged-in user, or INVALID_ARGUMENT for a blank email
        """
        if not email.strip():
            return ServiceResult.fail(ErrorCode.INVALID_ARGUMENT, EMAIL_REQUIRED)

        await self.latency.pause("auth.login")

        users = self.user_repository.load_all()
        if users is None:
            return ServiceResult.fail(ErrorCode.OPERATION_FAILED, "Login failed")

        existing = next((user for user in users if user.email == email), None)

        if existing is None:
            logged_in = User(
                id=_new_user_id(),
                email=email,
                name=PLACEHOLDER_NAME,
                is_logged_in=True,
                created_at=datetime.now(UTC),
            )
            if not self.user_repository.save_all([*users, logged_in]):
                record_store_write_failure("users")
                return ServiceResult.fail(ErrorCode.OPERATION_FAILED, "Login failed")
            logger.info(f"Created placeholder account {logged_in.id} on login")
        else:
            logged_in = existing.model_copy(update={"is_logged_in": True})

        logger.warning(f"Signing in user {logged_in.id} without credential verification")

        if not self.session.sign_in(logged_in):
            record_store_write_failure("current_user")
            return ServiceResult.fail(ErrorCode.OPERATION_FAILED, "Login failed")

        return ServiceResult.ok(logged_in, message="Login successful")

    @traced("auth.register")
    async def register(self, name: str, email: str, password: str) -> ServiceResult[User]:  # noqa: ARG002
        """Create a new, not yet logged-in user.

        Returns:
            ServiceResult with the new user, DUPLICATE_EMAIL if the email is taken,
            or INVALID_ARGUMENT for a blank email
        """
        if not email.strip():
            return ServiceResult.fail(ErrorCode.INVALID_ARGUMENT, EMAIL_REQUIRED)

        await self.latency.pause("auth.register")

        users = self.user_repository.load_all()
        if users is None:
            return ServiceResult.fail(ErrorCode.OPERATION_FAILED, "Registration failed")

        if any(user.email == email for user in users):
            return ServiceResult.fail(ErrorCode.DUPLICATE_EMAIL, "User already exists")

        new_user = User(
            id=_new_user_id(),
            email=email,
            name=name,
            is_logged_in=False,
            created_at=datetime.now(UTC),
        )

        if not self.user_repository.save_all([*users, new_user]):
            record_store_write_failure("users")
            return ServiceResult.fail(ErrorCode.OPERATION_FAILED, "Registration failed")

        logger.info(f"Registered user {new_user.id}")
        return ServiceResult.ok(new_user, message="Registration successful")

    @traced("auth.logout")
    async def logout(self) -> ServiceResult[None]:
        """Clear the current user. The stored user record is left untouched."""
        if not self.session.sign_out():
            return ServiceResult.fail(ErrorCode.OPERATION_FAILED, "Logout failed")

        return ServiceResult.ok(message="Logout successful")

    def get_current_user(self) -> User | None:
        return self.session.current_user
