"""Session context holding the current-user pointer."""

import logging

from canteen_mate.models.user_models import User
from canteen_mate.repositories.canteen_repositories import CurrentUserRepository

logger = logging.getLogger(__name__)


class SessionContext:
    """The logged-in identity of one client, if any.

    Services that need identity receive a SessionContext explicitly, so two
    contexts over separate stores (or separate keys) never see each other's
    current user.
    """

    def __init__(self, current_user_repository: CurrentUserRepository) -> None:
        """Initialize the session context.

        Args:
            current_user_repository: Repository for the current-user pointer
        """
        self.current_user_repository = current_user_repository

    @property
    def current_user(self) -> User | None:
        return self.current_user_repository.get()

    @property
    def is_authenticated(self) -> bool:
        return self.current_user is not None

    def sign_in(self, user: User) -> bool:
        """Stamp user as the current user.

        Returns:
            bool: True if the pointer was stored, False otherwise
        """
        return self.current_user_repository.save(user)

    def sign_out(self) -> bool:
        return self.current_user_repository.clear()
