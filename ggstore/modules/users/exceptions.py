"""User domain specific exceptions."""


class UserError(Exception):
    """Base class for user domain errors."""


class UserNotFoundError(UserError):
    """Raised when the requested user has never interacted with the bot."""

    def __init__(self, user_id: int) -> None:
        self.user_id = user_id
        super().__init__(f"User {user_id} not found")
