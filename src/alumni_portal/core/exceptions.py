"""Custom exception classes for the Alumni Portal.

Lookups of missing records are not exceptional: managers return ``None`` or
``False`` for them. These exceptions cover the remaining domain conflicts.
"""


class AlumniPortalError(Exception):
    """Base exception for all Alumni Portal errors."""

    pass


class UserAlreadyExistsError(AlumniPortalError):
    """Raised when a username or email is already taken."""

    def __init__(self, field: str, value: str):
        """Initialize the exception.

        Args:
            field: The unique field that collided ('username' or 'email').
            value: The value that is already registered.
        """
        self.field = field
        self.value = value
        super().__init__(f"A user with {field} '{value}' already exists")


class AlreadyRegisteredError(AlumniPortalError):
    """Raised when a user registers twice for the same event."""

    def __init__(self, event_id: int, user_id: int):
        """Initialize the exception.

        Args:
            event_id: The event the user is already registered for.
            user_id: The user that attempted to register.
        """
        self.event_id = event_id
        self.user_id = user_id
        super().__init__("You are already registered for this event")


class ValidationError(AlumniPortalError):
    """Raised when input is well-formed but semantically unusable."""

    pass
