class DuplicateIdentityError(Exception):
    """Raised by a user store when an email or username is already taken."""

    def __init__(self, field: str) -> None:
        super().__init__(f"{field} already registered")
        self.field = field
