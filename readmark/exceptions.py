"""Custom exception hierarchy for readmark."""


class ReadmarkError(Exception):
    """Base exception for all readmark errors."""

    def __init__(self, message: str) -> None:
        """Initialize exception with message."""
        self.message = message
        super().__init__(self.message)


class NotFoundError(ReadmarkError):
    """Resource not found error."""


class BookNotFoundError(NotFoundError):
    """Book not found error."""

    def __init__(self, book_id: int | None = None, *, message: str | None = None) -> None:
        """Initialize with book ID or custom message."""
        self.book_id = book_id
        if message:
            super().__init__(message)
        elif book_id is not None:
            super().__init__(f"Book with id {book_id} not found")
        else:
            super().__init__("Book not found")


class ValidationError(ReadmarkError):
    """Validation error."""


class XPointParseError(ValidationError):
    """Invalid xpoint format."""

    def __init__(self, xpoint: str, reason: str) -> None:
        """Initialize with the invalid xpoint and reason for failure."""
        self.xpoint = xpoint
        self.reason = reason
        super().__init__(f"Invalid xpoint '{xpoint}': {reason}")


class InvalidEbookError(ValidationError):
    """Invalid ebook file."""

    def __init__(self, reason: str, ebook_type: str = "epub") -> None:
        """Initialize with reason for validation failure."""
        self.reason = reason
        self.ebook_type = ebook_type
        super().__init__(f"Invalid {ebook_type}: {reason}")


class PositionComparisonError(ReadmarkError):
    """Two positions cannot be ordered against each other."""

    def __init__(self, first: str, second: str, reason: str) -> None:
        self.first = first
        self.second = second
        self.reason = reason
        super().__init__(f"Cannot compare '{first}' with '{second}': {reason}")


class AnchorResolutionError(ReadmarkError):
    """A chapter anchor could not be converted to a position."""

    def __init__(self, href: str, reason: str) -> None:
        self.href = href
        self.reason = reason
        super().__init__(f"Cannot resolve anchor '{href}': {reason}")


class SectionLoadError(ReadmarkError):
    """A content section could not be loaded."""

    def __init__(self, href: str, reason: str) -> None:
        self.href = href
        self.reason = reason
        super().__init__(f"Cannot load section '{href}': {reason}")


class OverlayRegistrationError(ReadmarkError):
    """An overlay annotation could not be placed in the rendered section."""


class PersistenceError(ReadmarkError):
    """The annotation store failed to read or write."""


class InvalidSessionTransitionError(ReadmarkError):
    """A highlight session handler was called from a state that does not allow it."""

    def __init__(self, action: str, state: str) -> None:
        self.action = action
        self.state = state
        super().__init__(f"Cannot {action} while highlight session is {state}")
