class LibraryError(ValueError):
    """Base for failures that controllers turn into a form error or status code."""

    message = "Request failed"

    def __init__(self, message: str = None):
        super().__init__(message or self.message)


class MissingFieldError(LibraryError):
    message = "Required fields are missing"


class InvalidCredentialsError(LibraryError):
    message = "Invalid credentials"


class UsernameConflictError(LibraryError):
    message = "Username already exists"


class InvalidRoleError(LibraryError):
    message = "Unknown role"


class BookUnavailableError(LibraryError):
    message = "Book unavailable"


class NotBorrowedError(LibraryError):
    message = "You have not borrowed this book"


class InvalidUploadError(LibraryError):
    message = "Unsupported image type"


class StoreError(LibraryError):
    message = "Server error"
