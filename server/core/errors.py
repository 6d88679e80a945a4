# server/core/errors.py


class BlogError(Exception):
    """Base class for errors raised by the blog core."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInput(BlogError):
    status_code = 400


class Unauthenticated(BlogError):
    status_code = 401


class NotFound(BlogError):
    status_code = 404


class StoreFailure(BlogError):
    status_code = 500
