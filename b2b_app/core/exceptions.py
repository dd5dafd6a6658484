# b2b_app/core/exceptions.py


class B2BError(Exception):
    """Base class for domain errors raised by the pricing and validation services."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return self.message


class ValidationError(B2BError):
    """Bad numeric input: price, quantity, order total or a malformed rule value."""

    status_code = 400


class NotFoundError(B2BError):
    status_code = 404
