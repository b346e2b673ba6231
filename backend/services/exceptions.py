"""Typed exception hierarchy for domain errors.

Services raise these; the exception handlers registered in ``main``
turn them into ``{"error": {"code", "message"}}`` responses. Each class
carries the machine-readable code and the HTTP status it maps to.
"""


class MomentumError(Exception):
    """Base exception for all domain errors."""

    code = "INTERNAL_ERROR"
    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class BadRequestError(MomentumError):
    """The request is well-formed but breaks a business rule."""

    code = "BAD_REQUEST"
    status_code = 400


class InvalidPeriodError(BadRequestError):
    """Period name is not one of week, month, year."""

    def __init__(self, period: str):
        self.period = period
        super().__init__(
            f"Invalid period: {period}. Must be 'week', 'month', or 'year'."
        )


class InvalidDateFormatError(BadRequestError):
    """A calendar date could not be parsed or the range is inverted."""

    pass


class NotFoundError(MomentumError):
    """Unknown id, or an id owned by somebody else.

    The two cases look the same to the caller.
    """

    code = "NOT_FOUND"
    status_code = 404


class ConflictError(MomentumError):
    """The operation clashes with the current state of a record."""

    code = "CONFLICT"
    status_code = 409
