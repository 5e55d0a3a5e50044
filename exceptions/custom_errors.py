class NoAttemptsError(Exception):
    """Raised when a generation run is configured with zero attempts, so no roster can be selected."""

    pass


class InvalidConfigError(Exception):
    """Raised when the run configuration describes an impossible calendar (bad month, horizon longer than the month)."""

    pass


class InputMismatchError(Exception):
    """Raised when staff or slot type records reference each other inconsistently (duplicate ids)."""

    pass


class AssignmentNotFoundError(Exception):
    """Raised when a manual edit targets an assignment that does not exist on the given day."""


class UnknownStaffError(Exception):
    """Raised when a manual edit names a replacement staff member that is not part of the roster."""


# Mapping of custom exceptions to HTTP status codes
CUSTOM_ERRORS = {
    NoAttemptsError: 422,
    InvalidConfigError: 400,
    InputMismatchError: 400,
    AssignmentNotFoundError: 404,
    UnknownStaffError: 400,
}
