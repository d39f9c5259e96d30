"""Status-code classification shared by the middlewares and adapters."""

CLIENT_ERROR = "client_error"
SERVER_ERROR = "server_error"
PANIC = "panic"


def status_class(status_code: int | str) -> str:
    """Return the class label for a status code, e.g. ``404 -> "4xx"``."""
    return f"{str(status_code)[0]}xx"


def error_type_for_status(status_code: int) -> str | None:
    """Map a final status code to an ``error_type`` label, or None below 400."""
    if status_code >= 500:
        return SERVER_ERROR
    if status_code >= 400:
        return CLIENT_ERROR
    return None
