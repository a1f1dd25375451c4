from typing import Optional


class OrderIntakeError(Exception):
    """Base error. `message` is what the caller sees; `status_code` is the HTTP status."""

    status_code = 500
    message = "Failed to process order"

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail or self.message)
        self.detail = detail


class ClientInputError(OrderIntakeError):
    status_code = 400
    message = "Missing required fields"


class MethodNotAllowedError(OrderIntakeError):
    status_code = 405
    message = "Method not allowed"


class ConfigurationError(OrderIntakeError):
    status_code = 500
    message = "Server configuration error"


class UpstreamWriteError(OrderIntakeError):
    """The tabular store rejected the row. Upstream details stay server-side."""

    status_code = 500
    message = "Failed to process order"

    def __init__(self, status: int, body: str):
        super().__init__(f"Baserow returned {status}: {body}")
        self.status = status
        self.body = body


class NotificationError(OrderIntakeError):
    # Logged only, never turned into a response.
    pass
