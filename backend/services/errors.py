class ConfigurationError(Exception):
    """Raised when a required credential is missing."""


class UpstreamServiceError(Exception):
    """Non-2xx response from the routing or map service.

    Carries the upstream status and raw body so handlers can pass them through.
    """

    def __init__(self, status_code: int, body: str):
        super().__init__(f"Upstream error {status_code}: {body}")
        self.status_code = status_code
        self.body = body
