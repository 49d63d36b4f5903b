"""
Base exception shared by the routing-provider adapters.

Callers that only care "did the provider fail?" catch RoutingProviderError;
adapter-specific subclasses live next to their client.
"""


class RoutingProviderError(Exception):
    """Raised when a routing provider answers with an error or an unusable payload."""

    def __init__(self, message: str, status_code: int = None, body: str = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body
