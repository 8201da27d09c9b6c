# backend/app/core/errors.py


class GatewayError(Exception):
    """Base class for every failure of an AI gateway operation."""


class GatewayTimeoutError(GatewayError):
    """The call did not finish before the session deadline."""


class GatewayResponseError(GatewayError):
    """The model answered, but not with the declared schema."""


class RateLimitedError(GatewayError):
    """Provider returned 429. Retried with backoff by the gateway."""
