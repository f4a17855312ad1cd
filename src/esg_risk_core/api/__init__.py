from esg_risk_core.api.client import ESGMonitoringClient
from esg_risk_core.api.exceptions import (
    AuthenticationError,
    ESGApiError,
    RateLimitError,
    ResourceNotFoundError,
    ServerError,
)

__all__ = [
    "ESGMonitoringClient",
    "ESGApiError",
    "RateLimitError",
    "AuthenticationError",
    "ResourceNotFoundError",
    "ServerError",
]
