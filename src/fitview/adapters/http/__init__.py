"""HTTP adapter – API client and the platform gateway."""
from fitview.adapters.http.client import ApiClient, ApiClientBuilder, StatusCallback, TokenProvider
from fitview.adapters.http.gateway import BookingLedger, FitnessApi, PostPage

__all__ = [
    "ApiClient",
    "ApiClientBuilder",
    "BookingLedger",
    "FitnessApi",
    "PostPage",
    "StatusCallback",
    "TokenProvider",
]
