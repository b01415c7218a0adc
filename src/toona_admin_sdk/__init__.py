from .api_session import ApiSession
from .auth_store import AuthStore
from .config import ClientConfig, ConfigError, load_config
from .events import ErrorChannel, ErrorEvent
from .exceptions import (
    ApiError,
    HttpError,
    NetworkError,
    NotFoundError,
    ResponseParseError,
    ServerError,
    SessionExpiredError,
    ValidationError,
)
from .fallback import FallbackProvider
from .http_client import HttpClient
from .models import (
    EndpointDescriptor,
    FallbackDataset,
    Identity,
    NotFound,
    PaginatedQuery,
    PaginatedResult,
    RequestDescriptor,
    Resolved,
    ResolutionOutcome,
    SessionData,
    TransportFailure,
    ValidationReport,
    ValidationResult,
    ValidationStatus,
)
from .query_controller import ListingEndpoint, QueryController, QueryState
from .resolver import DirectFetch, EntityResolver, ListScan, group_resolver
from .session import SessionGuard
from .validator import EndpointValidator, report_to_text, summarize

__all__ = [
    "ApiError",
    "ApiSession",
    "AuthStore",
    "ClientConfig",
    "ConfigError",
    "DirectFetch",
    "EndpointDescriptor",
    "EndpointValidator",
    "EntityResolver",
    "ErrorChannel",
    "ErrorEvent",
    "FallbackDataset",
    "FallbackProvider",
    "HttpClient",
    "HttpError",
    "Identity",
    "ListScan",
    "ListingEndpoint",
    "NetworkError",
    "NotFound",
    "NotFoundError",
    "PaginatedQuery",
    "PaginatedResult",
    "QueryController",
    "QueryState",
    "RequestDescriptor",
    "Resolved",
    "ResolutionOutcome",
    "ResponseParseError",
    "ServerError",
    "SessionData",
    "SessionExpiredError",
    "SessionGuard",
    "TransportFailure",
    "ValidationError",
    "ValidationReport",
    "ValidationResult",
    "ValidationStatus",
    "group_resolver",
    "load_config",
    "report_to_text",
    "summarize",
]
