"""Client for the Zoho CRM v2 REST API."""

from importlib.metadata import PackageNotFoundError, version

from .api import ZohoCRM
from .classify import Outcome, OutcomeKind, classify_response
from .config import ZohoConfig
from .exceptions import (
    ApiError,
    ClientError,
    EmptyResponse,
    GeneralError,
    MissingCredentialsError,
    UnexpectedResponseType,
)
from .logging_config import configure_logging
from .response import (
    ApiErrorResponse,
    ApiGetManyResponse,
    ApiGetResponse,
    BulkResultItem,
    BulkWriteResponse,
    ErrorDetails,
    ResponseInfo,
    SuccessDetails,
    TokenRecord,
)
from .session import ZohoSession
from .utils import parse_params

try:
    __version__ = version("zohocrm")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "unknown"

__all__ = [
    "ApiError",
    "ApiErrorResponse",
    "ApiGetManyResponse",
    "ApiGetResponse",
    "BulkResultItem",
    "BulkWriteResponse",
    "ClientError",
    "EmptyResponse",
    "ErrorDetails",
    "GeneralError",
    "MissingCredentialsError",
    "Outcome",
    "OutcomeKind",
    "ResponseInfo",
    "SuccessDetails",
    "TokenRecord",
    "UnexpectedResponseType",
    "ZohoCRM",
    "ZohoConfig",
    "ZohoSession",
    "classify_response",
    "configure_logging",
    "parse_params",
]
