from .client import TvdbClient
from .config_types import ClientConfig, Credentials, RequestOptions
from .errors import AuthError, TvdbClientError

__all__ = ["TvdbClient", "ClientConfig", "Credentials", "RequestOptions", "AuthError", "TvdbClientError"]
