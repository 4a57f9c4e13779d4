from hoard._exceptions import HoardError, ImmutableResponseError
from hoard._headers import CacheControl, Headers, parse_cache_control
from hoard._protocols import HeaderAccessor, ResponseHeaderAccessor
from hoard._response import CachedResponse
from hoard._response_headers import ResponseHeaders
from hoard._serializers import (
    BaseSerializer,
    JSONSerializer,
    MsgPackSerializer,
    PickleSerializer,
    YAMLSerializer,
)

__all__ = (
    ## Response
    "CachedResponse",
    ## Headers
    "Headers",
    "CacheControl",
    "parse_cache_control",
    "ResponseHeaders",
    "HeaderAccessor",
    "ResponseHeaderAccessor",
    ## Serializers
    "BaseSerializer",
    "JSONSerializer",
    "MsgPackSerializer",
    "PickleSerializer",
    "YAMLSerializer",
    ## Errors
    "HoardError",
    "ImmutableResponseError",
)

__version__ = "0.1.0"
