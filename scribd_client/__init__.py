"""
Scribd Client Library

A Python client library for the Scribd platform API. Remote documents,
users, categories and collections are local objects whose methods send
signed requests to the API endpoint.

Example usage:
    from scribd_client import Document, get_api

    api = get_api()
    api.key, api.secret = "your-api-key", "your-api-secret"
    doc = Document.upload(file="/path/to/report.pdf", access="private")
"""

import logging

from .api import API, get_api, set_api, use_api
from .category import Category
from .collection import Collection
from .document import Document
from .exceptions import (
    ScribdError,
    NotReadyError,
    ArgumentError,
    ConfigurationError,
    MalformedResponseError,
    PrivilegeError,
    ResponseError
)
from .resource import Resource, Symbol
from .transport import Transport
from .user import User
from . import security

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "1.0.0"
__all__ = [
    "API",
    "get_api",
    "set_api",
    "use_api",
    "Transport",
    "Resource",
    "Symbol",
    "Document",
    "User",
    "Category",
    "Collection",
    "security",
    "ScribdError",
    "NotReadyError",
    "ArgumentError",
    "ConfigurationError",
    "MalformedResponseError",
    "PrivilegeError",
    "ResponseError"
]
