"""
API facade: credentials, the current actor and the request entry point.

All resource classes send their requests through the process-wide default
API instance (get_api()). Tests and multi-account programs can swap it
with set_api() or, temporarily, with use_api().
"""

import logging
import os
import xml.etree.ElementTree as ET
from contextlib import contextmanager
from typing import Any, Dict, Mapping, Optional

from .constants import (
    ENV_API_KEY,
    ENV_API_SECRET,
    FIELD_API_KEY,
    FIELD_API_SIG,
    FIELD_FILE,
    FIELD_METHOD,
    FIELD_MY_USER_ID,
    FIELD_SESSION_KEY
)
from .exceptions import ArgumentError, NotReadyError
from .response import validate
from .signer import sign, stringify
from .transport import Transport

log = logging.getLogger(__name__)


def actor_fields(actor) -> Dict[str, Any]:
    """Request fields identifying an actor: a User's session_key or a bare my_user_id."""
    if actor is None:
        return {}
    if isinstance(actor, str):
        return {FIELD_MY_USER_ID: actor}
    if not hasattr(actor, 'session_key'):
        raise ArgumentError(f"Actor must be a User or an identifier string, got {actor!r}")
    return {FIELD_SESSION_KEY: actor.session_key}


class API:
    """
    Builds, signs and sends Scribd API requests.

    Holds the API key and secret and the current actor. The actor is
    either None, a logged-in User (requests carry its session_key) or a
    bare user identifier string (requests carry it as my_user_id).
    """

    def __init__(self, key: Optional[str] = None, secret: Optional[str] = None,
                 user=None, transport: Optional[Transport] = None, **config):
        """
        Initialize API.

        Args:
            key: API key (defaults to $SCRIBD_API_KEY)
            secret: API secret (defaults to $SCRIBD_API_SECRET)
            user: Initial actor
            transport: Transport to use; one is created from **config otherwise
            **config: Transport configuration options
        """
        self.reload()
        if key is not None:
            self.key = key
        if secret is not None:
            self.secret = secret
        self.user = user
        self.transport = transport if transport is not None else Transport(**config)

    @property
    def ready(self) -> bool:
        return bool(self.key and self.secret)

    def reload(self) -> 'API':
        """Reset credentials from the environment and clear the current actor."""
        self.key = os.environ.get(ENV_API_KEY)
        self.secret = os.environ.get(ENV_API_SECRET)
        self.user = None
        return self

    def build_fields(self, method: str, fields: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """
        Complete and sign the fields of a request.

        Adds method, api_key and the actor's credentials (unless the
        caller passed session_key or my_user_id), drops None values and
        appends api_sig. The file field, if any, is not signed.
        """
        fields = {str(name): value for name, value in (fields or {}).items()}
        fields[FIELD_METHOD] = method
        fields[FIELD_API_KEY] = self.key

        if fields.get(FIELD_SESSION_KEY) is None and fields.get(FIELD_MY_USER_ID) is None:
            fields.update(actor_fields(self.user))

        payload = fields.pop(FIELD_FILE, None)
        signed = {}
        for name, value in fields.items():
            if value is None:
                continue
            if hasattr(value, 'read'):
                raise ArgumentError(f"Only the '{FIELD_FILE}' field may carry a file, not '{name}'")
            signed[name] = stringify(value)
        signed[FIELD_API_SIG] = sign(self.secret, signed)

        if payload is None:
            return signed
        return {FIELD_FILE: payload, **signed}

    def request(self, method: str, fields: Optional[Mapping[str, Any]] = None) -> ET.Element:
        """
        Send a request and return the validated response document.

        Args:
            method: Remote method name, e.g. "docs.getSettings"
            fields: Method parameters

        Returns:
            The rsp root element

        Raises:
            NotReadyError: If the API key or secret is missing
            ArgumentError: If method is empty
            MalformedResponseError: If the response has no envelope
            ResponseError: If the remote host reports a failure
        """
        if not self.ready:
            raise NotReadyError("API key and secret must be set before sending requests")
        if not method:
            raise ArgumentError("Method should be given")

        fields = self.build_fields(method, fields)
        log.debug("Remote method call: %s; fields: %s", method,
                  ', '.join(name for name in fields if name != FIELD_API_SIG))

        return validate(self.transport.post(fields), method)

    def close(self):
        """Close the underlying transport."""
        self.transport.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()


_default_api = None


def get_api() -> API:
    """Return the process-wide API instance, creating it on first use."""
    global _default_api
    if _default_api is None:
        _default_api = API()
    return _default_api


def set_api(api: Optional[API]) -> Optional[API]:
    """Install a new process-wide API instance; returns the previous one."""
    global _default_api
    previous, _default_api = _default_api, api
    return previous


@contextmanager
def use_api(api: API):
    """Temporarily make api the process-wide instance."""
    previous = set_api(api)
    try:
        yield api
    finally:
        set_api(previous)
