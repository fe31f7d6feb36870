"""
HTTP transport for the Scribd API.

Every API call is a multipart/form-data POST to a single endpoint. The
transport retries transport-level failures a fixed number of times and
parses the response body as XML; checking the response envelope is left
to scribd_client.response.
"""

import logging
import mimetypes
import os
import time
import xml.etree.ElementTree as ET
from contextlib import contextmanager
from typing import Any, Dict, Mapping, Optional

import requests

from .constants import DEFAULT_CONFIG, DEFAULT_MIME_TYPE, FIELD_FILE
from .exceptions import ConfigurationError, MalformedResponseError

log = logging.getLogger(__name__)


def guess_mime_type(filename: str) -> str:
    """Best-effort MIME type for an upload, from its file extension."""
    mime_type, _ = mimetypes.guess_type(filename)
    return mime_type or DEFAULT_MIME_TYPE


@contextmanager
def open_payload(payload):
    """
    Yield (filename, fileobj) for a file payload.

    The payload is a path, a binary file object or a (filename, fileobj)
    tuple. Paths are opened here and closed on exit; file objects are
    left open for the caller.
    """
    if isinstance(payload, tuple):
        filename, fileobj = payload
        yield filename, fileobj
    elif isinstance(payload, (str, os.PathLike)):
        path = os.fspath(payload)
        with open(path, 'rb') as fileobj:
            yield os.path.basename(path), fileobj
    else:
        name = getattr(payload, 'name', None)
        filename = os.path.basename(name) if isinstance(name, str) else FIELD_FILE
        yield filename, payload


class Transport:
    """
    Performs signed-request POSTs against the Scribd API endpoint.

    Fields must already be signed and stringified (see scribd_client.api);
    the transport only encodes, sends, retries and parses.
    """

    def __init__(self, url: Optional[str] = None, **config):
        """
        Initialize transport.

        Args:
            url: API endpoint (defaults to the public Scribd endpoint)
            **config: Configuration options (timeout, connect_timeout, tries, retry_delay)
        """
        self.config = {**DEFAULT_CONFIG, **config}
        if url is not None:
            self.config['url'] = url
        self._validate_config()

        self.url = self.config['url']
        self.session = requests.Session()

    def _validate_config(self):
        """Validate transport configuration."""
        if not self.config['url']:
            raise ConfigurationError("url cannot be empty")

        if self.config['tries'] < 1:
            raise ConfigurationError("tries must be at least 1")

        if self.config['retry_delay'] < 0:
            raise ConfigurationError("retry_delay cannot be negative")

        if self.config['timeout'] <= 0 or self.config['connect_timeout'] <= 0:
            raise ConfigurationError("timeouts must be positive")

    @property
    def timeout(self):
        """(connect, read) timeout pair as accepted by requests."""
        return (self.config['connect_timeout'], self.config['timeout'])

    def post(self, fields: Mapping[str, Any]) -> ET.Element:
        """
        Send a request and return the parsed response document.

        Args:
            fields: Ordered text fields, plus at most one file payload under "file"

        Returns:
            Root element of the response

        Raises:
            MalformedResponseError: If the body is not XML
            requests.RequestException: If every attempt failed
        """
        fields = dict(fields)
        payload = fields.pop(FIELD_FILE, None)

        if payload is None:
            body = self._send(fields)
        else:
            with open_payload(payload) as (filename, fileobj):
                body = self._send(fields, filename, fileobj)

        return self.parse(body)

    def _multipart(self, fields: Dict[str, str], filename=None, fileobj=None) -> list:
        """Build the requests "files" list; text parts carry no filename."""
        parts = []
        if fileobj is not None:
            parts.append((FIELD_FILE, (filename, fileobj, guess_mime_type(filename))))
        parts.extend((name, (None, value)) for name, value in fields.items())
        return parts

    def _send(self, fields: Dict[str, str], filename=None, fileobj=None) -> bytes:
        """
        POST with retries; returns the raw response body.

        A file object that can't be rewound is only sent once, since a
        second attempt would upload whatever is left of it.
        """
        seekable = fileobj is not None and getattr(fileobj, 'seekable', lambda: False)()
        start = fileobj.tell() if seekable else None
        tries = 1 if fileobj is not None and not seekable else self.config['tries']

        for attempt in range(1, tries + 1):
            if start is not None:
                fileobj.seek(start)
            try:
                response = self.session.post(
                    self.url,
                    files=self._multipart(fields, filename, fileobj),
                    timeout=self.timeout
                )
                log.debug("Response from %s: HTTP %s, %d bytes",
                          self.url, response.status_code, len(response.content))
                return response.content
            except requests.RequestException as e:
                if attempt >= tries:
                    raise
                log.warning("Request encountered error (%s), will retry %d more",
                            e, tries - attempt)
                time.sleep(self.config['retry_delay'])

    @staticmethod
    def parse(body: bytes) -> ET.Element:
        """Parse a response body into its root element."""
        try:
            return ET.fromstring(body)
        except ET.ParseError as e:
            raise MalformedResponseError(
                "The response received from the remote host could not be interpreted"
            ) from e

    def close(self):
        """Close HTTP session."""
        if self.session:
            self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
