"""
Response envelope validation.

Successful responses look like ``<rsp stat="ok">...</rsp>``; failures like
``<rsp stat="fail"><error code="..." message="..."/></rsp>``.
"""

import xml.etree.ElementTree as ET

from .constants import ENVELOPE_TAG, STATUS_ATTR, STATUS_FAIL
from .exceptions import MalformedResponseError, ResponseError


def validate(document: ET.Element, method: str) -> ET.Element:
    """
    Check the envelope of a parsed response.

    Args:
        document: Root element as returned by Transport.post()
        method: Remote method name, used in error messages

    Returns:
        The document, unchanged

    Raises:
        MalformedResponseError: If there is no rsp root with a status
        ResponseError: If the status is "fail"
    """
    if document is None or document.tag != ENVELOPE_TAG or STATUS_ATTR not in document.attrib:
        raise MalformedResponseError(
            "The response received from the remote host could not be interpreted"
        )

    if document.get(STATUS_ATTR) == STATUS_FAIL:
        error = document.find('error')
        if error is not None:
            code = error.get('code', -1)
            message = error.get('message') or error.get('msg') or "Unidentified error"
        else:
            code = -1
            message = "Unidentified error:\n" + ET.tostring(document, encoding='unicode')

        raise ResponseError(code, f"Method: {method} Response: code={code} message={message}")

    return document
