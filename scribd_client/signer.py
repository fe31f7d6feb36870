"""
Request signing for the Scribd API.

The signature is the MD5 hex digest of the API secret followed by every
request field name and value, sorted by name. The file field is never
signed; callers remove it before calling sign().
"""

import hashlib
from typing import Any, Mapping


def stringify(value: Any) -> str:
    """Return the wire representation of a field value."""
    if value is True:
        return 'true'
    if value is False:
        return 'false'
    return str(value)


def sign(secret: str, fields: Mapping[str, Any]) -> str:
    """
    Compute the api_sig value for a set of request fields.

    Args:
        secret: API secret shared with the server
        fields: Field name to value mapping, file field excluded

    Returns:
        Hex-encoded MD5 signature
    """
    pairs = sorted((stringify(name), stringify(value)) for name, value in fields.items())
    message = secret + ''.join(name + value for name, value in pairs)
    return hashlib.md5(message.encode('utf-8')).hexdigest()
