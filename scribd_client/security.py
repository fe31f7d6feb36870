"""
iPaper Secure access control.

Users are referenced by the identifier used in the secure embed code.
Access is granted or revoked per document, or for all documents when no
document is given.
"""

from typing import List

from .api import get_api
from .document import Document
from .exceptions import ArgumentError
from .resource import element_text


def _document_id(document):
    if isinstance(document, Document):
        return document.id
    try:
        return int(document)
    except (TypeError, ValueError):
        raise ArgumentError("document must be a Document, a document ID, or None") from None


def grant_access(user_identifier: str, document=None):
    set_access(user_identifier, True, document)


def revoke_access(user_identifier: str, document=None):
    set_access(user_identifier, False, document)


def set_access(user_identifier: str, allowed: bool, document=None):
    """
    Set whether a user may view a document.

    Args:
        user_identifier: Identifier from the secure embed code
        allowed: Grant (True) or revoke (False)
        document: A Document or document id; None applies to all documents
    """
    fields = {'user_identifier': user_identifier, 'allowed': 1 if allowed else 0}
    if document is not None:
        fields['doc_id'] = _document_id(document)
    get_api().request('security.setAccess', fields)


def document_access_list(document) -> List[str]:
    """Identifiers of the users allowed to view a document."""
    response = get_api().request('security.getDocumentAccessList', {'doc_id': _document_id(document)})
    return [element_text(tag) for tag in response.findall('resultset/result/user_identifier')]


def user_access_list(user_identifier: str) -> List[Document]:
    """Documents a user is allowed to view."""
    response = get_api().request('security.getUserAccessList', {'user_identifier': user_identifier})
    return Document.build_collection(response)
