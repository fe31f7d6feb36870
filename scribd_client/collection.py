"""
Collections: user-maintained lists of documents.
"""

from .api import actor_fields, get_api
from .constants import DOCUMENT_EXISTS_ERROR_CODE, DOCUMENT_MISSING_ERROR_CODE
from .document import Document
from .exceptions import ArgumentError, ResponseError
from .resource import Resource


class Collection(Resource):
    """
    A collection created by a user; retrieved with User.collections().

    Collections themselves can't be created or modified through the API,
    but documents can be added to and removed from them.
    """

    def __init__(self, xml=None, owner=None, **attributes):
        if xml is None:
            raise ArgumentError("Collections cannot be created, only retrieved")
        super().__init__(xml, **attributes)
        self.owner = owner

    @property
    def id(self):
        return self.read_attribute('collection_id')

    @property
    def name(self):
        return self.read_attribute('collection_name')

    def add(self, document: Document, ignore_if_exists: bool = True) -> Document:
        """
        Add a document to this collection.

        Raises:
            ResponseError: If the document is already in the collection and
                ignore_if_exists is False, or on any other remote error
        """
        return self._update('docs.addToCollection', 'add', document,
                            ignore_if_exists, DOCUMENT_EXISTS_ERROR_CODE)

    def remove(self, document: Document, ignore_if_missing: bool = True) -> Document:
        """
        Remove a document from this collection.

        Raises:
            ResponseError: If the document isn't in the collection and
                ignore_if_missing is False, or on any other remote error
        """
        return self._update('docs.removeFromCollection', 'remove', document,
                            ignore_if_missing, DOCUMENT_MISSING_ERROR_CODE)

    delete = remove

    def _update(self, method, verb, document, ignore, ignorable_code):
        if not isinstance(document, Document):
            raise ArgumentError(f"You can only {verb} Documents to/from collections")
        try:
            get_api().request(method, {
                'collection_id': self.id,
                'doc_id': document.id,
                **actor_fields(self.owner)
            })
        except ResponseError as e:
            if not ignore or e.int_code != ignorable_code:
                raise
        return document
