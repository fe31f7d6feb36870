"""
Documents: upload, search, settings and per-document helpers.
"""

import io
import logging
import os
import re
from urllib.parse import urlparse

from .api import actor_fields, get_api
from .exceptions import ArgumentError, PrivilegeError
from .resource import Resource, child_text

log = logging.getLogger(__name__)

REMOTE_FILE_PATTERN = re.compile(r'^(http|https|ftp)://', re.IGNORECASE)
# thumbnails are fetched locally, so only schemes requests can download
FETCHABLE_PATTERN = re.compile(r'^(http|https)://', re.IGNORECASE)

# attributes never sent to docs.changeSettings
LOCAL_ONLY_ATTRIBUTES = ('file', 'type', 'conversion_status', 'owner', 'thumbnail')


def is_remote(location) -> bool:
    return isinstance(location, str) and REMOTE_FILE_PATTERN.match(location) is not None


def fetch_remote_file(url: str):
    """Download a file so it can be re-uploaded; returns a (filename, fileobj) payload."""
    transport = get_api().transport
    response = transport.session.get(url, timeout=transport.timeout)
    response.raise_for_status()
    filename = os.path.basename(urlparse(url).path) or 'thumbnail'
    return filename, io.BytesIO(response.content)


class Document(Resource):
    """
    A document on Scribd.

    New documents need a ``file`` attribute: a local path, a binary file
    object or an http/https/ftp URL. An optional ``thumbnail`` is a local
    path, a binary file object or an http/https URL. Both are dropped from
    the attributes once saved. Any other attribute is sent to
    docs.changeSettings on save. Documents with an ``owner`` (a logged-in
    User) are modified on that user's behalf.
    """

    def __init__(self, xml=None, **attributes):
        super().__init__(xml, **attributes)
        self._download_urls = {}
        self._reads = None

    @property
    def id(self):
        return self.read_attribute('doc_id')

    @property
    def owner(self):
        return self.read_attribute('owner')

    @owner.setter
    def owner(self, value):
        self.write_attribute('owner', value)

    @classmethod
    def upload(cls, **attributes) -> 'Document':
        return cls.create(**attributes)

    @classmethod
    def find(cls, doc_id=None, owner=None, **options):
        """
        Look up one document by id, or all documents matching a query.

        Args:
            doc_id: Document id; returns a single Document
            owner: User to attach to the returned documents
            **options: docs.search parameters (query is required without doc_id);
                limit and offset are mapped to num_results and num_start

        Returns:
            A Document, or a list of Documents for a query
        """
        api = get_api()
        if doc_id is not None:
            response = api.request('docs.getSettings',
                                   {**options, **actor_fields(owner), 'doc_id': doc_id})
            return cls(xml=response, owner=owner)

        if not options.get('query'):
            raise ArgumentError("You must specify a query or document ID")

        if 'limit' in options:
            options['num_results'] = options.pop('limit')
        if 'offset' in options:
            options['num_start'] = options.pop('offset')
        response = api.request('docs.search', {**options, **actor_fields(owner)})
        return cls.build_collection(response, owner=owner)

    @classmethod
    def featured(cls, **options):
        return cls.build_collection(get_api().request('docs.featured', options))

    @classmethod
    def browse(cls, **options):
        return cls.build_collection(get_api().request('docs.browse', options))

    @classmethod
    def update_all(cls, docs, **options):
        """Apply the same settings to many documents, one request per owner."""
        if not isinstance(docs, (list, tuple)):
            raise ArgumentError("docs must be a list")
        if not all(isinstance(doc, Document) for doc in docs):
            raise ArgumentError("docs must consist of Document objects")
        if any(doc.owner is None for doc in docs):
            raise ArgumentError("You can't modify one or more documents")

        docs_by_owner = {}
        for doc in docs:
            docs_by_owner.setdefault(doc.owner, []).append(doc)

        api = get_api()
        for owner, doc_list in docs_by_owner.items():
            doc_ids = ','.join(str(doc.id) for doc in doc_list)
            api.request('docs.changeSettings', {**options, 'doc_ids': doc_ids, **actor_fields(owner)})

    @classmethod
    def get_thumbnail_url(cls, doc_id, width=None, height=None, size=None, page=None) -> str:
        """
        Return the URL of a document's thumbnail.

        Give either width and height, or size as a (width, height) pair, or neither.
        """
        if (width is not None or height is not None) and size is not None:
            raise ArgumentError("Cannot specify both width/height and size")
        if size is not None:
            if not isinstance(size, (list, tuple)) or len(size) != 2:
                raise ArgumentError("Size option must be a two-element sequence")
            width, height = size
        elif (width is None) != (height is None):
            raise ArgumentError("Must specify both width and height, or neither")

        response = get_api().request('thumbnail.get', {
            'doc_id': doc_id,
            'width': width,
            'height': height,
            'page': page
        })
        return child_text(response, 'thumbnail_url')

    def save(self) -> bool:
        """
        Upload the file (if any), the thumbnail (if any) and the settings.

        Raises:
            ArgumentError: If a new document has no file
            PrivilegeError: If replacing the file of a document without an owner session
        """
        file = self.read_attribute('file')
        thumbnail = self.read_attribute('thumbnail')
        owner = self.owner
        if not self.created and not file:
            raise ArgumentError("'file' attribute must be specified for new documents")
        if self.created and file and (owner is None or not getattr(owner, 'session_key', None)):
            raise PrivilegeError("The current API user is not the owner of this document")
        if is_remote(thumbnail) and not FETCHABLE_PATTERN.match(thumbnail):
            raise ArgumentError("Thumbnail URLs must be http or https")

        if file:
            self._process_file(file)
        self._process_thumbnail(thumbnail, uploaded=bool(file))

        self._attributes.pop('file', None)
        self._attributes.pop('thumbnail', None)
        if self.owner is None:
            self.owner = get_api().user
        self._mark_saved()
        return True

    def _process_file(self, file):
        fields = {name: value for name, value in self._attributes.items()
                  if name not in ('thumbnail', 'file', 'owner')}
        fields.update(actor_fields(self.owner))

        doc_type = fields.pop('type', None)
        fields['doc_type'] = doc_type.lower() if isinstance(doc_type, str) else doc_type
        fields['rev_id'] = fields.pop('doc_id', None)

        if is_remote(file):
            response = get_api().request('docs.uploadFromUrl', {**fields, 'url': file})
        else:
            response = get_api().request('docs.upload', {**fields, 'file': file})
        self._load_attributes(response)
        log.debug("Uploaded document %s", self.id)

    def _process_thumbnail(self, thumbnail, uploaded):
        api = get_api()
        if thumbnail:
            payload = fetch_remote_file(thumbnail) if is_remote(thumbnail) else thumbnail
            api.request('docs.uploadThumb', {'file': payload, 'doc_id': self.id})

        fields = {name: value for name, value in self._attributes.items()
                  if name not in LOCAL_ONLY_ATTRIBUTES}
        fields.update(actor_fields(self.owner))
        fields['doc_ids'] = self.id
        if uploaded:
            fields.pop('access', None)

        api.request('docs.changeSettings', fields)

    def destroy(self) -> bool:
        response = get_api().request('docs.delete', {'doc_id': self.id})
        return response.get('stat') == 'ok'

    def conversion_status(self) -> str:
        """Current conversion status; fetched from the server on every call."""
        response = get_api().request('docs.getConversionStatus', {'doc_id': self.id})
        return child_text(response, 'conversion_status')

    def reads(self, force: bool = False) -> str:
        if self._reads is None or force:
            response = get_api().request('docs.getStats', {'doc_id': self.id})
            self._reads = child_text(response, 'reads')
        return self._reads

    def download_url(self, format: str = 'original', force: bool = False) -> str:
        """Download link for the given format, remembered per format for this instance."""
        if format not in self._download_urls or force:
            response = get_api().request('docs.getDownloadUrl', {'doc_id': self.id, 'doc_type': format})
            self._download_urls[format] = child_text(response, 'download_link')
        return self._download_urls[format]

    def thumbnail_url(self, **options) -> str:
        return Document.get_thumbnail_url(self.id, **options)

    def grant_access(self, user_identifier):
        from . import security
        security.grant_access(user_identifier, self)

    def revoke_access(self, user_identifier):
        from . import security
        security.revoke_access(user_identifier, self)

    def access_list(self):
        from . import security
        return security.document_access_list(self)
