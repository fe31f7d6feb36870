"""
Unit tests for collections.
"""

import xml.etree.ElementTree as ET

import pytest

from scribd_client import ArgumentError, Collection, Document, ResponseError, User

EXISTS = "<rsp stat='fail'><error code='653' message='Document already in collection'/></rsp>"
MISSING = "<rsp stat='fail'><error code='652' message='Document not in collection'/></rsp>"
OTHER = "<rsp stat='fail'><error code='401' message='Unauthorized'/></rsp>"


@pytest.fixture
def collection():
    xml = ET.fromstring("<result><collection_id>61</collection_id>"
                        "<collection_name>Reading</collection_name></result>")
    return Collection(xml=xml, owner=User(session_key='owner-session'))


@pytest.fixture
def document():
    return Document(xml=ET.fromstring("<rsp stat='ok'><doc_id type='integer'>7</doc_id></rsp>"))


class TestCollection:
    """Test adding and removing documents."""

    def test_attributes(self, collection):
        """Test id and name come from the collection attributes."""
        assert collection.id == '61'
        assert collection.name == 'Reading'
        assert collection.created and collection.saved

    def test_cannot_create(self):
        """Test collections can only be built from responses."""
        with pytest.raises(ArgumentError):
            Collection(collection_name='New')

    def test_add(self, api, server, collection, document):
        """Test add sends the collection, document and owner session."""
        assert collection.add(document) is document

        fields = server.fields()
        assert fields['method'] == 'docs.addToCollection'
        assert fields['collection_id'] == '61'
        assert fields['doc_id'] == '7'
        assert fields['session_key'] == 'owner-session'

    def test_add_existing_ignored(self, api, server, collection, document):
        """Test an already-present document is ignored by default."""
        server.respond(EXISTS)

        assert collection.add(document, ignore_if_exists=True) is document

    def test_add_existing_raises(self, api, server, collection, document):
        """Test an already-present document raises when not ignored."""
        server.respond(EXISTS)

        with pytest.raises(ResponseError) as excinfo:
            collection.add(document, ignore_if_exists=False)

        assert excinfo.value.code == '653'
        assert len(server.calls) == 1

    def test_add_other_error_raises(self, api, server, collection, document):
        """Test other remote errors are never ignored."""
        server.respond(OTHER)

        with pytest.raises(ResponseError) as excinfo:
            collection.add(document)

        assert excinfo.value.code == '401'

    def test_remove(self, api, server, collection, document):
        """Test remove sends docs.removeFromCollection."""
        assert collection.remove(document) is document
        assert server.fields()['method'] == 'docs.removeFromCollection'

    def test_remove_missing(self, api, server, collection, document):
        """Test a missing document is ignored only when asked to."""
        server.respond(MISSING)

        assert collection.delete(document) is document

        with pytest.raises(ResponseError) as excinfo:
            collection.remove(document, ignore_if_missing=False)

        assert excinfo.value.code == '652'

    def test_remove_ignores_only_missing(self, api, server, collection, document):
        """Test the exists code isn't ignored on removal."""
        server.respond(EXISTS)

        with pytest.raises(ResponseError):
            collection.remove(document)

    def test_non_document(self, api, server, collection):
        """Test only documents can be added or removed."""
        with pytest.raises(ArgumentError):
            collection.add('7')

        with pytest.raises(ArgumentError):
            collection.remove(None)

        assert not server.calls
