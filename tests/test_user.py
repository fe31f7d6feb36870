"""
Unit tests for users.
"""

import xml.etree.ElementTree as ET

import pytest

from scribd_client import Collection, Document, NotReadyError, ResponseError, User

LOGGED_IN = ("<rsp stat='ok'><username>testuser</username><user_id type='integer'>12</user_id>"
             "<name>Test User</name><session_key>sess-123</session_key></rsp>")


def logged_in_user():
    return User(xml=ET.fromstring(LOGGED_IN))


class TestAccount:
    """Test login and signup."""

    def test_login(self, api, server):
        """Test login returns a created user and makes it the actor."""
        server.respond(LOGGED_IN)

        user = User.login('testuser', 'secret')

        assert server.fields()['method'] == 'user.login'
        assert server.fields()['username'] == 'testuser'
        assert server.fields()['password'] == 'secret'
        assert user.created and user.saved
        assert user.id == 12
        assert user.session_key == 'sess-123'
        assert str(user) == 'testuser'
        assert api.user is user

    def test_requests_after_login_use_session(self, api, server):
        """Test later requests carry the logged-in session key."""
        server.respond(LOGGED_IN, "<rsp stat='ok'/>")

        User.login('testuser', 'secret')
        api.request('docs.getList')

        assert server.fields()['session_key'] == 'sess-123'

    def test_signup(self, api, server):
        """Test signup creates the account and logs in as it."""
        server.respond(LOGGED_IN)

        user = User.signup(username='testuser', password='secret', email='t@example.com')

        assert server.fields()['method'] == 'user.signup'
        assert server.fields()['email'] == 't@example.com'
        assert user.created and user.saved
        assert api.user is user

    def test_failed_signup(self, api, server):
        """Test a failed signup leaves the user uncreated and the actor unchanged."""
        server.respond("<rsp stat='fail'><error code='612' message='Username taken'/></rsp>")
        user = User(username='testuser')

        with pytest.raises(ResponseError):
            user.save()

        assert (user.saved, user.created) == (False, False)
        assert api.user is None

    def test_update_not_supported(self, api, server):
        """Test created users can't be saved again."""
        with pytest.raises(NotImplementedError):
            logged_in_user().save()

        assert not server.calls


class TestUserDocuments:
    """Test a user's documents and collections."""

    def test_documents(self, api, server):
        """Test documents are listed with the user as owner."""
        server.respond("<rsp stat='ok'><resultset>"
                       "<result><doc_id type='integer'>1</doc_id></result>"
                       "<result><doc_id type='integer'>2</doc_id></result>"
                       "</resultset></rsp>")
        user = logged_in_user()

        docs = user.documents(limit=2)

        assert server.fields()['method'] == 'docs.getList'
        assert server.fields()['session_key'] == 'sess-123'
        assert [doc.id for doc in docs] == [1, 2]
        assert all(doc.owner is user for doc in docs)

    def test_find_documents(self, api, server):
        """Test searching within the user's documents."""
        server.respond("<rsp stat='ok'><result_set><result><doc_id>1</doc_id></result></result_set></rsp>")
        user = logged_in_user()

        docs = user.find_documents(query='x')

        fields = server.fields()
        assert fields['method'] == 'docs.search'
        assert fields['scope'] == 'user'
        assert fields['session_key'] == 'sess-123'
        assert docs[0].owner is user

    def test_find_document(self, api, server):
        """Test loading one of the user's documents."""
        server.respond("<rsp stat='ok'><doc_id type='integer'>3</doc_id></rsp>")
        user = logged_in_user()

        doc = user.find_document(3)

        assert server.fields()['doc_id'] == '3'
        assert server.fields()['session_key'] == 'sess-123'
        assert isinstance(doc, Document)
        assert doc.owner is user

    def test_without_session(self, api, server):
        """Test lookups need a session."""
        user = User(username='nobody')

        assert user.find_documents(query='x') is None
        assert user.find_document(3) is None
        assert not server.calls

    def test_upload_requires_created_user(self, api, server):
        """Test uploading needs an existing user."""
        with pytest.raises(NotReadyError):
            User(username='nobody').upload(file='http://example.com/a.pdf')

    def test_upload(self, api, server):
        """Test uploading on behalf of the user."""
        server.respond("<rsp stat='ok'><doc_id type='integer'>9</doc_id></rsp>", "<rsp stat='ok'/>")
        user = logged_in_user()

        doc = user.upload(file='http://example.com/a.pdf')

        assert doc.owner is user
        assert doc.created
        assert server.fields(0)['session_key'] == 'sess-123'

    def test_collections(self, api, server):
        """Test collections are listed with the user as owner."""
        server.respond("<rsp stat='ok'><resultset><result>"
                       "<collection_id>61</collection_id><collection_name>Reading</collection_name>"
                       "</result></resultset></rsp>")
        user = logged_in_user()

        collections = user.collections()

        assert server.fields()['method'] == 'docs.getCollections'
        assert isinstance(collections[0], Collection)
        assert collections[0].name == 'Reading'
        assert collections[0].owner is user

    def test_auto_sign_in_url(self, api, server):
        """Test the auto sign-in URL is read from CDATA."""
        server.respond("<rsp stat='ok'><url><![CDATA[http://www.scribd.com/login?x=1&y=2]]></url></rsp>")

        url = logged_in_user().auto_sign_in_url('http://example.com/next')

        assert url == 'http://www.scribd.com/login?x=1&y=2'
        assert server.fields()['next_url'] == 'http://example.com/next'

    def test_auto_sign_in_url_requires_created_user(self, api, server):
        """Test the auto sign-in URL needs an existing user."""
        with pytest.raises(NotReadyError):
            User().auto_sign_in_url()
