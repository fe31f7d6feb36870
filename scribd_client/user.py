"""
Users: login, signup and the documents and collections a user owns.
"""

from .api import get_api
from .collection import Collection
from .document import Document
from .exceptions import NotReadyError
from .resource import Resource, child_text


class User(Resource):
    """
    A Scribd user.

    User.login() and User.signup() make the returned user the current
    actor of the default API, so later requests run on its session.
    """

    @property
    def id(self):
        return self.read_attribute('user_id')

    @property
    def session_key(self):
        return self.read_attribute('session_key')

    def __str__(self):
        return str(self.read_attribute('username') or '')

    @classmethod
    def signup(cls, **attributes) -> 'User':
        return cls.create(**attributes)

    @classmethod
    def login(cls, username: str, password: str) -> 'User':
        """Log in and make the user the current actor."""
        api = get_api()
        response = api.request('user.login', {'username': username, 'password': password})
        user = cls(xml=response)
        api.user = user
        return user

    def save(self) -> bool:
        """Create a new account from the attributes and log in as it."""
        if self.created:
            raise NotImplementedError("Cannot update a user once that user's been saved")

        api = get_api()
        response = api.request('user.signup', self._attributes)
        self._load_attributes(response)
        api.user = self
        self._mark_saved()
        return True

    def _require_created(self):
        if not self.created:
            raise NotReadyError("User hasn't been created yet")

    def documents(self, **options):
        """Documents owned by this user (docs.getList)."""
        response = get_api().request('docs.getList', {**options, 'session_key': self.session_key})
        return Document.build_collection(response, owner=self)

    def find_documents(self, **options):
        """Search this user's documents; None if the user has no session."""
        if not self.session_key:
            return None
        return Document.find(scope='user', owner=self, **options)

    def find_document(self, doc_id):
        """Load one of this user's documents by id; None if the user has no session."""
        if not self.session_key:
            return None
        return Document.find(doc_id, owner=self)

    def upload(self, **options) -> Document:
        self._require_created()
        return Document.create(owner=self, **options)

    def collections(self, **options):
        self._require_created()
        response = get_api().request('docs.getCollections', {**options, 'session_key': self.session_key})
        return Collection.build_collection(response, owner=self)

    def auto_sign_in_url(self, next_url: str = '') -> str:
        """URL that signs this user in and then redirects to next_url."""
        self._require_created()
        response = get_api().request('user.getAutoSignInUrl', {
            'session_key': self.session_key,
            'next_url': next_url
        })
        return child_text(response, 'url')
