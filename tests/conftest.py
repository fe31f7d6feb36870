"""
Shared fixtures: a configured API whose HTTP session is a Mock.
"""

from unittest.mock import Mock, patch

import pytest

from scribd_client import API, use_api
from scribd_client.constants import ENV_API_KEY, ENV_API_SECRET

OK = "<rsp stat='ok'/>"


def http_response(body: str) -> Mock:
    """Mock requests.Response carrying an XML body."""
    response = Mock()
    response.status_code = 200
    response.content = body.encode('utf-8')
    return response


class FakeServer:
    """Queues response bodies on a mocked session and reads back what was sent."""

    def __init__(self, session: Mock):
        self.session = session
        self.respond(OK)

    def respond(self, *bodies):
        if len(bodies) == 1:
            self.session.post.side_effect = None
            self.session.post.return_value = http_response(bodies[0])
        else:
            self.session.post.side_effect = [http_response(body) for body in bodies]

    @property
    def calls(self):
        return self.session.post.call_args_list

    def parts(self, index=-1) -> dict:
        """All multipart parts of a request as name -> (filename, content, ...)."""
        return dict(self.calls[index].kwargs['files'])

    def fields(self, index=-1) -> dict:
        """Text fields of a request as name -> value."""
        return {name: part[1] for name, part in self.parts(index).items() if part[0] is None}

    def methods(self) -> list:
        return [self.fields(i)['method'] for i in range(len(self.calls))]


@pytest.fixture
def api(monkeypatch):
    """API with test credentials installed as the process-wide default."""
    monkeypatch.delenv(ENV_API_KEY, raising=False)
    monkeypatch.delenv(ENV_API_SECRET, raising=False)

    api = API(key='test key', secret='test sec')
    api.transport.session = Mock()
    with use_api(api), patch('scribd_client.transport.time.sleep'):
        yield api


@pytest.fixture
def server(api):
    """Fake remote host answering stat="ok" unless told otherwise."""
    return FakeServer(api.transport.session)
