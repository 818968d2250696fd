import pytest
import requests

from logglyclient.sender import HttpTransport


class FakeResponse:
    def __init__(self, status_code):
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error")


class FakeSession:
    def __init__(self, status_code=200, error=None):
        self.headers = {}
        self.status_code = status_code
        self.error = error
        self.posts = []
        self.closed = False

    def post(self, url, data=None, timeout=None):
        self.posts.append((url, data, timeout))
        if self.error is not None:
            raise self.error
        return FakeResponse(self.status_code)

    def close(self):
        self.closed = True


def test_url_without_tags():
    transport = HttpTransport(base_url="http://logs-01.loggly.com/", session=FakeSession())

    assert transport.url_for("inputs", "tok") == "http://logs-01.loggly.com/inputs/tok/"
    assert transport.url_for("bulk", "tok") == "http://logs-01.loggly.com/bulk/tok/"


def test_url_with_tags():
    transport = HttpTransport(tags=("web", "api"), session=FakeSession())

    assert (
        transport.url_for("bulk", "tok")
        == "http://logs-01.loggly.com/bulk/tok/tag/web,api/"
    )


def test_send_posts_plain_text():
    session = FakeSession()
    transport = HttpTransport(session=session, timeout=4.0)

    assert transport.send("inputs", "tok", "héllo") is True
    assert session.posts == [
        ("http://logs-01.loggly.com/inputs/tok/", "héllo".encode("utf-8"), 4.0)
    ]
    assert session.headers["Content-Type"] == "text/plain"


def test_custom_headers_kept():
    session = FakeSession()
    HttpTransport(session=session, headers={"X-Source": "tests"})

    assert session.headers["X-Source"] == "tests"


def test_non_2xx_raises():
    transport = HttpTransport(session=FakeSession(status_code=403))

    with pytest.raises(requests.HTTPError, match="403"):
        transport.send("inputs", "tok", "hello")


def test_caller_session_not_replaced_on_error():
    session = FakeSession(error=requests.ConnectionError("down"))
    transport = HttpTransport(session=session)

    with pytest.raises(requests.ConnectionError):
        transport.send("inputs", "tok", "hello")

    assert transport._session is session
    transport.close()
    assert session.closed is False


def test_owned_session_reset_on_error():
    transport = HttpTransport()
    broken = FakeSession(error=requests.ConnectionError("down"))
    transport._session = broken

    with pytest.raises(requests.ConnectionError):
        transport.send("inputs", "tok", "hello")

    assert broken.closed is True
    assert isinstance(transport._session, requests.Session)
    transport.close()


def test_reset_session_with_caller_session():
    transport = HttpTransport()
    session = FakeSession()

    transport.reset_session(session)

    assert transport._session is session
    assert session.headers["Content-Type"] == "text/plain"


def test_failed_send_keeps_session_replaced_by_another_worker():
    transport = HttpTransport()
    replacement = FakeSession()

    class StaleSession(FakeSession):
        def post(self, url, data=None, timeout=None):
            # Another worker swaps the session while this request is in flight
            transport._session = replacement
            raise requests.ConnectionError("down")

    transport._session = StaleSession()

    with pytest.raises(requests.ConnectionError):
        transport.send("inputs", "tok", "hello")

    assert transport._session is replacement
    assert replacement.closed is False
