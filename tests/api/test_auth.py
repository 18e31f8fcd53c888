"""Tests for shotgun_api.api.auth module."""

import time

import httpx
import pytest

from shotgun_api.api.auth import Authenticator, AuthToken
from shotgun_api.core.deadline import deadline
from shotgun_api.core.errors import AuthenticationError, DeadlineExceededError, TransportError
from tests._support.fake_api import TOKEN_PATH, token_body


def _form(request: httpx.Request) -> dict[str, str]:
    return dict(httpx.QueryParams(request.content.decode()))


class TestAuthToken:
    """Test token model."""

    def test_header_value(self):
        """Header value is '{token_type} {access_token}'."""
        assert AuthToken(access_token="abc", token_type="Bearer").header_value == "Bearer abc"


class TestClientCredentials:
    """Test the default client-credentials grant."""

    def test_posts_form_credentials(self, authenticator, fake_api):
        """The token request carries client id, secret and grant type."""
        token = authenticator.authenticate()

        assert token.access_token == "tok-1"
        (request,) = fake_api.token_requests
        assert str(request.url) == "https://studio.example.com/api/v1/auth/access_token"
        assert _form(request) == {
            "client_id": "feed_reader",
            "client_secret": "s3cret",
            "grant_type": "client_credentials",
        }
        assert request.headers["Accept"] == "application/json"

    def test_token_is_cached(self, authenticator, fake_api):
        """A fresh token is reused instead of re-requested."""
        first = authenticator.authenticate()
        second = authenticator.authenticate()
        assert first is second
        assert len(fake_api.token_requests) == 1

    def test_short_lived_token_not_cached(self, authenticator, fake_api):
        """Tokens expiring within the skew window are refreshed every call."""
        fake_api.add("POST", TOKEN_PATH, token_body(expires_in=10), prefix=False)
        authenticator.authenticate()
        authenticator.authenticate()
        assert len(fake_api.token_requests) == 2

    def test_invalidate_forces_refresh(self, authenticator, fake_api):
        """invalidate() drops the cached token."""
        authenticator.authenticate()
        authenticator.invalidate()
        authenticator.authenticate()
        assert len(fake_api.token_requests) == 2


class TestPasswordGrant:
    """Test the human-user password grant."""

    def test_for_user(self, settings, http_client, fake_api):
        """for_user sends username, password and grant_type=password."""
        Authenticator.for_user(settings, http_client, "jane", "hunter2").authenticate()
        (request,) = fake_api.token_requests
        assert _form(request) == {"username": "jane", "password": "hunter2", "grant_type": "password"}


class TestFailures:
    """Test failure mapping."""

    def test_rejected_credentials(self, authenticator, fake_api):
        """A 4xx answer raises AuthenticationError with the remote errors."""
        fake_api.add(
            "POST",
            TOKEN_PATH,
            {"errors": [{"status": 400, "code": 102, "title": "Invalid credentials", "detail": "bad key"}]},
            status=400,
            prefix=False,
        )
        with pytest.raises(AuthenticationError) as exc_info:
            authenticator.authenticate()

        err = exc_info.value
        assert str(err) == "Invalid credentials: bad key"
        assert err.errors[0].code == 102
        assert err.context.http_status == 400

    def test_transport_failure(self, settings):
        """A network failure on the token endpoint is an AuthenticationError."""
        def refuse(request):
            raise httpx.ConnectError("refused", request=request)

        with httpx.Client(transport=httpx.MockTransport(refuse)) as client:
            with pytest.raises(AuthenticationError) as exc_info:
                Authenticator(settings, client).authenticate()
        assert isinstance(exc_info.value.cause, TransportError)

    def test_malformed_token_body(self, authenticator, fake_api):
        """A non-JSON or incomplete body is an AuthenticationError."""
        fake_api.add("POST", TOKEN_PATH, content=b"<html>oops</html>", prefix=False)
        with pytest.raises(AuthenticationError):
            authenticator.authenticate()

        fake_api.add("POST", TOKEN_PATH, {"token_type": "Bearer"}, prefix=False)
        with pytest.raises(AuthenticationError):
            authenticator.authenticate()

    def test_expired_deadline_stops_before_sending(self, authenticator, fake_api):
        """An expired deadline raises before the token request is sent."""
        with deadline(0):
            with pytest.raises(DeadlineExceededError):
                authenticator.authenticate()
        assert fake_api.token_requests == []

    def test_timeout_after_deadline_expiry(self, settings):
        """A token timeout once the deadline ran out is DeadlineExceededError."""
        def slow(request):
            time.sleep(0.2)
            raise httpx.ReadTimeout("slow", request=request)

        with httpx.Client(transport=httpx.MockTransport(slow)) as client:
            with deadline(0.1, operation="fetch_activity"):
                with pytest.raises(DeadlineExceededError) as exc_info:
                    Authenticator(settings, client).authenticate()
        assert exc_info.value.operation == "fetch_activity"
        assert isinstance(exc_info.value.cause, httpx.ReadTimeout)
        assert not isinstance(exc_info.value, AuthenticationError)

    def test_timeout_within_deadline(self, settings):
        """A token timeout with time left is still an AuthenticationError."""
        def slow(request):
            raise httpx.ReadTimeout("slow", request=request)

        with httpx.Client(transport=httpx.MockTransport(slow)) as client:
            with deadline(30.0):
                with pytest.raises(AuthenticationError) as exc_info:
                    Authenticator(settings, client).authenticate()
        assert isinstance(exc_info.value.cause, TransportError)
