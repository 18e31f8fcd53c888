"""Tests for shotgun_api.activity.attachments module."""

import threading

import httpx
import pytest

from shotgun_api.activity.attachments import AttachmentResolver
from shotgun_api.core.deadline import deadline
from shotgun_api.core.errors import DeadlineExceededError, DecodeError, RemoteError
from tests._support.payloads import attachment


class TestResolveUrl:
    """Test single lookups."""

    def test_ok(self, gateway, fake_api):
        """A file URL comes back as Ok."""
        fake_api.add("GET", "/entity/Attachment/11", attachment(11, "https://cdn/frame.png"))

        result = AttachmentResolver(gateway).resolve_url(11)

        assert result.is_ok()
        assert result.unwrap() == "https://cdn/frame.png"
        (request,) = fake_api.calls("GET", "/entity/Attachment/11")
        assert request.url.params["fields"] == "id,this_file,name"

    def test_remote_error_is_err(self, gateway):
        """A 404 becomes Err, never an exception."""
        result = AttachmentResolver(gateway).resolve_url(404)
        assert result.is_err()
        assert isinstance(result.error, RemoteError)

    def test_missing_file_is_err(self, gateway, fake_api):
        """An Attachment without a file URL is Err(DecodeError)."""
        fake_api.add("GET", "/entity/Attachment/12", attachment(12, None))
        result = AttachmentResolver(gateway).resolve_url(12)
        assert isinstance(result.error, DecodeError)
        assert result.error.context.entity_id == 12

    def test_malformed_record_is_err(self, gateway, fake_api):
        """A record that fails validation is Err."""
        fake_api.add("GET", "/entity/Attachment/13", {"data": {"attributes": {}}})
        assert isinstance(AttachmentResolver(gateway).resolve_url(13).error, DecodeError)

    def test_deadline_propagates(self, gateway):
        """An expired deadline is fatal, not an Err."""
        with deadline(0):
            with pytest.raises(DeadlineExceededError):
                AttachmentResolver(gateway).resolve_url(11)


class TestResolveUrls:
    """Test batch lookups."""

    def test_rejects_zero_workers(self, gateway):
        """At least one worker is required."""
        with pytest.raises(ValueError):
            AttachmentResolver(gateway, max_workers=0)

    def test_sequential_order(self, gateway, fake_api):
        """Results follow input order, failures in place."""
        fake_api.add("GET", "/entity/Attachment/1", attachment(1, "https://cdn/1"))
        fake_api.add("GET", "/entity/Attachment/3", attachment(3, "https://cdn/3"))

        results = AttachmentResolver(gateway).resolve_urls([3, 2, 1])

        assert [r.unwrap_or(None) for r in results] == ["https://cdn/3", None, "https://cdn/1"]

    def test_empty(self, gateway):
        """No ids, no results."""
        assert AttachmentResolver(gateway, max_workers=4).resolve_urls([]) == []

    def test_thread_pool_preserves_order(self, gateway, fake_api):
        """Pooled lookups still return results in input order."""
        threads = set()

        def handler(request):
            threads.add(threading.get_ident())
            attachment_id = int(request.url.path.rsplit("/", 1)[-1])
            return httpx.Response(200, json=attachment(attachment_id, f"https://cdn/{attachment_id}"))

        ids = [5, 1, 4, 2, 3]
        for attachment_id in ids:
            fake_api.add("GET", f"/entity/Attachment/{attachment_id}", handler=handler)

        results = AttachmentResolver(gateway, max_workers=3).resolve_urls(ids)

        assert [r.unwrap() for r in results] == [f"https://cdn/{i}" for i in ids]
        assert threading.get_ident() not in threads

    def test_thread_pool_sees_deadline(self, gateway):
        """Worker threads inherit the caller's deadline scope."""
        with deadline(0):
            with pytest.raises(DeadlineExceededError):
                AttachmentResolver(gateway, max_workers=2).resolve_urls([1, 2])
