"""
Unit tests for download module.

Tests download functionality with mocked network requests.
"""

import logging

import pytest
import requests
import responses
from unittest.mock import Mock, patch

from steptools.core.download import download_file
from steptools.core.exceptions import (
    CopyError,
    DownloadError,
    FileCreateError,
    NetworkError,
)

URL = "https://example.com/tool"


def _leftover_temp_files(directory):
    return [p for p in directory.iterdir() if p.name.endswith(".tmp")]


class TestDownloadFile:
    """Test download_file function."""

    @responses.activate
    def test_simple_download(self, tmp_path):
        """Test downloaded file is byte-identical to the payload."""
        content = bytes(range(256)) * 100
        destination = tmp_path / "tool"

        responses.add(responses.GET, URL, body=content, status=200)

        result = download_file(URL, destination)

        assert result == destination
        assert destination.read_bytes() == content
        assert _leftover_temp_files(tmp_path) == []

    @responses.activate
    def test_overwrites_existing_file(self, tmp_path):
        destination = tmp_path / "tool"
        destination.write_bytes(b"old content that is longer than the new one")

        responses.add(responses.GET, URL, body=b"new", status=200)

        download_file(URL, destination)

        assert destination.read_bytes() == b"new"

    @responses.activate
    def test_accepts_string_destination(self, tmp_path):
        responses.add(responses.GET, URL, body=b"data", status=200)

        result = download_file(URL, str(tmp_path / "tool"))

        assert result == tmp_path / "tool"

    @responses.activate
    def test_small_chunk_size(self, tmp_path):
        content = b"x" * 1000
        responses.add(responses.GET, URL, body=content, status=200)

        download_file(URL, tmp_path / "tool", chunk_size=7)

        assert (tmp_path / "tool").read_bytes() == content

    @responses.activate
    def test_unreachable_url_raises_network_error(self, tmp_path):
        """Test connection failure (no registered response) maps to NetworkError."""
        destination = tmp_path / "tool"

        with pytest.raises(NetworkError) as exc_info:
            download_file("https://unreachable.invalid/tool", destination)

        assert exc_info.value.url == "https://unreachable.invalid/tool"
        assert isinstance(exc_info.value.__cause__, requests.exceptions.ConnectionError)
        assert not destination.exists()
        assert _leftover_temp_files(tmp_path) == []

    @responses.activate
    def test_network_error_keeps_previous_file(self, tmp_path):
        destination = tmp_path / "tool"
        destination.write_bytes(b"previous")

        responses.add(
            responses.GET, URL, body=requests.exceptions.ConnectionError("refused")
        )

        with pytest.raises(NetworkError):
            download_file(URL, destination)

        assert destination.read_bytes() == b"previous"

    @responses.activate
    def test_http_404_error(self, tmp_path):
        """Test handles HTTP 404 error."""
        responses.add(responses.GET, URL, status=404)

        with pytest.raises(NetworkError, match="404"):
            download_file(URL, tmp_path / "tool")

        assert not (tmp_path / "tool").exists()

    @responses.activate
    def test_http_500_is_download_error(self, tmp_path):
        responses.add(responses.GET, URL, status=500)

        with pytest.raises(DownloadError):
            download_file(URL, tmp_path / "tool")

    @responses.activate
    def test_no_retry(self, tmp_path):
        """Test a failed request is attempted exactly once."""
        responses.add(responses.GET, URL, status=503)

        with pytest.raises(NetworkError):
            download_file(URL, tmp_path / "tool")

        assert len(responses.calls) == 1

    @responses.activate
    def test_create_error_before_request(self, tmp_path):
        """Test no request is made when the local file cannot be created."""
        destination = tmp_path / "missing-dir" / "tool"
        responses.add(responses.GET, URL, body=b"data", status=200)

        with pytest.raises(FileCreateError) as exc_info:
            download_file(URL, destination)

        assert exc_info.value.path == destination
        assert len(responses.calls) == 0
        assert not destination.exists()

    @responses.activate
    def test_directory_destination_before_request(self, tmp_path):
        """Test a directory destination fails as a create error without a request."""
        destination = tmp_path / "tool"
        destination.mkdir()
        responses.add(responses.GET, URL, body=b"data", status=200)

        with pytest.raises(FileCreateError) as exc_info:
            download_file(URL, destination)

        assert exc_info.value.path == destination
        assert len(responses.calls) == 0
        assert destination.is_dir()
        assert list(tmp_path.iterdir()) == [destination]

    def test_copy_error_midstream(self, tmp_path):
        """Test a broken stream maps to CopyError and leaves nothing behind."""
        destination = tmp_path / "tool"

        def broken_stream(chunk_size):
            yield b"partial"
            raise requests.exceptions.ChunkedEncodingError("connection reset")

        response = Mock()
        response.iter_content.side_effect = broken_stream
        session = Mock()
        session.get.return_value = response

        with pytest.raises(CopyError) as exc_info:
            download_file(URL, destination, session=session)

        assert exc_info.value.url == URL
        assert exc_info.value.path == destination
        assert not destination.exists()
        assert _leftover_temp_files(tmp_path) == []
        response.close.assert_called_once()

    def test_uses_session_with_timeout(self, tmp_path):
        response = Mock()
        response.iter_content.return_value = iter([b"abc", b"", b"def"])
        session = Mock()
        session.get.return_value = response

        download_file(URL, tmp_path / "tool", timeout=12, session=session)

        session.get.assert_called_once_with(URL, stream=True, timeout=12)
        assert (tmp_path / "tool").read_bytes() == b"abcdef"

    def test_close_failure_is_only_logged(self, tmp_path, caplog):
        response = Mock()
        response.iter_content.return_value = iter([b"data"])
        response.close.side_effect = OSError("close failed")
        session = Mock()
        session.get.return_value = response

        with caplog.at_level(logging.WARNING, logger="steptools.core.download"):
            result = download_file(URL, tmp_path / "tool", session=session)

        assert result.read_bytes() == b"data"
        assert "Failed to close" in caplog.text

    def test_rename_failure_is_copy_error(self, tmp_path):
        response = Mock()
        response.iter_content.return_value = iter([b"data"])
        session = Mock()
        session.get.return_value = response

        with patch("pathlib.Path.replace", side_effect=OSError("cross-device")):
            with pytest.raises(CopyError):
                download_file(URL, tmp_path / "tool", session=session)

        assert _leftover_temp_files(tmp_path) == []

    def test_empty_url_raises_valueerror(self, tmp_path):
        """Test empty URL raises ValueError."""
        with pytest.raises(ValueError, match="URL cannot be empty"):
            download_file("", tmp_path / "tool")

    def test_empty_destination_raises_valueerror(self):
        """Test empty destination raises ValueError."""
        with pytest.raises(ValueError, match="Destination path cannot be empty"):
            download_file(URL, None)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
