"""Tests for word list providers."""

from unittest.mock import Mock, patch

import pytest
import requests

from providers import FileWordListProvider, OnlineWordListProvider, WordListUnavailable


def make_response(text="", status_error=None):
    response = Mock()
    response.text = text
    if status_error is not None:
        response.raise_for_status.side_effect = status_error
    return response


class TestFileWordListProvider:
    """Test cases for loading words from disk."""

    def test_load(self, tmp_path):
        path = tmp_path / "words.txt"
        path.write_text("Apple\n\n please\n", encoding="utf-8")

        dictionary = FileWordListProvider(path).load()
        assert len(dictionary) == 2
        assert dictionary.contains("please")

    def test_load_is_cached(self, tmp_path):
        path = tmp_path / "words.txt"
        path.write_text("apple\n", encoding="utf-8")
        provider = FileWordListProvider(path)

        first = provider.load()
        path.write_text("pear\n", encoding="utf-8")
        assert provider.load() is first

    def test_missing_file(self, tmp_path):
        provider = FileWordListProvider(tmp_path / "missing.txt")
        with pytest.raises(WordListUnavailable):
            provider.load()


class TestOnlineWordListProvider:
    """Test cases for downloading the word list."""

    def setup_method(self):
        self.provider = OnlineWordListProvider("https://example.com/words.txt", max_retries=3)

    @patch("providers.time.sleep")
    @patch("providers.requests.get")
    def test_load(self, mock_get, mock_sleep):
        mock_get.return_value = make_response("ab\nBC\n\ncd\n")

        dictionary = self.provider.load()
        assert list(dictionary) == ["ab", "bc", "cd"]
        mock_get.assert_called_once_with("https://example.com/words.txt", timeout=10)
        mock_sleep.assert_not_called()

    @patch("providers.time.sleep")
    @patch("providers.requests.get")
    def test_load_downloads_once(self, mock_get, mock_sleep):
        mock_get.return_value = make_response("ab\n")

        first = self.provider.load()
        assert self.provider.load() is first
        assert mock_get.call_count == 1

        self.provider.clear_cache()
        self.provider.load()
        assert mock_get.call_count == 2

    @patch("providers.time.sleep")
    @patch("providers.requests.get")
    def test_retries_after_errors(self, mock_get, mock_sleep):
        mock_get.side_effect = [
            requests.exceptions.Timeout(),
            make_response(status_error=requests.exceptions.HTTPError("503")),
            make_response("ab\nbc\n"),
        ]

        assert self.provider.fetch() == "ab\nbc\n"
        assert mock_get.call_count == 3
        assert mock_sleep.call_count == 2

    @patch("providers.time.sleep")
    @patch("providers.requests.get")
    def test_empty_body_is_retried(self, mock_get, mock_sleep):
        mock_get.side_effect = [make_response("  \n"), make_response("ab\n")]
        assert self.provider.fetch() == "ab\n"

    @patch("providers.time.sleep")
    @patch("providers.requests.get")
    def test_gives_up_after_max_retries(self, mock_get, mock_sleep):
        mock_get.side_effect = requests.exceptions.ConnectionError("offline")

        assert self.provider.fetch() is None
        assert mock_get.call_count == 3
        # no sleep after the final attempt
        assert mock_sleep.call_count == 2

        with pytest.raises(WordListUnavailable):
            self.provider.load()

    @patch("providers.time.sleep")
    @patch("providers.requests.get")
    def test_backoff_is_capped(self, mock_get, mock_sleep):
        provider = OnlineWordListProvider(
            "https://example.com/words.txt", max_retries=6,
            backoff_base=1.0, backoff_factor=10.0, backoff_cap=2.0,
        )
        mock_get.side_effect = requests.exceptions.Timeout()

        assert provider.fetch() is None
        for call in mock_sleep.call_args_list:
            # cap plus at most 10% jitter
            assert call.args[0] <= 2.0 + 0.1 * 2.0
