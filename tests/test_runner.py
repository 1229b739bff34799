"""Tests for runner.py -- single-word pipeline with a mocked Forvo."""

import httpx
import pytest

from forvo_pronounce.api.forvo import build_query_url
from forvo_pronounce.errors import TransferError
from forvo_pronounce.runner import run_pipeline

AUDIO = b"ID3 fake mp3 body"


def _forvo(items, audio_status=200, query_status=200, requests=None):
    """MockTransport that serves a Forvo query and the audio files it lists."""

    def handler(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(str(request.url))
        if request.url.host == "apifree.forvo.com":
            if query_status != 200:
                return httpx.Response(query_status)
            return httpx.Response(200, json={"attributes": {}, "items": items})
        return httpx.Response(audio_status, content=AUDIO)

    return httpx.Client(transport=httpx.MockTransport(handler))


ITEMS = [
    {
        "id": 1,
        "hits": 10,
        "username": "another_user",
        "pathmp3": "https://audio.test/plain.mp3",
        "num_positive_votes": 4,
    },
    {
        "id": 2,
        "hits": 3,
        "username": "Spinster",
        "pathmp3": "https://audio.test/spinster.mp3",
        "num_positive_votes": 3,
    },
]


class TestRunPipeline:
    def test_downloads_best(self, tmp_path):
        seen = []
        with _forvo(ITEMS, requests=seen) as client:
            result = run_pipeline("многоба́йтовый", "key", tmp_path, client=client)

        assert result.found
        assert result.normalized_word == "многобайтовый"
        assert result.selected.id == 2  # 3 votes + 2 bonus beats 4
        assert result.file_path == (tmp_path / "многобайтовый.mp3").resolve()
        assert result.file_path.read_bytes() == AUDIO
        assert seen[0] == str(httpx.URL(build_query_url("key", "многобайтовый")))
        assert seen[1] == "https://audio.test/spinster.mp3"

    def test_keeps_all_candidates(self, tmp_path):
        with _forvo(ITEMS) as client:
            result = run_pipeline("word", "key", tmp_path, client=client)
        assert [c.id for c in result.candidates] == [1, 2]

    def test_nothing_found_makes_no_audio_request(self, tmp_path):
        seen = []
        with _forvo([], requests=seen) as client:
            result = run_pipeline("word", "key", tmp_path / "out", client=client)

        assert not result.found
        assert result.selected is None
        assert result.file_path is None
        assert len(seen) == 1
        assert not (tmp_path / "out").exists()

    def test_query_failure_propagates(self, tmp_path):
        with _forvo(ITEMS, query_status=500) as client:
            with pytest.raises(TransferError) as exc_info:
                run_pipeline("word", "key", tmp_path, client=client)
        assert exc_info.value.status_code == 500

    def test_audio_failure_propagates(self, tmp_path):
        with _forvo(ITEMS, audio_status=404) as client:
            with pytest.raises(TransferError) as exc_info:
                run_pipeline("word", "key", tmp_path, client=client)
        assert exc_info.value.status_code == 404
        assert not (tmp_path / "word.mp3").exists()

    def test_selected_without_audio_url(self, tmp_path):
        items = [{"id": 7, "username": "1640max", "num_positive_votes": 1}]
        with _forvo(items) as client:
            with pytest.raises(TransferError, match="No audio URL"):
                run_pipeline("word", "key", tmp_path, client=client)
