"""Pipeline runner -- one word from input text to an MP3 on disk."""

from dataclasses import dataclass, field
from pathlib import Path

import httpx
from loguru import logger

from .api.forvo import fetch_pronunciations
from .config import ForvoSettings
from .download import download_mp3
from .models import PronunciationRecord
from .normalize import strip_combining_marks
from .scoring import select_best

log = logger.bind(stage="runner")


@dataclass
class PipelineResult:
    """Outcome of one run. selected and file_path are None when Forvo had nothing."""

    word: str
    normalized_word: str
    candidates: list[PronunciationRecord] = field(default_factory=list)
    selected: PronunciationRecord | None = None
    file_path: Path | None = None

    @property
    def found(self) -> bool:
        return self.file_path is not None


def run_pipeline(
    word: str,
    api_key: str,
    download_dir: str | Path,
    client: httpx.Client | None = None,
    settings: ForvoSettings | None = None,
) -> PipelineResult:
    """Normalize, query, select and download the best pronunciation of `word`.

    Each call is independent. When no client is passed, a fresh one is
    opened for the two requests of this run and closed afterwards.
    TransferError from either network step propagates to the caller.
    """
    settings = settings or ForvoSettings(_env_file=None)
    normalized = strip_combining_marks(word)
    result = PipelineResult(word=word, normalized_word=normalized)

    owns_client = client is None
    if client is None:
        client = httpx.Client()
    try:
        result.candidates = fetch_pronunciations(
            api_key,
            normalized,
            client=client,
            timeout=settings.request_timeout,
        )
        result.selected = select_best(result.candidates)
        if result.selected is None:
            log.info(f"No pronunciation found for {normalized!r}")
            return result

        log.info(
            f"Downloading pronunciation by {result.selected.contributor_name or 'unknown'} "
            f"(score: {result.selected.score})"
        )
        result.file_path = download_mp3(
            result.selected.audio_url,
            download_dir,
            normalized,
            client=client,
            chunk_size=settings.chunk_size,
            timeout=settings.download_timeout,
        )
    finally:
        if owns_client:
            client.close()

    return result
