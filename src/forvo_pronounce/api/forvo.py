"""Forvo word-pronunciations client.

Builds the query URL, fetches it, and turns the JSON payload into
PronunciationRecord values. Parsing is tolerant: the shape of Forvo
responses is not guaranteed, so malformed fields fall back to defaults
instead of raising.
"""

from typing import Any

import httpx
from loguru import logger

from ..errors import TransferError
from ..models import FORVO_API_BASE, FORVO_LANGUAGE, PronunciationRecord

log = logger.bind(stage="forvo")


def build_query_url(api_key: str, word: str) -> str:
    """Build the word-pronunciations URL. Key and word are inserted verbatim."""
    return (
        f"{FORVO_API_BASE}/key/{api_key}/format/json"
        f"/action/word-pronunciations/word/{word}/language/{FORVO_LANGUAGE}"
    )


def fetch_pronunciations(
    api_key: str,
    word: str,
    client: httpx.Client | None = None,
    timeout: float = 30.0,
) -> list[PronunciationRecord]:
    """Query Forvo for a (normalized) word and return parsed records.

    Raises TransferError on a non-success status, a transport failure,
    or a body that is not JSON. An unexpected JSON shape is not an error;
    it yields an empty list.
    """
    url = build_query_url(api_key, word)
    log.debug(f"Forvo query: word={word!r}")

    get = client.get if client is not None else httpx.get
    try:
        resp = get(url, timeout=timeout)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        log.warning(f"Forvo request failed for {word!r}: {e}")
        raise TransferError(f"Forvo request failed: {e}", url=url) from e

    if not resp.is_success:
        log.warning(f"Forvo returned HTTP {resp.status_code} for {word!r}")
        raise TransferError(
            f"Request failed with status: {resp.status_code}",
            url=url,
            status_code=resp.status_code,
        )

    try:
        data = resp.json()
    except ValueError as e:
        raise TransferError(f"Forvo returned invalid JSON: {e}", url=url) from e

    if isinstance(data, dict) and data.get("error"):
        log.warning(f"Forvo API error for {word!r}: {data['error']}")

    records = parse_pronunciations(data)
    log.debug(f"Forvo results: {len(records)} pronunciations")
    return records


def parse_pronunciations(payload: Any) -> list[PronunciationRecord]:
    """Parse the top-level `items` list, preserving order.

    Anything other than a dict with an `items` list yields [].
    """
    if not isinstance(payload, dict):
        return []
    items = payload.get("items")
    if not isinstance(items, list):
        return []
    return [parse_pronunciation_item(item) for item in items]


def parse_pronunciation_item(item: Any) -> PronunciationRecord:
    """Build a record from one response item, defaulting each bad field."""
    if not isinstance(item, dict):
        item = {}
    return PronunciationRecord(
        id=_int_field(item, "id"),
        hit_count=_int_field(item, "hits"),
        contributor_name=_str_field(item, "username"),
        audio_url=_str_field(item, "pathmp3"),
        positive_vote_count=_int_field(item, "num_positive_votes"),
    )


def _int_field(item: dict, key: str) -> int:
    # bool is an int subclass but not a JSON integer
    value = item.get(key)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return 0


def _str_field(item: dict, key: str) -> str:
    value = item.get(key)
    return value if isinstance(value, str) else ""
