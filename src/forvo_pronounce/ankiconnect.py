"""AnkiConnect client for registering downloaded media with Anki.

AnkiConnect is an Anki add-on that listens on localhost:8765 and accepts
JSON envelopes of the form {"action", "params", "version"}. Only the
storeMediaFile action is used here. Not part of the default download flow;
the CLI calls it when --store-media is passed.
"""

from pathlib import Path
from typing import Any

import httpx
from loguru import logger

from .errors import CollectionError
from .models import ANKICONNECT_URL, ANKICONNECT_VERSION

log = logger.bind(stage="anki")


def invoke(
    action: str,
    params: dict[str, Any],
    url: str = ANKICONNECT_URL,
    client: httpx.Client | None = None,
    timeout: float = 30.0,
) -> Any:
    """Send one AnkiConnect request and return its `result` field.

    Raises CollectionError when Anki is unreachable, answers with something
    other than JSON, or reports a non-empty `error`.
    """
    payload = {"action": action, "params": params, "version": ANKICONNECT_VERSION}
    log.debug(f"AnkiConnect {action}: {params}")

    post = client.post if client is not None else httpx.post
    try:
        resp = post(url, json=payload, timeout=timeout)
        resp.raise_for_status()
        data = resp.json()
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise CollectionError(f"AnkiConnect request failed: {e}") from e
    except ValueError as e:
        raise CollectionError(f"AnkiConnect returned invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise CollectionError(f"Unexpected AnkiConnect response: {data!r}")

    error = data.get("error")
    if isinstance(error, str) and error:
        log.warning(f"AnkiConnect {action} failed: {error}")
        raise CollectionError(f"Error from AnkiConnect: {error}")

    return data.get("result")


def store_media_file(mp3_path: Path, **kwargs: Any) -> Any:
    """Ask Anki to copy a local file into the collection's media folder.

    Returns the stored filename as reported by AnkiConnect.
    """
    mp3_path = Path(mp3_path).resolve()
    result = invoke(
        "storeMediaFile",
        {"filename": mp3_path.name, "path": str(mp3_path)},
        **kwargs,
    )
    log.info(f"Stored {mp3_path.name} in Anki media")
    return result
