"""Best-pronunciation selection."""

from collections.abc import Iterable

from loguru import logger

from .models import PronunciationRecord

log = logger.bind(stage="scoring")


def select_best(records: Iterable[PronunciationRecord]) -> PronunciationRecord | None:
    """Return the highest-scoring record, or None when there are none.

    Ties go to the earliest record: the scan only replaces the current best
    on a strictly greater score. Do not swap this for sorted(...)[-1], which
    would hand ties to the last record instead.
    """
    best: PronunciationRecord | None = None
    for record in records:
        if best is None or record.score > best.score:
            best = record

    if best is None:
        log.debug("No candidates to select from")
    else:
        log.debug(
            f"Best match: id={best.id} user={best.contributor_name!r} score={best.score}"
        )
    return best
