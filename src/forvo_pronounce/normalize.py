"""Word normalization before querying Forvo."""

import unicodedata

from loguru import logger

log = logger.bind(stage="normalize")


def strip_combining_marks(word: str) -> str:
    """Remove nonspacing combining marks (category Mn) from a word.

    Used to drop stress accents from Russian words: "многоба́йтовый" becomes
    "многобайтовый". Precomposed letters (й, ё) are left alone since no
    decomposition is applied.
    """
    stripped = "".join(ch for ch in word if unicodedata.category(ch) != "Mn")
    if stripped != word:
        log.debug(f"strip_combining_marks: {word!r} -> {stripped!r}")
    return stripped
