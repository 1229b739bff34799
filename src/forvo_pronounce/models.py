"""Core record type and constants for Forvo pronunciation lookup.

PronunciationRecord -- one candidate recording parsed from a Forvo response.
                       The score is derived at construction and never changes.
"""

from dataclasses import dataclass, field

FORVO_API_BASE = "https://apifree.forvo.com"

# Target language is fixed; the tool only fetches Russian pronunciations
FORVO_LANGUAGE = "ru"

AUDIO_EXTENSION = ".mp3"

ANKICONNECT_URL = "http://localhost:8765"
ANKICONNECT_VERSION = 6

CONTRIBUTOR_BONUS = 2

# Contributors whose recordings get a score bonus. Exact, case-sensitive match.
RECOGNIZED_CONTRIBUTORS: frozenset[str] = frozenset(
    {
        "1640max",
        "Spinster",
        "szurzuncik",
        "ae5s",
        "Shady_arc",
        "zhivanova",
        "Selene71",
    }
)


def contributor_bonus(contributor_name: str) -> int:
    """Return the score bonus for a contributor (0 if not recognized)."""
    if contributor_name in RECOGNIZED_CONTRIBUTORS:
        return CONTRIBUTOR_BONUS
    return 0


@dataclass(frozen=True)
class PronunciationRecord:
    """A single Forvo pronunciation candidate.

    score = positive_vote_count + contributor bonus. id and hit_count are
    informational and play no part in selection.
    """

    id: int = 0
    hit_count: int = 0
    contributor_name: str = ""
    audio_url: str = ""
    positive_vote_count: int = 0
    score: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "score",
            self.positive_vote_count + contributor_bonus(self.contributor_name),
        )
