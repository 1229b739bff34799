"""Forvo Pronounce -- fetch the best Forvo pronunciation for a word as an MP3.

Core modules:
    config     -- Runtime settings via pydantic-settings (FORVO_* env vars),
                  loguru setup, and the persisted per-user config record
                  (api key, Anki root, default collection) stored as JSON.
    cli        -- Click CLI entry point. CLI flags passed as kwargs to
                  ForvoSettings (no env pollution).
    runner     -- Single-word pipeline: normalize -> query -> select -> download.
    normalize  -- Strip combining marks (stress accents) from input words
    scoring    -- Deterministic best-record selection (first max wins)
    download   -- Streaming MP3 download to local storage
    ankiconnect -- AnkiConnect client for registering downloaded media (opt-in)

Subpackages:
    api -- Forvo API client (URL building, response parsing)
"""

__version__ = "0.1.3"
