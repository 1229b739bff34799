"""External API clients.

Submodules:
    forvo -- Forvo word-pronunciations query and response parsing
"""
