"""Module-wide constants for the game activity."""

from __future__ import annotations

# Frankenstyle component name used for string lookups and grade items
COMPONENT_NAME = "game"
ITEM_TYPE_MOD = "mod"

# Grade item number used by the main activity grade
DEFAULT_GRADE_ITEM_NUMBER = 0

# Attempts
UNLIMITED_ATTEMPTS = 0

# String keys
STRING_KEY_COMPLETION_PASS = "completiondetail_pass"
STRING_KEY_COMPLETION_ATTEMPTS_EXHAUSTED = "completiondetail_attemptsexhausted"

DEFAULT_LANGUAGE = "en"
