# backend/game_completion/services/strings.py
"""
Localized strings for the game module.

Keep strings in code for versioning and review. A missing key never raises;
it renders as [[key]] so the gap is visible without breaking the page.
"""

from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional

from ..core.constants import (
    DEFAULT_LANGUAGE,
    STRING_KEY_COMPLETION_ATTEMPTS_EXHAUSTED,
    STRING_KEY_COMPLETION_PASS,
)

logger = logging.getLogger(__name__)

STRINGS: Dict[str, Dict[str, str]] = {
    "en": {
        STRING_KEY_COMPLETION_PASS: "Receive a pass grade",
        STRING_KEY_COMPLETION_ATTEMPTS_EXHAUSTED: "Complete all available attempts",
        "completionpass": "Require passing grade",
        "completionpass_help": "If enabled, this activity is considered complete when the student receives a pass grade.",
        "completionattemptsexhausted": "Require all available attempts completed",
        "completionattemptsexhausted_help": "If enabled, the activity is considered complete when the student has used all allowed attempts.",
        "modulename": "Game",
    },
    "el": {
        STRING_KEY_COMPLETION_PASS: "Λάβετε βαθμό επιτυχίας",
        STRING_KEY_COMPLETION_ATTEMPTS_EXHAUSTED: "Ολοκληρώστε όλες τις διαθέσιμες προσπάθειες",
        "modulename": "Παιχνίδι",
    },
}


class StringManager:
    """Resolve string keys for one language, falling back to English."""

    def __init__(
        self,
        language: str = DEFAULT_LANGUAGE,
        catalog: Optional[Mapping[str, Mapping[str, str]]] = None,
    ):
        self.language = language
        self.catalog = catalog if catalog is not None else STRINGS

    def get_string(self, key: str) -> str:
        for language in (self.language, DEFAULT_LANGUAGE):
            value = self.catalog.get(language, {}).get(key)
            if value is not None:
                return value

        logger.debug("Missing string '%s' for language '%s'", key, self.language)
        return f"[[{key}]]"
