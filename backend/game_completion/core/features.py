# backend/game_completion/core/features.py
"""Feature flags the game module advertises to the host framework."""

from typing import Dict, Optional, Union

from .enums import ModuleFeature

SUPPORTED_FEATURES: Dict[ModuleFeature, bool] = {
    ModuleFeature.COMPLETION_TRACKS_VIEWS: True,
    ModuleFeature.COMPLETION_HAS_RULES: True,
    ModuleFeature.GRADE_HAS_GRADE: True,
    ModuleFeature.GRADE_OUTCOMES: False,
    ModuleFeature.BACKUP_MOODLE2: True,
    ModuleFeature.SHOW_DESCRIPTION: True,
    ModuleFeature.GROUPS: True,
}


def supports(feature: Union[ModuleFeature, str]) -> Optional[bool]:
    """
    Return whether the game module supports a framework feature.

    Unknown features return None so the framework can apply its own default.
    """
    try:
        key = ModuleFeature(feature)
    except ValueError:
        return None
    return SUPPORTED_FEATURES.get(key)
