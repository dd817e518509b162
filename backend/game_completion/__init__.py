"""
Custom completion rules for the game activity module.

Decides, for a learner and a game instance, whether the "pass grade" and
"attempts exhausted" completion conditions are met.
"""

__version__ = "1.0.0"
