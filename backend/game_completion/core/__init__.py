"""Core configuration, enums, and exceptions for the game completion package."""
