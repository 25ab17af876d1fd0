"""Core engine package for the Kabo card game."""

__all__ = [
    "cards",
    "deck",
    "player",
    "errors",
    "events",
    "rules_schema",
    "pregame",
    "game",
    "actions",
    "service",
]
