"""Enums for model fields."""

from enum import StrEnum


class AltTextStyle(StrEnum):
    """Writing style a store has chosen for generated alt text."""

    CONCISE = "concise"
    BALANCED = "balanced"
    DETAILED = "detailed"


class AltTextStatus(StrEnum):
    """Lifecycle of a locally stored alt text."""

    GENERATED = "GENERATED"
    APPLIED = "APPLIED"


class UsageAction(StrEnum):
    """What a usage record was charged for."""

    GENERATE_BULK = "GENERATE_BULK"
    AUTO_PROCESS = "AUTO_PROCESS"
