"""Evaluation mode for multi-permission checks."""

from enum import StrEnum


class EvaluationMode(StrEnum):
    """How requested permission names combine into one decision."""

    ALL = "all"
    ANY = "any"
