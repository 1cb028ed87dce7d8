"""Notification payloads delivered by FilterState and FilterController.

FieldChanged is scoped to one criterion and carries its new value, for
keeping bound widgets in sync. FilterChanged carries nothing: observers
re-read the criteria they need from the state.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldChanged:
    """Fired by FilterState after a criterion's stored value changed."""

    field: str
    value: object


@dataclass(frozen=True)
class FilterChanged:
    """Fired by FilterController when the filter should be re-applied."""
