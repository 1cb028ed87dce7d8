"""Filter actions and the policy table FilterController executes.

Each user-facing interaction is one Action. Its ActionPolicy says which
writes it performs on the FilterState and whether it then emits the
coalesced FilterChanged. Commit actions write nothing: their field was
already updated live by the bound widget, and the action only marks the
edit as finished. Toggle actions flip their flag and emit in one step.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from vocabfilter.state import FilterState


class Action(str, Enum):
    """User interactions the filter responds to."""

    COMMIT_READING = "commit_reading"
    COMMIT_MEANING = "commit_meaning"
    COMMIT_CATEGORY = "commit_category"
    CLEAR_CATEGORY = "clear_category"
    TOGGLE_COMMON_FIRST = "toggle_common_first"
    TOGGLE_SHORT_READING_FIRST = "toggle_short_reading_first"
    COMMIT_LEVELS = "commit_levels"

    @classmethod
    def from_name(cls, name: str) -> Action:
        """Resolve an action from its value, dashed value or member name.

        Raises:
            ValueError: If *name* matches no action.
        """
        key = name.strip().lower().replace("-", "_")
        try:
            return cls(key)
        except ValueError:
            valid = ", ".join(a.value for a in cls)
            raise ValueError(f"Unknown filter action: {name!r}. Valid actions: {valid}") from None


@dataclass(frozen=True)
class ActionPolicy:
    """Table entry: the writes an action makes and whether it emits."""

    description: str
    effect: Callable[["FilterState"], None] | None = None
    emits: bool = True


@dataclass(frozen=True)
class ActionResult:
    """Outcome of FilterController.apply()."""

    action: Action
    changed_fields: tuple[str, ...]
    emitted: bool


def _clear_category(state: FilterState) -> None:
    state.category = None


def _toggle_common_first(state: FilterState) -> None:
    state.toggle("common_first")


def _toggle_short_reading_first(state: FilterState) -> None:
    state.toggle("short_reading_first")


ACTION_TABLE: dict[Action, ActionPolicy] = {
    Action.COMMIT_READING: ActionPolicy("Validate the reading filter"),
    Action.COMMIT_MEANING: ActionPolicy("Validate the meaning filter"),
    Action.COMMIT_CATEGORY: ActionPolicy("Validate the category filter"),
    Action.CLEAR_CATEGORY: ActionPolicy("Clear the category filter", _clear_category),
    Action.TOGGLE_COMMON_FIRST: ActionPolicy(
        "Switch the common-first order", _toggle_common_first
    ),
    Action.TOGGLE_SHORT_READING_FIRST: ActionPolicy(
        "Switch the reading-length order", _toggle_short_reading_first
    ),
    Action.COMMIT_LEVELS: ActionPolicy("Validate the JLPT and WaniKani level filters"),
}
