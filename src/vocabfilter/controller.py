"""FilterController: named filter actions and the coalesced notification.

The controller is a stateless dispatcher over a FilterState. Each action
looks up its ActionPolicy, applies the policy's writes (which notify field
observers on their own) and then emits one payload-free FilterChanged.
That notification is what downstream query code listens to, so it is
raised only when the user finishes an edit, never per keystroke.
"""

from __future__ import annotations

from typing import Callable

from reactivex import Observable
from reactivex.abc import DisposableBase
from reactivex.subject import Subject

from vocabfilter.actions import ACTION_TABLE, Action, ActionResult
from vocabfilter.messages import FilterChanged
from vocabfilter.models import FilterCriteria
from vocabfilter.state import FilterState
from vocabfilter.telemetry import get_telemetry


class FilterController:
    """One entry point per filter interaction.

    Example:
        >>> controller = FilterController(FilterCriteria())
        >>> sub = controller.subscribe(lambda _: print(controller.state.common_first))
        >>> result = controller.toggle_common_first()
        True
    """

    def __init__(self, state: FilterState | FilterCriteria | None = None) -> None:
        if isinstance(state, FilterState):
            self._state = state
        else:
            self._state = FilterState(state)
        self._filter_subject: Subject[FilterChanged] = Subject()

    @property
    def state(self) -> FilterState:
        """The FilterState this controller writes to."""
        return self._state

    @property
    def filter_changed(self) -> Observable[FilterChanged]:
        """Observable of coalesced FilterChanged notifications."""
        return self._filter_subject

    def subscribe(self, handler: Callable[[FilterChanged], None]) -> DisposableBase:
        """Register *handler* for coalesced notifications.

        Returns:
            Subscription handle; ``dispose()`` it to unsubscribe.
        """
        return self._filter_subject.subscribe(on_next=handler)

    def apply(self, action: Action) -> ActionResult:
        """Execute *action* according to its entry in ACTION_TABLE."""
        policy = ACTION_TABLE[action]
        tel = get_telemetry()
        with tel.span("filter.action") as span:
            span.set_attribute("action.name", action.value)
            before = self._state.snapshot()
            if policy.effect is not None:
                policy.effect(self._state)
            changed = before.diff(self._state.snapshot())
            if policy.emits:
                # Queued behind this action's writes when called re-entrantly.
                self._state.enqueue(self._emit_filter_changed)
            span.set_attribute("action.changed_fields", list(changed))
            span.set_attribute("action.emitted", policy.emits)
            tel.log.info(
                f"filter action action={action.value} changed={list(changed)} "
                f"emitted={policy.emits}"
            )
        return ActionResult(action=action, changed_fields=changed, emitted=policy.emits)

    def _emit_filter_changed(self) -> None:
        get_telemetry().log.info(
            f"filter changed filters={self._state.snapshot().to_filter_strings()}"
        )
        self._filter_subject.on_next(FilterChanged())

    # ------------------------------------------------------------------
    # Named actions
    # ------------------------------------------------------------------

    def commit_reading(self) -> ActionResult:
        """Validate the reading filter typed so far."""
        return self.apply(Action.COMMIT_READING)

    def commit_meaning(self) -> ActionResult:
        """Validate the meaning filter typed so far."""
        return self.apply(Action.COMMIT_MEANING)

    def commit_category(self) -> ActionResult:
        """Validate the selected category."""
        return self.apply(Action.COMMIT_CATEGORY)

    def clear_category(self) -> ActionResult:
        """Remove the category constraint and re-apply the filter."""
        return self.apply(Action.CLEAR_CATEGORY)

    def toggle_common_first(self) -> ActionResult:
        """Switch the "common first" order."""
        return self.apply(Action.TOGGLE_COMMON_FIRST)

    def toggle_short_reading_first(self) -> ActionResult:
        """Switch the reading-length order."""
        return self.apply(Action.TOGGLE_SHORT_READING_FIRST)

    def commit_levels(self) -> ActionResult:
        """Validate the JLPT and WaniKani level bounds."""
        return self.apply(Action.COMMIT_LEVELS)
