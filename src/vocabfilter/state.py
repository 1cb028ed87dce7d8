"""Observable filter state with equality-gated, per-field notifications.

FilterState owns a private FilterCriteria. Each property setter stores the
new value only when it differs from the current one and then emits a
FieldChanged on ``field_changes``. Bound widgets that push back the value
they were just given therefore cause no further notifications.

Writes made from inside a notification handler are not dispatched
re-entrantly: they join a FIFO queue that is drained once the current
dispatch returns. Callbacks registered with ``enqueue()`` share that queue,
which is how FilterController orders its coalesced notification behind
the writes of the same action.
"""

from __future__ import annotations

from collections import deque
from functools import partial
from typing import Callable

from reactivex import Observable
from reactivex import operators as ops
from reactivex.abc import DisposableBase
from reactivex.subject import Subject

from vocabfilter.messages import FieldChanged
from vocabfilter.models import FILTER_FIELDS, Category, FilterCriteria
from vocabfilter.telemetry import get_telemetry

_FLAG_FIELDS = ("common_first", "short_reading_first")


class FilterState:
    """Typed, observable accessors over one FilterCriteria value."""

    def __init__(self, criteria: FilterCriteria | None = None) -> None:
        self._criteria = criteria.copy() if criteria is not None else FilterCriteria()
        self._field_subject: Subject[FieldChanged] = Subject()
        self._pending: deque[Callable[[], None]] = deque()
        self._dispatching = False

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    @property
    def field_changes(self) -> Observable[FieldChanged]:
        """Observable of every FieldChanged, in dispatch order."""
        return self._field_subject

    def subscribe(
        self,
        handler: Callable[[FieldChanged], None],
        field: str | None = None,
    ) -> DisposableBase:
        """Register *handler* for changes to *field*, or to every field.

        Returns:
            Subscription handle; ``dispose()`` it to unsubscribe.

        Raises:
            ValueError: If *field* is not a FilterCriteria field name.
        """
        if field is None:
            return self._field_subject.subscribe(on_next=handler)
        if field not in FILTER_FIELDS:
            raise ValueError(
                f"Unknown filter field: {field!r}. Valid fields: {', '.join(FILTER_FIELDS)}"
            )
        return self._field_subject.pipe(
            ops.filter(lambda event: event.field == field),
        ).subscribe(on_next=handler)

    @property
    def is_dispatching(self) -> bool:
        """True while notifications are being delivered."""
        return self._dispatching

    def snapshot(self) -> FilterCriteria:
        """Return a copy of the current criteria for collaborators."""
        return self._criteria.copy()

    def enqueue(self, callback: Callable[[], None]) -> None:
        """Run *callback* once every queued write has been dispatched."""
        self._pending.append(callback)
        self._drain()

    # ------------------------------------------------------------------
    # Criteria accessors
    # ------------------------------------------------------------------

    @property
    def reading_text(self) -> str:
        """Reading (kana/kanji) text the vocab list is filtered on."""
        return self._criteria.reading_text

    @reading_text.setter
    def reading_text(self, value: str) -> None:
        self._write("reading_text", value)

    @property
    def meaning_text(self) -> str:
        """Meaning text the vocab list is filtered on."""
        return self._criteria.meaning_text

    @meaning_text.setter
    def meaning_text(self, value: str) -> None:
        self._write("meaning_text", value)

    @property
    def category(self) -> Category | None:
        """Category the vocab list is restricted to, or None for all."""
        return self._criteria.category

    @category.setter
    def category(self, value: Category | None) -> None:
        self._write("category", value)

    @property
    def jlpt_level(self) -> int:
        """JLPT level bound; NO_LEVEL when unconstrained."""
        return self._criteria.jlpt_level

    @jlpt_level.setter
    def jlpt_level(self, value: int) -> None:
        self._write("jlpt_level", value)

    @property
    def wk_level(self) -> int:
        """WaniKani level bound; NO_LEVEL when unconstrained."""
        return self._criteria.wk_level

    @wk_level.setter
    def wk_level(self, value: int) -> None:
        self._write("wk_level", value)

    @property
    def common_first(self) -> bool:
        """Whether common vocab sorts before the less common results."""
        return self._criteria.common_first

    @common_first.setter
    def common_first(self, value: bool) -> None:
        self._write("common_first", value)

    @property
    def short_reading_first(self) -> bool:
        """Whether vocab sorts by ascending reading length."""
        return self._criteria.short_reading_first

    @short_reading_first.setter
    def short_reading_first(self, value: bool) -> None:
        self._write("short_reading_first", value)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def toggle(self, name: str) -> None:
        """Negate the boolean field *name* as a single queued write.

        The current value is read when the write is applied, not when it
        is queued, so two toggles issued during one dispatch cancel out.

        Raises:
            ValueError: If *name* is not a boolean ordering field.
        """
        if name not in _FLAG_FIELDS:
            raise ValueError(f"Not a toggleable filter field: {name!r}")
        self._pending.append(lambda: self._apply(name, not getattr(self._criteria, name)))
        self._drain()

    def _write(self, name: str, value: object) -> None:
        if self._dispatching:
            get_telemetry().log.debug(f"filter write queued field={name} value={value!r}")
        self._pending.append(partial(self._apply, name, value))
        self._drain()

    def _apply(self, name: str, value: object) -> None:
        if getattr(self._criteria, name) == value:
            return
        setattr(self._criteria, name, value)
        get_telemetry().log.debug(f"filter field changed field={name} value={value!r}")
        self._field_subject.on_next(FieldChanged(field=name, value=value))

    def _drain(self) -> None:
        if self._dispatching:
            return
        self._dispatching = True
        try:
            while self._pending:
                self._pending.popleft()()
        finally:
            self._dispatching = False
            self._pending.clear()

    def __repr__(self) -> str:
        return f"FilterState({self._criteria!r})"
