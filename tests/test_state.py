"""Tests for FilterState: dedup, independence, ownership and re-entrancy."""

from __future__ import annotations

import pytest

from vocabfilter.messages import FieldChanged
from vocabfilter.models import Category, FilterCriteria
from vocabfilter.state import FilterState

from conftest import Recorder

FIELD_VALUES = [
    ("reading_text", "たべる"),
    ("meaning_text", "to eat"),
    ("category", Category(id=7, label="Ichidan verb")),
    ("jlpt_level", 4),
    ("wk_level", 21),
    ("common_first", True),
    ("short_reading_first", True),
]


@pytest.fixture
def state() -> FilterState:
    return FilterState(FilterCriteria())


@pytest.fixture
def events(state) -> Recorder:
    recorder = Recorder()
    state.subscribe(recorder)
    return recorder


# ---------------------------------------------------------------------------
# Accessors and notifications
# ---------------------------------------------------------------------------


class TestFieldNotifications:
    @pytest.mark.parametrize("field,value", FIELD_VALUES)
    def test_set_stores_and_notifies(self, state, events, field, value):
        setattr(state, field, value)
        assert getattr(state, field) == value
        assert events.events == [FieldChanged(field=field, value=value)]

    @pytest.mark.parametrize("field,value", FIELD_VALUES)
    def test_second_identical_set_is_noop(self, state, events, field, value):
        setattr(state, field, value)
        setattr(state, field, value)
        assert events.count == 1

    @pytest.mark.parametrize("field,value", FIELD_VALUES)
    def test_setting_current_value_emits_nothing(self, field, value):
        state = FilterState(FilterCriteria(**{field: value}))
        recorder = Recorder()
        state.subscribe(recorder)
        setattr(state, field, value)
        assert recorder.count == 0

    @pytest.mark.parametrize("field,value", FIELD_VALUES)
    def test_field_subscription_ignores_other_fields(self, state, field, value):
        others = Recorder()
        for other in ("reading_text", "common_first"):
            if other != field:
                state.subscribe(others, field=other)
        setattr(state, field, value)
        assert others.count == 0

    def test_field_subscription_receives_its_field(self, state):
        recorder = Recorder()
        state.subscribe(recorder, field="wk_level")
        state.wk_level = 10
        state.jlpt_level = 3
        assert recorder.events == [FieldChanged(field="wk_level", value=10)]

    def test_equal_but_distinct_category_is_a_change(self, state, events):
        first = Category(id=1, label="Noun")
        second = Category(id=1, label="Noun")
        state.category = first
        state.category = second
        assert events.count == 2
        assert state.category is second

    def test_category_back_to_none_notifies(self, noun):
        state = FilterState(FilterCriteria(category=noun))
        recorder = Recorder()
        state.subscribe(recorder)
        state.category = None
        assert recorder.events == [FieldChanged(field="category", value=None)]

    def test_notification_is_synchronous_and_sees_new_value(self, state):
        seen = []
        state.subscribe(lambda e: seen.append(state.reading_text))
        state.reading_text = "か"
        assert seen == ["か"]

    def test_unknown_field_rejected(self, state):
        with pytest.raises(ValueError, match="Unknown filter field"):
            state.subscribe(lambda e: None, field="kanji_text")

    def test_disposed_subscription_receives_nothing(self, state):
        recorder = Recorder()
        handle = state.subscribe(recorder)
        state.jlpt_level = 1
        handle.dispose()
        state.jlpt_level = 2
        assert recorder.count == 1

    def test_field_changes_observable(self, state):
        recorder = Recorder()
        state.field_changes.subscribe(recorder)
        state.meaning_text = "water"
        assert recorder.fields() == ["meaning_text"]


# ---------------------------------------------------------------------------
# Ownership
# ---------------------------------------------------------------------------


class TestOwnership:
    def test_constructor_copies_criteria(self):
        criteria = FilterCriteria(reading_text="a")
        state = FilterState(criteria)
        criteria.reading_text = "b"
        assert state.reading_text == "a"

    def test_snapshot_is_a_copy(self, state):
        snap = state.snapshot()
        snap.reading_text = "changed"
        assert state.reading_text == ""

    def test_snapshot_reflects_current_values(self, state, noun):
        state.category = noun
        state.jlpt_level = 2
        snap = state.snapshot()
        assert snap.category is noun
        assert snap.jlpt_level == 2

    def test_default_constructor(self):
        assert FilterState().snapshot() == FilterCriteria()


# ---------------------------------------------------------------------------
# Re-entrant writes
# ---------------------------------------------------------------------------


class TestReentrancy:
    def test_write_from_handler_is_applied_after_dispatch(self, state):
        order = []

        def handler(event):
            order.append((event.field, event.value, state.is_dispatching))
            if event.field == "reading_text":
                state.meaning_text = "echo"
                # Still queued: the current dispatch has not finished.
                order.append(("meaning_now", state.meaning_text, True))

        state.subscribe(handler)
        state.reading_text = "x"

        assert order == [
            ("reading_text", "x", True),
            ("meaning_now", "", True),
            ("meaning_text", "echo", True),
        ]
        assert state.meaning_text == "echo"
        assert state.is_dispatching is False

    def test_reentrant_write_to_same_field_is_deduped_when_applied(self, state):
        recorder = Recorder()

        def handler(event):
            recorder(event)
            state.reading_text = event.value

        state.subscribe(handler)
        state.reading_text = "y"
        assert recorder.count == 1

    def test_queued_writes_apply_fifo(self, state):
        seen = []

        def handler(event):
            seen.append(event.field)
            if event.field == "jlpt_level":
                state.wk_level = 5
                state.common_first = True

        state.subscribe(handler)
        state.jlpt_level = 3
        assert seen == ["jlpt_level", "wk_level", "common_first"]

    def test_enqueue_runs_immediately_when_idle(self, state):
        ran = []
        state.enqueue(lambda: ran.append(True))
        assert ran == [True]

    def test_enqueue_from_handler_waits_for_dispatch(self, state):
        ran = []

        def handler(event):
            state.enqueue(lambda: ran.append(("callback", state.wk_level)))
            if event.field == "jlpt_level":
                state.wk_level = 9
            ran.append(("handler", event.field))

        state.subscribe(handler)
        state.jlpt_level = 1
        assert ran[0] == ("handler", "jlpt_level")
        assert ran[1] == ("callback", 0)
        assert ran[2] == ("handler", "wk_level")
        assert ran[3] == ("callback", 9)

    def test_toggle_flips_and_notifies(self, state, events):
        state.toggle("short_reading_first")
        assert state.short_reading_first is True
        assert events.events == [FieldChanged(field="short_reading_first", value=True)]

    def test_toggle_rejects_non_flag_field(self, state):
        with pytest.raises(ValueError, match="Not a toggleable"):
            state.toggle("reading_text")

    def test_toggles_queued_in_handler_read_value_when_applied(self, state):
        values = []

        def handler(event):
            values.append((event.field, event.value))
            if event.field == "jlpt_level":
                state.toggle("common_first")
                state.toggle("common_first")

        state.subscribe(handler)
        state.jlpt_level = 2
        assert values == [
            ("jlpt_level", 2),
            ("common_first", True),
            ("common_first", False),
        ]
        assert state.common_first is False

    def test_handler_error_propagates_and_resets(self, state):
        def handler(event):
            state.meaning_text = "queued"
            raise RuntimeError("boom")

        handle = state.subscribe(handler)
        with pytest.raises(RuntimeError, match="boom"):
            state.reading_text = "z"
        handle.dispose()

        assert state.reading_text == "z"
        assert state.meaning_text == ""
        assert state.is_dispatching is False
        state.meaning_text = "after"
        assert state.meaning_text == "after"
