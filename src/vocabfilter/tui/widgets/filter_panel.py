"""Filter panel widget bound to a FilterState and its FilterController.

Text and level inputs write to the state on every keystroke and commit on
Enter. The category Select commits on selection; the clear button and the
two order checkboxes call their controller actions directly. State changes
made elsewhere (a clear, a toggle from a key binding) flow back into the
widgets through the state's field-changed notifications. The echo events
those programmatic updates produce are dropped because they carry the
value the state already holds.
"""

from __future__ import annotations

from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Checkbox, Input, Select, Static

from vocabfilter.constants import NO_LEVEL
from vocabfilter.controller import FilterController
from vocabfilter.messages import FieldChanged
from vocabfilter.models import Category
from vocabfilter.telemetry import get_telemetry

_LEVEL_INPUTS = {"filter-jlpt": "jlpt_level", "filter-wk": "wk_level"}
_TEXT_INPUTS = {"filter-reading": "reading_text", "filter-meaning": "meaning_text"}


def _level_text(level: int) -> str:
    return "" if level == NO_LEVEL else str(level)


class FilterPanel(Vertical):
    """Reading, meaning, category, level and order controls for the vocab list."""

    DEFAULT_CSS = """
    FilterPanel {
        height: auto;
        padding: 1;
        border-bottom: solid $primary;
        background: $surface;
    }

    FilterPanel Horizontal {
        height: auto;
    }

    FilterPanel Input {
        width: 1fr;
    }
    """

    def __init__(
        self,
        controller: FilterController,
        categories: list[Category] | None = None,
    ) -> None:
        super().__init__(id="filter-panel")
        self.controller = controller
        self.categories = list(categories or [])
        self._categories_by_id = {c.id: c for c in self.categories}
        self._field_subscription = None

    @property
    def state(self):
        return self.controller.state

    def compose(self):
        """Yield the filter inputs, initialised from the current state."""
        state = self.state
        yield Static("Filters", classes="filter-header")
        with Horizontal():
            yield Input(state.reading_text, placeholder="Reading", id="filter-reading")
            yield Input(state.meaning_text, placeholder="Meaning", id="filter-meaning")
        with Horizontal():
            select_kwargs = {}
            if state.category is not None:
                select_kwargs["value"] = state.category.id
            yield Select(
                [(c.label, c.id) for c in self.categories],
                allow_blank=True,
                prompt="All categories",
                id="filter-category",
                **select_kwargs,
            )
            yield Button("Clear", id="filter-clear-category")
        with Horizontal():
            yield Input(
                _level_text(state.jlpt_level),
                placeholder="JLPT level",
                type="integer",
                id="filter-jlpt",
            )
            yield Input(
                _level_text(state.wk_level),
                placeholder="WK level",
                type="integer",
                id="filter-wk",
            )
        with Horizontal():
            yield Checkbox("Common first", state.common_first, id="filter-common-first")
            yield Checkbox(
                "Short reading first",
                state.short_reading_first,
                id="filter-short-reading-first",
            )

    def on_mount(self) -> None:
        self._field_subscription = self.state.subscribe(self._sync_widget)

    def on_unmount(self) -> None:
        if self._field_subscription is not None:
            self._field_subscription.dispose()
            self._field_subscription = None

    # ------------------------------------------------------------------
    # Widget -> state
    # ------------------------------------------------------------------

    def on_input_changed(self, event: Input.Changed) -> None:
        """Live-bind text and level inputs to the state (no commit)."""
        input_id = event.input.id
        if input_id in _TEXT_INPUTS:
            setattr(self.state, _TEXT_INPUTS[input_id], event.value)
        elif input_id in _LEVEL_INPUTS:
            text = event.value.strip()
            try:
                level = int(text) if text else NO_LEVEL
            except ValueError:
                # Partial input such as "-"; keep the previous level.
                return
            setattr(self.state, _LEVEL_INPUTS[input_id], level)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Enter in an input commits the corresponding filter."""
        input_id = event.input.id
        get_telemetry().log.info(f"filter input submitted widget={input_id!r}")
        if input_id == "filter-reading":
            self.controller.commit_reading()
        elif input_id == "filter-meaning":
            self.controller.commit_meaning()
        elif input_id in _LEVEL_INPUTS:
            self.controller.commit_levels()

    def on_select_changed(self, event: Select.Changed) -> None:
        """Selecting a category sets and commits it."""
        if event.value is Select.NULL:
            category = None
        else:
            category = self._categories_by_id.get(event.value)
        if category is self.state.category:
            return
        self.state.category = category
        self.controller.commit_category()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "filter-clear-category":
            self.controller.clear_category()

    def on_checkbox_changed(self, event: Checkbox.Changed) -> None:
        """A checkbox click is a toggle action unless it echoes the state."""
        checkbox_id = event.checkbox.id
        if checkbox_id == "filter-common-first":
            if event.value != self.state.common_first:
                self.controller.toggle_common_first()
        elif checkbox_id == "filter-short-reading-first":
            if event.value != self.state.short_reading_first:
                self.controller.toggle_short_reading_first()

    # ------------------------------------------------------------------
    # State -> widget
    # ------------------------------------------------------------------

    def _sync_widget(self, event: FieldChanged) -> None:
        if event.field == "reading_text":
            self._set_input("#filter-reading", event.value)
        elif event.field == "meaning_text":
            self._set_input("#filter-meaning", event.value)
        elif event.field == "jlpt_level":
            self._set_input("#filter-jlpt", _level_text(event.value))
        elif event.field == "wk_level":
            self._set_input("#filter-wk", _level_text(event.value))
        elif event.field == "category":
            category = event.value
            if category is not None and category.id not in self._categories_by_id:
                get_telemetry().log.warning(
                    f"category not offered by panel category={category!r}"
                )
                return
            select = self.query_one("#filter-category", Select)
            target = Select.NULL if category is None else category.id
            if select.value != target:
                select.value = target
        elif event.field == "common_first":
            self._set_checkbox("#filter-common-first", event.value)
        elif event.field == "short_reading_first":
            self._set_checkbox("#filter-short-reading-first", event.value)

    def _set_checkbox(self, selector: str, value: bool) -> None:
        # Changed from a programmatic write must not read back as a click.
        checkbox = self.query_one(selector, Checkbox)
        with checkbox.prevent(Checkbox.Changed):
            checkbox.value = value

    def _set_input(self, selector: str, text: str) -> None:
        widget = self.query_one(selector, Input)
        if widget.value != text:
            widget.value = text
