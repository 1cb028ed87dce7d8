"""Vocab filter TUI application.

Hosts the FilterPanel above a results pane and a status bar. The panel
drives a FilterController; every coalesced FilterChanged refreshes the
status line and, when a query service is available, re-runs the query
through the reactivex pipeline in ``rx_pipeline``.
"""

from __future__ import annotations

from textual.app import App, ComposeResult
from textual.containers import Vertical
from textual.reactive import reactive
from textual.widgets import Footer, Header, Static

from vocabfilter.config import FilterConfig
from vocabfilter.controller import FilterController
from vocabfilter.messages import FilterChanged
from vocabfilter.models import FilterCriteria
from vocabfilter.telemetry import Telemetry, set_telemetry
from vocabfilter.tui.rx_pipeline import query_on_commit
from vocabfilter.tui.widgets import FilterPanel

MAX_LISTED_RESULTS = 50


class VocabFilterApp(App):
    """Vocab list filter with live-bound inputs and commit-driven queries."""

    TITLE = "Vocab Filter"
    SUB_TITLE = "Reading, meaning, category and level filters"

    CSS = """
    #results-pane {
        height: 1fr;
        overflow-y: auto;
        padding: 0 1;
    }

    #status-bar {
        dock: bottom;
        height: 1;
        background: $primary-background;
        color: $text;
        padding: 0 1;
    }
    """

    BINDINGS = [
        ("f2", "toggle_common_first", "Common first"),
        ("f3", "toggle_short_reading_first", "Short first"),
        ("f4", "clear_category", "Clear category"),
    ]

    active_filters: reactive[FilterCriteria] = reactive(FilterCriteria)
    results: reactive[list] = reactive(list)
    is_searching: reactive[bool] = reactive(False)
    filter_change_count: reactive[int] = reactive(0)

    def __init__(
        self,
        config: FilterConfig | None = None,
        query_service: object | None = None,
        telemetry: Telemetry | None = None,
    ) -> None:
        """Initialize the app.

        Args:
            config: Initial criteria and category list. Defaults apply if None.
            query_service: Object with ``async search(criteria)`` returning a
                list of results (may be None in tests or offline use).
            telemetry: OTel tracing facade. Defaults to no-op if not provided.
        """
        super().__init__()
        self.config = config if config is not None else FilterConfig()
        self.query_service = query_service
        self.telemetry = telemetry if telemetry is not None else Telemetry.noop()
        set_telemetry(self.telemetry)
        self.controller = FilterController(self.config.to_criteria())
        self._subscriptions: list = []

    def compose(self) -> ComposeResult:
        yield Header()
        yield FilterPanel(self.controller, self.config.categories)
        with Vertical(id="results-pane"):
            yield Static("Commit a filter to list vocab", id="results")
        yield Static(self._status_text(), id="status-bar")
        yield Footer()

    def on_mount(self) -> None:
        """Subscribe to coalesced notifications and wire the query pipeline."""
        self.active_filters = self.controller.state.snapshot()
        self._subscriptions.append(self.controller.subscribe(self._on_filter_changed))
        if self.query_service is not None:
            pipeline = query_on_commit(self.controller, self._search, self._on_search_error)
            self._subscriptions.append(pipeline.subscribe(on_next=self._on_search_result))
        self.telemetry.log.info(
            f"app mounted categories={len(self.config.categories)} "
            f"has_query_service={self.query_service is not None}"
        )

    def on_unmount(self) -> None:
        """Dispose reactivex subscriptions on app shutdown."""
        for subscription in self._subscriptions:
            subscription.dispose()
        self._subscriptions.clear()

    # ------------------------------------------------------------------
    # Filter and query pipeline
    # ------------------------------------------------------------------

    def _on_filter_changed(self, _event: FilterChanged) -> None:
        self.active_filters = self.controller.state.snapshot()
        self.filter_change_count += 1
        self.query_one("#status-bar", Static).update(self._status_text())

    async def _search(self, criteria: FilterCriteria):
        self.is_searching = True
        with self.telemetry.span("tui.search") as span:
            span.set_attribute("search.filters", criteria.to_filter_strings())
            return await self.query_service.search(criteria)  # type: ignore[union-attr]

    def _on_search_result(self, pair) -> None:
        criteria, found = pair
        self.results = list(found or [])
        count = len(self.results)
        lines = [str(item) for item in self.results[:MAX_LISTED_RESULTS]]
        if count > MAX_LISTED_RESULTS:
            lines.append(f"... {count - MAX_LISTED_RESULTS} more")
        self.query_one("#results", Static).update("\n".join(lines) or "No vocab found")
        self.is_searching = False
        self.query_one("#status-bar", Static).update(self._status_text())
        self.telemetry.log.info(
            f"search completed filters={criteria.to_filter_strings()} result_count={count}"
        )

    def _on_search_error(self, error: Exception, criteria: FilterCriteria) -> None:
        self.is_searching = False
        self.query_one("#results", Static).update(f"Search error: {error}")
        self.notify("Search error", severity="error")
        self.telemetry.log.error(
            f"search error filters={criteria.to_filter_strings()} error={error!r}"
        )

    def watch_is_searching(self, searching: bool) -> None:
        if searching:
            self.query_one("#status-bar", Static).update("Searching...")

    def _status_text(self) -> str:
        filters = self.controller.state.snapshot().to_filter_strings()
        summary = " ".join(filters) if filters else "no filters"
        return f"{len(self.results)} results | {summary}"

    # ------------------------------------------------------------------
    # Key binding actions
    # ------------------------------------------------------------------

    def action_toggle_common_first(self) -> None:
        self.controller.toggle_common_first()

    def action_toggle_short_reading_first(self) -> None:
        self.controller.toggle_short_reading_first()

    def action_clear_category(self) -> None:
        self.controller.clear_category()
