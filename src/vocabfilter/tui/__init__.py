"""Textual front end for the vocab filter.

Provides a terminal list view whose filter panel is bound to a
FilterState/FilterController pair, with commit-driven re-querying.
"""

from __future__ import annotations


def run_tui(config=None, query_service=None) -> None:
    """Configure file logging and run the TUI application.

    Imports are deferred so that ``import vocabfilter.tui`` stays cheap.

    Args:
        config: FilterConfig with initial criteria and categories.
        query_service: Optional object with ``async search(criteria)``.
    """
    from vocabfilter.config import FilterConfig
    from vocabfilter.telemetry import configure_file_logging
    from vocabfilter.tui.app import VocabFilterApp

    config = config if config is not None else FilterConfig()
    configure_file_logging(str(config.log_dir))

    app = VocabFilterApp(config=config, query_service=query_service)
    app.run()
