"""reactivex helpers that turn filter commits into cancellable queries.

Coalesced FilterChanged notifications are mapped to a criteria snapshot and
switch-mapped onto the query coroutine, so a new commit cancels a query
still in flight and only the latest result reaches the view.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable

import reactivex as rx
from reactivex import Observable
from reactivex import operators as ops
from reactivex.disposable import Disposable

from vocabfilter.controller import FilterController
from vocabfilter.models import FilterCriteria


def defer_task(coro_factory, loop=None):
    """Wrap ``coro_factory()`` as an Observable backed by an asyncio.Task.

    The task starts on subscribe and is cancelled on dispose, which
    reactivex does not do by itself. A cancelled task completes silently
    instead of surfacing CancelledError as on_error.

    Returns:
        Observable emitting the coroutine's result once, or its exception.
    """

    def _subscribe(observer, scheduler=None):
        task = (loop or asyncio.get_running_loop()).create_task(coro_factory())

        def _deliver(done: asyncio.Task) -> None:
            if done.cancelled():
                return
            exc = done.exception()
            if exc is not None:
                observer.on_error(exc)
                return
            observer.on_next(done.result())
            observer.on_completed()

        task.add_done_callback(_deliver)
        return Disposable(lambda: None if task.done() else task.cancel())

    return rx.create(_subscribe)


def query_on_commit(
    controller: FilterController,
    search: Callable[[FilterCriteria], Awaitable[object]],
    on_error: Callable[[Exception, FilterCriteria], None],
) -> Observable:
    """Build the query stream driven by *controller*'s coalesced notifications.

    Each notification takes a snapshot of the criteria and runs
    ``search(snapshot)``. Errors go to *on_error* and end only that query.

    Returns:
        Observable of ``(criteria, result)`` pairs.
    """

    def _run(criteria: FilterCriteria) -> Observable:
        return defer_task(lambda: search(criteria)).pipe(
            ops.map(lambda result: (criteria, result)),
            ops.catch(lambda err, _source: _fail(err, criteria)),
        )

    def _fail(err: Exception, criteria: FilterCriteria) -> Observable:
        on_error(err, criteria)
        return rx.empty()

    return controller.filter_changed.pipe(
        ops.map(lambda _: controller.state.snapshot()),
        ops.switch_map(_run),
    )
