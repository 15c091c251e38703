"""
Search state and the controller that turns user actions into GitHub searches.
"""

import threading
from dataclasses import dataclass, field
from functools import partial
from typing import Callable, List, Tuple

from config import get_auth_token, logger
from github_client import FetchFailure, Repository, SortOrder, raw_search_repositories


@dataclass
class SearchState:
    """Everything the UI renders. Selected tags keep their selection order."""
    selected_tags: Tuple[str, ...] = ()
    current_page: int = 1
    sort_order: SortOrder = SortOrder.DESCENDING
    loading: bool = False
    results: Tuple[Repository, ...] = field(default_factory=tuple)


class SearchController:
    """
    Holds the SearchState and dispatches one fetch per state change.

    Every dispatched request gets a sequence number. Only the completion of
    the most recent request is applied; older ones are dropped when they
    resolve, so a slow early response never overwrites a newer one.

    With no executor the fetch runs inline on the caller's thread. With a
    concurrent.futures executor it runs on a worker and is applied from the
    future's done callback.
    """

    def __init__(self, fetcher=None, token=None, executor=None):
        self.state = SearchState()
        self.history: List[str] = []
        self._fetcher = fetcher or raw_search_repositories
        self._token = get_auth_token() if token is None else token
        self._executor = executor
        self._lock = threading.RLock()
        self._seq = 0
        self._listeners: List[Callable[[SearchState], None]] = []

    @property
    def route(self) -> str:
        return f"/page/{self.state.current_page}"

    def subscribe(self, listener):
        """Registers a callback run with the state after every change. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def toggle_tag(self, tag):
        with self._lock:
            tags = list(self.state.selected_tags)
            if tag in tags:
                tags.remove(tag)
            else:
                tags.append(tag)
            self.state.selected_tags = tuple(tags)
        self._state_changed()

    def next_page(self):
        with self._lock:
            self.state.current_page += 1
            self.state.loading = True
            self.history.append(self.route)
        self._state_changed()

    def prev_page(self):
        with self._lock:
            if self.state.current_page <= 1:
                return
            self.state.current_page -= 1
            self.state.loading = True
            self.history.append(self.route)
        self._state_changed()

    def set_sort_order(self, order):
        order = SortOrder.parse(order)
        with self._lock:
            if order is self.state.sort_order:
                return
            self.state.sort_order = order
        self._state_changed()

    def refresh(self):
        """Fetches the current page again, e.g. on first load."""
        self.fetch_repositories(self.state.selected_tags, self.state.current_page)

    def fetch_repositories(self, tags, page):
        """
        Searches for `tags` on `page` with the current sort order.

        On success the results are replaced and loading is cleared. On
        FetchFailure loading is cleared and the previous results stay. Any
        other exception also clears loading, then propagates.
        """
        with self._lock:
            self._seq += 1
            seq = self._seq
            self.state.loading = True
            order = self.state.sort_order
        self._notify()

        args = (list(tags), page, order, self._token)
        if self._executor is None:
            try:
                repos = self._fetcher(*args)
            except FetchFailure as e:
                self._fail(seq, e)
            except Exception:
                self._abort(seq)
                raise
            else:
                self._complete(seq, repos)
            return

        future = self._executor.submit(self._fetcher, *args)
        future.add_done_callback(partial(self._on_done, seq))

    def is_latest(self, seq) -> bool:
        return seq == self._seq

    def _on_done(self, seq, future):
        try:
            repos = future.result()
        except FetchFailure as e:
            self._fail(seq, e)
        except Exception:
            self._abort(seq)
            raise
        else:
            self._complete(seq, repos)

    def _complete(self, seq, repos):
        with self._lock:
            if not self.is_latest(seq):
                logger.debug(f"Discarding stale response for request {seq}")
                return
            self.state.results = tuple(repos)
            self.state.loading = False
        logger.info(f"Loaded {len(repos)} repositories for {self.route}")
        self._notify()

    def _fail(self, seq, error: FetchFailure):
        with self._lock:
            if not self.is_latest(seq):
                logger.debug(f"Discarding stale failure for request {seq}: {error}")
                return
            self.state.loading = False
        logger.error(f"Error: {error}")
        self._notify()

    def _abort(self, seq):
        # Unexpected errors still settle the request before propagating
        with self._lock:
            if not self.is_latest(seq):
                return
            self.state.loading = False
        logger.exception(f"Request {seq} failed unexpectedly")
        self._notify()

    def _state_changed(self):
        self.fetch_repositories(self.state.selected_tags, self.state.current_page)

    def _notify(self):
        for listener in list(self._listeners):
            listener(self.state)
