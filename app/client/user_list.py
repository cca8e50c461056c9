"""
Users list view-model: fetches users once, then filters, sorts and caps the
displayed list locally.

Filter input is debounced with a loop timer that is reset on every keystroke;
close() cancels that timer and any fetch still in flight.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from app.client.sorting import (
    SORT_DIRECTIONS,
    SortDirection,
    SortOption,
    SortState,
    apply_sorting,
    field_value,
)
from app.core.config import settings
from app.core.exceptions import ValidationError

logger = logging.getLogger(__name__)

FETCH_ERROR_MESSAGE = "Failed to load users. Please try again later."

DEFAULT_SORT_OPTIONS = (
    SortOption("name", "Name"),
    SortOption("email", "Email"),
    SortOption("role", "Role"),
    SortOption("created_at", "Created Date"),
)

# Fields searched by the filter text.
FILTER_FIELDS = ("name", "email", "role")

UserSource = Callable[[], Awaitable[Sequence[Any]]]


def matches_filter(record: Any, filter_text: str) -> bool:
    """True if filter_text (already lowercased) is a substring of name, email or role."""
    for field in FILTER_FIELDS:
        value = field_value(record, field)
        if value and filter_text in str(value).lower():
            return True
    return False


class UserListView:
    """
    State for a users table: all_users is the fetched set, users is what is displayed.

    Pipeline order is always filter -> sort -> cap.
    """

    def __init__(
        self,
        source: UserSource,
        *,
        title: str = "Users List",
        limit: int | None = None,
        debounce_seconds: float | None = None,
    ) -> None:
        if limit is not None and limit < 0:
            raise ValidationError(f"limit must be zero or positive, got {limit}")
        self.source = source
        self.title = title
        # None or 0 means no cap.
        self.limit = limit
        self.debounce_seconds = (
            settings.USER_LIST_DEBOUNCE_SEC if debounce_seconds is None else debounce_seconds
        )

        self.users: list[Any] = []
        self.all_users: list[Any] = []
        self.loading = False
        self.error: str | None = None

        self.filter_text = ""
        self.sort_options: list[SortOption] = list(DEFAULT_SORT_OPTIONS)
        self.current_sort = SortState(field="name", direction="asc")

        self._debounce_handle: asyncio.TimerHandle | None = None
        self._last_filter_value: str | None = None
        self._fetch_task: asyncio.Future[Sequence[Any]] | None = None
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def fetch(self) -> None:
        """
        Load users from the source and re-derive the displayed list. Failures set error.

        A newer fetch (or retry) cancels the one in flight; only the latest
        call touches loading, error and the list.
        """
        if self._closed:
            return
        if self._fetch_task is not None and not self._fetch_task.done():
            self._fetch_task.cancel()
        self.loading = True
        self.error = None
        task = asyncio.ensure_future(self.source())
        self._fetch_task = task
        try:
            data = await task
        except asyncio.CancelledError:
            if self._closed or self._fetch_task is not task:
                return
            raise
        except Exception:
            if self._fetch_task is not task:
                return
            logger.warning("Error fetching users", exc_info=True)
            self.error = FETCH_ERROR_MESSAGE
            return
        finally:
            if self._fetch_task is task:
                self.loading = False
                self._fetch_task = None

        if self._closed:
            return
        self.all_users = list(data)
        if self.filter_text:
            self.filter_users(self.filter_text)
        else:
            self.sort_users(self.current_sort.field, self.current_sort.direction)

    async def retry(self) -> None:
        await self.fetch()

    def on_filter_change(self, value: str) -> None:
        """Schedule value to be applied once no new input arrives for debounce_seconds."""
        if self._closed:
            return
        self._cancel_debounce()
        loop = asyncio.get_running_loop()
        self._debounce_handle = loop.call_later(
            self.debounce_seconds, self._apply_settled_filter, value
        )

    def _apply_settled_filter(self, value: str) -> None:
        self._debounce_handle = None
        if value == self._last_filter_value:
            return
        self._last_filter_value = value
        self.filter_users(value)

    def _cancel_debounce(self) -> None:
        if self._debounce_handle is not None:
            self._debounce_handle.cancel()
            self._debounce_handle = None

    def clear_filter(self) -> None:
        self.filter_text = ""
        self.on_filter_change("")

    def filter_users(self, filter_text: str) -> None:
        """Apply filter_text immediately (no debounce)."""
        self.filter_text = filter_text.lower().strip()
        if not self.filter_text:
            self.sort_users(self.current_sort.field, self.current_sort.direction)
            return

        filtered = [u for u in self.all_users if matches_filter(u, self.filter_text)]
        sorted_users = apply_sorting(
            filtered, self.current_sort.field, self.current_sort.direction
        )
        self.users = self._apply_limit(sorted_users)

    def sort_users(self, field: str, direction: SortDirection | None = None) -> None:
        """
        Sort on field. Without an explicit direction, sorting the current field
        again flips asc to desc; any other request sorts ascending.

        With a filter active the already filtered list is re-sorted.
        """
        if direction is None:
            same_field_ascending = (
                field == self.current_sort.field and self.current_sort.direction == "asc"
            )
            direction = "desc" if same_field_ascending else "asc"
        elif direction not in SORT_DIRECTIONS:
            raise ValidationError(f"Unknown sort direction: {direction!r}")

        self.current_sort = SortState(field=field, direction=direction)
        data = self.users if self.filter_text else self.all_users
        self.users = self._apply_limit(apply_sorting(data, field, direction))

    def _apply_limit(self, records: list[Any]) -> list[Any]:
        if self.limit:
            return records[: self.limit]
        return records

    def sort_icon(self, field: str) -> str:
        if field != self.current_sort.field:
            return "sort"
        return "arrow_upward" if self.current_sort.direction == "asc" else "arrow_downward"

    def close(self) -> None:
        """Tear down: drop pending filter input and cancel an in-flight fetch."""
        self._closed = True
        self._cancel_debounce()
        if self._fetch_task is not None and not self._fetch_task.done():
            self._fetch_task.cancel()
