"""UI session state and task query composition.

The state is a plain object handed to whoever builds queries; persisting it
between runs is the job of ``JsonSessionStateStore``.
"""

import json
import logging
from dataclasses import asdict, dataclass, field, replace
from datetime import date, datetime, timedelta, timezone, tzinfo
from enum import Enum
from pathlib import Path
from typing import List, Optional, Sequence

from client.models import Task
from client.query_cache import TaskQuery

logger = logging.getLogger(__name__)


class ViewMode(str, Enum):
    ALL = "all"
    TODAY = "today"
    UPCOMING = "upcoming"
    COMPLETED = "completed"
    HIGH_PRIORITY = "high-priority"


@dataclass
class FilterState:
    search: str = ""
    completed: Optional[bool] = None
    priority: Optional[int] = None
    tag: Optional[str] = None
    sort_by: str = "createdAt"
    order: str = "desc"


@dataclass
class UISessionState:
    """View mode, filters and the selection used for bulk actions.

    Example:
        >>> state = UISessionState()
        >>> state.set_view_mode(ViewMode.HIGH_PRIORITY)
        >>> state.filters.priority, state.filters.completed
        (1, False)
    """

    view_mode: ViewMode = ViewMode.ALL
    filters: FilterState = field(default_factory=FilterState)
    selected_task_ids: List[str] = field(default_factory=list)

    def set_view_mode(self, mode: ViewMode) -> None:
        """Switch view; filters go back to defaults plus the view's preset."""
        mode = ViewMode(mode)
        filters = FilterState()
        if mode in (ViewMode.TODAY, ViewMode.UPCOMING):
            filters.completed = False
        elif mode == ViewMode.COMPLETED:
            filters.completed = True
        elif mode == ViewMode.HIGH_PRIORITY:
            filters.priority = 1
            filters.completed = False
        self.view_mode = mode
        self.filters = filters

    def set_filters(self, **changes) -> None:
        self.filters = replace(self.filters, **changes)

    def reset_filters(self) -> None:
        self.filters = FilterState()

    def toggle_task_selection(self, task_id: str) -> None:
        if task_id in self.selected_task_ids:
            self.selected_task_ids.remove(task_id)
        else:
            self.selected_task_ids.append(task_id)

    def clear_selection(self) -> None:
        self.selected_task_ids = []


def build_task_query(
    state: UISessionState, page: int = 1, page_size: int = 20
) -> TaskQuery:
    """Resolve the session state into the query sent to the server.

    An empty search is dropped. View modes override the matching filters
    even if the user changed them after switching view.
    """
    filters = state.filters
    completed = filters.completed
    priority = filters.priority

    if state.view_mode in (ViewMode.TODAY, ViewMode.UPCOMING):
        completed = False
    elif state.view_mode == ViewMode.COMPLETED:
        completed = True
    elif state.view_mode == ViewMode.HIGH_PRIORITY:
        priority = 1
        completed = False

    return TaskQuery(
        q=filters.search or None,
        completed=completed,
        priority=priority,
        tag=filters.tag or None,
        sort_by=filters.sort_by,
        order=filters.order,
        page=page,
        page_size=page_size,
    )


def _in_zone(value: datetime, tz: tzinfo) -> datetime:
    # Naive timestamps from the server are UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(tz)


def filter_by_due_window(
    tasks: Sequence[Task],
    mode: ViewMode,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> List[Task]:
    """Apply the date buckets of the ``today`` and ``upcoming`` views.

    This runs on an already fetched page, so a page can come out shorter
    than its page size. Calendar days are those of ``tz``, the machine's
    local zone by default.

    - today: due today or overdue; tasks without a due date are hidden
    - upcoming: due more than one day from now, or no due date
    """
    tz = tz or datetime.now().astimezone().tzinfo
    now = _in_zone(now or datetime.now(timezone.utc), tz)

    if mode == ViewMode.TODAY:
        today: date = now.date()
        return [
            task
            for task in tasks
            if task.due_date is not None
            and (
                _in_zone(task.due_date, tz).date() == today
                or _in_zone(task.due_date, tz) < now
            )
        ]
    if mode == ViewMode.UPCOMING:
        horizon = now + timedelta(days=1)
        return [
            task
            for task in tasks
            if task.due_date is None or _in_zone(task.due_date, tz) > horizon
        ]
    return list(tasks)


class JsonSessionStateStore:
    """Persist view mode and filters to a JSON file.

    The selection is per session and is never written.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> UISessionState:
        """Missing or unreadable file -> default state."""
        if not self.path.exists():
            return UISessionState()
        try:
            with open(self.path, "r") as f:
                data = json.load(f)
            return UISessionState(
                view_mode=ViewMode(data.get("view_mode", ViewMode.ALL.value)),
                filters=FilterState(**data.get("filters", {})),
            )
        except (ValueError, TypeError) as e:
            logger.warning(f"Ignoring unreadable session state {self.path}: {e}")
            return UISessionState()

    def save(self, state: UISessionState) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            json.dump(
                {"view_mode": state.view_mode.value, "filters": asdict(state.filters)},
                f,
                indent=4,
            )
