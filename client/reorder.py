"""Drag-and-drop reorder protocol.

The client recomputes the manual order of the displayed page locally, shows
it at once and submits every ``{id, orderIndex}`` pair. The page keeps its
own set of ``orderIndex`` slots so tasks on other pages do not move. If the
server rejects the batch the list is put back exactly as it was before the
drag.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Callable, Dict, List, Optional, Sequence

from client.models import Task
from client.query_cache import CacheKey, QueryCache

logger = logging.getLogger(__name__)


def _order_slots(tasks: Sequence[Task]) -> List[int]:
    # Equal indices are pushed apart so the new order is strict
    slots = sorted(task.order_index for task in tasks)
    for i in range(1, len(slots)):
        slots[i] = max(slots[i], slots[i - 1] + 1)
    return slots


def compute_reorder(
    tasks: Sequence[Task], source_id: str, target_id: Optional[str]
) -> Optional[List[Dict[str, Any]]]:
    """Move ``source_id`` to the position of ``target_id`` and renumber.

    Args:
        tasks: The page as currently displayed.
        source_id: Id of the dragged task.
        target_id: Id of the task it was dropped on, None when dropped elsewhere.

    Returns:
        The full recomputed order as ``{"id", "orderIndex"}`` dicts. The
        page's own ``orderIndex`` values are handed out in the new sequence,
        or None is returned when the drop changes nothing.

    Example:
        >>> compute_reorder([a, b, c], source_id=c.id, target_id=a.id)
        [{'id': c.id, 'orderIndex': 0}, {'id': a.id, 'orderIndex': 1}, {'id': b.id, 'orderIndex': 2}]
    """
    if target_id is None or source_id == target_id:
        return None

    ids = [task.id for task in tasks]
    if source_id not in ids or target_id not in ids:
        return None

    old_index = ids.index(source_id)
    new_index = ids.index(target_id)
    ids.insert(new_index, ids.pop(old_index))
    return [
        {"id": task_id, "orderIndex": slot}
        for task_id, slot in zip(ids, _order_slots(tasks))
    ]


def apply_order(tasks: Sequence[Task], order_map: Dict[str, int]) -> List[Task]:
    """Re-sort tasks by a submitted order map.

    Tasks missing from the map keep their previous ``order_index``. The sort
    is stable, so ties keep their current relative position.
    """
    reordered = [
        task.model_copy(update={"order_index": order_map.get(task.id, task.order_index)})
        for task in tasks
    ]
    return sorted(reordered, key=lambda task: task.order_index)


@asynccontextmanager
async def optimistic_update(
    cache: QueryCache, key: CacheKey, update: Callable[[Any], Any]
):
    """Three-phase optimistic update of one cache entry.

    1. Snapshot the entry
    2. Apply ``update`` to it immediately
    3. Discard the snapshot if the block succeeds, restore it if it raises

    Example:
        >>> async with optimistic_update(cache, key, reorder_page):
        ...     await tasks_api.reorder_tasks(order)
    """
    snapshot = cache.snapshot(key)
    cache.patch(key, update)
    logger.debug(f"Applied optimistic update to {key[0]}")
    try:
        yield
    except BaseException:
        cache.restore(key, snapshot)
        logger.info(f"Rolled back optimistic update to {key[0]}")
        raise
