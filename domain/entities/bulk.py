"""Bulk action domain entities.

A bulk action mutates several tasks identically. Each action is its own
variant so that the payload an action needs is always present.
"""

from dataclasses import dataclass
from typing import List, Union

from domain.entities.task import normalize_tag_names, validate_priority


@dataclass(frozen=True)
class CompleteTasks:
    ids: List[str]


@dataclass(frozen=True)
class IncompleteTasks:
    ids: List[str]


@dataclass(frozen=True)
class SetTaskPriority:
    ids: List[str]
    priority: int

    def __post_init__(self):
        validate_priority(self.priority)


@dataclass(frozen=True)
class SetTaskTags:
    """Replace the tag set of every listed task with the same names.

    This is a destructive replace, not a merge: existing associations of the
    listed tasks are removed first.
    """

    ids: List[str]
    tags: List[str]

    def __post_init__(self):
        object.__setattr__(self, "tags", normalize_tag_names(self.tags))


@dataclass(frozen=True)
class DeleteTasks:
    ids: List[str]


BulkAction = Union[
    CompleteTasks, IncompleteTasks, SetTaskPriority, SetTaskTags, DeleteTasks
]


@dataclass(frozen=True)
class BulkResult:
    """Outcome of a bulk action.

    Attributes:
        affected: Number of tasks actually changed or removed. Ids that did not
            match a task are not counted.
        deleted: True when the action removed tasks.
    """

    affected: int
    deleted: bool = False
