"""Domain rules that hold without a database."""

import pytest

from domain.entities.bulk import SetTaskPriority, SetTaskTags
from domain.entities.query import (
    PaginationMetadata,
    SortField,
    SortOrder,
    TaskQueryCriteria,
)
from domain.entities.task import UNSET, TaskChanges, TaskEntity, normalize_tag_names


@pytest.mark.parametrize(
    "page,page_size,total,expected",
    [
        (1, 1, 3, (3, True, False)),
        (3, 1, 3, (3, False, True)),
        (1, 20, 0, (0, False, False)),
        (2, 20, 21, (2, False, True)),
        (4, 20, 21, (2, False, True)),
    ],
)
def test_pagination_metadata(page, page_size, total, expected):
    pagination = PaginationMetadata.calculate(page=page, page_size=page_size, total=total)

    assert (pagination.total_pages, pagination.has_next, pagination.has_prev) == expected


def test_criteria_defaults_and_offset():
    criteria = TaskQueryCriteria(page=3, page_size=10)

    assert criteria.offset == 20
    assert criteria.sort_by == SortField.CREATED_AT
    assert criteria.order == SortOrder.DESC
    assert criteria.needs_secondary_sort()
    assert not TaskQueryCriteria(sort_by="orderIndex").needs_secondary_sort()


@pytest.mark.parametrize(
    "kwargs", [{"page": 0}, {"page_size": 0}, {"page_size": 101}, {"priority": 4}]
)
def test_criteria_rejects_out_of_range_values(kwargs):
    with pytest.raises(ValueError):
        TaskQueryCriteria(**kwargs)


def test_task_entity_rules():
    with pytest.raises(ValueError):
        TaskEntity(id=None, title="")
    with pytest.raises(ValueError):
        TaskEntity(id=None, title="ok", priority=5)
    with pytest.raises(ValueError):
        TaskEntity(id=None, title="ok", description="x" * 2001)


def test_whitespace_title_is_kept_verbatim():
    assert TaskEntity(id=None, title="   ").title == "   "


def test_normalize_tag_names_keeps_first_occurrence():
    assert normalize_tag_names(["b", "a", "b", "c", "a"]) == ["b", "a", "c"]
    with pytest.raises(ValueError):
        normalize_tag_names(["x" * 51])


def test_task_changes_tracks_supplied_fields_only():
    changes = TaskChanges(description=None, priority=1)

    assert changes.provided_fields() == {"description": None, "priority": 1}
    assert changes.title is UNSET
    assert not changes.replaces_tags()


def test_task_changes_tags_cannot_be_null():
    with pytest.raises(ValueError):
        TaskChanges(tags=None)
    assert TaskChanges(tags=["a", "a"]).tags == ["a"]


def test_bulk_variants_validate_their_payload():
    with pytest.raises(ValueError):
        SetTaskPriority(ids=["a"], priority=0)
    assert SetTaskTags(ids=["a"], tags=["x", "x", "y"]).tags == ["x", "y"]
