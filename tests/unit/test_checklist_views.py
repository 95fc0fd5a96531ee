"""Tests for checklist derivations (progress, overdue, filter, sort, grouping)."""

from datetime import UTC, datetime, timedelta

import pytest

from backend.app.models.checklist import ChecklistItem
from backend.app.models.common import (
    ChecklistCategory,
    ChecklistPriority,
    ChecklistSortKey,
    CompletionFilter,
)
from backend.app.store.checklist import (
    DEFAULT_CHECKLIST,
    build_checklist_view,
    calculate_progress,
    default_checklist,
    filter_checklist,
    get_due_soon_tasks,
    get_overdue_tasks,
    group_by_category,
    sort_checklist,
)

NOW = datetime(2025, 6, 1, tzinfo=UTC)


def make_item(
    item_id: str,
    title: str | None = None,
    category: ChecklistCategory = ChecklistCategory.other,
    priority: ChecklistPriority = ChecklistPriority.medium,
    completed: bool = False,
    due_date: datetime | None = None,
) -> ChecklistItem:
    """Helper to create a checklist item."""
    return ChecklistItem(
        id=item_id,
        title=title or item_id,
        category=category,
        priority=priority,
        completed=completed,
        due_date=due_date,
    )


@pytest.fixture
def checklist() -> list[ChecklistItem]:
    """Mixed checklist covering every category used in the tests."""
    return [
        make_item("passport", "Passport", ChecklistCategory.documents, ChecklistPriority.high,
                  due_date=NOW - timedelta(days=5)),
        make_item("pack", "pack bags", ChecklistCategory.packing, ChecklistPriority.low,
                  due_date=NOW + timedelta(days=2)),
        make_item("flights", "Flights", ChecklistCategory.booking, ChecklistPriority.high,
                  completed=True, due_date=NOW - timedelta(days=10)),
        make_item("visa", "Visa", ChecklistCategory.documents, ChecklistPriority.medium),
    ]


class TestProgress:
    """Test calculate_progress."""

    def test_empty_checklist_is_zero(self) -> None:
        assert calculate_progress([]) == 0.0

    def test_fraction_of_completed_items(self, checklist: list[ChecklistItem]) -> None:
        assert calculate_progress(checklist) == 25.0

    def test_all_completed(self) -> None:
        items = [make_item("a", completed=True), make_item("b", completed=True)]
        assert calculate_progress(items) == 100.0


class TestDueDates:
    """Test overdue and due-soon selection."""

    def test_overdue_excludes_completed_and_undated(self, checklist: list[ChecklistItem]) -> None:
        overdue = get_overdue_tasks(checklist, NOW)
        assert [item.id for item in overdue] == ["passport"]

    def test_due_exactly_now_is_not_overdue(self) -> None:
        item = make_item("a", due_date=NOW)
        assert get_overdue_tasks([item], NOW) == []
        assert get_due_soon_tasks([item], NOW) == [item]

    def test_due_soon_window_is_inclusive(self) -> None:
        edge = make_item("edge", due_date=NOW + timedelta(days=3))
        beyond = make_item("beyond", due_date=NOW + timedelta(days=3, seconds=1))
        assert get_due_soon_tasks([edge, beyond], NOW) == [edge]

    def test_due_soon_respects_custom_horizon(self, checklist: list[ChecklistItem]) -> None:
        assert get_due_soon_tasks(checklist, NOW, days=1) == []
        assert [item.id for item in get_due_soon_tasks(checklist, NOW, days=2)] == ["pack"]


class TestFilter:
    """Test filter_checklist."""

    def test_all_returns_everything(self, checklist: list[ChecklistItem]) -> None:
        assert filter_checklist(checklist) == checklist

    def test_category_filter(self, checklist: list[ChecklistItem]) -> None:
        result = filter_checklist(checklist, category=ChecklistCategory.documents)
        assert [item.id for item in result] == ["passport", "visa"]

    def test_category_filter_accepts_plain_string(self, checklist: list[ChecklistItem]) -> None:
        result = filter_checklist(checklist, category="booking")
        assert [item.id for item in result] == ["flights"]

    def test_completion_filters(self, checklist: list[ChecklistItem]) -> None:
        completed = filter_checklist(checklist, completion=CompletionFilter.completed)
        pending = filter_checklist(checklist, completion=CompletionFilter.pending)
        assert [item.id for item in completed] == ["flights"]
        assert [item.id for item in pending] == ["passport", "pack", "visa"]

    def test_filters_combine(self, checklist: list[ChecklistItem]) -> None:
        result = filter_checklist(
            checklist, category=ChecklistCategory.documents, completion=CompletionFilter.completed
        )
        assert result == []


class TestSort:
    """Test sort_checklist."""

    def test_priority_high_first_and_stable(self, checklist: list[ChecklistItem]) -> None:
        result = sort_checklist(checklist, ChecklistSortKey.priority)
        assert [item.id for item in result] == ["passport", "flights", "visa", "pack"]

    def test_category_alphabetical(self, checklist: list[ChecklistItem]) -> None:
        result = sort_checklist(checklist, ChecklistSortKey.category)
        assert [item.category.value for item in result] == [
            "booking",
            "documents",
            "documents",
            "packing",
        ]

    def test_due_date_undated_last(self, checklist: list[ChecklistItem]) -> None:
        result = sort_checklist(checklist, ChecklistSortKey.due_date)
        assert [item.id for item in result] == ["flights", "passport", "pack", "visa"]

    def test_title_ignores_case(self, checklist: list[ChecklistItem]) -> None:
        result = sort_checklist(checklist, ChecklistSortKey.title)
        assert [item.title for item in result] == ["Flights", "pack bags", "Passport", "Visa"]

    def test_sort_does_not_mutate_input(self, checklist: list[ChecklistItem]) -> None:
        original = list(checklist)
        sort_checklist(checklist, ChecklistSortKey.title)
        assert checklist == original


def test_group_by_category_keeps_first_seen_order(checklist: list[ChecklistItem]) -> None:
    groups = group_by_category(checklist)
    assert list(groups) == ["documents", "packing", "booking"]
    assert [item.id for item in groups["documents"]] == ["passport", "visa"]


def test_default_checklist_seed() -> None:
    """Kickoff seed has five pending items across documents, booking and packing."""
    items = default_checklist()
    assert len(items) == len(DEFAULT_CHECKLIST) == 5
    assert all(not item.completed for item in items)
    assert {item.category for item in items} == {
        ChecklistCategory.documents,
        ChecklistCategory.booking,
        ChecklistCategory.packing,
    }
    assert items[0].title == "Check passport validity (6+ months)"
    assert items[0].priority == ChecklistPriority.high


def test_view_rollups_use_full_checklist(checklist: list[ChecklistItem]) -> None:
    """Filtering narrows items/groups but not progress or the due-date lists."""
    view = build_checklist_view(
        checklist,
        NOW,
        category=ChecklistCategory.packing,
        sort_by=ChecklistSortKey.title,
    )
    assert [item.id for item in view.items] == ["pack"]
    assert list(view.groups) == ["packing"]
    assert view.progress == 25.0
    assert [item.id for item in view.overdue] == ["passport"]
    assert [item.id for item in view.due_soon] == ["pack"]
