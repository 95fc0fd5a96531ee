"""Checklist derivations: progress, overdue/due-soon, filter, sort and grouping.

All functions are pure; they never mutate the items they receive.
"""

from collections.abc import Sequence
from datetime import UTC, datetime, timedelta

from backend.app.models.checklist import ChecklistItem, ChecklistItemCreate, ChecklistView
from backend.app.models.common import (
    ChecklistCategory,
    ChecklistPriority,
    ChecklistSortKey,
    CompletionFilter,
)

DEFAULT_DUE_SOON_DAYS = 3
_NO_DUE_DATE = datetime.max.replace(tzinfo=UTC)

# Kickoff items seeded into a freshly planned trip
DEFAULT_CHECKLIST: tuple[tuple[str, ChecklistCategory, ChecklistPriority], ...] = (
    ("Check passport validity (6+ months)", ChecklistCategory.documents, ChecklistPriority.high),
    ("Book flights", ChecklistCategory.booking, ChecklistPriority.high),
    ("Book accommodation", ChecklistCategory.booking, ChecklistPriority.high),
    ("Travel insurance", ChecklistCategory.documents, ChecklistPriority.medium),
    ("Pack essentials", ChecklistCategory.packing, ChecklistPriority.medium),
)


def default_checklist() -> list[ChecklistItemCreate]:
    """Return the five kickoff items, all pending."""
    return [
        ChecklistItemCreate(title=title, category=category, priority=priority, completed=False)
        for title, category, priority in DEFAULT_CHECKLIST
    ]


def calculate_progress(checklist: Sequence[ChecklistItem]) -> float:
    """Percentage of completed items; 0 for an empty checklist."""
    if not checklist:
        return 0.0
    completed = sum(1 for item in checklist if item.completed)
    return completed / len(checklist) * 100


def get_overdue_tasks(checklist: Sequence[ChecklistItem], now: datetime) -> list[ChecklistItem]:
    """Pending items whose due date is strictly in the past."""
    return [
        item
        for item in checklist
        if not item.completed and item.due_date is not None and item.due_date < now
    ]


def get_due_soon_tasks(
    checklist: Sequence[ChecklistItem],
    now: datetime,
    days: int = DEFAULT_DUE_SOON_DAYS,
) -> list[ChecklistItem]:
    """Pending items due between now (inclusive) and now + days (inclusive)."""
    horizon = now + timedelta(days=days)
    return [
        item
        for item in checklist
        if not item.completed and item.due_date is not None and now <= item.due_date <= horizon
    ]


def filter_checklist(
    checklist: Sequence[ChecklistItem],
    category: ChecklistCategory | str = "all",
    completion: CompletionFilter = CompletionFilter.all,
) -> list[ChecklistItem]:
    """Apply the category and completion filters (AND semantics)."""
    results: list[ChecklistItem] = []
    for item in checklist:
        if category != "all" and item.category != category:
            continue
        if completion == CompletionFilter.completed and not item.completed:
            continue
        if completion == CompletionFilter.pending and item.completed:
            continue
        results.append(item)
    return results


def sort_checklist(
    checklist: Sequence[ChecklistItem],
    sort_by: ChecklistSortKey = ChecklistSortKey.priority,
) -> list[ChecklistItem]:
    """Sort by a single key. Python's sort is stable, so ties keep their order."""
    if sort_by == ChecklistSortKey.priority:
        return sorted(checklist, key=lambda item: item.priority.rank, reverse=True)
    if sort_by == ChecklistSortKey.category:
        return sorted(checklist, key=lambda item: item.category.value)
    if sort_by == ChecklistSortKey.due_date:
        # Items without a due date go last and compare equal to each other
        return sorted(checklist, key=lambda item: (item.due_date is None, item.due_date or _NO_DUE_DATE))
    return sorted(checklist, key=lambda item: item.title.casefold())


def group_by_category(checklist: Sequence[ChecklistItem]) -> dict[str, list[ChecklistItem]]:
    """Partition by category; categories appear in first-occurrence order."""
    groups: dict[str, list[ChecklistItem]] = {}
    for item in checklist:
        groups.setdefault(item.category.value, []).append(item)
    return groups


def build_checklist_view(
    checklist: Sequence[ChecklistItem],
    now: datetime,
    *,
    category: ChecklistCategory | str = "all",
    completion: CompletionFilter = CompletionFilter.all,
    sort_by: ChecklistSortKey = ChecklistSortKey.priority,
    due_soon_days: int = DEFAULT_DUE_SOON_DAYS,
) -> ChecklistView:
    """Filter, sort and group a checklist.

    Progress and the overdue/due-soon lists are computed over the whole
    checklist, not the filtered subset.
    """
    items = sort_checklist(filter_checklist(checklist, category, completion), sort_by)
    return ChecklistView(
        progress=calculate_progress(checklist),
        items=items,
        groups=group_by_category(items),
        overdue=get_overdue_tasks(checklist, now),
        due_soon=get_due_soon_tasks(checklist, now, due_soon_days),
    )
