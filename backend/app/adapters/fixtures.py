"""Sample trips for local development and demos.

Dates are computed relative to a reference time so that the sample always
contains an upcoming, an active, a completed and a cancelled trip.
"""

from datetime import datetime, timedelta

from backend.app.models.checklist import ChecklistItem
from backend.app.models.common import (
    ChecklistCategory,
    ChecklistPriority,
    ExpenseCategory,
    TravelerRole,
    TripPurpose,
    TripStatus,
    Visibility,
)
from backend.app.models.trip import (
    Budget,
    BudgetBreakdown,
    Destination,
    Expense,
    LocaleInfo,
    Traveler,
    Trip,
)


def _day(now: datetime, offset: int) -> datetime:
    return (now + timedelta(days=offset)).replace(hour=0, minute=0, second=0, microsecond=0)


def _primary(trip_id: str, owner: str) -> Traveler:
    return Traveler(id=f"{trip_id}-traveler-1", name=owner, role=TravelerRole.primary)


def _checklist(trip_id: str, now: datetime, completed: bool) -> list[ChecklistItem]:
    return [
        ChecklistItem(
            id=f"{trip_id}-checklist-1",
            title="Check passport validity (6+ months)",
            category=ChecklistCategory.documents,
            priority=ChecklistPriority.high,
            completed=completed,
            due_date=_day(now, -1) if not completed else None,
        ),
        ChecklistItem(
            id=f"{trip_id}-checklist-2",
            title="Book flights",
            category=ChecklistCategory.booking,
            priority=ChecklistPriority.high,
            completed=completed,
            due_date=_day(now, 2) if not completed else None,
        ),
        ChecklistItem(
            id=f"{trip_id}-checklist-3",
            title="Pack essentials",
            category=ChecklistCategory.packing,
            priority=ChecklistPriority.medium,
            completed=completed,
        ),
    ]


def build_fixture_trips(now: datetime, owner: str = "current-user") -> list[Trip]:
    """Build the sample trip collection.

    Args:
        now: Reference time (timezone-aware)
        owner: Name recorded as creator and primary traveler

    Returns:
        Four trips: upcoming, active, completed and cancelled
    """
    tokyo_start, tokyo_end = _day(now, 14), _day(now, 19)
    london_start, london_end = _day(now, -2), _day(now, 3)
    paris_start, paris_end = _day(now, -60), _day(now, -53)
    berlin_start, berlin_end = _day(now, 30), _day(now, 33)

    tokyo = Trip(
        id="trip-tokyo",
        title="Tokyo client visit",
        description="Quarterly review with the Tokyo team",
        purpose=TripPurpose.client_visit,
        status=TripStatus.confirmed,
        start_date=tokyo_start,
        end_date=tokyo_end,
        duration=(tokyo_end - tokyo_start).days,
        timezone="Asia/Tokyo",
        destinations=[
            Destination(
                id="dest-tokyo",
                city="Tokyo",
                country="Japan",
                arrival_date=tokyo_start,
                departure_date=tokyo_end,
                purpose="Client meetings",
                important_info=LocaleInfo(timezone="Asia/Tokyo", currency="JPY", language="Japanese"),
            )
        ],
        travelers=[_primary("trip-tokyo", owner)],
        budget=Budget(
            total=4000.0,
            breakdown=BudgetBreakdown(transportation=1800.0, accommodation=1500.0, meals=700.0),
            expense_tracking=True,
        ),
        checklist=_checklist("trip-tokyo", now, completed=False),
        related_meetings=["meeting-tokyo-review"],
        created_by=owner,
        created_at=_day(now, -20),
        updated_at=_day(now, -20),
        tags=["client", "apac"],
        visibility=Visibility.team,
    )

    london = Trip(
        id="trip-london",
        title="London tech conference",
        purpose=TripPurpose.conference,
        status=TripStatus.in_progress,
        start_date=london_start,
        end_date=london_end,
        duration=(london_end - london_start).days,
        timezone="Europe/London",
        current_location="London",
        destinations=[
            Destination(
                id="dest-london",
                city="London",
                country="United Kingdom",
                arrival_date=london_start,
                departure_date=london_end,
                purpose="Conference",
                important_info=LocaleInfo(timezone="Europe/London", currency="GBP", language="English"),
            )
        ],
        travelers=[_primary("trip-london", owner)],
        budget=Budget(
            total=2500.0,
            breakdown=BudgetBreakdown(transportation=600.0, accommodation=1200.0, business=700.0),
            expense_tracking=True,
            spent_amount=850.0,
        ),
        expenses=[
            Expense(
                id="exp-london-1",
                category=ExpenseCategory.accommodation,
                amount=850.0,
                description="Hotel deposit",
                date=london_start,
            )
        ],
        checklist=_checklist("trip-london", now, completed=True),
        created_by=owner,
        created_at=_day(now, -30),
        updated_at=_day(now, -2),
        tags=["conference"],
    )

    paris = Trip(
        id="trip-paris",
        title="Paris holiday",
        purpose=TripPurpose.vacation,
        status=TripStatus.completed,
        start_date=paris_start,
        end_date=paris_end,
        duration=(paris_end - paris_start).days,
        timezone="Europe/Paris",
        destinations=[
            Destination(
                id="dest-paris",
                city="Paris",
                country="France",
                arrival_date=paris_start,
                departure_date=paris_end,
                purpose="Holiday",
            )
        ],
        travelers=[_primary("trip-paris", owner)],
        budget=Budget(
            total=3000.0,
            breakdown=BudgetBreakdown(
                transportation=700.0, accommodation=1400.0, meals=600.0, entertainment=300.0
            ),
            spent_amount=2750.0,
        ),
        expenses=[
            Expense(
                id="exp-paris-1",
                category=ExpenseCategory.accommodation,
                amount=1400.0,
                description="Hotel",
                date=paris_start,
            ),
            Expense(
                id="exp-paris-2",
                category=ExpenseCategory.transportation,
                amount=1350.0,
                description="Flights and trains",
                date=paris_start,
            ),
        ],
        checklist=_checklist("trip-paris", now, completed=True),
        created_by=owner,
        created_at=_day(now, -90),
        updated_at=_day(now, -53),
        tags=["family"],
    )

    berlin = Trip(
        id="trip-berlin",
        title="Berlin training",
        purpose=TripPurpose.training,
        status=TripStatus.cancelled,
        start_date=berlin_start,
        end_date=berlin_end,
        duration=(berlin_end - berlin_start).days,
        timezone="Europe/Berlin",
        destinations=[
            Destination(
                id="dest-berlin",
                city="Berlin",
                country="Germany",
                arrival_date=berlin_start,
                departure_date=berlin_end,
                purpose="Training",
            )
        ],
        travelers=[_primary("trip-berlin", owner)],
        created_by=owner,
        created_at=_day(now, -10),
        updated_at=_day(now, -5),
    )

    return [tokyo, london, paris, berlin]
