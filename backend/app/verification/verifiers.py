"""Advisory consistency checks for trips.

None of these checks blocks a mutation; the store logs the findings and the
presentation layer may display them as warnings.
"""

from backend.app.models.trip import Trip
from backend.app.models.violations import Violation, ViolationKind, ViolationSeverity

# Tolerance for float rounding when comparing budget sums
BUDGET_EPSILON = 0.005


def verify_budget(trip: Trip) -> list[Violation]:
    """Check budget breakdown consistency and recorded spend.

    Checks:
    1. Breakdown sum differs from the budget total (ADVISORY)
    2. Recorded expenses exceed the budget total (ADVISORY)

    Args:
        trip: Trip to check

    Returns:
        List of violations (empty when there is no budget or it is consistent)
    """
    budget = trip.budget
    if budget is None:
        return []

    violations: list[Violation] = []

    breakdown_total = budget.breakdown.total
    if abs(breakdown_total - budget.total) > BUDGET_EPSILON:
        violations.append(
            Violation(
                kind=ViolationKind.BUDGET,
                code="BUDGET_BREAKDOWN_MISMATCH",
                message="Budget breakdown does not add up to the budget total.",
                severity=ViolationSeverity.ADVISORY,
                affected_ids=[],
                details={
                    "breakdown_total": round(breakdown_total, 2),
                    "budget_total": round(budget.total, 2),
                    "difference": round(breakdown_total - budget.total, 2),
                },
            )
        )

    spent = trip.total_spent
    if spent > budget.total + BUDGET_EPSILON:
        violations.append(
            Violation(
                kind=ViolationKind.BUDGET,
                code="OVER_BUDGET",
                message="Recorded expenses exceed the trip budget.",
                severity=ViolationSeverity.ADVISORY,
                affected_ids=[expense.id for expense in trip.expenses],
                details={
                    "spent": round(spent, 2),
                    "budget_total": round(budget.total, 2),
                    "currency": budget.currency,
                },
            )
        )

    return violations


def verify_destination_windows(trip: Trip) -> list[Violation]:
    """Check that each destination's window falls inside the trip window.

    Args:
        trip: Trip to check

    Returns:
        At most one ADVISORY violation listing the offending destinations
    """
    outside = [
        destination
        for destination in trip.destinations
        if destination.arrival_date < trip.start_date
        or destination.departure_date > trip.end_date
        or destination.departure_date < destination.arrival_date
    ]
    if not outside:
        return []

    return [
        Violation(
            kind=ViolationKind.SCHEDULE,
            code="DESTINATION_OUTSIDE_TRIP",
            message="Some destination dates fall outside the trip dates.",
            severity=ViolationSeverity.ADVISORY,
            affected_ids=[destination.id for destination in outside],
            details={
                "trip_start": trip.start_date.isoformat(),
                "trip_end": trip.end_date.isoformat(),
                "cities": [destination.city for destination in outside],
            },
        )
    ]


def run_verifiers(trip: Trip) -> list[Violation]:
    """Run all trip checks and aggregate violations."""
    violations: list[Violation] = []
    violations.extend(verify_budget(trip))
    violations.extend(verify_destination_windows(trip))
    return violations
