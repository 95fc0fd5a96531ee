"""Rule-based optimization suggestions for a single trip."""

from backend.app.models.common import OptimizationImpact, OptimizationType
from backend.app.models.optimization import (
    EstimatedSavings,
    OptimizationSuggestion,
    Savings,
    TravelOptimization,
)
from backend.app.models.trip import Trip

# Budgets above this total get a cost suggestion.
COST_REVIEW_THRESHOLD = 1000.0


def suggest_optimizations(trip: Trip) -> TravelOptimization:
    """Evaluate the route, timing and cost rules against a trip.

    - route: more than two destinations
    - timing: at least one transportation leg
    - cost: budget total above COST_REVIEW_THRESHOLD
    """
    suggestions: list[OptimizationSuggestion] = []

    if len(trip.destinations) > 2:
        suggestions.append(
            OptimizationSuggestion(
                type=OptimizationType.route,
                description="Optimize destination order to minimize travel time",
                impact=OptimizationImpact.high,
                savings=Savings(time=120, cost=200.0, distance=50.0),
            )
        )

    if trip.transportation:
        suggestions.append(
            OptimizationSuggestion(
                type=OptimizationType.timing,
                description="Adjust departure times to avoid peak travel hours",
                impact=OptimizationImpact.medium,
                savings=Savings(time=45, cost=50.0),
            )
        )

    if trip.budget is not None and trip.budget.total > COST_REVIEW_THRESHOLD:
        suggestions.append(
            OptimizationSuggestion(
                type=OptimizationType.cost,
                description="Consider alternative accommodation options to reduce costs",
                impact=OptimizationImpact.medium,
                savings=Savings(cost=300.0),
            )
        )

    savings = [s.savings for s in suggestions if s.savings is not None]
    return TravelOptimization(
        trip_id=trip.id,
        suggestions=suggestions,
        estimated_savings=EstimatedSavings(
            time=sum(s.time or 0 for s in savings),
            cost=float(sum(s.cost or 0.0 for s in savings)),
            distance=float(sum(s.distance or 0.0 for s in savings)),
        ),
    )
