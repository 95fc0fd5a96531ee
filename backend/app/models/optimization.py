"""Optimization models - heuristic suggestions for improving a trip plan."""

from pydantic import BaseModel

from backend.app.models.common import OptimizationImpact, OptimizationType


class Savings(BaseModel):
    """Expected savings of one suggestion; time in minutes, distance in km."""

    time: int | None = None
    cost: float | None = None
    distance: float | None = None


class OptimizationSuggestion(BaseModel):
    type: OptimizationType
    description: str
    impact: OptimizationImpact
    savings: Savings | None = None


class EstimatedSavings(BaseModel):
    """Totals over every suggestion; missing savings count as zero."""

    time: int = 0
    cost: float = 0.0
    distance: float = 0.0


class TravelOptimization(BaseModel):
    """Suggestions for one trip, recomputed on demand and never stored."""

    trip_id: str
    suggestions: list[OptimizationSuggestion]
    estimated_savings: EstimatedSavings
