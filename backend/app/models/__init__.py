"""Models package - re-exports for convenience."""

from backend.app.models.checklist import (
    ChecklistItem,
    ChecklistItemCreate,
    ChecklistItemUpdate,
    ChecklistView,
)
from backend.app.models.common import (
    AccommodationType,
    ApprovalStatus,
    BookingStatus,
    ChecklistCategory,
    ChecklistPriority,
    ChecklistSortKey,
    CompletionFilter,
    ExpenseCategory,
    OptimizationImpact,
    OptimizationType,
    TransportationType,
    TravelerRole,
    TripPurpose,
    TripStatus,
    Visibility,
)
from backend.app.models.insights import (
    FavoriteDestination,
    MonthlyTrips,
    PurposeShare,
    TravelInsights,
    TravelPatterns,
)
from backend.app.models.optimization import (
    EstimatedSavings,
    OptimizationSuggestion,
    Savings,
    TravelOptimization,
)
from backend.app.models.search import (
    BudgetRange,
    DateRange,
    SortOrder,
    TravelFilters,
    TravelSearchQuery,
    TripSortField,
)
from backend.app.models.template import (
    TemplateChecklistItem,
    TemplateCreate,
    TemplateDestination,
    TravelTemplate,
    TripFromTemplate,
)
from backend.app.models.trip import (
    Accommodation,
    AccommodationContact,
    AccommodationCreate,
    Budget,
    BudgetBreakdown,
    Destination,
    DestinationActivity,
    DestinationCreate,
    DestinationUpdate,
    Expense,
    ExpenseCreate,
    ExpenseUpdate,
    LocaleInfo,
    Transportation,
    TransportationCreate,
    TransportationUpdate,
    Traveler,
    TravelerCreate,
    Trip,
    TripCreate,
    TripUpdate,
)
from backend.app.models.violations import Violation, ViolationKind, ViolationSeverity

__all__ = [
    # Common
    "TripPurpose",
    "TripStatus",
    "Visibility",
    "TravelerRole",
    "ChecklistCategory",
    "ChecklistPriority",
    "CompletionFilter",
    "ChecklistSortKey",
    "ExpenseCategory",
    "ApprovalStatus",
    "TransportationType",
    "AccommodationType",
    "BookingStatus",
    "OptimizationType",
    "OptimizationImpact",
    # Trip
    "Trip",
    "TripCreate",
    "TripUpdate",
    "Destination",
    "DestinationActivity",
    "DestinationCreate",
    "DestinationUpdate",
    "LocaleInfo",
    "Traveler",
    "TravelerCreate",
    "Budget",
    "BudgetBreakdown",
    "Expense",
    "ExpenseCreate",
    "ExpenseUpdate",
    "Transportation",
    "TransportationCreate",
    "TransportationUpdate",
    "Accommodation",
    "AccommodationContact",
    "AccommodationCreate",
    # Checklist
    "ChecklistItem",
    "ChecklistItemCreate",
    "ChecklistItemUpdate",
    "ChecklistView",
    # Templates
    "TravelTemplate",
    "TemplateCreate",
    "TemplateDestination",
    "TemplateChecklistItem",
    "TripFromTemplate",
    # Search
    "TravelSearchQuery",
    "TravelFilters",
    "DateRange",
    "BudgetRange",
    "TripSortField",
    "SortOrder",
    # Optimization
    "TravelOptimization",
    "OptimizationSuggestion",
    "Savings",
    "EstimatedSavings",
    # Insights
    "TravelInsights",
    "TravelPatterns",
    "FavoriteDestination",
    "MonthlyTrips",
    "PurposeShare",
    # Violations
    "Violation",
    "ViolationKind",
    "ViolationSeverity",
]
