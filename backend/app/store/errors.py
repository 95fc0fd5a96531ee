"""Trip store exception types."""


class TripStoreError(Exception):
    """Base class for trip store failures."""

    pass


class TripValidationError(TripStoreError):
    """Input rejected before any state mutation (e.g. end date not after start)."""

    pass


class TripNotFoundError(TripStoreError):
    """No trip with the given id."""

    def __init__(self, trip_id: str) -> None:
        super().__init__(f"Trip not found: {trip_id}")
        self.trip_id = trip_id


class ChecklistItemNotFoundError(TripStoreError):
    """No checklist item with the given id on the trip."""

    def __init__(self, trip_id: str, item_id: str) -> None:
        super().__init__(f"Checklist item not found: {item_id} (trip {trip_id})")
        self.trip_id = trip_id
        self.item_id = item_id


class DestinationNotFoundError(TripStoreError):
    """No destination with the given id on the trip."""

    def __init__(self, trip_id: str, destination_id: str) -> None:
        super().__init__(f"Destination not found: {destination_id} (trip {trip_id})")
        self.trip_id = trip_id
        self.destination_id = destination_id


class ExpenseNotFoundError(TripStoreError):
    """No expense with the given id on the trip."""

    def __init__(self, trip_id: str, expense_id: str) -> None:
        super().__init__(f"Expense not found: {expense_id} (trip {trip_id})")
        self.trip_id = trip_id
        self.expense_id = expense_id


class TravelerNotFoundError(TripStoreError):
    """No traveler with the given id on the trip."""

    def __init__(self, trip_id: str, traveler_id: str) -> None:
        super().__init__(f"Traveler not found: {traveler_id} (trip {trip_id})")
        self.trip_id = trip_id
        self.traveler_id = traveler_id


class TransportationNotFoundError(TripStoreError):
    """No transportation leg with the given id on the trip."""

    def __init__(self, trip_id: str, transportation_id: str) -> None:
        super().__init__(f"Transportation not found: {transportation_id} (trip {trip_id})")
        self.trip_id = trip_id
        self.transportation_id = transportation_id


class TemplateNotFoundError(TripStoreError):
    """No template with the given id."""

    def __init__(self, template_id: str) -> None:
        super().__init__(f"Template not found: {template_id}")
        self.template_id = template_id


class TripBackendError(TripStoreError):
    """Persistence collaborator failed; the message is shown to the user verbatim."""

    pass
