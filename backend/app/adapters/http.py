"""HTTP persistence backend for trips."""

import httpx
from pydantic import TypeAdapter, ValidationError

from backend.app.models.trip import Trip
from backend.app.store.errors import TripBackendError

_TRIP_LIST = TypeAdapter(list[Trip])


class HttpTripBackend:
    """Loads trips from a remote JSON endpoint (GET {base_url}/trips)."""

    def __init__(
        self,
        base_url: str,
        *,
        client: httpx.AsyncClient | None = None,
        timeout: float = 4.0,
    ) -> None:
        """Initialize backend.

        Args:
            base_url: Service base URL, without the trailing /trips
            client: Optional httpx client (for testing with mocks)
            timeout: Per-request timeout in seconds when no client is given
        """
        self._base_url = base_url.rstrip("/")
        self._client = client
        self._timeout = timeout

    async def load_trips(self) -> list[Trip]:
        """Fetch and parse the trip list.

        Raises:
            TripBackendError: On network, HTTP or payload errors
        """
        url = f"{self._base_url}/trips"

        close_client = False
        client = self._client
        if client is None:
            client = httpx.AsyncClient(timeout=self._timeout)
            close_client = True

        try:
            response = await client.get(url)
            response.raise_for_status()
            payload = response.json()

            # Accept either a bare list or {"trips": [...]}
            if isinstance(payload, dict):
                payload = payload.get("trips", [])

            return _TRIP_LIST.validate_python(payload)
        except httpx.HTTPStatusError as e:
            raise TripBackendError(
                f"Failed to fetch trips: server returned {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise TripBackendError(f"Failed to fetch trips: {type(e).__name__}") from e
        except (ValueError, ValidationError) as e:
            raise TripBackendError("Failed to fetch trips: malformed response") from e
        finally:
            if close_client:
                await client.aclose()
