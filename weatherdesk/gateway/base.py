"""Backend gateway contract used by the application shell."""

from collections.abc import Callable
from typing import Protocol, TypeAlias

from weatherdesk.models.forecast import ForecastEntry

RefreshHandler: TypeAlias = Callable[[list[ForecastEntry]], None]
Unsubscribe: TypeAlias = Callable[[], None]


class ForecastGateway(Protocol):
    """A backend able to return the forecast list and push fresh copies."""

    def fetch_forecast(self) -> list[ForecastEntry]:
        """Fetch the current forecast list. May raise on any failure."""
        ...

    def subscribe_refresh(self, handler: RefreshHandler) -> Unsubscribe:
        """Deliver unsolicited forecast updates until the returned callable is invoked."""
        ...
