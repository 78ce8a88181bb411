"""Weather backend: FastAPI service serving the parsed feed forecast."""

import logging

from fastapi import FastAPI, HTTPException

from weatherdesk.config.loader import build_gateway, load_config
from weatherdesk.gateway.base import ForecastGateway
from weatherdesk.models.codec import encode_entries
from weatherdesk.models.common import utc_now_iso

logger = logging.getLogger(__name__)


def create_app(gateway: ForecastGateway | None = None) -> FastAPI:
    if gateway is None:
        gateway = build_gateway(load_config())

    app = FastAPI(title="weatherdesk backend", version="0.1.0")
    app.state.gateway = gateway

    @app.get("/api/weather")
    def get_weather():
        """Forecast entries plus the time they were fetched."""
        try:
            entries = app.state.gateway.fetch_forecast()
        except Exception as e:
            logger.exception("Failed to fetch forecast for client")
            raise HTTPException(502, str(e) or type(e).__name__) from e
        return {"forecasts": encode_entries(entries), "fetched": utc_now_iso()}

    @app.get("/api/health")
    def get_health():
        return {"ok": True, "timestamp": utc_now_iso()}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=8777)
