import os
import logging
import config

# Configure logging
logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Environment validation
logger.info("🔧 Environment Check:")
logger.info(f"   TRIMBLE_API_KEY: {'✅' if config.TRIMBLE_API_KEY else '❌ MISSING (devKey fallback only)'}")
logger.info(f"   TRIMBLE_MAPS_KEY: {'✅' if config.TRIMBLE_MAPS_KEY else '❌ MISSING'}")
logger.info(f"   PCMILER_BASE_URL: {config.PCMILER_BASE_URL}")

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from models.route import RouteMilesRequest, RouteMapRequest
from models.response import RouteMilesResponse, RouteMapResponse, PublicConfigResponse
from services.errors import ConfigurationError, UpstreamServiceError
from services.stops import classify_stops, is_highway_only
from services.pcmiler import address_stops, build_route_request, fetch_route_reports
from services.reports import normalize_reports
from services.static_map import build_pins, render_static_map

PUBLIC_DIR = os.path.normpath(os.path.join(os.path.dirname(__file__), "..", "public"))
INDEX_HTML = os.path.join(PUBLIC_DIR, "index.html")

ROUTE_MILES_PATH = "/api/route-miles"
ROUTE_MAP_PATH = "/api/route-map"
OTHER_METHODS = ["GET", "HEAD", "OPTIONS", "PUT", "PATCH", "DELETE"]

app = FastAPI(
    title="Route Miles",
    description="Truck mileage, route geometry and static route maps for a list of stops",
    version="3.1.1",
    docs_url="/docs" if os.getenv("ENVIRONMENT") != "production" else None,
    redoc_url="/redoc" if os.getenv("ENVIRONMENT") != "production" else None
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOWED_ORIGINS,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


def _error(status_code: int, error: str, details: str | None = None, **extra) -> JSONResponse:
    body = {**extra, "error": error}
    if details is not None:
        body["details"] = details
    return JSONResponse(status_code=status_code, content=body)


def _wants_map(request: Request) -> bool:
    return request.url.path == ROUTE_MAP_PATH


@app.exception_handler(RequestValidationError)
async def invalid_body(request: Request, exc: RequestValidationError):
    logger.warning(f"Rejected body for {request.url.path}: {exc.errors()}")
    extra = {"ok": False} if _wants_map(request) else {}
    return _error(400, "Invalid request body.", str(exc.errors()), **extra)


@app.get("/")
def index():
    """Serve the static frontend at the site root."""
    if not os.path.exists(INDEX_HTML):
        return _error(404, "index.html not found")
    return FileResponse(INDEX_HTML, media_type="text/html")


@app.get("/health")
def health():
    """Health check endpoint"""
    return {
        "status": "ok",
        "service": "Route Miles",
        "trimble_configured": bool(config.TRIMBLE_API_KEY),
        "maps_key_configured": bool(config.TRIMBLE_MAPS_KEY),
    }


@app.get("/api/public-config", response_model=PublicConfigResponse)
def public_config():
    """Expose the browser maps key. Not a secret."""
    return PublicConfigResponse(mapsKey=config.TRIMBLE_MAPS_KEY or "")


@app.post(ROUTE_MILES_PATH, response_model=RouteMilesResponse)
def route_miles(req: RouteMilesRequest):
    if len(req.stops) < 2:
        logger.warning(f"Route miles rejected: {len(req.stops)} stop(s)")
        return _error(400, "At least two stops are required.")

    try:
        api_key = config.TRIMBLE_API_KEY or (req.devKey or "").strip()
        if not api_key:
            raise ConfigurationError("Server API key not configured.")

        stops = classify_stops(req.stops)
        highway_only = is_highway_only(stops)
        logger.info(f"🛣 Classified {len(stops)} stops ({', '.join(s.kind for s in stops)}), HighwayOnly={highway_only}")

        data = fetch_route_reports(build_route_request(stops, highway_only), api_key)
        summary = normalize_reports(data)
        logger.info(f"✅ Route miles: {summary.miles} across {len(summary.stops)} resolved stops")
        return RouteMilesResponse(**summary.model_dump())

    except ConfigurationError as e:
        logger.error(f"❌ {e}")
        return _error(500, str(e))
    except UpstreamServiceError as e:
        return _error(e.status_code, "Routing service error", e.body)
    except Exception as e:
        logger.exception(f"💥 Route miles failed: {e}")
        return _error(500, "Server error", str(e))


@app.post(ROUTE_MAP_PATH, response_model=RouteMapResponse)
def route_map(req: RouteMapRequest):
    if len(req.locations) < 2:
        logger.warning(f"Route map rejected: {len(req.locations)} location(s)")
        return _error(400, "At least two locations are required.", ok=False)

    try:
        if not config.TRIMBLE_API_KEY:
            raise ConfigurationError("Server API key not configured.")

        stops = address_stops(req.locations)
        data = fetch_route_reports(build_route_request(stops, highway_only=False), config.TRIMBLE_API_KEY)
        summary = normalize_reports(data)

        pins = build_pins(summary.geometry, req.locations)
        static_map_url = render_static_map(pins, config.TRIMBLE_API_KEY)
        logger.info(f"🗺 Route map: {summary.miles} miles, {len(pins)} pins")
        return RouteMapResponse(miles=summary.miles, staticMapUrl=static_map_url)

    except ConfigurationError as e:
        logger.error(f"❌ {e}")
        return _error(500, str(e), ok=False)
    except UpstreamServiceError as e:
        return _error(e.status_code, "Routing service error", e.body, ok=False)
    except Exception as e:
        logger.exception(f"💥 Route map failed: {e}")
        return _error(500, "Server error", str(e), ok=False)


@app.api_route(ROUTE_MILES_PATH, methods=OTHER_METHODS, include_in_schema=False)
def route_miles_method_not_allowed(request: Request):
    logger.warning(f"{request.method} {ROUTE_MILES_PATH} not allowed")
    return _error(405, "Method not allowed")


@app.api_route(ROUTE_MAP_PATH, methods=OTHER_METHODS, include_in_schema=False)
def route_map_method_not_allowed(request: Request):
    logger.warning(f"{request.method} {ROUTE_MAP_PATH} not allowed")
    return _error(405, "Method not allowed", ok=False)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
