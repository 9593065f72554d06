import os
import logging
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_PCMILER_BASE = "https://pcmiler.alk.com/apis/rest/v1.0/Service.svc"

# Server-side routing credential. Read once per process.
TRIMBLE_API_KEY = (os.getenv("TRIMBLE_API_KEY") or "").strip()

# Browser maps key, safe to hand to the frontend.
TRIMBLE_MAPS_KEY = os.getenv("TRIMBLE_MAPS_KEY", "")

PCMILER_BASE_URL = os.getenv("PCMILER_BASE_URL", DEFAULT_PCMILER_BASE).rstrip("/")


def _optional_seconds(name: str) -> float | None:
    raw = os.getenv(name)
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Ignoring non-numeric {name}={raw!r}")
        return None


# None means no client-side timeout; the hosting platform's limit applies.
PCMILER_TIMEOUT = _optional_seconds("PCMILER_TIMEOUT")

ALLOWED_ORIGINS = [o.strip() for o in os.getenv("ALLOWED_ORIGINS", "*").split(",") if o.strip()]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
