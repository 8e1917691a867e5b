"""GET /api — santé de l'API."""
from datetime import datetime, timezone

from fastapi import APIRouter

router = APIRouter(tags=["Status"])

API_VERSION = "1.0.0"


@router.get("/api")
@router.get("/api/")
def api_status():
    return {
        "status":    "online",
        "message":   "DROIT API is running",
        "version":   API_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
    }
