from fastapi import APIRouter

from ..config import settings
from ..utils.cloudinary_helper import get_cloudinary_status

router = APIRouter(prefix="/config", tags=["Config"])


@router.get("/check")
def check_config():
    """Report which integrations have their environment configured (never the values)."""
    return {
        "success": True,
        "data": {
            "google_calendar": {
                "configured": settings.google_calendar_configured,
                "has_client_id": bool(settings.GOOGLE_CALENDAR_CLIENT_ID),
                "has_client_secret": bool(settings.GOOGLE_CALENDAR_CLIENT_SECRET),
                "has_redirect_uri": bool(settings.GOOGLE_CALENDAR_REDIRECT_URI),
            },
            "phonepe": {"configured": settings.phonepe_configured},
            "weather": {"configured": settings.weather_configured},
            "aws": {"configured": settings.aws_configured, "region": settings.AWS_REGION},
            "cloudinary": get_cloudinary_status(),
        },
    }
