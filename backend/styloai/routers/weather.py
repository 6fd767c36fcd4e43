from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..core.exceptions import ValidationError
from ..models import User
from ..services.weather_service import (
    get_weather_based_recommendations,
    get_weather_by_city,
    get_weather_by_coords,
)
from ..utils.auth import get_current_user

router = APIRouter(prefix="/weather", tags=["Weather"])


@router.get("")
def current_weather(
    city: Optional[str] = Query(None, description="City name, e.g. Mumbai"),
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lon: Optional[float] = Query(None, ge=-180, le=180),
    current_user: User = Depends(get_current_user),
):
    if city:
        weather = get_weather_by_city(city)
    elif lat is not None and lon is not None:
        weather = get_weather_by_coords(lat, lon)
    else:
        raise ValidationError("city or lat and lon are required")

    return {
        "success": True,
        "data": {
            "weather": weather,
            "recommendations": get_weather_based_recommendations(weather),
        },
    }
