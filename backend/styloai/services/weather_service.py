"""
Current weather from OpenWeatherMap, mapped onto the four conditions outfits care about.
Any failure degrades to a fixed default so outfit generation never blocks on weather.
"""
import logging
from typing import Any, Dict, Optional

import requests

from ..config import settings
from ..utils.cache import get_cached_weather, set_cached_weather, weather_cache_key

logger = logging.getLogger(__name__)

OPENWEATHERMAP_URL = "https://api.openweathermap.org/data/2.5/weather"

CONDITION_MAP = {
    "Clear": "sunny",
    "Clouds": "cloudy",
    "Rain": "rainy",
    "Drizzle": "rainy",
    "Thunderstorm": "rainy",
    "Snow": "snowy",
    "Mist": "cloudy",
    "Fog": "cloudy",
    "Haze": "cloudy",
}

RECOMMENDATIONS = {
    "sunny": {
        "message": "Sunny day! Wear light, breathable fabrics.",
        "suggestions": ["Light colors", "Sunglasses", "Hat", "Sunscreen"],
    },
    "rainy": {
        "message": "Rainy weather! Stay dry and comfortable.",
        "suggestions": ["Waterproof jacket", "Umbrella", "Boots", "Layers"],
    },
    "cloudy": {
        "message": "Cloudy day! Perfect for layered outfits.",
        "suggestions": ["Light layers", "Comfortable shoes", "Versatile pieces"],
    },
    "snowy": {
        "message": "Cold weather! Bundle up and stay warm.",
        "suggestions": ["Warm layers", "Winter coat", "Boots", "Gloves"],
    },
}


def map_weather_condition(condition: Optional[str]) -> str:
    return CONDITION_MAP.get(condition or "", "sunny")


def get_default_weather() -> Dict[str, Any]:
    return {
        "temperature": 25,
        "condition": "sunny",
        "humidity": 60,
        "wind_speed": 5,
        "description": "Clear sky",
        "icon": "01d",
    }


def _parse_weather(data: dict, include_city: bool) -> Dict[str, Any]:
    current = (data.get("weather") or [{}])[0]
    weather = {
        "temperature": round(data["main"]["temp"]),
        "condition": map_weather_condition(current.get("main")),
        "humidity": data["main"].get("humidity"),
        "wind_speed": (data.get("wind") or {}).get("speed") or 0,
        "description": current.get("description"),
        "icon": current.get("icon"),
    }
    if include_city:
        weather["city"] = data.get("name")
    return weather


def _fetch(params: dict, cache_key: str, include_city: bool) -> Dict[str, Any]:
    if not settings.weather_configured:
        logger.warning("OpenWeatherMap API key not configured. Using default weather.")
        return get_default_weather()

    cached = get_cached_weather(cache_key)
    if cached:
        return cached

    try:
        response = requests.get(
            OPENWEATHERMAP_URL,
            params={**params, "appid": settings.OPENWEATHERMAP_API_KEY, "units": "metric"},
            timeout=settings.HTTP_TIMEOUT,
        )
        if response.status_code != 200:
            logger.error(f"Weather API error: {response.status_code} {response.text}")
            return get_default_weather()
        weather = _parse_weather(response.json(), include_city)
    except (requests.RequestException, ValueError, KeyError, TypeError) as e:
        logger.error(f"Weather API error: {e}")
        return get_default_weather()

    set_cached_weather(cache_key, weather)
    return weather


def get_weather_by_coords(lat: float, lon: float) -> Dict[str, Any]:
    return _fetch({"lat": lat, "lon": lon}, weather_cache_key(lat=lat, lon=lon), include_city=False)


def get_weather_by_city(city: str) -> Dict[str, Any]:
    return _fetch({"q": city}, weather_cache_key(city=city), include_city=True)


def get_weather_based_recommendations(weather: Optional[dict]) -> Dict[str, Any]:
    condition = (weather or {}).get("condition")
    return RECOMMENDATIONS.get(condition, RECOMMENDATIONS["cloudy"])
