# poi_oracle/services/gazetteer.py
from typing import Dict, Tuple

DEFAULT_CITY = "bangalore"

# 주요 인도 도시 + 아프리카(나이로비) 중심 좌표 (lat, lng)
CITY_COORDINATES: Dict[str, Tuple[float, float]] = {
    "bangalore": (12.9716, 77.5946),
    "bengaluru": (12.9716, 77.5946),
    "delhi": (28.6139, 77.2090),
    "mumbai": (19.0760, 72.8777),
    "nairobi": (-1.2921, 36.8219),
    "hyderabad": (17.3850, 78.4867),
    "kenya": (-1.2921, 36.8219),
    "chennai": (13.0827, 80.2707),
    "pune": (18.5204, 73.8567),
    "kolkata": (22.5726, 88.3639),
    "ahmedabad": (23.0225, 72.5714),
    "jaipur": (26.9124, 75.7873),
    "lucknow": (26.8467, 80.9462),
    "kochi": (9.9312, 76.2673),
    "chandigarh": (30.7333, 76.7794),
}


def get_city_coordinates(location: str) -> Tuple[float, float]:
    """
    도시명 -> 중심 좌표. 소문자화 + 공백 제거 후 정확 일치만 허용.
    미등록 도시는 기본 도시(방갈로르) 좌표로 대체.
    """
    normalized = "".join((location or "").lower().split())
    return CITY_COORDINATES.get(normalized, CITY_COORDINATES[DEFAULT_CITY])
