# poi_oracle/services/classifier.py
# -----------------------------------------------------------------------------
# POI 분류기
# - 15개 L1 카테고리 정적 택소노미 (인도 시장 기준)
# - 이름 키워드(주 신호) + 문맥 규칙(보조 신호) 부분문자열 매칭 점수
# -----------------------------------------------------------------------------
from __future__ import annotations

import random
import time
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from poi_oracle.schemas.analysis import POI, POIAttributes
from poi_oracle.services.gazetteer import get_city_coordinates

KEYWORD_WEIGHT = 0.35
CONTEXT_WEIGHT = 0.15
MAX_CONFIDENCE = 0.95  # 현실 불확실성 반영 상한
UNKNOWN = "unknown"
UNKNOWN_CONFIDENCE = 0.3


@dataclass(frozen=True)
class POICategory:
    id: str
    name: str
    description: str
    keywords: Tuple[str, ...]
    contextual_rules: Tuple[str, ...]


POI_CATEGORIES: Tuple[POICategory, ...] = (
    POICategory(
        "food_beverage",
        "Food & Beverage",
        "Restaurants, cafes, street food, and beverage outlets",
        ("restaurant", "cafe", "dhaba", "chai", "food", "biryani", "dosa", "coffee", "bakery"),
        ("Near residential areas", "High foot traffic zones", "Commercial streets"),
    ),
    POICategory(
        "retail",
        "Retail & Shopping",
        "Shops, markets, malls, and retail outlets",
        ("shop", "store", "market", "mall", "kirana", "bazaar", "supermarket", "grocery"),
        ("Commercial zones", "Market districts", "Residential periphery"),
    ),
    POICategory(
        "healthcare",
        "Healthcare",
        "Hospitals, clinics, pharmacies, diagnostic centers",
        ("hospital", "clinic", "pharmacy", "medical", "doctor", "diagnostic", "chemist", "health"),
        ("Accessible locations", "Near residential areas", "Main roads"),
    ),
    POICategory(
        "education",
        "Education",
        "Schools, colleges, coaching centers, libraries",
        ("school", "college", "university", "coaching", "tuition", "library", "academy", "institute"),
        ("Residential neighborhoods", "Safe zones", "Away from industrial areas"),
    ),
    POICategory(
        "finance",
        "Financial Services",
        "Banks, ATMs, insurance, financial services",
        ("bank", "atm", "insurance", "finance", "money transfer", "loan", "credit"),
        ("Commercial areas", "High security zones", "Main markets"),
    ),
    POICategory(
        "transportation",
        "Transportation",
        "Bus stops, metro stations, auto stands, parking",
        ("bus", "metro", "auto", "taxi", "parking", "station", "stand", "terminal"),
        ("Transit hubs", "Major roads", "Junction points"),
    ),
    POICategory(
        "worship",
        "Places of Worship",
        "Temples, mosques, churches, gurudwaras",
        ("temple", "mosque", "church", "gurudwara", "mandir", "masjid", "prayer"),
        ("Community centers", "Peaceful areas", "Heritage zones"),
    ),
    POICategory(
        "entertainment",
        "Entertainment",
        "Theaters, gaming zones, recreational facilities",
        ("cinema", "theater", "gaming", "entertainment", "multiplex", "park", "playground"),
        ("Commercial zones", "Urban centers", "Family areas"),
    ),
    POICategory(
        "government",
        "Government Services",
        "Government offices, post offices, civic centers",
        ("government", "office", "post office", "municipal", "civic", "panchayat", "tehsil"),
        ("Administrative zones", "Accessible locations", "City centers"),
    ),
    POICategory(
        "technology",
        "IT & Technology",
        "IT parks, tech companies, coworking spaces",
        ("IT park", "tech park", "office", "coworking", "startup", "software", "technology"),
        ("Business districts", "Modern infrastructure", "Metro connectivity"),
    ),
    POICategory(
        "hospitality",
        "Hospitality",
        "Hotels, lodges, guest houses",
        ("hotel", "lodge", "guest house", "resort", "inn", "motel", "hostel"),
        ("Tourist areas", "Business districts", "Transport hubs"),
    ),
    POICategory(
        "automotive",
        "Automotive",
        "Fuel stations, service centers, showrooms",
        ("petrol", "diesel", "fuel", "service center", "showroom", "workshop", "garage"),
        ("Main roads", "Highway junctions", "Industrial areas"),
    ),
    POICategory(
        "fitness",
        "Fitness & Wellness",
        "Gyms, yoga centers, spas, salons",
        ("gym", "fitness", "yoga", "spa", "salon", "wellness", "health club"),
        ("Residential areas", "Commercial zones", "IT park vicinity"),
    ),
    POICategory(
        "industrial",
        "Industrial",
        "Factories, warehouses, manufacturing units",
        ("factory", "warehouse", "industrial", "manufacturing", "godown", "plant"),
        ("Industrial zones", "City outskirts", "Logistics hubs"),
    ),
    POICategory(
        "residential",
        "Residential",
        "Apartments, villas, housing societies",
        ("apartment", "villa", "society", "colony", "township", "residential"),
        ("Planned layouts", "School proximity", "Green zones"),
    ),
)

_BY_ID: Dict[str, POICategory] = {c.id: c for c in POI_CATEGORIES}


def get_category(category_id: str) -> Optional[POICategory]:
    return _BY_ID.get(category_id)


def _score(category: POICategory, name_lower: str, context_lower: str) -> float:
    score = 0.0
    for keyword in category.keywords:
        if keyword.lower() in name_lower:
            score += KEYWORD_WEIGHT
    if context_lower:
        for rule in category.contextual_rules:
            if rule.lower() in context_lower:
                score += CONTEXT_WEIGHT
    return min(score, MAX_CONFIDENCE)


def classify_poi(name: str, context: Optional[str] = None) -> Dict[str, object]:
    """
    이름(+선택적 문맥)을 가장 점수가 높은 카테고리로 분류.
    동점이면 택소노미 선언 순서상 앞선 카테고리 유지.
    어떤 카테고리도 0.3을 넘지 못하면 unknown(0.3).
    """
    name_lower = (name or "").lower()
    context_lower = (context or "").lower()

    best = {"category": UNKNOWN, "confidence": UNKNOWN_CONFIDENCE}
    for category in POI_CATEGORIES:
        confidence = _score(category, name_lower, context_lower)
        if confidence > best["confidence"]:
            best = {"category": category.id, "confidence": confidence}
    return best


def generate_sample_pois(
    location: str,
    category: str,
    count: int = 5,
    rng: Optional[random.Random] = None,
) -> List[POI]:
    """
    도시 중심 ±0.05° 범위에 샘플 POI 생성 (데모용).
    카테고리 문자열 자체를 분류기에 통과시켜 category/confidence 결정.
    """
    rng = rng or random.Random()
    lat, lng = get_city_coordinates(location)
    classification = classify_poi(category)
    stamp = int(time.time() * 1000)

    pois: List[POI] = []
    for i in range(count):
        pois.append(
            POI(
                id=f"poi_{stamp}_{i}",
                name=f"{category} Location {i + 1}",
                category=classification["category"],
                lat=lat + (rng.random() - 0.5) * 0.1,
                lng=lng + (rng.random() - 0.5) * 0.1,
                confidence=classification["confidence"],
                verified=rng.random() > 0.3,
                attributes=POIAttributes(
                    hours="9 AM - 9 PM",
                    rating=3 + rng.random() * 2,
                    tags=[category],
                ),
            )
        )
    return pois
