# poi_oracle/services/reasoning.py
# -----------------------------------------------------------------------------
# 분석 오케스트레이터
# - LLM 해석 + AI 제안 지점 5개 + Ground Truth 검증 subset 합성
# - 보정/공백 문구, 정확도(최대 70%), 추천문, 지도 뷰포트 조립
# - 검증은 분류기 정확도(60~70%)를 흉내 낸 무작위 샘플링
# -----------------------------------------------------------------------------
from __future__ import annotations

import math
import random
import time
from typing import Dict, List, Optional, Sequence, Tuple

from loguru import logger

from poi_oracle.core.config import Settings, settings
from poi_oracle.schemas.analysis import (
    AIReasoning,
    AnalysisResult,
    GroundTruth,
    POI,
    POIAttributes,
    Visualization,
)
from poi_oracle.services.gazetteer import get_city_coordinates
from poi_oracle.services.llm import analyze_spatial_query

SUGGESTION_COUNT = 5
ACCURACY_CAP = 70
DEFAULT_ZOOM = 13
DEFAULT_QUERY_TYPE = "location"

AI_SUGGESTED = "ai_suggested"
GROUND_TRUTH_VERIFIED = "ground_truth_verified"

RULE = "━" * 52


def _suggestion_names(business_type: str) -> Dict[str, List[str]]:
    return {
        "location": [
            f"Prime {business_type} Zone - High Traffic",
            f"{business_type} Hotspot - Tech Corridor",
            f"Emerging {business_type} District",
            f"Premium {business_type} Location",
            f"Strategic {business_type} Point",
        ],
        "market": [
            f"Underserved Market - {business_type}",
            "High Growth Potential Zone",
            f"Market Gap - {business_type} Opportunity",
            "Emerging Consumer Hub",
            f"Untapped {business_type} Market",
        ],
        "competitor": [
            "Low Competition Zone",
            "Competitor Weak Spot",
            "Market Share Opportunity",
            "Strategic Entry Point",
            "Competition Gap Area",
        ],
        "optimize": [
            "Optimal Coverage Point",
            "Network Efficiency Zone",
            "Supply Chain Hub",
            "Logistics Optimization Point",
            "Resource Efficiency Location",
        ],
    }


def _mentions(factors: Sequence[str], *needles: str) -> bool:
    return any(n in f.lower() for f in factors for n in needles)


def _stamp() -> int:
    return int(time.time() * 1000)


def generate_ai_suggestions(
    location: str,
    business_type: str,
    factors: Sequence[str],
    query_type: Optional[str] = None,
    rng: Optional[random.Random] = None,
) -> List[POI]:
    """AI 제안 지점 (일부러 부정확할 수 있음 → Ground Truth 가치 시연)"""
    rng = rng or random.Random()
    lat, lng = get_city_coordinates(location)
    table = _suggestion_names(business_type)
    names = table.get(query_type or DEFAULT_QUERY_TYPE) or table[DEFAULT_QUERY_TYPE]
    tech = _mentions(factors, "it", "tech")
    stamp = _stamp()

    return [
        POI(
            id=f"ai_{stamp}_{i}",
            name=names[i],
            category=AI_SUGGESTED,
            lat=lat + (rng.random() - 0.5) * 0.04,
            lng=lng + (rng.random() - 0.5) * 0.04,
            confidence=0.55 + rng.random() * 0.25,  # 55~80%
            verified=False,
            attributes=POIAttributes(
                tags=["AI Generated", "Tech Zone" if tech else "Commercial Zone"],
                hours="7 AM - 10 PM" if tech else "9 AM - 9 PM",
            ),
        )
        for i in range(SUGGESTION_COUNT)
    ]


def validate_with_ground_truth(
    suggestions: Sequence[POI],
    location: str,
    business_type: str,
    rng: Optional[random.Random] = None,
) -> List[POI]:
    """검증률 60~70% 가정 하에 검증 지점 생성"""
    rng = rng or random.Random()
    lat, lng = get_city_coordinates(location)
    rate = 0.60 + rng.random() * 0.10
    valid_count = math.floor(len(suggestions) * rate)

    names = [
        f"Verified: {business_type} - Prime Location",
        f"Validated: High-Traffic {business_type} Zone",
        f"Confirmed: {business_type} Opportunity",
        f"Ground Truth: Optimal {business_type} Spot",
    ]
    stamp = _stamp()

    return [
        POI(
            id=f"verified_{stamp}_{i}",
            name=names[i] if i < len(names) else f"Verified Location {i + 1}",
            category=GROUND_TRUTH_VERIFIED,
            lat=lat + (rng.random() - 0.5) * 0.035,
            lng=lng + (rng.random() - 0.5) * 0.035,
            confidence=0.82 + rng.random() * 0.13,  # 82~95%
            verified=True,
            attributes=POIAttributes(
                tags=["POI Classifier Validated", "Ground Truth"],
                rating=3.5 + rng.random() * 1.5,
                hours="Based on verified operating patterns",
            ),
        )
        for i in range(valid_count)
    ]


def identify_corrections_and_gaps(
    factors: Sequence[str],
    business_type: str,
    location: str,
    rng: Optional[random.Random] = None,
) -> Tuple[List[str], List[str]]:
    rng = rng or random.Random()

    if _mentions(factors, "it", "tech"):
        corrections = [
            "AI assumed standard commercial hours; actual IT park peak times are 8-10 AM and 6-8 PM",
            "AI suggested general commercial areas; IT corridors have different foot traffic patterns",
        ]
    else:
        corrections = [
            "AI overestimated foot traffic in suggested Zone 2 by approximately 35%",
            "Competition density in AI's top pick is higher than estimated (4 similar businesses within 500m)",
        ]

    gaps = [
        f"Identified {rng.randint(2, 4)} underserved neighborhoods with high demand potential",
        f"Found market gap: No {business_type} within 1km of {location} Central Metro Station",
    ]
    if _mentions(factors, "residential"):
        gaps.append(
            f"Residential zones in {location} East show 40% higher demand than current supply"
        )
    return corrections, gaps


def compute_accuracy(verified_count: int, suggestion_count: int) -> int:
    """검증 비율(%) 반올림 후 70에서 캡"""
    ratio = verified_count / max(suggestion_count, 1)
    return min(int(math.floor(ratio * 100 + 0.5)), ACCURACY_CAP)


def generate_recommendation(
    business_type: str,
    location: str,
    verified: Sequence[POI],
    corrections: Sequence[str],
    gaps: Sequence[str],
) -> str:
    if verified:
        top = verified[0].name
        confidence = int(math.floor(verified[0].confidence * 100 + 0.5))
    else:
        top = "No optimal location identified"
        confidence = 0

    return f"""{RULE}
📊 ANALYSIS SUMMARY: {business_type} in {location}
{RULE}

✅ Verified Locations: {len(verified)}
⚠️  AI Corrections Made: {len(corrections)}
🔍 Market Gaps Found: {len(gaps)}

{RULE}
🎯 TOP RECOMMENDATION
{RULE}

Location: {top}
Confidence: {confidence}% (grounded in POI data)

This recommendation is validated against real-world POI
data using our 61% accuracy classifier, ensuring AI
reasoning is grounded in physical reality.
"""


async def analyze_query(
    query: str,
    query_type: Optional[str] = None,
    cfg: Settings = settings,
    rng: Optional[random.Random] = None,
) -> AnalysisResult:
    """
    AI 추론 + Ground Truth 검증 결합 분석.
    난수 사용으로 동일 입력이라도 호출마다 결과가 달라짐.
    """
    rng = rng or random.Random()

    # 1) 질의 해석 (LLM 실패 시 내부에서 휴리스틱 폴백)
    interp = await analyze_spatial_query(query, cfg)
    location = interp.location
    business_type = interp.business_type
    factors = interp.contextual_factors

    # 2) AI 제안 / 3) 검증
    suggestions = generate_ai_suggestions(
        location, business_type, factors, query_type, rng
    )
    verified = validate_with_ground_truth(suggestions, location, business_type, rng)

    # 4) 보정 / 공백
    corrections, gaps = identify_corrections_and_gaps(
        factors, business_type, location, rng
    )

    # 5) 정확도
    accuracy = compute_accuracy(len(verified), len(suggestions))

    logger.info(
        f"[Analyze] {business_type} @ {location} "
        f"(type={query_type or DEFAULT_QUERY_TYPE}) "
        f"suggested={len(suggestions)} verified={len(verified)} acc={accuracy}%"
    )

    return AnalysisResult(
        query=query,
        ai_reasoning=AIReasoning(
            interpretation=interp.market_insights,
            suggested_locations=suggestions,
            assumptions=interp.key_assumptions,
            confidence=0.72 + rng.random() * 0.08,  # 72~80%
        ),
        ground_truth=GroundTruth(
            verified_pois=verified,
            corrections=corrections,
            gaps=gaps,
            accuracy=accuracy,
        ),
        recommendation=generate_recommendation(
            business_type, location, verified, corrections, gaps
        ),
        visualization=Visualization(
            center=get_city_coordinates(location), zoom=DEFAULT_ZOOM
        ),
    )
