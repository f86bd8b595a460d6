# poi_oracle/services/llm.py
# -----------------------------------------------------------------------------
# LLM 질의 해석기
# - OpenAI 호환 chat/completions 호출 (Ollama / OpenAI)
# - 미설정/호출 실패/JSON 파싱 실패 시 휴리스틱(시뮬레이션)으로 폴백
# - 연결 확인(/status)과 엔드포인트 탐침(/test-llm)
# -----------------------------------------------------------------------------
from __future__ import annotations

from typing import Dict, List, Optional, Tuple

import httpx
from loguru import logger

from poi_oracle.core.config import Settings, settings
from poi_oracle.schemas.analysis import QueryInterpretation

SYSTEM_PROMPT = """You are POI Oracle, an expert spatial intelligence AI specialized in location analysis for businesses in India and Africa.

Your task is to analyze business location queries and extract structured information. Always respond with valid JSON in this exact format:
{
  "location": "city name (e.g., Bangalore, Delhi, Nairobi)",
  "businessType": "type of business (e.g., Chai Stall, Pharmacy, Restaurant)",
  "contextualFactors": ["factor1", "factor2", "factor3"],
  "marketInsights": "A detailed 2-3 sentence analysis of the market opportunity",
  "keyAssumptions": ["assumption1", "assumption2", "assumption3"]
}

Focus on:
1. Identifying the exact target location and business type
2. Understanding contextual factors (IT parks, residential areas, foot traffic patterns)
3. Making realistic assumptions about the business environment
4. Providing actionable market insights based on spatial reasoning

Be specific about Indian/African market dynamics when relevant."""

# ── 휴리스틱 테이블 (선언 순서대로 첫 매칭 채택) ─────────────────────────────
DEFAULT_LOCATION = "Bangalore"
DEFAULT_BUSINESS_TYPE = "Business"

CITIES: Tuple[str, ...] = (
    "bangalore", "bengaluru", "delhi", "mumbai", "nairobi", "hyderabad",
    "kenya", "chennai", "pune", "kolkata", "ahmedabad", "jaipur",
)

BUSINESS_TYPES: Tuple[Tuple[str, str], ...] = (
    ("chai", "Chai Stall"),
    ("tea", "Tea Shop"),
    ("coffee", "Coffee Shop"),
    ("pharmacy", "Pharmacy"),
    ("medical", "Medical Store"),
    ("restaurant", "Restaurant"),
    ("food", "Food Outlet"),
    ("gym", "Fitness Center"),
    ("school", "Educational Institution"),
    ("bank", "Banking Services"),
    ("atm", "ATM"),
    ("salon", "Beauty Salon"),
    ("spa", "Wellness Spa"),
    ("grocery", "Grocery Store"),
    ("supermarket", "Supermarket"),
)

IT_PARK_FACTOR = "Proximity to IT/Tech Parks"

CONTEXT_TRIGGERS: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("it park", "tech park"), IT_PARK_FACTOR),
    (("residential",), "Residential Area Focus"),
    (("underserved", "gap"), "Market Gap Analysis Required"),
    (("commercial",), "Commercial Zone Priority"),
    (("metro", "transit"), "Metro/Transit Accessibility"),
)
DEFAULT_FACTORS = ("General Commercial Viability", "Foot Traffic Potential")


def simulate_analysis(query: str) -> QueryInterpretation:
    """LLM 없이 부분문자열 규칙만으로 질의를 해석 (결정적)."""
    q = query.lower()

    location = DEFAULT_LOCATION
    for city in CITIES:
        if city in q:
            location = city[0].upper() + city[1:]
            break

    business_type = DEFAULT_BUSINESS_TYPE
    for keyword, label in BUSINESS_TYPES:
        if keyword in q:
            business_type = label
            break

    factors: List[str] = [
        label for phrases, label in CONTEXT_TRIGGERS if any(p in q for p in phrases)
    ]
    if not factors:
        factors = list(DEFAULT_FACTORS)

    near_it = IT_PARK_FACTOR in factors
    insights = (
        f"Analyzing optimal locations for {business_type} in {location}. "
        f"Key considerations include {' and '.join(factors[:2]).lower()}. "
        "The analysis will identify high-footfall areas with good accessibility, "
        "visibility, and demographic alignment for your target customer base."
    )
    assumptions = [
        "High demand areas are concentrated near major "
        + ("IT parks and tech corridors" if near_it else "commercial zones"),
        f"{business_type} performs best in areas with consistent daily foot traffic patterns",
        "Peak business hours align with "
        + (
            "8-10 AM and 6-8 PM (IT crowd)"
            if near_it
            else "standard 9 AM - 6 PM working hours"
        ),
        "Competition density in target area is moderate to high",
    ]

    return QueryInterpretation(
        location=location,
        business_type=business_type,
        contextual_factors=factors,
        market_insights=insights,
        key_assumptions=assumptions,
    )


def strip_code_fence(content: str) -> str:
    """```json ... ``` 형태의 마크다운 래퍼 제거"""
    text = content.strip()
    if text.startswith("```json"):
        text = text[7:]
    if text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]
    return text.strip()


def _client_params(cfg: Settings) -> Optional[Tuple[str, str, str]]:
    """(base_url, api_key, model). 휴리스틱 모드면 None."""
    if not cfg.llm_enabled:
        return None
    provider = cfg.LLM_PROVIDER.lower()
    if provider == "ollama":
        # Ollama는 실제 키가 필요 없음
        return cfg.OLLAMA_URL, "ollama", cfg.OLLAMA_MODEL
    if provider == "openai":
        if not cfg.OPENAI_API_KEY:
            logger.warning("[LLM] OPENAI_API_KEY 미설정 → 시뮬레이션 모드")
            return None
        return cfg.OPENAI_URL, cfg.OPENAI_API_KEY, cfg.OPENAI_MODEL
    logger.warning(f"[LLM] 알 수 없는 공급자 {cfg.LLM_PROVIDER!r} → 시뮬레이션 모드")
    return None


async def _chat_completion(
    base_url: str, api_key: str, payload: Dict, timeout: float
) -> Dict:
    async with httpx.AsyncClient(timeout=timeout) as client:
        r = await client.post(
            f"{base_url.rstrip('/')}/chat/completions",
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            json=payload,
        )
        r.raise_for_status()
        return r.json()


async def analyze_spatial_query(
    query: str, cfg: Settings = settings
) -> QueryInterpretation:
    """
    질의 -> QueryInterpretation.
    LLM 호출은 요청당 1회. 어떤 실패도 밖으로 던지지 않고 휴리스틱으로 폴백.
    """
    params = _client_params(cfg)
    if params is None:
        return simulate_analysis(query)

    base_url, api_key, model = params
    payload = {
        "model": model,
        "messages": [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": query},
        ],
        "temperature": cfg.LLM_TEMPERATURE,
        "max_tokens": cfg.LLM_MAX_TOKENS,
    }
    try:
        data = await _chat_completion(base_url, api_key, payload, cfg.LLM_TIMEOUT)
        choices = data.get("choices") or [{}]
        content = (choices[0].get("message") or {}).get("content")
        if not content:
            raise ValueError("No response from LLM")
        return QueryInterpretation.model_validate_json(strip_code_fence(content))
    except httpx.HTTPError as e:
        logger.warning(f"[LLM] HTTPError: {e!r} → 시뮬레이션 폴백")
    except Exception as e:
        logger.warning(f"[LLM] 응답 해석 실패: {e!r} → 시뮬레이션 폴백")
    return simulate_analysis(query)


async def check_llm_connection(cfg: Settings = settings) -> bool:
    """설정된 LLM에 최소 요청 1회. 휴리스틱 모드면 네트워크 없이 False."""
    params = _client_params(cfg)
    if params is None:
        return False

    base_url, api_key, model = params
    payload = {
        "model": model,
        "messages": [{"role": "user", "content": "test"}],
        "max_tokens": 5,
    }
    try:
        await _chat_completion(base_url, api_key, payload, cfg.LLM_PROBE_TIMEOUT)
        return True
    except httpx.HTTPError as e:
        logger.warning(f"[LLM] 연결 확인 실패: {e!r}")
    except Exception as e:
        logger.error(f"[LLM] 연결 확인 중 기타 오류: {e!r}")
    return False


async def probe_endpoint(
    endpoint: str,
    model: str,
    tags_timeout: float = 5.0,
    completion_timeout: float = 10.0,
) -> bool:
    """
    사용자가 입력한 엔드포인트 탐침.
    1) 모델 목록 GET (Ollama /api/tags)
    2) 실패 시 chat/completions POST 1회
    """
    tags_url = endpoint.replace("/v1", "/api/tags", 1)
    try:
        async with httpx.AsyncClient(timeout=tags_timeout) as client:
            r = await client.get(tags_url)
        if r.is_success:
            return True
    except Exception as e:
        logger.info(f"[LLM] 모델 목록 조회 실패 ({tags_url}): {e!r}")

    try:
        async with httpx.AsyncClient(timeout=completion_timeout) as client:
            r = await client.post(
                f"{endpoint.rstrip('/')}/chat/completions",
                json={
                    "model": model,
                    "messages": [{"role": "user", "content": "test"}],
                    "max_tokens": 5,
                },
            )
        return r.is_success
    except Exception as e:
        logger.warning(f"[LLM] 엔드포인트 탐침 실패 ({endpoint}): {e!r}")
        return False
