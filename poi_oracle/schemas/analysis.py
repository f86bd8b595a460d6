# poi_oracle/schemas/analysis.py
# -----------------------------------------------------------------------------
# 분석 요청/응답 스키마
# - 파이썬 필드는 snake_case, 와이어(JSON) 키는 camelCase alias
# -----------------------------------------------------------------------------
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Tuple


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class POIAttributes(BaseModel):
    hours: Optional[str] = None
    rating: Optional[float] = None
    tags: Optional[List[str]] = None


class POI(BaseModel):
    id: str
    name: str
    category: str
    lat: float
    lng: float
    confidence: float = Field(ge=0.0, le=1.0)
    verified: bool
    attributes: Optional[POIAttributes] = None


class QueryInterpretation(_CamelModel):
    location: str
    business_type: str = Field(alias="businessType")
    contextual_factors: List[str] = Field(alias="contextualFactors")
    market_insights: str = Field(alias="marketInsights")
    key_assumptions: List[str] = Field(alias="keyAssumptions")


class AnalysisRequest(_CamelModel):
    query: str = Field(min_length=1)
    query_type: Optional[str] = Field(None, alias="queryType")


class AIReasoning(_CamelModel):
    interpretation: str
    suggested_locations: List[POI] = Field(alias="suggestedLocations")
    assumptions: List[str]
    confidence: float = Field(ge=0.0, le=1.0)


class GroundTruth(_CamelModel):
    verified_pois: List[POI] = Field(alias="verifiedPOIs")
    corrections: List[str]
    gaps: List[str]
    accuracy: int = Field(ge=0, le=70)


class Visualization(BaseModel):
    center: Tuple[float, float]
    zoom: int = 13


class AnalysisResult(_CamelModel):
    query: str
    ai_reasoning: AIReasoning = Field(alias="aiReasoning")
    ground_truth: GroundTruth = Field(alias="groundTruth")
    recommendation: str
    visualization: Visualization
