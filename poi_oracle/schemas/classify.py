# poi_oracle/schemas/classify.py

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class ClassifyRequest(BaseModel):
    name: str
    context: Optional[str] = None


class ClassifyResponse(BaseModel):
    category: str
    confidence: float


class CategoryOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    description: str
    keywords: List[str]
    contextual_rules: List[str] = Field(alias="contextualRules")
