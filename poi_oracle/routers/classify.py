from typing import List

from fastapi import APIRouter, Query

from poi_oracle.schemas.analysis import POI
from poi_oracle.schemas.classify import CategoryOut, ClassifyRequest, ClassifyResponse
from poi_oracle.services.classifier import (
    POI_CATEGORIES,
    classify_poi,
    generate_sample_pois,
)

router = APIRouter(tags=["classify"])


@router.get("/categories", response_model=List[CategoryOut])
async def categories():
    return [
        CategoryOut(
            id=c.id,
            name=c.name,
            description=c.description,
            keywords=list(c.keywords),
            contextual_rules=list(c.contextual_rules),
        )
        for c in POI_CATEGORIES
    ]


@router.post("/classify", response_model=ClassifyResponse)
async def classify(req: ClassifyRequest):
    return ClassifyResponse(**classify_poi(req.name, req.context))


@router.get("/pois/sample", response_model=List[POI])
async def sample_pois(
    location: str = Query("bangalore"),
    category: str = Query("restaurant"),
    count: int = Query(5, ge=1, le=50),
):
    return generate_sample_pois(location, category, count)
