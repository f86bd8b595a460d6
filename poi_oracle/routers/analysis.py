from fastapi import APIRouter
from fastapi.responses import JSONResponse
from loguru import logger

from poi_oracle.schemas.analysis import AnalysisRequest, AnalysisResult
from poi_oracle.services.reasoning import analyze_query

router = APIRouter(tags=["analysis"])


@router.post("/analyze", response_model=AnalysisResult)
async def analyze(req: AnalysisRequest):
    """AI 추론 + Ground Truth 검증 결과 반환. 본문 검증 실패는 400 (main 핸들러)."""
    try:
        return await analyze_query(req.query, req.query_type)
    except Exception as e:
        logger.exception(f"[Analyze] 분석 실패: {e}")
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to analyze query", "details": str(e)},
        )
