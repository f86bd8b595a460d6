# poi_oracle/routers/llm.py
# -----------------------------------------------------------------------------
# /status   : 설정된 LLM 연결 여부 + 모드(llm | simulation)
# /test-llm : 사용자가 입력한 엔드포인트/모델 연결 탐침
# 두 엔드포인트 모두 내부 오류를 호출자에게 던지지 않음 (항상 200)
# -----------------------------------------------------------------------------
from fastapi import APIRouter, Request
from loguru import logger

from poi_oracle.schemas.llm import LLMProbeRequest, LLMProbeResponse, StatusResponse
from poi_oracle.services.llm import check_llm_connection, probe_endpoint

router = APIRouter(tags=["llm"])


@router.get("/status", response_model=StatusResponse)
async def status():
    try:
        connected = await check_llm_connection()
    except Exception as e:
        logger.error(f"[Status] 연결 확인 오류: {e!r}")
        connected = False
    return StatusResponse(
        llm_connected=connected, mode="llm" if connected else "simulation"
    )


@router.post("/test-llm", response_model=LLMProbeResponse)
async def test_llm(request: Request):
    """본문이 깨졌거나 endpoint가 문자열이 아니면 탐침 없이 connected=false."""
    try:
        req = LLMProbeRequest.model_validate(await request.json())
    except Exception as e:
        logger.info(f"[TestLLM] 잘못된 요청 본문: {e!r}")
        return LLMProbeResponse(connected=False)

    if not isinstance(req.endpoint, str) or not req.endpoint:
        logger.info(f"[TestLLM] endpoint 누락/형식 오류: {req.endpoint!r}")
        return LLMProbeResponse(connected=False)
    if req.model is not None and not isinstance(req.model, str):
        logger.info(f"[TestLLM] model 형식 오류: {req.model!r}")
        return LLMProbeResponse(connected=False)
    model = req.model or ""

    try:
        connected = await probe_endpoint(req.endpoint, model)
    except Exception as e:
        logger.error(f"[TestLLM] 탐침 오류: {e!r}")
        connected = False
    return LLMProbeResponse(connected=connected)
