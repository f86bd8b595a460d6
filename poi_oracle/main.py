# poi_oracle/main.py
# -----------------------------------------------------------------------------
# FastAPI 엔트리포인트
# - 실행: uvicorn poi_oracle.main:app
# - 요청 본문 검증 실패 → 400, 그 외 HTTP 예외 → {"error": detail}
# -----------------------------------------------------------------------------
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

import poi_oracle.core.logging  # noqa: F401  (로깅 싱크 등록)
from poi_oracle.core.config import settings
from poi_oracle.routers import analysis, classify, llm

app = FastAPI(title=settings.APP_NAME)


@app.on_event("startup")
async def on_startup():
    mode = f"llm:{settings.LLM_PROVIDER}" if settings.llm_enabled else "simulation"
    logger.info(f"[Startup] {settings.APP_NAME} ({settings.ENV}) mode={mode}")


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.info(f"[Request] {request.method} {request.url.path} 본문 검증 실패")
    return JSONResponse(
        status_code=400,
        content={
            "error": "Invalid request body",
            "details": jsonable_encoder(exc.errors()),
        },
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


app.include_router(analysis.router)
app.include_router(llm.router)
app.include_router(classify.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
