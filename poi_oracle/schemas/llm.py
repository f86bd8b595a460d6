from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Literal, Optional


class StatusResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    llm_connected: bool = Field(alias="llmConnected")
    mode: Literal["llm", "simulation"]


class LLMProbeRequest(BaseModel):
    # 타입 검증은 라우터에서 (잘못된 값도 400 대신 connected=false)
    endpoint: Optional[Any] = None
    model: Optional[Any] = None


class LLMProbeResponse(BaseModel):
    connected: bool
