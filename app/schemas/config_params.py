"""参数说明 schema 接口的请求/响应模型。"""
from pydantic import BaseModel, Field


class ConfigParamItem(BaseModel):
    name: str
    type: str
    description: str | None = None
    items: str | None = None
    enum: list[str] | None = None


class ConfigParamsResponse(BaseModel):
    params: list[ConfigParamItem] = Field(default_factory=list)


class ConfigParamsUpdateRequest(BaseModel):
    params: list[ConfigParamItem] = Field(..., description="完整的参数列表，整体替换当前版本")


class ConfigParamsUpdateResponse(BaseModel):
    message: str = "Parameter schema updated successfully"
    schema_id: str
    updated_at: str
    params: list[ConfigParamItem]
