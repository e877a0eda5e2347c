"""学生提交接口的请求/响应模型。attempts 内部沿用前端的 camelCase 键名，同时接受 snake_case。"""
from pydantic import BaseModel, ConfigDict, Field


class AnswerItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    selected_option: str = Field(..., alias="selectedOption")
    rationale: str = ""


class AttemptItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    attempt_index: int = Field(..., alias="attemptIndex")
    answers: dict[str, AnswerItem] = Field(default_factory=dict, description="questionId -> 作答")
    result: float = Field(..., description="正确率百分比 0-100，由前端计算")
    submitted_at: str = Field(..., alias="submittedAt")


class SubmissionRequest(BaseModel):
    instance_id: str = Field(..., min_length=1)
    student_id: str = Field(..., min_length=1)
    attempts: list[AttemptItem]


class SubmissionResponse(BaseModel):
    submission_id: str
    instance_id: str
    student_id: str
    number_of_attempts: int
    attempts: list[dict]
    created_at: str


class SubmissionListResponse(BaseModel):
    count: int = 0
    submissions: list[SubmissionResponse] = Field(default_factory=list)
