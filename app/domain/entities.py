"""领域实体：Activity、DeploymentInstance、Submission、ConfigParamsSchema。

实体一经构造不可修改；内嵌的 dict / list 在构造时深拷贝并冻结
（dict -> MappingProxyType，list -> tuple），to_dict() 等方法返回新的普通副本。
"""
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import Any


def freeze(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        return tuple(freeze(item) for item in value)
    return value


def thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: thaw(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [thaw(item) for item in value]
    return value


@dataclass(frozen=True)
class Activity:
    """cfg 为合并并校验通过的完整配置（title、grade、modules、exercises 等字段，原样保留调用方额外传入的键）。

    cfg 以只读形式保存（dict -> MappingProxyType，list -> tuple），含列表的配置不能直接与 cfg 比较；
    与原始输入做相等判断请用 config_dict()（等价于 thaw(cfg)）。
    """

    id: str
    cfg: Mapping[str, Any]
    created_at: datetime

    def __post_init__(self):
        object.__setattr__(self, "cfg", freeze(self.cfg))

    def config_dict(self) -> dict[str, Any]:
        return thaw(self.cfg)

    @property
    def title(self) -> str | None:
        return self.cfg.get("title")


@dataclass(frozen=True)
class DeploymentInstance:
    instance_id: str
    activity_id: str
    created_at: datetime
    expires_at: datetime
    session_params: Mapping[str, Any] | None = None

    def __post_init__(self):
        if self.session_params is not None:
            object.__setattr__(self, "session_params", freeze(self.session_params))

    def session_params_dict(self) -> dict[str, Any] | None:
        return None if self.session_params is None else thaw(self.session_params)


@dataclass(frozen=True)
class Answer:
    selected_option: str
    rationale: str = ""


@dataclass(frozen=True)
class AttemptResult:
    """单次作答结果，由前端计算好后整体提交，服务端不重新判分。"""

    attempt_index: int
    answers: Mapping[str, Answer]
    result: float
    submitted_at: str

    def __post_init__(self):
        object.__setattr__(self, "answers", MappingProxyType(dict(self.answers)))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AttemptResult":
        """兼容 camelCase（存储格式）与 snake_case（接口格式）两种键名。"""
        raw_answers = data.get("answers") or {}
        answers = {
            str(question_id): Answer(
                selected_option=str(item.get("selectedOption", item.get("selected_option", ""))),
                rationale=str(item.get("rationale") or ""),
            )
            for question_id, item in raw_answers.items()
        }
        return cls(
            attempt_index=int(data.get("attemptIndex", data.get("attempt_index", 0))),
            answers=answers,
            result=data.get("result", 0),
            submitted_at=str(data.get("submittedAt", data.get("submitted_at", ""))),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "attemptIndex": self.attempt_index,
            "answers": {
                question_id: {"selectedOption": answer.selected_option, "rationale": answer.rationale}
                for question_id, answer in self.answers.items()
            },
            "result": self.result,
            "submittedAt": self.submitted_at,
        }


@dataclass(frozen=True)
class Submission:
    submission_id: str
    instance_id: str
    student_id: str
    attempts: tuple[AttemptResult, ...]
    created_at: datetime

    def __post_init__(self):
        object.__setattr__(self, "attempts", tuple(self.attempts))

    @property
    def number_of_attempts(self) -> int:
        return len(self.attempts)


@dataclass(frozen=True)
class ConfigParamDefinition:
    name: str
    type: str
    description: str | None = None
    items: str | None = None
    enum: tuple[str, ...] | None = None

    def __post_init__(self):
        if self.enum is not None:
            object.__setattr__(self, "enum", tuple(self.enum))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ConfigParamDefinition":
        return cls(
            name=data["name"],
            type=data["type"],
            description=data.get("description"),
            items=data.get("items"),
            enum=data.get("enum"),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name, "type": self.type}
        if self.description is not None:
            out["description"] = self.description
        if self.items is not None:
            out["items"] = self.items
        if self.enum is not None:
            out["enum"] = list(self.enum)
        return out


@dataclass(frozen=True)
class ConfigParamsSchema:
    id: str
    params: tuple[ConfigParamDefinition, ...]
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        object.__setattr__(self, "params", tuple(self.params))

    def params_list(self) -> list[dict[str, Any]]:
        return [param.to_dict() for param in self.params]


# 参数说明的初始版本，scripts/init_db.py 在库中没有当前 schema 时写入
DEFAULT_CONFIG_PARAMS: tuple[ConfigParamDefinition, ...] = (
    ConfigParamDefinition("title", "string", "Activity title"),
    ConfigParamDefinition("grade", "integer", "School grade (10, 11, 12)"),
    ConfigParamDefinition("modules", "string", "Thematic modules"),
    ConfigParamDefinition("number_of_exercises", "integer"),
    ConfigParamDefinition("total_time_minutes", "integer"),
    ConfigParamDefinition("number_of_retries", "integer"),
    ConfigParamDefinition("relative_tolerance_pct", "number"),
    ConfigParamDefinition("absolute_tolerance", "number"),
    ConfigParamDefinition("show_answers_after_submission", "boolean"),
    ConfigParamDefinition("scoring_policy", "string", enum=("linear", "non-linear")),
    ConfigParamDefinition("approval_threshold", "number"),
    ConfigParamDefinition(
        "exercises",
        "array",
        "Exercises (question, options, correct_options, correct_answer)",
        items="object",
    ),
)
