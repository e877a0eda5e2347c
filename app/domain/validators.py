"""Activity 配置校验。

每个字段独立校验（先类型、后取值范围），一次收集全部错误，不在首个错误处中断。
纯函数，无副作用。
"""
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterator

TITLE_MAX_LENGTH = 200
ALLOWED_GRADES = (10, 11, 12)
SCORING_POLICIES = ("linear", "non-linear")

REQUIRED_FIELDS = (
    "title",
    "grade",
    "modules",
    "number_of_exercises",
    "total_time_minutes",
    "number_of_retries",
    "exercises",
)


@dataclass(frozen=True)
class ValidationResult:
    """字段 -> 错误信息列表。没有任何非空列表时 is_valid 为 True。

    构造时复制并冻结（MappingProxyType，列表转 tuple），as_dict() 返回普通副本。
    """

    errors: Mapping[str, Sequence[str]] = field(default_factory=dict)

    def __post_init__(self):
        frozen = {name: tuple(messages) for name, messages in self.errors.items()}
        object.__setattr__(self, "errors", MappingProxyType(frozen))

    def as_dict(self) -> dict[str, list[str]]:
        return {name: list(messages) for name, messages in self.errors.items()}

    @property
    def is_valid(self) -> bool:
        return not any(self.errors.values())

    def iter_messages(self) -> Iterator[tuple[str, str]]:
        for field_name, messages in self.errors.items():
            for message in messages:
                yield field_name, message

    def all_messages(self) -> list[str]:
        """按字段顺序展开所有错误信息，供接口 details 使用。"""
        return [message for _, message in self.iter_messages()]


def _is_number(value: Any) -> bool:
    # bool 是 int 的子类，这里不算数字；NaN / inf 也不算
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) or (isinstance(value, float) and value.is_integer())


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def _is_list(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _present(config: Mapping[str, Any], key: str) -> bool:
    return config.get(key) is not None


def _validate_title(config: Mapping[str, Any]) -> list[str]:
    if not _present(config, "title"):
        return ["Activity title is required"]
    title = config["title"]
    if not isinstance(title, str):
        return ["Activity title must be a string"]
    errors = []
    if not title.strip():
        errors.append("Activity title is required")
    if len(title) > TITLE_MAX_LENGTH:
        errors.append(f"Activity title cannot exceed {TITLE_MAX_LENGTH} characters")
    return errors


def _validate_grade(config: Mapping[str, Any]) -> list[str]:
    if not _present(config, "grade"):
        return ["Grade is required"]
    grade = config["grade"]
    if not _is_number(grade):
        return ["Grade must be a number"]
    if grade not in ALLOWED_GRADES:
        return ["Grade must be 10, 11 or 12"]
    return []


def _validate_modules(config: Mapping[str, Any]) -> list[str]:
    if _is_blank(config.get("modules")):
        return ["At least one thematic module must be selected"]
    return []


def _validate_positive_int(config: Mapping[str, Any], key: str, label: str, unit: str = "") -> list[str]:
    if not _present(config, key):
        return [f"{label} is required"]
    value = config[key]
    if not _is_number(value):
        return [f"{label} must be a number"]
    errors = []
    if not _is_integer(value):
        errors.append(f"{label} must be a whole number{unit}")
    if value <= 0:
        errors.append(f"{label} must be greater than 0")
    return errors


def _validate_retries(config: Mapping[str, Any]) -> list[str]:
    # 0 合法，只按是否存在判断
    if not _present(config, "number_of_retries"):
        return ["Number of retries is required"]
    value = config["number_of_retries"]
    if not _is_number(value):
        return ["Number of retries must be a number"]
    errors = []
    if not _is_integer(value):
        errors.append("Number of retries must be a whole number")
    if value < 0:
        errors.append("Number of retries cannot be negative")
    return errors


def _validate_optional_range(
    config: Mapping[str, Any],
    key: str,
    label: str,
    low: float,
    high: float | None,
    range_message: str,
) -> list[str]:
    if not _present(config, key):
        return []
    value = config[key]
    if not _is_number(value):
        return [f"{label} must be a number"]
    if value < low or (high is not None and value > high):
        return [range_message]
    return []


def _validate_show_answers(config: Mapping[str, Any]) -> list[str]:
    if _present(config, "show_answers_after_submission") and not isinstance(
        config["show_answers_after_submission"], bool
    ):
        return ["Show answers after submission must be a boolean"]
    return []


def _validate_scoring_policy(config: Mapping[str, Any]) -> list[str]:
    if not _present(config, "scoring_policy"):
        return []
    policy = config["scoring_policy"]
    if _is_blank(policy):
        return ["Scoring policy must be a non-empty string"]
    if policy not in SCORING_POLICIES:
        return ['Scoring policy must be "linear" or "non-linear"']
    return []


def _validate_exercise(exercise: Any, position: int) -> list[str]:
    if not isinstance(exercise, Mapping):
        return [f"Exercise {position} is invalid"]
    errors = []
    if _is_blank(exercise.get("question")):
        errors.append(f"Exercise {position} must have a question")

    options = exercise.get("options")
    if options is None:
        errors.append(f"Exercise {position} must have answer options")
    elif not _is_list(options):
        errors.append(f"Exercise {position} options must be a list")
    elif not options:
        errors.append(f"Exercise {position} must have at least one answer option")
    elif not all(isinstance(opt, str) for opt in options):
        errors.append(f"Exercise {position} options must be text")

    for key in ("correct_options", "correct_answer"):
        value = exercise.get(key)
        if value is None:
            errors.append(f"Exercise {position} must define {key}")
        elif _is_blank(value):
            errors.append(f"Exercise {position} {key} must be a non-empty string")
    return errors


def _validate_exercises(config: Mapping[str, Any]) -> list[str]:
    if not _present(config, "exercises"):
        return ["Exercises are required"]
    exercises = config["exercises"]
    if not _is_list(exercises):
        return ["Exercises must be a list"]
    if not exercises:
        return ["At least one exercise must be added to the activity"]
    errors: list[str] = []
    for position, exercise in enumerate(exercises, start=1):
        errors.extend(_validate_exercise(exercise, position))
    return errors


def validate_activity_config(candidate: Mapping[str, Any] | None) -> ValidationResult:
    """校验合并后的 Activity 配置，返回包含全部字段错误的 ValidationResult。"""
    config: Mapping[str, Any] = candidate if isinstance(candidate, Mapping) else {}
    checks = {
        "title": _validate_title(config),
        "grade": _validate_grade(config),
        "modules": _validate_modules(config),
        "number_of_exercises": _validate_positive_int(
            config, "number_of_exercises", "Number of exercises"
        ),
        "total_time_minutes": _validate_positive_int(
            config, "total_time_minutes", "Total time in minutes", unit=" of minutes"
        ),
        "number_of_retries": _validate_retries(config),
        "relative_tolerance_pct": _validate_optional_range(
            config,
            "relative_tolerance_pct",
            "Relative tolerance",
            0,
            100,
            "Relative tolerance must be between 0 and 100",
        ),
        "absolute_tolerance": _validate_optional_range(
            config,
            "absolute_tolerance",
            "Absolute tolerance",
            0,
            None,
            "Absolute tolerance cannot be negative",
        ),
        "show_answers_after_submission": _validate_show_answers(config),
        "scoring_policy": _validate_scoring_policy(config),
        "approval_threshold": _validate_optional_range(
            config,
            "approval_threshold",
            "Approval threshold",
            0,
            1,
            "Approval threshold must be between 0 and 1 (e.g. 0.5 for 50%)",
        ),
        "exercises": _validate_exercises(config),
    }
    return ValidationResult(errors={key: messages for key, messages in checks.items() if messages})
