"""ActivityBuilder：Activity 的唯一构造入口。

三层配置按优先级合并：overrides > json > defaults（同名键后者覆盖，其余键原样保留），
合并结果经 validate_activity_config 校验通过后才生成 Activity。
"""
import uuid
from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

from app.core.errors import ValidationFailure
from app.domain.entities import Activity
from app.domain.validators import ValidationResult, validate_activity_config
from app.utils.datetime_utils import utcnow


def _new_id() -> str:
    return str(uuid.uuid4())


class ActivityBuilder:
    def __init__(
        self,
        *,
        id_factory: Callable[[], str] = _new_id,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._defaults: dict[str, Any] = {}
        self._json: dict[str, Any] = {}
        self._overrides: dict[str, Any] = {}
        self._id_factory = id_factory
        self._clock = clock

    @classmethod
    def create(cls, **kwargs) -> "ActivityBuilder":
        return cls(**kwargs)

    def with_json(self, candidate: Any) -> "ActivityBuilder":
        """设置用户提交的配置；非 dict 输入被忽略。"""
        if isinstance(candidate, Mapping):
            self._json = dict(candidate)
        return self

    def with_defaults(self, defaults: Mapping[str, Any] | None) -> "ActivityBuilder":
        self._defaults = dict(defaults or {})
        return self

    def with_overrides(self, overrides: Mapping[str, Any] | None) -> "ActivityBuilder":
        self._overrides = dict(overrides or {})
        return self

    def merged_config(self) -> dict[str, Any]:
        return {**self._defaults, **self._json, **self._overrides}

    def validate(self) -> ValidationResult:
        return validate_activity_config(self.merged_config())

    def build(self) -> Activity:
        """校验并构造 Activity；校验失败抛 ValidationFailure（携带完整 ValidationResult）。"""
        config = self.merged_config()
        result = validate_activity_config(config)
        if not result.is_valid:
            raise ValidationFailure(result)
        return Activity(id=self._id_factory(), cfg=config, created_at=self._clock())

    def build_safe(self) -> Activity | ValidationResult:
        """不抛校验异常的 build：失败时返回 ValidationResult，其余异常照常抛出。"""
        try:
            return self.build()
        except ValidationFailure as exc:
            return exc.result
