"""Field-level validation violations."""

from dataclasses import dataclass
from enum import StrEnum

from enrollment.domain.common.value_object import ValueObject


class ViolationCode(StrEnum):
    REQUIRED = "required"
    INVALID_FORMAT = "invalid_format"
    TOO_LONG = "too_long"


@dataclass(frozen=True)
class FieldViolation(ValueObject):
    """A single rule failure on a single input field."""

    field: str
    code: ViolationCode
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "code": self.code.value, "message": self.message}
