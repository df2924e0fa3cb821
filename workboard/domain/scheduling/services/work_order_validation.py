"""
Work Order Validation

Pure validation of candidate work order fields, independent of any form
widget. Accepts the snake_case names used in Python code as well as the
camelCase names of the persisted documents, so a deserialized document
``data`` block can be validated as-is.
"""

from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

import pydantic
from pydantic import AliasChoices, ConfigDict, Field, field_validator

from workboard.domain.shared.base import ValueObject
from workboard.domain.shared.exceptions import ValidationError
from workboard.domain.shared.result import Result

from ..value_objects.date_range import coerce_date
from ..value_objects.enums import WorkOrderStatus

FIELD_LABELS = {
    "work_center_id": "Work center",
    "name": "Name",
    "status": "Status",
    "start_date": "Start date",
    "end_date": "End date",
}

CAMEL_TO_SNAKE = {
    "workCenterId": "work_center_id",
    "startDate": "start_date",
    "endDate": "end_date",
}


class ValidatedWorkOrder(ValueObject):
    """Work order fields that passed validation; carries no identity."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    work_center_id: str = Field(
        min_length=1, validation_alias=AliasChoices("work_center_id", "workCenterId")
    )
    name: str = Field(min_length=1)
    status: WorkOrderStatus
    start_date: date = Field(validation_alias=AliasChoices("start_date", "startDate"))
    end_date: date = Field(validation_alias=AliasChoices("end_date", "endDate"))

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _normalize_to_calendar_date(cls, v: Any) -> Any:
        """Drop time-of-day: datetimes and ISO timestamps become plain dates."""
        if isinstance(v, (date, datetime, str)) and v != "":
            try:
                return coerce_date(v)
            except ValueError:
                return v
        return v


ValidationResult = Result[ValidatedWorkOrder, ValidationError]


def normalize_field_names(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Map camelCase document keys onto snake_case field names."""
    return {CAMEL_TO_SNAKE.get(key, key): value for key, value in fields.items()}


def validate(candidate_fields: Mapping[str, Any]) -> ValidationResult:
    """
    Validate candidate work order fields.

    Args:
        candidate_fields: Work center id, name, status, start and end date

    Returns:
        Result carrying a ValidatedWorkOrder, or a ValidationError naming the
        first offending field
    """
    fields = normalize_field_names(candidate_fields)
    try:
        validated = ValidatedWorkOrder.model_validate(fields)
    except pydantic.ValidationError as exc:
        return Result.fail(_to_domain_error(exc, fields))

    if validated.end_date <= validated.start_date:
        return Result.fail(
            ValidationError(
                "end_date",
                validated.end_date.isoformat(),
                "End date must be after start date",
                "DATE_RANGE",
            )
        )

    return Result.ok(validated)


def _to_domain_error(
    exc: pydantic.ValidationError, fields: Mapping[str, Any]
) -> ValidationError:
    error = exc.errors()[0]
    field_name = str(error["loc"][0]) if error["loc"] else "fields"
    field_name = CAMEL_TO_SNAKE.get(field_name, field_name)
    label = FIELD_LABELS.get(field_name, field_name)
    value = fields.get(field_name)

    if error["type"] == "missing" or value is None or value == "":
        return ValidationError(field_name, value, f"{label} is required", "REQUIRED")
    if error["type"] == "string_too_short":
        return ValidationError(field_name, value, f"{label} is required", "REQUIRED")
    if field_name == "status":
        allowed = ", ".join(status.value for status in WorkOrderStatus)
        return ValidationError(
            field_name, value, f"Status must be one of: {allowed}", "INVALID_STATUS"
        )
    if field_name in ("start_date", "end_date"):
        return ValidationError(
            field_name,
            value,
            f"{label} must be a calendar date (YYYY-MM-DD)",
            "INVALID_DATE",
        )
    return ValidationError(field_name, value, error["msg"], "INVALID_VALUE")
