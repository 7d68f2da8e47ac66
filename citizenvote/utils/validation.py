"""Field-level validation for writes that bypass ``Model.full_clean``."""

from typing import Any

from django.core.exceptions import ValidationError
from django.db import models


def validate_field_values(model: type[models.Model], values: dict[str, Any]) -> None:
    """
    Run each field's validators (max_length, value range, ...) on ``values``.

    Used before ``QuerySet.update`` and ``update_or_create``. Reference columns
    are skipped: they carry no database constraint and may point at rows
    that no longer exist.

    Raises:
        ValidationError: Keyed by field name
    """
    errors: dict[str, list[str]] = {}
    for name, value in values.items():
        field = model._meta.get_field(name)
        if field.is_relation:
            continue
        try:
            field.run_validators(value)
        except ValidationError as e:
            errors[name] = e.messages
    if errors:
        raise ValidationError(errors)
