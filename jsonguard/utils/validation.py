"""Field-level validation of decoded resources.

Pydantic checks types and rules in a single pass, so its errors are split in
two groups here: shape errors (the document does not fit the model at all)
and rule errors (the document fits, but a declared constraint or validator
rejected a value). Only rule errors are reported as validation failures.
"""

import logging
from typing import TypeVar

from pydantic import BaseModel, ValidationError
from pydantic_core import ErrorDetails

from jsonguard.utils.errors import ResourceValidationFailure

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

SHAPE_ERROR_TYPES = frozenset(
    {
        "missing",
        "extra_forbidden",
        "literal_error",
        "enum",
        "int_from_float",
        "is_instance_of",
        "is_subclass_of",
        "none_required",
        "union_tag_invalid",
        "union_tag_not_found",
        "missing_argument",
        "unexpected_keyword_argument",
    }
)


def is_shape_error(error: ErrorDetails) -> bool:
    """True when the error means the input has the wrong structure or type."""
    kind = error["type"]
    return kind in SHAPE_ERROR_TYPES or kind.endswith(("_type", "_parsing"))


def handle_field_validation_error(error: ErrorDetails) -> str | None:
    message = error.get("msg")
    if not message:
        return None
    return f"'{message}'"


def handle_validation_errors(exc: ValidationError) -> list[str]:
    """Flatten a pydantic error into quoted messages, in the order reported."""
    messages = []
    for error in exc.errors(include_url=False):
        message = handle_field_validation_error(error)
        if message is not None:
            messages.append(message)
    return messages


def perform_validation(resource: ModelT) -> ModelT:
    """Run the resource's validation rules and return it unchanged.

    Useful for instances that skipped validation, such as those built with
    ``model_construct`` or merged with ``model_copy(update=...)``. Fields are
    re-validated by name; nested models are taken as they are.

    Raises:
        ResourceValidationFailure: if any rule is violated.
    """
    try:
        type(resource).model_validate(dict(resource))
    except ValidationError as exc:
        messages = handle_validation_errors(exc)
        logger.info(f"{type(resource).__name__} failed validation with {len(messages)} error(s)")
        raise ResourceValidationFailure(messages) from exc
    return resource
