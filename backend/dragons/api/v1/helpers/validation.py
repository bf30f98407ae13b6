from typing import Any, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from dragons.core.exceptions import ValidationError, first_error_message

M = TypeVar("M", bound=BaseModel)


def build_model(model_class: Type[M], **data: Any) -> M:
    """
    Construct a document model, reporting the first validator failure as
    a 400 ValidationError.
    """
    try:
        return model_class(**data)
    except PydanticValidationError as e:
        raise ValidationError(first_error_message(e.errors()))
