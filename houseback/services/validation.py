"""
Input validation for signup and signin.
Every rule is evaluated independently so clients can show all problems at once.
Error details never include the submitted values.
"""

from typing import Any

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from houseback.core.errors import FieldError, ValidationError
from houseback.schemas.user import RegistrationInput, SigninInput


def field_errors(errors: list[dict[str, Any]]) -> list[FieldError]:
    """Flatten pydantic/FastAPI error dicts into field-level errors, dropping the offending input."""
    result = []
    for err in errors:
        loc = [part for part in err.get("loc", ()) if part != "body" and not isinstance(part, int)]
        field = ".".join(str(part) for part in loc) or "body"
        result.append(FieldError(field=field, message=err.get("msg", "Invalid value")))
    return result


def _validate(model: type[BaseModel], **values: Any):
    # Missing and null fields are both reported as "Field required"
    provided = {key: value for key, value in values.items() if value is not None}
    try:
        return model.model_validate(provided)
    except PydanticValidationError as exc:
        raise ValidationError(field_errors(exc.errors(include_input=False))) from None


def validate_registration(email: Any, name: Any, password: Any) -> RegistrationInput:
    """Return the normalized triple or raise ValidationError listing every broken rule."""
    return _validate(RegistrationInput, email=email, name=name, password=password)


def validate_signin(email: Any, password: Any) -> SigninInput:
    return _validate(SigninInput, email=email, password=password)
