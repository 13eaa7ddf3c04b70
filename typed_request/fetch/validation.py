"""Schema validation boundary backed by pydantic."""

from typing import Any, Generic, Literal, Protocol, TypeVar, runtime_checkable

from pydantic import TypeAdapter, ValidationError

from typed_request.fetch.errors import SchemaValidationError


T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


@runtime_checkable
class ResponseValidator(Protocol[T_co]):
    """Protocol for coercing an untyped value into ``T``.

    ``parse`` raises ``pydantic.ValidationError`` (or ``ValueError`` /
    ``TypeError``) when the value does not match.
    """

    def parse(self, value: Any) -> T_co: ...


class SchemaValidator(Generic[T]):
    """Validator for any type pydantic understands.

    Works with BaseModel subclasses, dataclasses, TypedDicts and builtin
    generics such as ``list[int]``.
    """

    def __init__(self, schema: type[T] | Any) -> None:
        self._schema = schema
        self._adapter: TypeAdapter[T] = TypeAdapter(schema)

    @property
    def schema(self) -> Any:
        return self._schema

    def parse(self, value: Any) -> T:
        return self._adapter.validate_python(value)


def describe_validation_error(error: Exception) -> str:
    """Summarize a validation failure on one line.

    Args:
        error: The validator's exception.

    Returns:
        ``loc: msg`` pairs for pydantic errors, ``str(error)`` otherwise.
    """
    if isinstance(error, ValidationError):
        parts = []
        for detail in error.errors():
            loc = ".".join(str(part) for part in detail["loc"]) or "<root>"
            parts.append(f"{loc}: {detail['msg']}")
        return "; ".join(parts)
    return str(error)


def as_validator(schema: "ResponseValidator[T] | type[T] | Any") -> ResponseValidator[T]:
    """Accept either a validator or a bare type.

    Args:
        schema: Object with a ``parse`` method, or a type for pydantic.

    Returns:
        A validator.
    """
    if isinstance(schema, ResponseValidator) and not isinstance(schema, type):
        return schema
    return SchemaValidator(schema)


def validate_body(
    validator: ResponseValidator[T],
    value: Any,
    target: Literal["request", "response"],
) -> T:
    """Run a validator and classify its failure.

    Args:
        validator: Validator to apply.
        value: Decoded or caller-supplied body.
        target: Which body is being validated.

    Returns:
        The validated value.

    Raises:
        SchemaValidationError: If the validator rejects the value.
    """
    try:
        return validator.parse(value)
    except (ValueError, TypeError) as e:
        msg = f"{target.capitalize()} body failed validation: {describe_validation_error(e)}"
        raise SchemaValidationError(msg, cause=e, target=target) from e
