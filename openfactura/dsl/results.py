"""Result models returned by document operations.

emit and find_by_token report runtime failures as data instead of raising:
the result carries either a value or a DomainError classifying what went
wrong. Programmer errors (wrong argument types, empty token) still raise.
"""

from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict

from openfactura.resources.document_error import DocumentError
from openfactura.shared.errors import ApiError, OpenFacturaError, ValidationError

T = TypeVar("T")

ErrorKind = Literal["validation", "transport", "rejection"]


class DomainError(BaseModel):
    """Classified failure of a document operation.

    Attributes:
        kind: validation (local, before any request), transport (HTTP or
            connection failure), or rejection (API refused the document)
        message: Human readable description
        exception: The underlying exception, for inspection or re-raising
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    kind: ErrorKind
    message: str
    exception: OpenFacturaError

    @classmethod
    def from_exception(cls, exception: OpenFacturaError) -> "DomainError":
        """Classify a library exception.

        Raises:
            TypeError: If the exception is not one of the classified kinds
        """
        kind: ErrorKind
        if isinstance(exception, ValidationError):
            kind = "validation"
        elif isinstance(exception, DocumentError):
            kind = "rejection"
        elif isinstance(exception, ApiError):
            kind = "transport"
        else:
            raise TypeError(f"Cannot classify {type(exception).__name__} as a domain error")
        return cls(kind=kind, message=str(exception), exception=exception)


class OperationResult(BaseModel, Generic[T]):
    """Outcome of a document operation.

    Attributes:
        success: Whether the operation succeeded
        value: Decoded response when successful
        error: Classified failure when not
    """

    success: bool
    value: T | None = None
    error: DomainError | None = None

    @classmethod
    def ok(cls, value: T) -> "OperationResult[T]":
        return cls(success=True, value=value)

    @classmethod
    def failed(cls, exception: OpenFacturaError) -> "OperationResult[T]":
        return cls(success=False, error=DomainError.from_exception(exception))

    def unwrap(self) -> T:
        """Return the value, or raise the exception behind the failure."""
        if self.error is not None:
            raise self.error.exception
        return self.value  # type: ignore[return-value]
