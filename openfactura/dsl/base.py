"""Base class for the document value objects (Receiver, DteItem, Issuer, Totals).

Value objects hold attributes under semantic snake_case names and render
them under the abbreviated wire names the API expects. Required fields are
checked when rendering, not when constructing, so partially filled objects
can be built up and inspected before submission.
"""

from collections.abc import Mapping
from typing import Any, ClassVar, TypeVar

from pydantic import BaseModel, ConfigDict

from openfactura.shared.attributes import is_blank
from openfactura.shared.errors import ValidationError

# Numeric inputs may arrive as numbers or as strings from JSON/form sources
NumberLike = int | float | str | None

T = TypeVar("T", bound="WireModel")


class WireModel(BaseModel):
    """Value object that validates itself and renders a wire fragment.

    Subclasses declare:
        object_kind: Key used in ValidationError.errors (e.g. "receiver")
        object_label: Name used in error messages (e.g. "Receiver")
        required_fields: Semantic names that must not be blank on the wire
        wire_names: Semantic name -> wire name, used to annotate messages
    """

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        validate_assignment=True,
        coerce_numbers_to_str=True,
    )

    object_kind: ClassVar[str]
    object_label: ClassVar[str]
    required_fields: ClassVar[tuple[str, ...]] = ()
    wire_names: ClassVar[dict[str, str]] = {}

    @classmethod
    def from_input(cls: type[T], value: T | Mapping[str, Any]) -> T:
        """Accept either a ready value object or a mapping of attributes.

        Args:
            value: Instance of this class, or a mapping with semantic keys

        Returns:
            The instance unchanged, or a new instance built from the mapping

        Raises:
            TypeError: If value is neither
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            return cls.model_validate(dict(value))
        raise TypeError(
            f"{cls.object_label} must be a {cls.__name__} or a mapping, got {type(value).__name__}"
        )

    def missing_fields(self) -> list[str]:
        """List required fields that are None or whitespace-only strings."""
        return [name for name in self.required_fields if is_blank(getattr(self, name))]

    def validate_required(self) -> None:
        """Raise ValidationError listing every blank required field."""
        missing = self.missing_fields()
        if not missing:
            return

        names = ", ".join(
            f"{name} ({self.wire_names[name]})" if name in self.wire_names else name
            for name in missing
        )
        raise ValidationError(
            f"{self.object_label} validation failed: Missing required fields: {names}",
            errors={self.object_kind: missing},
        )

    def to_wire(self) -> dict[str, Any]:
        """Render the wire fragment.

        Raises:
            ValidationError: If a required field is missing or blank
        """
        self.validate_required()
        return self._render()

    def to_hash(self) -> dict[str, Any]:
        """Alias of to_wire()."""
        return self.to_wire()

    def _render(self) -> dict[str, Any]:
        raise NotImplementedError
