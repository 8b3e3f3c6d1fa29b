"""
Core domain models for ts-model-typer.

These models describe what the model inspector reports about a Django model
and what a transformer hands back to the build command. They are independent
of Django itself so the transformation logic can be exercised with plain data.
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Protocol, Tuple

from ..constants import DeclarationKeywords
from ..exceptions import InvalidArgumentError


@dataclass(frozen=True)
class AttributeDescriptor:
    """A persisted attribute and the cast it is read through."""

    name: str
    cast_type: str
    nullable: bool = False


@dataclass(frozen=True)
class RelationDescriptor:
    """A named relation to another model."""

    name: str
    related_type: str
    many: bool = False
    nullable: bool = False


@dataclass(frozen=True)
class ModelInspection:
    """
    Structured inspection result for one model class.

    Created fresh for every transformation; never shared between models.
    """

    attributes: Tuple[AttributeDescriptor, ...] = field(default_factory=tuple)
    relations: Tuple[RelationDescriptor, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class TransformedType:
    """
    Final output record of a transformer.

    The build command aggregates many of these into one declaration file.
    """

    source_class: Any
    name: str
    body: str
    keyword: str = DeclarationKeywords.INTERFACE

    @classmethod
    def create(
        cls,
        source_class: Any,
        name: str,
        body: str,
        keyword: str = DeclarationKeywords.INTERFACE,
    ) -> "TransformedType":
        """Assemble a result, rejecting an empty declaration name."""
        if not isinstance(name, str) or not name.strip():
            raise InvalidArgumentError(
                "Declaration name must be a non-empty string",
                argument="name",
                context={'source_class': getattr(source_class, '__qualname__', repr(source_class))},
            )
        if keyword not in DeclarationKeywords.ALL:
            raise InvalidArgumentError(
                f"Unsupported declaration keyword '{keyword}'",
                argument="keyword",
            )
        return cls(source_class=source_class, name=name, body=body, keyword=keyword)


# --- Collaborator interfaces ---

class ModelInspector(Protocol):
    """Reports the attributes and relations of a model class."""

    def inspect(self, model_class: type) -> ModelInspection:
        ...


class DeclarationGenerator(Protocol):
    """Renders the raw, unqualified declaration text of a model class."""

    def generate(self, model_class: type) -> str:
        ...


class Transformer(Protocol):
    """Turns a class into a TransformedType, or None when it does not apply."""

    def transform(self, source_class: Any, name: str) -> Optional[TransformedType]:
        ...
