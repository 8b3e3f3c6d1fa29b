"""
Enum to TypeScript union transformer.

Model casts frequently point at ``enum.Enum`` subclasses (Django
``TextChoices`` / ``IntegerChoices`` included). Emitting them next to the
models keeps the qualified references in the generated file resolvable.
"""

import enum
import inspect
import json
from typing import Any, List, Optional

from .constants import DeclarationKeywords
from .domain.models import TransformedType


def _typescript_literal(value: Any) -> Optional[str]:
    """Render an enum member value as a TypeScript literal type, or None if it has none."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return json.dumps(value)
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    return None


def enum_literals(enum_class: type) -> List[str]:
    """Distinct literal types of an enum's members, in definition order."""
    literals = []
    for member in enum_class:
        literal = _typescript_literal(member.value)
        if literal is None:
            # Values without a literal form fall back to the member name
            literal = json.dumps(member.name)
        if literal not in literals:
            literals.append(literal)
    return literals


class EnumTransformer:
    """Transforms ``enum.Enum`` subclasses into ``export type`` unions."""

    def transform(self, source_class: Any, name: str) -> Optional[TransformedType]:
        if not inspect.isclass(source_class) or not issubclass(source_class, enum.Enum):
            return None

        literals = enum_literals(source_class)
        body = " | ".join(literals) if literals else "never"

        return TransformedType.create(
            source_class, name, body, keyword=DeclarationKeywords.TYPE
        )
