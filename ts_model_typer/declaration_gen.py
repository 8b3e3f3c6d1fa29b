"""
Raw TypeScript declaration generator.

Renders ``export interface <Model> { ... }`` from an inspection using short,
unqualified type names, optionally followed by an ``export const`` block with
the attribute names and a plural list alias. Qualifying the names is the
transformer's job.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from jinja2 import Environment, TemplateError

from .codegen_utils import setup_jinja_env
from .constants import TYPESCRIPT_TYPE_MAP, CastTypes, DefaultConfig, TemplateNames
from .domain.models import AttributeDescriptor, ModelInspector, RelationDescriptor
from .domain.naming import class_reference, is_class_like, short_name
from .exceptions import DeclarationGenerationError


logger = logging.getLogger(__name__)


@dataclass
class DeclaredField:
    """One line of the rendered interface."""
    name: str
    type: str
    optional: bool = False


def typescript_type_for_cast(cast_type: str) -> str:
    """
    Map a cast to the TypeScript type written in the raw declaration.

    Class-like casts are written by their short name; primitive casts go
    through the cast table. Parameterised casts such as ``decimal:2`` use
    their keyword.
    """
    if is_class_like(cast_type):
        return short_name(cast_type)
    keyword = cast_type.split(":", 1)[0].strip().lower()
    return TYPESCRIPT_TYPE_MAP.get(keyword, TYPESCRIPT_TYPE_MAP[CastTypes.MIXED])


def attribute_field(attribute: AttributeDescriptor) -> DeclaredField:
    ts_type = typescript_type_for_cast(attribute.cast_type)
    if attribute.nullable:
        ts_type += " | null"
    return DeclaredField(name=attribute.name, type=ts_type)


def relation_fields(
    relation: RelationDescriptor,
    counts: bool = DefaultConfig.EMIT_COUNTS,
    exists: bool = DefaultConfig.EMIT_EXISTS,
) -> List[DeclaredField]:
    """The relation itself plus its derived count/existence fields."""
    related = short_name(relation.related_type)
    if relation.many:
        ts_type = f"{related}[]"
    elif relation.nullable:
        ts_type = f"{related} | null"
    else:
        ts_type = related

    fields = [DeclaredField(name=relation.name, type=ts_type, optional=True)]
    if relation.many and counts:
        fields.append(DeclaredField(name=f"{relation.name}_count", type="number", optional=True))
    if relation.many and exists:
        fields.append(DeclaredField(name=f"{relation.name}_exists", type="boolean", optional=True))
    return fields


class TemplateDeclarationGenerator:
    """
    Renders raw interface declarations through the ``interface.ts.j2`` template.
    """

    def __init__(
        self,
        inspector: ModelInspector,
        counts: bool = DefaultConfig.EMIT_COUNTS,
        exists: bool = DefaultConfig.EMIT_EXISTS,
        emit_constants: bool = DefaultConfig.EMIT_CONSTANTS,
        env: Optional[Environment] = None,
    ):
        self.inspector = inspector
        self.counts = counts
        self.exists = exists
        self.emit_constants = emit_constants
        self.env = env or setup_jinja_env()

    def build_context(self, model_class: type) -> Dict[str, Any]:
        inspection = self.inspector.inspect(model_class)

        fields = [attribute_field(attribute) for attribute in inspection.attributes]
        for relation in inspection.relations:
            fields.extend(relation_fields(relation, counts=self.counts, exists=self.exists))

        return {
            'name': model_class.__name__,
            'fields': fields,
            'attribute_names': [attribute.name for attribute in inspection.attributes],
            'emit_constants': self.emit_constants,
        }

    def generate(self, model_class: type) -> str:
        context = self.build_context(model_class)
        try:
            template = self.env.get_template(TemplateNames.INTERFACE)
            rendered = template.render(**context)
        except TemplateError as e:
            raise DeclarationGenerationError(
                f"Could not render declaration: {e}",
                model=class_reference(model_class),
                template=TemplateNames.INTERFACE,
            ) from e

        logger.debug(f"Rendered raw declaration for '{context['name']}' ({len(context['fields'])} fields)")
        return rendered
