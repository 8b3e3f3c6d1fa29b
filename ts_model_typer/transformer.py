"""
Model to TypeScript declaration transformer.

For one Django model class this module:

1. collects the class-like casts and related models reported by the inspector
   into a symbol map (short name -> qualified dotted path),
2. strips the generator's ``export interface Name {`` header, its closing
   brace and any trailing ``export const`` block,
3. rewrites every capitalized word that follows whitespace and appears in the
   symbol map into its qualified path,
4. packages the result as a ``TransformedType``.

Everything here is a pure function of its inputs. Errors propagate to the
caller; nothing is logged.
"""

import inspect
import re
from typing import Any, Dict, Optional

from django.db import models

from .domain.models import (
    DeclarationGenerator,
    ModelInspection,
    ModelInspector,
    TransformedType,
)
from .domain.naming import SymbolQualifier, is_class_like, short_name
from .exceptions import MalformedDeclarationError


HEADER_PATTERN = re.compile(r"\A\s*export\s+interface\s+(\w+)\s*\{[ \t]*(?:\r\n|\n|\r)?")
CONSTANT_BLOCK_PATTERN = re.compile(r"^[ \t]*export\s+const\b.*\Z", re.MULTILINE | re.DOTALL)
TRAILING_LINE_TERMINATOR_PATTERN = re.compile(r"(?:\r\n|\n|\r)\Z")
CLOSING_BRACE_PATTERN = re.compile(r"(?:\r\n|\n|\r)?[ \t]*\}\s*\Z")

# A capitalized word preceded by whitespace. The lookahead rejects words that
# continue into a dotted path, so qualified output never matches again.
IDENTIFIER_PATTERN = re.compile(r"(?<=\s)([A-Z]\w*)(?![\w.])")


def collect_symbols(
    inspection: ModelInspection,
    qualifier: Optional[SymbolQualifier] = None,
) -> Dict[str, str]:
    """
    Build the symbol map for one model.

    Casts come first, then related models. Primitive casts (lower-case short
    name) are skipped. When two different references share a short name the
    last one seen wins.
    """
    qualifier = qualifier or SymbolQualifier()

    references = [attribute.cast_type for attribute in inspection.attributes]
    references += [relation.related_type for relation in inspection.relations]

    unique_references = dict.fromkeys(ref for ref in references if is_class_like(ref))

    return {short_name(ref): qualifier.qualify(ref) for ref in unique_references}


def normalize_declaration(raw_declaration: str) -> str:
    """
    Reduce a raw ``export interface`` declaration to its field-list body.

    Raises:
        MalformedDeclarationError: if the header or the closing brace is missing.
    """
    if not isinstance(raw_declaration, str):
        raise MalformedDeclarationError(
            f"Expected declaration text, got {type(raw_declaration).__name__}"
        )

    header = HEADER_PATTERN.match(raw_declaration)
    if header is None:
        raise MalformedDeclarationError(
            "Declaration does not start with 'export interface <Name> {'",
            declaration=raw_declaration,
        )

    body = raw_declaration[header.end():]
    body = CONSTANT_BLOCK_PATTERN.sub("", body, count=1)
    body = TRAILING_LINE_TERMINATOR_PATTERN.sub("", body, count=1)

    closing = CLOSING_BRACE_PATTERN.search(body)
    if closing is None:
        raise MalformedDeclarationError(
            f"Declaration '{header.group(1)}' is not closed with '}}'",
            declaration=raw_declaration,
        )
    return body[:closing.start()]


def rewrite_identifiers(body: str, symbols: Dict[str, str]) -> str:
    """Replace mapped short names with their qualified paths in a single pass."""
    if not symbols:
        return body

    def _replace(match: re.Match) -> str:
        word = match.group(1)
        return symbols.get(word, word)

    return IDENTIFIER_PATTERN.sub(_replace, body)


def is_model_class(candidate: Any) -> bool:
    """True for concrete, non-swapped Django model classes."""
    if not inspect.isclass(candidate) or not issubclass(candidate, models.Model):
        return False
    if candidate is models.Model:
        return False
    meta = candidate._meta
    return not meta.abstract and not meta.swapped


class ModelTransformer:
    """
    Transforms Django model classes into qualified TypeScript interface bodies.

    The inspector and the generator are injected so the transformer never
    reaches for global state.
    """

    def __init__(
        self,
        inspector: ModelInspector,
        generator: DeclarationGenerator,
        qualifier: Optional[SymbolQualifier] = None,
    ):
        self.inspector = inspector
        self.generator = generator
        self.qualifier = qualifier or SymbolQualifier()

    def transform(self, source_class: Any, name: str) -> Optional[TransformedType]:
        if not is_model_class(source_class):
            return None

        symbols = collect_symbols(self.inspector.inspect(source_class), self.qualifier)

        body = normalize_declaration(self.generator.generate(source_class))
        body = rewrite_identifiers(body, symbols)

        return TransformedType.create(source_class, name, body)
