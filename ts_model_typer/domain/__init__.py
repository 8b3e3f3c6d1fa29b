"""
Domain module for ts-model-typer.

Framework-independent data structures and naming rules shared by the
inspector, the declaration generator, the transformers and the writer.
"""

from .models import (
    AttributeDescriptor,
    RelationDescriptor,
    ModelInspection,
    TransformedType,
    ModelInspector,
    DeclarationGenerator,
    Transformer
)

from .naming import (
    SymbolQualifier,
    normalize_reference,
    short_name,
    is_class_like,
    class_reference,
    pluralize
)

__all__ = [
    # Core models
    'AttributeDescriptor',
    'RelationDescriptor',
    'ModelInspection',
    'TransformedType',

    # Collaborator interfaces
    'ModelInspector',
    'DeclarationGenerator',
    'Transformer',

    # Naming
    'SymbolQualifier',
    'normalize_reference',
    'short_name',
    'is_class_like',
    'class_reference',
    'pluralize'
]
