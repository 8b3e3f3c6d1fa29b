"""
Centralized constants for ts-model-typer.

Default configuration values, the Django field class -> cast keyword table and
the cast keyword -> TypeScript type table live here so that the inspector and
the declaration generator agree on one vocabulary.
"""

from typing import Dict, List


# =============================================================================
# CORE CONFIGURATION
# =============================================================================

class DefaultConfig:
    """Default configuration values."""

    OUTPUT_FILE = "resources/js/types/model.d.ts"
    CASTS_ATTRIBUTE = "casts"
    ON_ERROR = "abort"

    # Derived computed fields
    EMIT_COUNTS = True
    EMIT_EXISTS = True
    EMIT_CONSTANTS = True

    # Header written at the top of the aggregated declaration file
    FILE_HEADER = "// This file is auto generated by ts-model-typer. Do not edit it by hand."


# =============================================================================
# FIELD TYPE MAPPINGS
# =============================================================================

class DjangoFieldTypes:
    """Django model field class names."""

    # Auto fields
    AUTO_FIELD = "AutoField"
    BIG_AUTO_FIELD = "BigAutoField"
    SMALL_AUTO_FIELD = "SmallAutoField"

    # Numeric fields
    INTEGER_FIELD = "IntegerField"
    BIG_INTEGER_FIELD = "BigIntegerField"
    SMALL_INTEGER_FIELD = "SmallIntegerField"
    POSITIVE_INTEGER_FIELD = "PositiveIntegerField"
    POSITIVE_BIG_INTEGER_FIELD = "PositiveBigIntegerField"
    POSITIVE_SMALL_INTEGER_FIELD = "PositiveSmallIntegerField"
    FLOAT_FIELD = "FloatField"
    DECIMAL_FIELD = "DecimalField"

    # String fields
    CHAR_FIELD = "CharField"
    TEXT_FIELD = "TextField"
    EMAIL_FIELD = "EmailField"
    URL_FIELD = "URLField"
    SLUG_FIELD = "SlugField"

    # Date/time fields
    DATE_FIELD = "DateField"
    DATE_TIME_FIELD = "DateTimeField"
    TIME_FIELD = "TimeField"
    DURATION_FIELD = "DurationField"

    # Other fields
    BOOLEAN_FIELD = "BooleanField"
    NULL_BOOLEAN_FIELD = "NullBooleanField"
    UUID_FIELD = "UUIDField"
    JSON_FIELD = "JSONField"
    BINARY_FIELD = "BinaryField"
    FILE_FIELD = "FileField"
    IMAGE_FIELD = "ImageField"
    GENERIC_IP_ADDRESS_FIELD = "GenericIPAddressField"
    FILE_PATH_FIELD = "FilePathField"


class CastTypes:
    """Primitive cast keywords reported by the model inspector."""

    INT = "int"
    FLOAT = "float"
    DECIMAL = "decimal"
    STRING = "string"
    BOOL = "bool"
    DATE = "date"
    DATETIME = "datetime"
    TIME = "time"
    DURATION = "duration"
    UUID = "uuid"
    ARRAY = "array"
    BINARY = "binary"
    MIXED = "mixed"


# Django field class name -> cast keyword
DJANGO_FIELD_CASTS: Dict[str, str] = {
    DjangoFieldTypes.AUTO_FIELD: CastTypes.INT,
    DjangoFieldTypes.BIG_AUTO_FIELD: CastTypes.INT,
    DjangoFieldTypes.SMALL_AUTO_FIELD: CastTypes.INT,

    DjangoFieldTypes.INTEGER_FIELD: CastTypes.INT,
    DjangoFieldTypes.BIG_INTEGER_FIELD: CastTypes.INT,
    DjangoFieldTypes.SMALL_INTEGER_FIELD: CastTypes.INT,
    DjangoFieldTypes.POSITIVE_INTEGER_FIELD: CastTypes.INT,
    DjangoFieldTypes.POSITIVE_BIG_INTEGER_FIELD: CastTypes.INT,
    DjangoFieldTypes.POSITIVE_SMALL_INTEGER_FIELD: CastTypes.INT,
    DjangoFieldTypes.FLOAT_FIELD: CastTypes.FLOAT,
    DjangoFieldTypes.DECIMAL_FIELD: CastTypes.DECIMAL,

    DjangoFieldTypes.CHAR_FIELD: CastTypes.STRING,
    DjangoFieldTypes.TEXT_FIELD: CastTypes.STRING,
    DjangoFieldTypes.EMAIL_FIELD: CastTypes.STRING,
    DjangoFieldTypes.URL_FIELD: CastTypes.STRING,
    DjangoFieldTypes.SLUG_FIELD: CastTypes.STRING,
    DjangoFieldTypes.GENERIC_IP_ADDRESS_FIELD: CastTypes.STRING,
    DjangoFieldTypes.FILE_PATH_FIELD: CastTypes.STRING,
    DjangoFieldTypes.FILE_FIELD: CastTypes.STRING,
    DjangoFieldTypes.IMAGE_FIELD: CastTypes.STRING,

    DjangoFieldTypes.DATE_FIELD: CastTypes.DATE,
    DjangoFieldTypes.DATE_TIME_FIELD: CastTypes.DATETIME,
    DjangoFieldTypes.TIME_FIELD: CastTypes.TIME,
    DjangoFieldTypes.DURATION_FIELD: CastTypes.DURATION,

    DjangoFieldTypes.BOOLEAN_FIELD: CastTypes.BOOL,
    DjangoFieldTypes.NULL_BOOLEAN_FIELD: CastTypes.BOOL,
    DjangoFieldTypes.UUID_FIELD: CastTypes.UUID,
    DjangoFieldTypes.JSON_FIELD: CastTypes.ARRAY,
    DjangoFieldTypes.BINARY_FIELD: CastTypes.BINARY,
}


# Cast keyword -> TypeScript type
TYPESCRIPT_TYPE_MAP: Dict[str, str] = {
    CastTypes.INT: "number",
    CastTypes.FLOAT: "number",
    CastTypes.DECIMAL: "string",  # serialized as string to keep precision
    CastTypes.STRING: "string",
    CastTypes.BOOL: "boolean",
    CastTypes.DATE: "string",
    CastTypes.DATETIME: "string",
    CastTypes.TIME: "string",
    CastTypes.DURATION: "string",
    CastTypes.UUID: "string",
    CastTypes.ARRAY: "{ [key: string]: unknown }",
    CastTypes.BINARY: "string",
    CastTypes.MIXED: "unknown",
}


# =============================================================================
# TEMPLATES
# =============================================================================

class TemplateNames:
    """Jinja2 template file names shipped in the package."""

    INTERFACE = "interface.ts.j2"
    DECLARATIONS = "declarations.d.ts.j2"


# =============================================================================
# DECLARATION KEYWORDS
# =============================================================================

class DeclarationKeywords:
    """Keywords the writer uses to render a transformed type."""

    INTERFACE = "interface"
    TYPE = "type"

    ALL: List[str] = [INTERFACE, TYPE]
