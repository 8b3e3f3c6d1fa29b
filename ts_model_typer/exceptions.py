"""
Custom exception hierarchy for ts-model-typer.

Every error carries optional context and recovery suggestions so the build
command can report a failing model without digging through tracebacks.
"""

from typing import Dict, Any, Optional, List


class ModelTyperError(Exception):
    """
    Base exception for all ts-model-typer errors.

    Provides rich context and error recovery guidance.
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        error_code: Optional[str] = None
    ):
        """
        Initialize the exception with context and recovery suggestions.

        Args:
            message: Human-readable error message
            context: Additional context about where/why the error occurred
            suggestions: List of potential solutions or next steps
            error_code: Unique error code for programmatic handling
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.suggestions = suggestions or []
        self.error_code = error_code

    def __str__(self) -> str:
        """Return formatted error message with context."""
        lines = [self.message]

        if self.error_code:
            lines.append(f"Error Code: {self.error_code}")

        if self.context:
            lines.append("Context:")
            for key, value in self.context.items():
                lines.append(f"  {key}: {value}")

        if self.suggestions:
            lines.append("Suggestions:")
            for suggestion in self.suggestions:
                lines.append(f"  • {suggestion}")

        return "\n".join(lines)


class ConfigurationError(ModelTyperError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str, config_file: str = None, **kwargs):
        context = kwargs.get('context', {})
        if config_file:
            context['config_file'] = config_file

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Check the configuration file syntax",
                "Verify DJANGO_SETTINGS_MODULE points at an importable module",
                "Check the documentation for configuration examples"
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="CONFIG_ERROR"
        )


class SchemaIntrospectionError(ModelTyperError):
    """Raised when a model class cannot be inspected."""

    def __init__(self, message: str, model: str = None, field: str = None, **kwargs):
        context = kwargs.get('context', {})
        if model:
            context['model'] = model
        if field:
            context['field'] = field

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Make sure the class is a concrete django.db.models.Model subclass",
                "Check that the app registry is ready (django.setup() was called)",
                "Review the include/exclude app filters"
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="INTROSPECTION_ERROR"
        )


class DeclarationGenerationError(ModelTyperError):
    """Raised when the raw declaration template cannot be rendered."""

    def __init__(self, message: str, model: str = None, template: str = None, **kwargs):
        context = kwargs.get('context', {})
        if model:
            context['model'] = model
        if template:
            context['template'] = template

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Check that the package templates are installed",
                "Verify custom casts point at importable classes"
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="DECLARATION_GENERATION_ERROR"
        )


class MalformedDeclarationError(ModelTyperError):
    """Raised when a raw declaration does not have the expected header/body/footer shape."""

    def __init__(self, message: str, declaration: str = None, **kwargs):
        context = kwargs.get('context', {})
        if declaration is not None:
            # Only the head of the text is useful when reporting
            context['declaration'] = declaration[:80]

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Check that the declaration generator emits 'export interface <Name> {'",
                "Check that the interface body is closed with '}'"
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="MALFORMED_DECLARATION"
        )


class InvalidArgumentError(ModelTyperError, ValueError):
    """Raised when a transformation result is assembled from invalid input."""

    def __init__(self, message: str, argument: str = None, **kwargs):
        context = kwargs.get('context', {})
        if argument:
            context['argument'] = argument

        super().__init__(
            message,
            context=context,
            suggestions=kwargs.get('suggestions', []),
            error_code="INVALID_ARGUMENT"
        )

