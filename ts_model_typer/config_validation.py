# File: ts_model_typer/config_validation.py
from argparse import Namespace
import logging
import keyword
from typing import List, Optional, Dict, Any, Literal, Self
import yaml
from pathlib import Path

from pydantic import (
    BaseModel,
    Field,
    ValidationError,
    field_validator,
    model_validator,
    ConfigDict,
)

from .constants import DefaultConfig
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def is_valid_python_identifier(name: str) -> bool:
    """Check if a string is a valid Python identifier and not a keyword."""
    return name.isidentifier() and not keyword.iskeyword(name)


# --- Pydantic Model for Configuration Schema ---
class ToolConfigSchema(BaseModel):
    """Pydantic schema defining the expected structure and types for the configuration."""

    django_settings_module: Optional[str] = Field(
        default=None,
        description="Dotted path of the Django settings module. Falls back to DJANGO_SETTINGS_MODULE.",
    )
    output_file: str = Field(
        default=DefaultConfig.OUTPUT_FILE,
        min_length=1,
        description="Path of the aggregated TypeScript declaration file.",
    )
    include_apps: Optional[List[str]] = Field(
        default=None,
        description="Optional list of app labels whose models are transformed.",
    )
    exclude_apps: Optional[List[str]] = Field(
        default=None, description="Optional list of app labels to skip."
    )
    namespace_aliases: Dict[str, str] = Field(
        default_factory=dict,
        description="Dotted module prefix -> TypeScript namespace (e.g. 'blog.models': 'App.Models').",
    )
    casts_attribute: str = Field(
        default=DefaultConfig.CASTS_ATTRIBUTE,
        min_length=1,
        description="Name of the model class attribute holding per-attribute casts.",
    )
    counts: bool = Field(
        default=DefaultConfig.EMIT_COUNTS,
        description="Emit '<relation>_count' fields for to-many relations.",
    )
    exists: bool = Field(
        default=DefaultConfig.EMIT_EXISTS,
        description="Emit '<relation>_exists' fields for to-many relations.",
    )
    emit_constants: bool = Field(
        default=DefaultConfig.EMIT_CONSTANTS,
        description="Have the raw generator append its 'export const' block.",
    )
    on_error: Literal["abort", "skip"] = Field(
        default=DefaultConfig.ON_ERROR,
        description="What to do when a model's declaration is malformed.",
    )

    @field_validator("casts_attribute")
    @classmethod
    def check_valid_identifier(cls, v: str) -> str:
        """The casts attribute must be usable as a class attribute name."""
        if not is_valid_python_identifier(v):
            raise ValueError(
                f"'{v}' is not a valid Python identifier or is a reserved keyword."
            )
        return v

    @field_validator("include_apps", "exclude_apps", mode="before")
    @classmethod
    def check_app_labels_list(cls, v: Optional[List[Any]]) -> Optional[List[str]]:
        """Ensure items in app label lists are non-empty strings."""
        if v is None:
            return None
        if not isinstance(v, list):
            raise ValueError("include_apps/exclude_apps must be a list.")
        processed_list = []
        for index, item in enumerate(v):
            if not isinstance(item, str):
                raise ValueError(
                    f"Item at index {index} must be a string, found: {type(item).__name__}"
                )
            stripped_item = item.strip()
            if not stripped_item:
                raise ValueError(
                    f"Item at index {index} cannot be empty or just whitespace."
                )
            processed_list.append(stripped_item)
        return processed_list

    @field_validator("namespace_aliases")
    @classmethod
    def check_namespace_aliases(cls, v: Dict[str, str]) -> Dict[str, str]:
        """Alias prefixes must be non-empty; targets may be empty to drop a prefix."""
        for prefix in v:
            if not prefix.strip():
                raise ValueError("namespace_aliases keys cannot be empty.")
        return v

    @model_validator(mode="after")
    def check_app_filters(self) -> Self:
        """Perform cross-field validation checks."""
        if self.include_apps and self.exclude_apps:
            overlap = sorted(set(self.include_apps) & set(self.exclude_apps))
            if overlap:
                logger.warning(
                    f"Apps {overlap} are both included and excluded; exclusion wins."
                )
        return self

    model_config = ConfigDict(
        extra="ignore",  # Allow and ignore extra fields from input dict
    )


# --- Validation Function ---
def validate_and_parse_config(config_dict: Dict[str, Any]) -> ToolConfigSchema:
    """
    Validates a raw configuration dictionary against the ToolConfigSchema.
    Raises ConfigurationError listing every problem found.
    """
    try:
        validated_config = ToolConfigSchema.model_validate(config_dict)
        logger.debug(
            "Configuration dictionary parsed and validated successfully against schema."
        )
        return validated_config
    except ValidationError as e:
        problems = []
        for error in e.errors():
            loc_parts = [str(loc_item) for loc_item in error.get("loc", ())]
            loc_str = " -> ".join(loc_parts) if loc_parts else "Model Level"
            problems.append(f"{loc_str}: {error.get('msg', 'Unknown validation error')}")
        raise ConfigurationError(
            "Configuration validation failed",
            context={'errors': "; ".join(problems)},
        ) from e


def load_config(config_path: Optional[str], cli_args: Optional[Namespace] = None) -> ToolConfigSchema:
    """
    Loads configuration from YAML file, merges with CLI arguments,
    validates the result, and returns a validated Pydantic model instance.
    """
    raw_config: Dict[str, Any] = {}

    # 1. Load from YAML file if path is provided
    if config_path:
        config_file = Path(config_path)
        if config_file.is_file():
            try:
                with open(config_file, "r", encoding="utf-8") as f:
                    yaml_config = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigurationError(
                    f"Error parsing YAML file: {e}", config_file=config_path
                ) from e
            if yaml_config and isinstance(yaml_config, dict):
                raw_config.update(yaml_config)
                logger.debug(f"Loaded configuration from {config_path}")
            elif yaml_config:
                logger.warning(
                    f"Content in config file {config_path} is not a dictionary. Ignoring file content."
                )
        else:
            logger.warning(
                f"Config file not found at {config_path}. Using defaults and CLI arguments."
            )

    # 2. Override with CLI arguments (only those explicitly provided)
    if cli_args is not None:
        overridden_keys = set()
        for key, value in vars(cli_args).items():
            if value is not None and key in ToolConfigSchema.model_fields:
                raw_config[key] = value
                overridden_keys.add(key)
        if overridden_keys:
            logger.debug(f"Overridden config keys from CLI arguments: {sorted(overridden_keys)}")

    # 3. Validate
    logger.info("Validating final configuration...")
    validated_config = validate_and_parse_config(raw_config)

    logger.info("Configuration loaded and validated successfully.")
    return validated_config
