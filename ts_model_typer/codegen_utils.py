import logging
from pathlib import Path

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
)

from .domain.naming import pluralize


logger = logging.getLogger(__name__)

# Define the path to the templates directory relative to this file
TEMPLATE_DIR = Path(__file__).parent / "templates"


def jinja2_pluralize_filter(word):
    """
    Custom Jinja filter to pluralize a word using inflect.
    Falls back to appending 's' when inflect cannot help.
    """
    if not isinstance(word, str) or not word:
        return ""
    try:
        return pluralize(word)
    except Exception as e:
        logger.error(f"Inflect pluralization failed for '{word}': {e}. Falling back to adding 's'.")
        return word + "s"


def setup_jinja_env() -> Environment:
    """Sets up and returns the Jinja2 environment used for TypeScript output."""
    env = Environment(
        loader=FileSystemLoader(TEMPLATE_DIR),
        # TypeScript, not HTML: quotes and '<' must survive rendering
        autoescape=False,
        trim_blocks=True,  # Remove first newline after a block tag
        lstrip_blocks=True,  # Strip leading whitespace from lines with block tags
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )
    env.filters["pluralize"] = jinja2_pluralize_filter
    return env
