"""
Naming utilities for ts-model-typer.

Class references travel through the tool as dotted strings
(``"blog.models.Post"``). This module splits them into short names, decides
which of them look like classes, and qualifies them into the namespace paths
used by the generated TypeScript (``"App.Models.Post"``).
"""

import re
from typing import Dict, Optional

import inflect


# Initialize inflect engine for pluralization
p = inflect.engine()

CLASS_LIKE_PATTERN = re.compile(r"^[A-Z]")
REFERENCE_SEPARATOR_PATTERN = re.compile(r"\\|::")
# Whole value must be a separator-joined path of identifiers
CLASS_REFERENCE_PATTERN = re.compile(r"^[A-Za-z_]\w*(?:(?:\.|\\|::)[A-Za-z_]\w*)*$")


def normalize_reference(reference: str) -> str:
    """
    Normalize a class reference to dotted form.

    Example:
        >>> normalize_reference("App\\\\Enums\\\\Status")
        'App.Enums.Status'
    """
    return REFERENCE_SEPARATOR_PATTERN.sub(".", reference).strip(".")


def short_name(reference: str) -> str:
    """
    Return the terminal segment of a class reference.

    Example:
        >>> short_name("blog.models.Post")
        'Post'
        >>> short_name("int")
        'int'
    """
    return normalize_reference(reference).rsplit(".", 1)[-1]


def is_class_like(reference: str) -> bool:
    """Check whether a cast or related type names a class rather than a primitive."""
    if not isinstance(reference, str) or not CLASS_REFERENCE_PATTERN.fullmatch(reference):
        return False
    return bool(CLASS_LIKE_PATTERN.match(short_name(reference)))


def class_reference(cls: type) -> str:
    """Dotted reference of a class: ``module.qualname``."""
    return f"{cls.__module__}.{cls.__qualname__}"


def pluralize(word: str) -> str:
    """Pluralize a PascalCase declaration name, e.g. ``Category`` -> ``Categories``."""
    if not isinstance(word, str) or not word:
        return ""
    # inflect leaves capitalised words alone as proper nouns
    plural = p.plural_noun(word[0].lower() + word[1:])
    if not plural:
        return word + "s"
    return word[0] + plural[1:]


class SymbolQualifier:
    """
    Turns class references into fully-qualified dotted symbol paths.

    ``aliases`` maps a dotted namespace prefix of a reference to the namespace
    that should appear in the output; the longest matching prefix wins.

    Example:
        >>> SymbolQualifier({"blog.models": "App.Models"}).qualify("blog.models.Post")
        'App.Models.Post'
    """

    def __init__(self, aliases: Optional[Dict[str, str]] = None):
        self.aliases: Dict[str, str] = {
            normalize_reference(prefix): normalize_reference(target)
            for prefix, target in (aliases or {}).items()
        }
        # Longest prefix first, ties broken alphabetically for stable output
        self._ordered_prefixes = sorted(self.aliases, key=lambda prefix: (-len(prefix), prefix))

    def qualify(self, reference: str) -> str:
        dotted = normalize_reference(reference)
        for prefix in self._ordered_prefixes:
            if dotted == prefix or dotted.startswith(prefix + "."):
                target = self.aliases[prefix]
                remainder = dotted[len(prefix):].lstrip(".")
                return ".".join(part for part in (target, remainder) if part)
        return dotted

    def namespace(self, reference: str) -> str:
        """Qualified namespace of a reference: everything before its short name."""
        qualified = self.qualify(reference)
        return qualified.rsplit(".", 1)[0] if "." in qualified else ""
