"""
Aggregates transformed types into a single TypeScript declaration file.

Types are grouped by the qualified namespace of their source class; groups
are sorted by namespace and declarations by name so that the same input
always produces the same bytes.
"""

import logging
import textwrap
from itertools import groupby
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from jinja2 import Environment

from .codegen_utils import setup_jinja_env
from .constants import DefaultConfig, TemplateNames
from .domain.models import TransformedType
from .domain.naming import SymbolQualifier, class_reference


logger = logging.getLogger(__name__)


def namespace_for(transformed: TransformedType, qualifier: SymbolQualifier) -> str:
    """Qualified namespace of the class a type was generated from."""
    return qualifier.namespace(class_reference(transformed.source_class))


def body_lines(body: str) -> List[str]:
    """Interface body split into dedented, non-empty lines."""
    return [line.rstrip() for line in textwrap.dedent(body).splitlines() if line.strip()]


def group_by_namespace(
    types: Iterable[TransformedType],
    qualifier: SymbolQualifier,
) -> List[Dict[str, Any]]:
    """Sorted namespace groups ready for the declarations template."""
    keyed = sorted(
        ((namespace_for(item, qualifier), item) for item in types),
        key=lambda pair: (pair[0], pair[1].name),
    )

    groups = []
    for namespace, members in groupby(keyed, key=lambda pair: pair[0]):
        groups.append({
            'namespace': namespace,
            'indent': "  " if namespace else "",
            'export': "export" if namespace else "declare",
            'types': [
                {
                    'name': item.name,
                    'keyword': item.keyword,
                    'body': item.body,
                    'lines': body_lines(item.body),
                }
                for _, item in members
            ],
        })
    return groups


def render_declarations(
    types: Iterable[TransformedType],
    qualifier: Optional[SymbolQualifier] = None,
    header: str = DefaultConfig.FILE_HEADER,
    env: Optional[Environment] = None,
) -> str:
    """Render the aggregated declaration file as text."""
    qualifier = qualifier or SymbolQualifier()
    env = env or setup_jinja_env()

    groups = group_by_namespace(types, qualifier)
    template = env.get_template(TemplateNames.DECLARATIONS)
    return template.render(header=header, groups=groups)


def write_declarations(output_file: Union[str, Path], content: str) -> Path:
    """Write the rendered declarations, creating parent directories as needed."""
    path = Path(output_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="\n") as f:
        f.write(content)
    logger.info(f"Generated file: {path}")
    return path
