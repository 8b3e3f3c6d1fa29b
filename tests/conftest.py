# File: tests/conftest.py
# Configures an in-memory Django project holding the sample_app models
# before any test module imports them.

from pathlib import Path
from typing import Callable

import django
import pytest
from django.conf import settings

from ts_model_typer.domain.models import AttributeDescriptor, ModelInspection, RelationDescriptor
from ts_model_typer.domain.naming import SymbolQualifier


if not settings.configured:
    settings.configure(
        SECRET_KEY="ts-model-typer-tests",
        INSTALLED_APPS=["sample_app"],
        DATABASES={
            "default": {"ENGINE": "django.db.backends.sqlite3", "NAME": ":memory:"}
        },
        DEFAULT_AUTO_FIELD="django.db.models.BigAutoField",
        USE_TZ=True,
    )
    django.setup()


SAMPLE_ALIASES = {
    "sample_app.models": "App.Models",
    "sample_app.enums": "App.Enums",
}


@pytest.fixture
def qualifier() -> SymbolQualifier:
    """Qualifier mapping the sample app's modules onto App.* namespaces."""
    return SymbolQualifier(SAMPLE_ALIASES)


@pytest.fixture
def sample_inspection() -> ModelInspection:
    """Inspection with one enum cast, one primitive cast and one relation."""
    return ModelInspection(
        attributes=(
            AttributeDescriptor(name="id", cast_type="int"),
            AttributeDescriptor(name="status", cast_type="sample_app.enums.Status"),
        ),
        relations=(
            RelationDescriptor(name="author", related_type="sample_app.models.Author"),
        ),
    )


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[str], Path]:
    """Writes YAML text to a config file inside tmp_path and returns its path."""
    def _write(text: str) -> Path:
        config_file = tmp_path / "ts-model-typer.yaml"
        config_file.write_text(text, encoding="utf-8")
        return config_file
    return _write
