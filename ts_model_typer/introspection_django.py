import enum
import inspect
import logging
import os
from typing import Any, Dict, Iterable, List, Optional

import django
from django.apps import apps
from django.core.exceptions import ImproperlyConfigured
from django.db import models

from .constants import DJANGO_FIELD_CASTS, CastTypes, DefaultConfig
from .domain.models import AttributeDescriptor, ModelInspection, RelationDescriptor
from .domain.naming import class_reference
from .exceptions import ConfigurationError, SchemaIntrospectionError
from .transformer import is_model_class


logger = logging.getLogger(__name__)

# --- Django Setup Helper ---
_django_setup_done = False


def setup_django(settings_module: Optional[str] = None) -> None:
    """Points Django at a settings module and populates the app registry."""
    global _django_setup_done
    if _django_setup_done or apps.ready:
        logger.debug("Django setup already performed.")
        _django_setup_done = True
        return

    if settings_module:
        os.environ["DJANGO_SETTINGS_MODULE"] = settings_module
    elif not os.environ.get("DJANGO_SETTINGS_MODULE"):
        raise ConfigurationError(
            "No Django settings module configured",
            suggestions=[
                "Set 'django_settings_module' in the configuration file",
                "Or export DJANGO_SETTINGS_MODULE before running the command",
            ],
        )

    logger.info(f"Configuring Django with settings '{os.environ['DJANGO_SETTINGS_MODULE']}'...")
    try:
        django.setup()
    except (ImproperlyConfigured, ImportError) as e:
        raise ConfigurationError(
            f"Failed to configure Django: {e}",
            context={'settings_module': os.environ.get("DJANGO_SETTINGS_MODULE")},
        ) from e
    _django_setup_done = True
    logger.info("Django setup complete.")


def discover_models(
    include_apps: Optional[List[str]] = None,
    exclude_apps: Optional[List[str]] = None,
) -> List[type]:
    """Concrete models from the app registry, filtered by app label."""
    include_set = set(include_apps) if include_apps else None
    exclude_set = set(exclude_apps) if exclude_apps else set()

    selected = []
    for model in apps.get_models():
        app_label = model._meta.app_label
        if app_label in exclude_set:
            logger.debug(f"Skipping model '{model.__name__}' (app '{app_label}' excluded).")
            continue
        if include_set is not None and app_label not in include_set:
            logger.debug(f"Skipping model '{model.__name__}' (app '{app_label}' not included).")
            continue
        selected.append(model)

    logger.info(f"Found {len(selected)} models to transform.")
    return selected


def model_casts(model_class: type, casts_attribute: str = DefaultConfig.CASTS_ATTRIBUTE) -> Dict[str, Any]:
    """The model's declared casts mapping, or an empty dict."""
    casts = getattr(model_class, casts_attribute, None) or {}
    if not isinstance(casts, dict):
        raise SchemaIntrospectionError(
            f"'{casts_attribute}' must be a dict of attribute name -> cast, got {type(casts).__name__}",
            model=class_reference(model_class),
        )
    return casts


def collect_cast_enums(
    model_classes: Iterable[type],
    casts_attribute: str = DefaultConfig.CASTS_ATTRIBUTE,
) -> List[type]:
    """Enum classes referenced from the casts of the given models, first-seen order."""
    found: Dict[type, None] = {}
    for model_class in model_classes:
        for cast in model_casts(model_class, casts_attribute).values():
            if inspect.isclass(cast) and issubclass(cast, enum.Enum):
                found.setdefault(cast, None)
    return list(found)


def _cast_reference(cast: Any) -> str:
    """Casts may be declared as classes or as strings."""
    if inspect.isclass(cast):
        return class_reference(cast)
    return str(cast)


def _field_cast(field: models.Field) -> str:
    """Cast keyword for a Django field, based on its internal type."""
    return DJANGO_FIELD_CASTS.get(field.get_internal_type(), CastTypes.MIXED)


class DjangoModelInspector:
    """
    Reports attributes and relations of Django models.

    Attributes are the concrete columns of the model (foreign keys appear by
    their ``*_id`` column). Relations are forward relation fields followed by
    the non-hidden reverse accessors.
    """

    def __init__(self, casts_attribute: str = DefaultConfig.CASTS_ATTRIBUTE):
        self.casts_attribute = casts_attribute

    def inspect(self, model_class: type) -> ModelInspection:
        if not is_model_class(model_class):
            raise SchemaIntrospectionError(
                f"{model_class!r} is not a concrete Django model",
                model=getattr(model_class, '__qualname__', repr(model_class)),
            )

        meta = model_class._meta
        casts = model_casts(model_class, self.casts_attribute)
        logger.debug(f"Inspecting model '{meta.label}'")

        attributes: List[AttributeDescriptor] = []
        for field in meta.concrete_fields:
            if field.is_relation:
                name = field.attname
                default_cast = _field_cast(field.target_field)
            else:
                name = field.name
                default_cast = _field_cast(field)

            cast = casts.get(name)
            attributes.append(
                AttributeDescriptor(
                    name=name,
                    cast_type=_cast_reference(cast) if cast is not None else default_cast,
                    nullable=field.null,
                )
            )

        relations: List[RelationDescriptor] = []
        for field in list(meta.fields) + list(meta.many_to_many):
            if not field.is_relation or field.related_model is None:
                continue
            relations.append(
                RelationDescriptor(
                    name=field.name,
                    related_type=class_reference(field.related_model),
                    many=field.many_to_many,
                    nullable=field.null and not field.many_to_many,
                )
            )

        for rel in meta.related_objects:
            if rel.hidden:
                continue
            relations.append(
                RelationDescriptor(
                    name=rel.get_accessor_name(),
                    related_type=class_reference(rel.related_model),
                    many=rel.one_to_many or rel.many_to_many,
                    nullable=rel.one_to_one,
                )
            )

        logger.debug(
            f"Model '{meta.label}': {len(attributes)} attributes, {len(relations)} relations"
        )
        return ModelInspection(attributes=tuple(attributes), relations=tuple(relations))
