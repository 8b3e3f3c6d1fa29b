"""
Tests for the Django model inspector and model discovery helpers.
"""

import os
from unittest import TestCase
from unittest.mock import Mock, patch

from ts_model_typer.domain.models import AttributeDescriptor, RelationDescriptor
from ts_model_typer.exceptions import ConfigurationError, SchemaIntrospectionError
from ts_model_typer import introspection_django
from ts_model_typer.introspection_django import (
    DjangoModelInspector,
    collect_cast_enums,
    discover_models,
    model_casts,
    setup_django,
)

from sample_app.enums import Priority, Status
from sample_app.models import Author, Post, Profile, Tag, TimeStamped


class TestDjangoModelInspector(TestCase):
    """Test cases for DjangoModelInspector.inspect"""

    def setUp(self):
        self.inspector = DjangoModelInspector()

    def test_post_attributes(self):
        """Concrete columns in declaration order, FKs by their *_id column"""
        inspection = self.inspector.inspect(Post)

        self.assertEqual(list(inspection.attributes), [
            AttributeDescriptor(name="id", cast_type="int"),
            AttributeDescriptor(name="title", cast_type="string"),
            AttributeDescriptor(name="status", cast_type="sample_app.enums.Status"),
            AttributeDescriptor(name="priority", cast_type="sample_app.enums.Priority"),
            AttributeDescriptor(name="published_at", cast_type="datetime", nullable=True),
            AttributeDescriptor(name="metadata", cast_type="array"),
            AttributeDescriptor(name="author_id", cast_type="int"),
            AttributeDescriptor(name="editor_id", cast_type="int", nullable=True),
        ])

    def test_post_forward_relations(self):
        """Forward FK and M2M relations point at the related model's dotted reference"""
        inspection = self.inspector.inspect(Post)

        self.assertEqual(list(inspection.relations), [
            RelationDescriptor(name="author", related_type="sample_app.models.Author"),
            RelationDescriptor(name="editor", related_type="sample_app.models.Author", nullable=True),
            RelationDescriptor(name="tags", related_type="sample_app.models.Tag", many=True),
        ])

    def test_author_reverse_relations(self):
        """Reverse accessors are reported, hidden ones ('+') are not"""
        inspection = self.inspector.inspect(Author)
        relations = {relation.name: relation for relation in inspection.relations}

        self.assertEqual(set(relations), {"posts", "profile"})
        self.assertEqual(
            relations["posts"],
            RelationDescriptor(name="posts", related_type="sample_app.models.Post", many=True),
        )
        self.assertEqual(
            relations["profile"],
            RelationDescriptor(name="profile", related_type="sample_app.models.Profile", nullable=True),
        )

    def test_author_attributes(self):
        """EmailField and nullable TextField map to string casts"""
        inspection = self.inspector.inspect(Author)

        self.assertEqual(list(inspection.attributes), [
            AttributeDescriptor(name="id", cast_type="int"),
            AttributeDescriptor(name="name", cast_type="string"),
            AttributeDescriptor(name="email", cast_type="string"),
            AttributeDescriptor(name="bio", cast_type="string", nullable=True),
        ])

    def test_reverse_many_to_many(self):
        """The reverse side of a M2M is a to-many relation"""
        inspection = self.inspector.inspect(Tag)

        self.assertEqual(list(inspection.relations), [
            RelationDescriptor(name="posts", related_type="sample_app.models.Post", many=True),
        ])

    def test_one_to_one_forward(self):
        """A forward O2O is a single, non-null relation"""
        inspection = self.inspector.inspect(Profile)

        self.assertIn(
            RelationDescriptor(name="author", related_type="sample_app.models.Author"),
            inspection.relations,
        )
        self.assertIn(AttributeDescriptor(name="author_id", cast_type="int"), inspection.attributes)

    def test_custom_casts_attribute(self):
        """The casts mapping can live under another attribute name"""
        inspector = DjangoModelInspector(casts_attribute="typescript_casts")

        with patch.object(Post, "typescript_casts", {"title": "sample_app.values.Title"}, create=True):
            inspection = inspector.inspect(Post)

        casts = {attribute.name: attribute.cast_type for attribute in inspection.attributes}
        self.assertEqual(casts["title"], "sample_app.values.Title")
        # The default 'casts' attribute is ignored
        self.assertEqual(casts["status"], "string")

    def test_fk_column_cast_is_looked_up_by_column_name(self):
        """A cast keyed by the relation name does not leak onto its *_id column"""
        casts = {"author": "sample_app.values.AuthorRef", "editor_id": "string"}

        with patch.object(Post, "casts", casts):
            inspection = self.inspector.inspect(Post)

        attributes = {attribute.name: attribute.cast_type for attribute in inspection.attributes}
        self.assertEqual(attributes["author_id"], "int")
        self.assertEqual(attributes["editor_id"], "string")

    def test_non_model_raises(self):
        """Only concrete models can be inspected"""
        with self.assertRaises(SchemaIntrospectionError):
            self.inspector.inspect(TimeStamped)

        with self.assertRaises(SchemaIntrospectionError):
            self.inspector.inspect(Status)


class TestModelCasts(TestCase):
    """Test cases for model_casts and collect_cast_enums"""

    def test_model_without_casts(self):
        self.assertEqual(model_casts(Author), {})

    def test_invalid_casts_type(self):
        with patch.object(Author, "casts", ["status"], create=True):
            with self.assertRaises(SchemaIntrospectionError):
                model_casts(Author)

    def test_collect_cast_enums(self):
        """Enums are collected once each, in first-seen order"""
        self.assertEqual(collect_cast_enums([Author, Post, Post]), [Status, Priority])

    def test_string_casts_are_not_enums(self):
        with patch.object(Tag, "casts", {"label": "sample_app.values.Label"}, create=True):
            self.assertEqual(collect_cast_enums([Tag]), [])


class TestDiscoverModels(TestCase):
    """Test cases for discover_models"""

    def test_all_sample_models(self):
        """Abstract models and auto-created through tables are not discovered"""
        models = discover_models(include_apps=["sample_app"])

        self.assertEqual(set(models), {Author, Tag, Post, Profile})

    def test_exclude_wins(self):
        self.assertEqual(discover_models(include_apps=["sample_app"], exclude_apps=["sample_app"]), [])

    def test_unknown_app_included(self):
        self.assertEqual(discover_models(include_apps=["missing"]), [])


class TestSetupDjango(TestCase):
    """Test cases for setup_django"""

    def test_noop_when_registry_ready(self):
        """An already populated app registry is left alone"""
        with patch("ts_model_typer.introspection_django.django.setup") as mock_setup:
            setup_django("does.not.matter")

        mock_setup.assert_not_called()

    def test_missing_settings_module_raises(self):
        """Without a settings module there is nothing to configure"""
        with patch.object(introspection_django, "_django_setup_done", False), \
                patch.object(introspection_django, "apps", Mock(ready=False)), \
                patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(ConfigurationError):
                setup_django(None)

    def test_import_error_is_wrapped(self):
        """Broken settings surface as ConfigurationError"""
        with patch.object(introspection_django, "_django_setup_done", False), \
                patch.object(introspection_django, "apps", Mock(ready=False)), \
                patch.dict(os.environ, {}, clear=True), \
                patch("ts_model_typer.introspection_django.django.setup",
                      side_effect=ImportError("No module named 'missing'")):
            with self.assertRaises(ConfigurationError):
                setup_django("missing.settings")
