"""
Tests for class reference naming helpers and the symbol qualifier.
"""

from unittest import TestCase

from ts_model_typer.domain.naming import (
    SymbolQualifier,
    class_reference,
    is_class_like,
    normalize_reference,
    pluralize,
    short_name,
)

from sample_app.enums import Status
from sample_app.models import Post


class TestReferences(TestCase):
    """Test cases for reference helpers"""

    def test_normalize_reference(self):
        self.assertEqual(normalize_reference("App\\Enums\\Status"), "App.Enums.Status")
        self.assertEqual(normalize_reference("Foo::Bar"), "Foo.Bar")
        self.assertEqual(normalize_reference("blog.models.Post"), "blog.models.Post")

    def test_short_name(self):
        self.assertEqual(short_name("blog.models.Post"), "Post")
        self.assertEqual(short_name("App\\Models\\User"), "User")
        self.assertEqual(short_name("int"), "int")

    def test_is_class_like(self):
        self.assertTrue(is_class_like("blog.models.Post"))
        self.assertTrue(is_class_like("Status"))
        self.assertFalse(is_class_like("int"))
        self.assertFalse(is_class_like("decimal:2"))
        self.assertFalse(is_class_like("date:d.m.Y"))
        self.assertFalse(is_class_like("path/to/Thing"))
        self.assertFalse(is_class_like("blog.models.post"))
        self.assertFalse(is_class_like(""))
        self.assertFalse(is_class_like(None))

    def test_class_reference(self):
        self.assertEqual(class_reference(Post), "sample_app.models.Post")
        self.assertEqual(class_reference(Status), "sample_app.enums.Status")

    def test_pluralize(self):
        self.assertEqual(pluralize("Post"), "Posts")
        self.assertEqual(pluralize("Category"), "Categories")
        self.assertEqual(pluralize(""), "")


class TestSymbolQualifier(TestCase):
    """Test cases for SymbolQualifier"""

    def test_no_aliases(self):
        qualifier = SymbolQualifier()

        self.assertEqual(qualifier.qualify("blog.models.Post"), "blog.models.Post")
        self.assertEqual(qualifier.namespace("blog.models.Post"), "blog.models")

    def test_longest_prefix_wins(self):
        qualifier = SymbolQualifier({"blog": "Blog", "blog.models": "App.Models"})

        self.assertEqual(qualifier.qualify("blog.models.Post"), "App.Models.Post")
        self.assertEqual(qualifier.qualify("blog.enums.Status"), "Blog.enums.Status")

    def test_prefix_matches_whole_segments(self):
        qualifier = SymbolQualifier({"blog": "Blog"})

        self.assertEqual(qualifier.qualify("blogger.models.Post"), "blogger.models.Post")

    def test_alias_to_nothing(self):
        qualifier = SymbolQualifier({"blog.models": ""})

        self.assertEqual(qualifier.qualify("blog.models.Post"), "Post")
        self.assertEqual(qualifier.namespace("blog.models.Post"), "")

    def test_nested_class(self):
        qualifier = SymbolQualifier({"blog.models": "App.Models"})

        self.assertEqual(qualifier.namespace("blog.models.Post.Kind"), "App.Models.Post")
