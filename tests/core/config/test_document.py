"""
Tests for the backing document.

Covers path lookups, sections, defaults, comments and file loading.
"""

import pytest

from advancedconfig.core.config.document import ConfigDocument, ConfigSection
from advancedconfig.core.config.errors import ConfigFormatError


class TestPaths:
    """Tests for dotted path access."""

    def test_set_creates_intermediate_sections(self):
        doc = ConfigDocument()
        doc.set("a.b.c", 1)

        assert doc.contains("a.b")
        assert doc.is_section("a.b")
        assert not doc.is_section("a.b.c")
        assert doc.get("a.b.c") == 1

    def test_get_with_fallback(self):
        doc = ConfigDocument()
        assert doc.get("missing") is None
        assert doc.get("missing", 5) == 5

    def test_set_none_removes_entry_and_comment(self):
        doc = ConfigDocument({"a": {"b": 1, "c": 2}}, {"a.b": "about b"})
        doc.set("a.b", None)

        assert not doc.contains("a.b")
        assert doc.get_comment("a.b") is None
        assert doc.get("a.c") == 2

    def test_get_returns_copies(self):
        doc = ConfigDocument({"worlds": ["world"]})
        worlds = doc.get("worlds")
        worlds.append("nether")
        assert doc.get("worlds") == ["world"]

    def test_keys_shallow_and_deep(self):
        doc = ConfigDocument({"a": {"b": 1, "c": {"d": 2}}, "e": 3})
        assert doc.keys() == ["a", "e"]
        assert doc.keys(deep=True) == ["a", "a.b", "a.c", "a.c.d", "e"]

    def test_non_string_keys_are_normalized(self):
        doc = ConfigDocument.load_from_string("levels:\n  1: easy\n  2: hard\n")
        assert doc.get("levels.1") == "easy"


class TestSections:
    """Tests for ConfigSection views."""

    def test_create_section_returns_relative_view(self):
        doc = ConfigDocument()
        section = doc.create_section("server")
        section.set("port", 25565)

        assert isinstance(section, ConfigSection)
        assert section.current_path == "server"
        assert section.name == "server"
        assert section.root is doc
        assert doc.get("server.port") == 25565
        assert section.to_dict() == {"port": 25565}

    def test_create_section_replaces_existing_value(self):
        doc = ConfigDocument({"server": "old"})
        doc.create_section("server")
        assert doc.get("server") == {}

    def test_get_section_of_scalar_is_none(self):
        doc = ConfigDocument({"a": 1})
        assert doc.get_section("a") is None
        assert doc.get_section("missing") is None


class TestDefaults:
    """Tests for document defaults and copy_defaults."""

    def test_defaults_are_consulted_without_explicit_fallback(self):
        doc = ConfigDocument()
        doc.add_default("d.e", 2)

        assert doc.get("d.e") == 2
        assert doc.get("d.e", 7) == 7
        assert doc.contains("d.e")
        assert not doc.contains("d.e", ignore_defaults=True)

    def test_copy_defaults_controls_output(self):
        doc = ConfigDocument({"a": 1})
        doc.add_default("b", 2)

        assert "b: 2" not in doc.save_to_string()
        doc.options.copy_defaults = True
        assert "b: 2" in doc.save_to_string()


class TestComments:
    """Tests for comment handling."""

    def test_synthetic_comment_key_becomes_comment(self):
        doc = ConfigDocument()
        doc.set("messages.greet_COMMENT_", "Greeting message")
        doc.set("messages.greet", "Hi")

        assert doc.get_comment("messages.greet") == "Greeting message"

    def test_loaded_empty_entries_are_absent(self):
        doc = ConfigDocument.load_from_string("a:\n  b:\n  c: 1\n")
        assert not doc.contains("a.b")
        assert doc.get("a") == {"c": 1}
        assert not doc.contains("messages.greet_COMMENT_")
        assert doc.keys(deep=True) == ["messages", "messages.greet"]

    def test_loaded_synthetic_keys_are_not_data(self):
        doc = ConfigDocument.load_from_string(
            "messages:\n  greet_COMMENT_: Greeting message\n  greet: Hi\n"
        )
        assert doc.get("messages") == {"greet": "Hi"}
        assert doc.get_comment("messages.greet") == "Greeting message"

    def test_comments_survive_save_and_load(self):
        doc = ConfigDocument()
        doc.set_comment("server.port", "Port to bind")
        doc.set("server.port", 25565)

        reloaded = ConfigDocument.load_from_string(doc.save_to_string())
        assert reloaded.get_comment("server.port") == "Port to bind"
        assert reloaded.get("server.port") == 25565


class TestLoading:
    """Tests for reading documents from disk."""

    def test_empty_file_is_empty_document(self, tmp_path):
        path = tmp_path / "empty.yml"
        path.write_text("", encoding="utf-8")
        assert ConfigDocument.load(path).keys() == []

    def test_invalid_yaml_raises_format_error(self, tmp_path):
        path = tmp_path / "broken.yml"
        path.write_text("key: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigFormatError):
            ConfigDocument.load(path)

    def test_non_mapping_root_raises_format_error(self):
        with pytest.raises(ConfigFormatError):
            ConfigDocument.load_from_string("- a\n- b\n")

    def test_missing_file_raises_os_error(self, tmp_path):
        with pytest.raises(OSError):
            ConfigDocument.load(tmp_path / "nope.yml")

    def test_save_creates_parent_directories(self, tmp_path):
        doc = ConfigDocument({"a": 1})
        target = tmp_path / "nested" / "dir" / "out.yml"
        doc.save(target)
        assert target.read_text(encoding="utf-8") == "a: 1\n"
