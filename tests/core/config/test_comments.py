"""
Tests for the synthetic comment rewrite pass.

This module tests line rewriting, in-place file rewriting and the
non-fatal handling of I/O failures.
"""

from unittest.mock import patch

from advancedconfig.core.config.comments import old_file_path, replace_comments, rewrite_line


LEGACY = """messages:
  greet_COMMENT_: Greeting message
  greet: Hi
spawn_COMMENT_: 'Spawn: world'
spawn:
  x: 1
"""


class TestRewriteLine:
    """Tests for rewrite_line."""

    def test_rewrites_marker_line_at_same_indentation(self):
        assert rewrite_line("    greet_COMMENT_: Greeting message") == "    # Greeting message"

    def test_unquotes_quoted_text(self):
        assert rewrite_line("spawn_COMMENT_: 'Spawn: world'") == "# Spawn: world"

    def test_other_lines_pass_through(self):
        assert rewrite_line("  greet: Hi") == "  greet: Hi"
        assert rewrite_line("# already a comment _COMMENT_") == "# already a comment _COMMENT_"
        assert rewrite_line("") == ""


class TestReplaceComments:
    """Tests for replace_comments."""

    def test_rewrites_file_and_removes_copy(self, tmp_path):
        config_file = tmp_path / "config.yml"
        config_file.write_text(LEGACY, encoding="utf-8")

        assert replace_comments(config_file) is True

        text = config_file.read_text(encoding="utf-8")
        assert "_COMMENT_" not in text
        assert text.splitlines() == [
            "messages:",
            "  # Greeting message",
            "  greet: Hi",
            "# Spawn: world",
            "spawn:",
            "  x: 1",
        ]
        assert not old_file_path(config_file).exists()

    def test_old_file_is_sibling(self, tmp_path):
        assert old_file_path(tmp_path / "config.yml") == tmp_path / "config.old.yml"

    def test_file_without_markers_is_untouched(self, tmp_path):
        config_file = tmp_path / "config.yml"
        config_file.write_text("a: 1\n", encoding="utf-8")

        assert replace_comments(config_file) is False
        assert config_file.read_text(encoding="utf-8") == "a: 1\n"

    def test_missing_file_is_logged_not_raised(self, tmp_path):
        assert replace_comments(tmp_path / "missing.yml") is False

    def test_copy_failure_is_swallowed(self, tmp_path):
        config_file = tmp_path / "config.yml"
        config_file.write_text(LEGACY, encoding="utf-8")

        with patch(
            "advancedconfig.core.config.comments.shutil.copyfile",
            side_effect=OSError("disk full"),
        ):
            assert replace_comments(config_file) is False

        assert config_file.read_text(encoding="utf-8") == LEGACY
