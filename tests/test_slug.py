"""Tests for slug and id generation utilities."""

from kanpad.utils.slug import generate_id, slugify


class TestSlugify:
    """Tests for the slugify function."""

    def test_basic_text(self):
        """Simple text is lowercased and spaces become hyphens."""
        assert slugify("Hello World") == "hello-world"

    def test_special_characters_removed(self):
        assert slugify("Fix Login Bug!") == "fix-login-bug"
        assert slugify("What's up?") == "whats-up"

    def test_underscores_become_hyphens(self):
        assert slugify("hello_world") == "hello-world"

    def test_multiple_hyphens_collapsed(self):
        assert slugify("hello - - world") == "hello-world"

    def test_unicode_normalized(self):
        """Unicode characters are normalized to ASCII."""
        assert slugify("café") == "cafe"
        assert slugify("résumé") == "resume"

    def test_empty_result(self):
        assert slugify("@#$%") == ""


class TestGenerateId:
    """Tests for generate_id."""

    def test_free_id_used_as_is(self):
        assert generate_id("Fix bug", exists=lambda _: False) == "fix-bug"

    def test_collisions_get_suffix(self):
        """Taken ids get -1, -2, ... appended."""
        taken = {"fix-bug", "fix-bug-1"}
        assert generate_id("Fix bug", exists=taken.__contains__) == "fix-bug-2"

    def test_fallback_for_empty_slug(self):
        assert generate_id("!!!", exists=lambda _: False, fallback="task") == "task"

    def test_long_titles_truncated(self):
        """Ids are capped at 60 characters."""
        task_id = generate_id("word " * 40, exists=lambda _: False)
        assert len(task_id) <= 60
        assert not task_id.endswith("-")
