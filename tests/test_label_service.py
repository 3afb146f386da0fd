"""Tests for LabelService and label resolution."""

from pathlib import Path

import pytest

from kanpad.errors import NotFoundError, ValidationFailure
from kanpad.models import Label, LabelColor
from kanpad.repositories import FilesystemStore
from kanpad.services import LabelService, resolve_labels


@pytest.fixture
def label_service(tmp_path: Path) -> LabelService:
    return LabelService(FilesystemStore(tmp_path / ".kanpad"))


class TestResolveLabels:
    """Tests for resolve_labels."""

    def test_keeps_task_order(self):
        labels = [
            Label(id="bug", name="Bug", color=LabelColor.RED),
            Label(id="docs", name="Docs", color=LabelColor.YELLOW),
        ]
        assert [label.id for label in resolve_labels(["docs", "bug"], labels)] == ["docs", "bug"]

    def test_unknown_ids_skipped(self):
        """Dangling label ids are skipped silently."""
        labels = [Label(id="bug", name="Bug", color=LabelColor.RED)]
        assert [label.id for label in resolve_labels(["gone", "bug"], labels)] == ["bug"]


class TestLabelService:
    """Tests for label CRUD."""

    def test_create(self, label_service: LabelService):
        label = label_service.create_label("  Needs Review ", LabelColor.GREEN)

        assert label.name == "Needs Review"
        assert label.id == "needs-review"
        assert label_service.list_labels() == [label]

    def test_default_color(self, label_service: LabelService):
        assert label_service.create_label("X").color == LabelColor.BLUE

    def test_blank_name_rejected(self, label_service: LabelService):
        with pytest.raises(ValidationFailure):
            label_service.create_label("  ")

    def test_delete(self, label_service: LabelService):
        label = label_service.create_label("X")
        label_service.delete_label(label.id)
        assert label_service.list_labels() == []

    def test_delete_missing(self, label_service: LabelService):
        with pytest.raises(NotFoundError):
            label_service.delete_label("ghost")
