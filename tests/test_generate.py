"""Tests for the generate and seed commands."""

from pathlib import Path

import yaml

from kanpad.cli.generate import generate_config_yaml, run_generate
from kanpad.cli.seed import run_seed
from kanpad.models import KanpadConfig
from kanpad.services import ConfigService


class TestGenerateConfigYaml:
    """Tests for generate_config_yaml function."""

    def test_generates_valid_yaml(self):
        """Generated YAML parses back into the default config."""
        parsed = yaml.safe_load(generate_config_yaml())

        assert KanpadConfig(**parsed) == KanpadConfig.default()

    def test_includes_header_comments(self):
        content = generate_config_yaml()

        assert content.startswith("# kanpad Board Configuration")
        assert "archive_policy" in content


class TestRunGenerate:
    """Tests for run_generate."""

    def test_creates_config(self, tmp_path: Path, capsys):
        data_root = tmp_path / ".kanpad"

        assert run_generate(data_root) == 0

        config_path = data_root / "kanpad.yml"
        assert config_path.exists()
        assert "Generated config" in capsys.readouterr().out
        service = ConfigService(data_root)
        service.get_config()
        assert not service.has_config_error

    def test_existing_config_untouched(self, tmp_path: Path):
        data_root = tmp_path / ".kanpad"
        data_root.mkdir()
        (data_root / "kanpad.yml").write_text("version: 1\n")

        assert run_generate(data_root) == 1
        assert (data_root / "kanpad.yml").read_text() == "version: 1\n"


class TestRunSeed:
    """Tests for run_seed."""

    def test_seeds_data_directory(self, tmp_path: Path, capsys):
        data_root = tmp_path / ".kanpad"

        assert run_seed(data_root) == 0

        assert (data_root / "labels.yaml").exists()
        assert (data_root / "note.md").exists()
        assert "Created labels" in capsys.readouterr().out

    def test_second_run_reports_existing(self, tmp_path: Path, capsys):
        data_root = tmp_path / ".kanpad"
        run_seed(data_root)
        capsys.readouterr()

        assert run_seed(data_root) == 0
        assert "Labels already present" in capsys.readouterr().out
