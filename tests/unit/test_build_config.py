"""Unit tests for build configuration loading."""

from pathlib import Path

import pytest

from optbook.contexts.rendering import build_config
from optbook.contexts.rendering.build_config import RenderOptions, load_build_config

pytestmark = pytest.mark.unit

SHIPPED_CONFIG = Path(__file__).resolve().parents[2] / "configs" / "build.yaml"


@pytest.fixture(autouse=True)
def no_pandoc_override(monkeypatch):
    monkeypatch.setattr(build_config, "PANDOC_BIN", None)


def test_shipped_config_matches_defaults():
    """Test configs/build.yaml reproduces the original build settings."""
    options = load_build_config(SHIPPED_CONFIG)

    assert options == RenderOptions()
    assert options.source == "optimize-python.md"
    assert options.output == "optimize-python.pdf"
    assert options.template == "eisvogel.tex"
    assert options.listings is True


def test_missing_default_config_uses_defaults(tmp_path, monkeypatch):
    """Test a missing default config file falls back to RenderOptions defaults."""
    monkeypatch.setattr(build_config, "BUILD_CONFIG_PATH", tmp_path / "absent.yaml")

    assert load_build_config() == RenderOptions()


def test_override_values(tmp_path):
    """Test YAML values override defaults."""
    config = tmp_path / "draft.yaml"
    config.write_text("template: null\nlistings: false\nextra_args: [\"--toc\"]\n")

    options = load_build_config(config)

    assert options.template is None
    assert options.listings is False
    assert options.extra_args == ["--toc"]
    assert options.source == "optimize-python.md"


def test_unknown_key_rejected(tmp_path):
    """Test unknown keys raise ValueError."""
    config = tmp_path / "bad.yaml"
    config.write_text("tempalte: eisvogel\n")

    with pytest.raises(ValueError, match="Invalid build config"):
        load_build_config(config)


def test_wrong_type_rejected(tmp_path):
    """Test wrongly typed values raise ValueError."""
    config = tmp_path / "bad.yaml"
    config.write_text("listings: maybe\n")

    with pytest.raises(ValueError):
        load_build_config(config)


def test_explicit_missing_config(tmp_path):
    """Test an explicitly requested config must exist."""
    with pytest.raises(ValueError, match="Build config not found"):
        load_build_config(tmp_path / "absent.yaml")


def test_pandoc_bin_override(monkeypatch):
    """Test PANDOC_BIN replaces the configured converter."""
    monkeypatch.setattr(build_config, "PANDOC_BIN", "/opt/pandoc/bin/pandoc")

    options = load_build_config(SHIPPED_CONFIG)

    assert options.converter == "/opt/pandoc/bin/pandoc"


def test_relative_paths_anchor_to_project_root(monkeypatch, tmp_path):
    """Test relative source/output resolve against PROJECT_ROOT."""
    monkeypatch.setattr(build_config, "PROJECT_ROOT", tmp_path)
    options = RenderOptions()

    assert options.source_path == tmp_path / "optimize-python.md"
    assert options.output_path == tmp_path / "optimize-python.pdf"

    absolute = RenderOptions(output=str(tmp_path / "out" / "guide.pdf"))
    assert absolute.output_path == tmp_path / "out" / "guide.pdf"
