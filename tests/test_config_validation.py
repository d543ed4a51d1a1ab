"""Tests for config validation."""

import pytest

from makeyourtext.config import load_config


class TestConfigValidation:
    def test_valid_defaults(self):
        """Default config passes validation without raising."""
        config = load_config(None)
        assert config.pipeline.short_char_budget == 50
        assert config.batch.max_templates == 30

    def test_short_budget_too_small(self, tmp_path):
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("pipeline:\n  short_char_budget: 5\n")
        with pytest.raises(ValueError, match="short_char_budget"):
            load_config(yaml)

    def test_short_budget_too_large(self, tmp_path):
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("pipeline:\n  short_char_budget: 500\n")
        with pytest.raises(ValueError, match="short_char_budget"):
            load_config(yaml)

    def test_invalid_max_templates(self, tmp_path):
        """max_templates of 0 (below minimum of 1) raises ValueError."""
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("batch:\n  max_templates: 0\n")
        with pytest.raises(ValueError, match="max_templates"):
            load_config(yaml)

    def test_unknown_key_rejected(self, tmp_path):
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("pipeline:\n  qa_threshold: 80\n")
        with pytest.raises(TypeError):
            load_config(yaml)
