"""
Tests for FSSP configuration.
"""

import argparse

import pytest
from fssp.config import Config


class TestConfig:
    """Tests for Config dataclass."""

    def test_defaults(self):
        """Config initializes with the driver defaults."""
        config = Config()

        assert config.cells == 10
        assert config.rule_file == "waksman-slim.rul.txt"
        assert config.dump is False
        assert config.max_steps is None
        assert config.show_progress is True

    def test_custom_values(self):
        """Config accepts custom values."""
        config = Config(cells=128, dump=True, max_steps=500)

        assert config.cells == 128
        assert config.dump is True
        assert config.step_budget == 500

    def test_default_budget(self):
        """Without max_steps the budget scales with the line."""
        assert Config(cells=100).step_budget == 416
        assert Config(cells=0).step_budget == 16

    def test_zero_cells(self):
        """An empty interior is a legal line."""
        assert Config(cells=0).cells == 0

    def test_invalid_cells(self):
        """Config rejects negative cell counts."""
        with pytest.raises(ValueError, match="cells"):
            Config(cells=-1)

    def test_invalid_max_steps(self):
        """Config rejects a budget below one step."""
        with pytest.raises(ValueError, match="max_steps"):
            Config(max_steps=0)

    def test_invalid_rule_file(self):
        """Config rejects an empty rule path."""
        with pytest.raises(ValueError, match="rule_file"):
            Config(rule_file="")

    def test_serialization_roundtrip(self):
        """Config serializes and deserializes correctly."""
        config = Config(cells=64, rule_file="rules.txt", save_diagram="out.png")

        restored = Config.from_dict(config.to_dict())

        assert restored == config

    def test_from_args(self):
        """Unset argparse values fall back to defaults."""
        args = argparse.Namespace(cells=5, rule_file="r.txt", max_steps=None, verbose=True)
        config = Config.from_args(args)

        assert config.cells == 5
        assert config.rule_file == "r.txt"
        assert config.max_steps is None
