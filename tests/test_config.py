"""Tests for RunConfig."""

import argparse

import pytest

from broth.config import RunConfig
from broth.core.exceptions import InvalidDimension
from broth.core.rules import ElementaryRule, LifeLikeRule


class TestRunConfig:
    """Test cases for run configuration."""

    def test_defaults(self):
        """Test default values validate."""
        config = RunConfig()
        assert config.width == 64
        assert config.height == 1
        assert config.rule == "30"
        assert config.seed_cells == []

    def test_build_rule(self):
        """Test rule construction from text."""
        assert isinstance(RunConfig(rule="110").build_rule(), ElementaryRule)
        assert isinstance(RunConfig(rule="B3/S23").build_rule(), LifeLikeRule)

    @pytest.mark.parametrize(
        "field,value", [("width", 0), ("height", -2), ("width", True), ("height", 2.5), ("width", "8")]
    )
    def test_invalid_dimensions(self, field, value):
        """Test non-positive or non-integer dimensions raise InvalidDimension."""
        with pytest.raises(InvalidDimension):
            RunConfig(**{field: value})

    @pytest.mark.parametrize(
        "kwargs",
        [{"generations": -1}, {"population_rate": 1.5}, {"population_rate": -0.1}, {"rule": "nonsense"}],
    )
    def test_invalid_values(self, kwargs):
        """Test other invalid parameters raise ValueError."""
        with pytest.raises(ValueError):
            RunConfig(**kwargs)

    def test_dict_round_trip(self):
        """Test serialization to and from a dictionary."""
        config = RunConfig(width=7, rule="rule30", seed_cells=[(3, 0)])
        data = config.to_dict()

        assert data["seed_cells"] == [(3, 0)]
        data["seed_cells"] = [list(cell) for cell in data["seed_cells"]]
        data["unknown"] = "ignored"

        restored = RunConfig.from_dict(data)
        assert restored == config

    def test_from_args(self):
        """Test creation from an argparse namespace."""
        args = argparse.Namespace(
            width=7,
            height=1,
            rule="30",
            generations=3,
            population_rate=0.0,
            seed=None,
            pattern=None,
            pattern_x=0,
            pattern_y=0,
            seed_cells=[(3, 0)],
            verbose=True,
        )

        config = RunConfig.from_args(args)

        assert config.width == 7
        assert config.generations == 3
        assert config.seed is None
        assert config.seed_cells == [(3, 0)]
