"""Unit tests for configuration loading."""

from pathlib import Path

import pytest

from roadnet.errors import InvalidParameterError
from roadnet.utils.config import load_config
from roadnet.world import MergePolicy, RoadConfig

CONFIG_DIR = Path(__file__).parents[2] / "configs"


class TestLoadConfig:
    """Test suite for load_config."""

    def test_missing_file(self, tmp_path):
        assert load_config(tmp_path / "missing.yaml") == {}

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == {}

    def test_load_mapping(self, tmp_path):
        path = tmp_path / "world.yaml"
        path.write_text("road:\n  width: 40\n  roundness: 3\n")
        assert load_config(path) == {"road": {"width": 40, "roundness": 3}}

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("road: [unclosed\n")
        with pytest.raises(InvalidParameterError):
            load_config(path)

    def test_top_level_must_be_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(InvalidParameterError):
            load_config(path)

    def test_shipped_defaults(self):
        config = RoadConfig.from_file(CONFIG_DIR / "world.yaml")
        assert config.road_width == 100.0
        assert config.road_roundness == 10
        assert config.merge_policy is MergePolicy.MULTI_BREAK
        assert config.log_level == "INFO"
