import logging

import pytest

from config import LayoutConfig


def test_defaults():
    config = LayoutConfig()

    assert config.anchor_id is None
    assert config.row_height == 154
    assert config.column_width == 212


def test_from_mapping_accepts_camel_and_snake_case(caplog):
    with caplog.at_level(logging.WARNING, logger="config"):
        config = LayoutConfig.from_mapping(
            {"anchorId": "jane", "node_width": 200, "resetTranslate": [0, 0], "colour": "red"}
        )

    assert config.anchor_id == "jane"
    assert config.node_width == 200
    assert config.reset_translate == (0, 0)
    assert "colour" in caplog.text


@pytest.mark.parametrize(
    "options",
    [{"node_width": 0}, {"node_sep_y": -1}, {"forest_gap": -5}, {"min_zoom": 4}],
)
def test_invalid_options(options):
    with pytest.raises(ValueError):
        LayoutConfig(**options)
