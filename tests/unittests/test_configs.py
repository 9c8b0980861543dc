import json

import pytest
from pydantic import ValidationError

from bannerbaker.core.configs import (
    BakerConfig,
    CompositionRequest,
    RowConfig,
    load_request,
)
from bannerbaker.core.defs import ConfigError

MINIMAL = {
    "background": {"file": "bg.png", "width": 1584, "height": 396},
    "bgRgba": {"top": [0, 153, 153, 255], "bottom": [192, 192, 192, 255]},
    "like": {"file": "like.png"},
    "dislike": {"file": "dislike.png"},
    "output": {"file": "saved.png", "format": "png"},
}


def test_from_json_maps_aliases():
    data = dict(MINIMAL)
    data["likeIcon"] = [{"name": "go", "file": "go.png"}, {"file": "py.png"}]
    request = CompositionRequest.from_json(json.dumps(data))

    assert request.background.width == 1584
    assert request.background_colors.top == (0, 153, 153, 255)
    assert request.background_colors.bottom == (192, 192, 192, 255)
    assert request.primary_overlay.file == "like.png"
    assert request.secondary_overlay.file == "dislike.png"
    assert [icon.file for icon in request.top_icons] == ["go.png", "py.png"]
    assert request.top_icons[0].name == "go"
    assert request.top_icons[1].name is None
    assert request.bottom_icons == []


def test_optional_fields_default():
    request = CompositionRequest.from_json(json.dumps(MINIMAL))
    assert request.primary_overlay.name is None
    assert request.primary_overlay.width == 0
    assert request.primary_overlay.height == 0


def test_unknown_format_is_structurally_valid():
    data = dict(MINIMAL, output={"file": "saved.gif", "format": "gif"})
    request = CompositionRequest.from_json(json.dumps(data))
    assert request.output.format == "gif"


@pytest.mark.parametrize("text", ["", "   \n", "{not json", "[1, 2, 3]"])
def test_malformed_documents(text):
    with pytest.raises(ConfigError):
        CompositionRequest.from_json(text)


@pytest.mark.parametrize(
    "override",
    [
        {"background": {"width": 10, "height": 10}},
        {"bgRgba": {"top": [0, 153, 153], "bottom": [192, 192, 192, 255]}},
        {"bgRgba": {"top": [0, 153, 153, 256], "bottom": [192, 192, 192, 255]}},
        {"output": {"file": "", "format": "png"}},
        {"likeIcon": {"file": "not-a-list.png"}},
    ],
)
def test_wrong_shape(override):
    data = dict(MINIMAL, **override)
    with pytest.raises(ConfigError):
        CompositionRequest.from_json(json.dumps(data))


def test_load_request_from_file(tmp_path):
    path = tmp_path / "preference.json"
    path.write_text(json.dumps(MINIMAL), encoding="utf-8")
    request = load_request(path)
    assert request.output.format == "png"


def test_load_request_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="Cannot read configuration"):
        load_request(tmp_path / "missing.json")


def test_load_request_empty_path():
    with pytest.raises(ConfigError):
        load_request("")


def test_default_layout_constants():
    config = BakerConfig()
    assert config.split_row == 198
    assert config.native_limit == 4
    assert config.native_step == 230
    assert (config.top_row.start_x, config.top_row.y, config.top_row.adjustment) == (
        520,
        0,
        0,
    )
    assert (
        config.bottom_row.start_x,
        config.bottom_row.y,
        config.bottom_row.adjustment,
    ) == (550, 198, -30)
    assert config.jpeg_quality == 100


@pytest.mark.parametrize("size", [{"width": -5}, {"height": -1}])
def test_negative_background_size_is_rejected(size):
    background = dict(MINIMAL["background"], **size)
    data = dict(MINIMAL, background=background)
    with pytest.raises(ConfigError):
        CompositionRequest.from_json(json.dumps(data))


def test_bottom_row_follows_split_row():
    config = BakerConfig(split_row=100)
    assert config.bottom_row.y == 100
    assert config.bottom_row.start_x == 550
    assert config.top_row.y == 0


def test_bottom_row_must_sit_on_split_row():
    with pytest.raises(ValidationError, match="split_row"):
        BakerConfig(split_row=100, bottom_row=RowConfig(start_x=550, y=198))
    config = BakerConfig(split_row=100, bottom_row=RowConfig(start_x=10, y=100))
    assert config.bottom_row.y == 100
