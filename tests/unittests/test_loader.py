import pytest

from bannerbaker.api.background import render_background, save_background
from bannerbaker.api.loader import AssetLoader
from bannerbaker.core.configs import load_request
from bannerbaker.core.defs import DecodeError, ImageIOError

from helpers import GRAY, TEAL


@pytest.fixture
def request_with_background(make_config):
    def factory(**kwargs):
        request = load_request(make_config(**kwargs))
        spec = request.background
        save_background(render_background(spec.width, spec.height, TEAL, GRAY), spec.file)
        return request

    return factory


def test_load_common_images_in_order(request_with_background):
    request = request_with_background()
    assets = AssetLoader().load(request)

    background, primary, secondary = assets.common
    assert background.size == (800, 400)
    assert primary.label == "like"
    assert secondary.label is None
    assert primary.pixel(0, 0) == (255, 0, 0, 255)
    assert secondary.pixel(0, 0) == (0, 0, 255, 255)


def test_icon_lists_keep_order(request_with_background):
    request = request_with_background(top_icons=3, bottom_icons=2)
    assets = AssetLoader().load(request)

    assert [icon.label for icon in assets.top_icons] == ["like 0", "like 1", "like 2"]
    assert [icon.label for icon in assets.bottom_icons] == ["dislike 0", "dislike 1"]
    assert [str(icon.source) for icon in assets.top_icons] == [
        icon.file for icon in request.top_icons
    ]


def test_missing_icon_aborts(request_with_background, tmp_path):
    request = request_with_background(top_icons=2)
    request.top_icons[1].file = str(tmp_path / "nope.png")
    with pytest.raises(ImageIOError, match="nope.png"):
        AssetLoader().load(request)


def test_missing_background_aborts(make_config):
    # background was never rendered
    request = load_request(make_config())
    with pytest.raises(ImageIOError):
        AssetLoader().load(request)


def test_corrupt_overlay_aborts(request_with_background):
    request = request_with_background()
    with open(request.secondary_overlay.file, "wb") as f:
        f.write(b"garbage")
    with pytest.raises(DecodeError):
        AssetLoader().load(request)
