import json

import pytest

from helpers import GRAY, TEAL, solid, write_image


@pytest.fixture
def make_config(tmp_path):
    """
    Build a configuration file in tmp_path with real image files.

    Returns a function accepting the icon counts and overrides, which returns
    the path of the written JSON file.
    """

    def factory(
        top_icons=0,
        bottom_icons=0,
        icon_size=200,
        output_format="png",
        width=800,
        height=400,
        **overrides,
    ):
        images = tmp_path / "images"
        images.mkdir(exist_ok=True)
        # transparent base images, with one opaque marker pixel each
        like = solid(100, 50, (0, 0, 0, 0))
        like[0, 0] = (255, 0, 0, 255)
        dislike = solid(100, 50, (0, 0, 0, 0))
        dislike[0, 0] = (0, 0, 255, 255)
        write_image(images / "like.png", like)
        write_image(images / "dislike.png", dislike)

        def icons(prefix, count, color):
            entries = []
            for i in range(count):
                path = images / f"{prefix}_{i}.png"
                write_image(path, solid(icon_size, icon_size, color))
                entries.append({"name": f"{prefix} {i}", "file": str(path)})
            return entries

        data = {
            "background": {
                "name": "background",
                "file": str(images / "bg.png"),
                "width": width,
                "height": height,
            },
            "bgRgba": {"top": list(TEAL), "bottom": list(GRAY)},
            "like": {"name": "like", "file": str(images / "like.png"), "width": 100, "height": 50},
            "dislike": {"file": str(images / "dislike.png"), "width": 100, "height": 50},
            "output": {
                "file": str(tmp_path / "out" / f"saved.{output_format}"),
                "format": output_format,
            },
            "likeIcon": icons("like", top_icons, (255, 255, 0, 255)),
            "dislikeIcon": icons("dislike", bottom_icons, (255, 0, 255, 255)),
        }
        data.update(overrides)

        config_path = tmp_path / "preference.json"
        config_path.write_text(json.dumps(data), encoding="utf-8")
        return config_path

    return factory
