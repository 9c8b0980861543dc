"""
Example: Using BannerBaker as a Python library

This script builds a request in code, generates placeholder icons with
OpenCV and bakes a banner, without touching the CLI.
"""

from pathlib import Path

import cv2
import numpy as np

from bannerbaker.api import BannerBaker
from bannerbaker.core.configs import CompositionRequest


def make_icon(path: Path, color, size: int = 200):
    icon = np.zeros((size, size, 4), dtype=np.uint8)
    cv2.circle(icon, (size // 2, size // 2), size // 2 - 4, (*color, 255), -1)
    cv2.imwrite(str(path), icon)


def main():
    print("=== BannerBaker API Example ===\n")

    work_dir = Path("./examples/output")
    work_dir.mkdir(parents=True, exist_ok=True)

    # Transparent base images, one per band
    for name in ("like", "dislike"):
        base = np.zeros((198, 500, 4), dtype=np.uint8)
        cv2.putText(
            base, name.upper(), (20, 120), cv2.FONT_HERSHEY_SIMPLEX, 3,
            (255, 255, 255, 255), 6,
        )
        cv2.imwrite(str(work_dir / f"{name}.png"), base)

    like_icons = []
    for i in range(6):
        path = work_dir / f"like_{i}.png"
        make_icon(path, (40 * i, 200, 255 - 40 * i))
        like_icons.append({"name": f"like {i}", "file": str(path)})

    dislike_icons = []
    for i in range(3):
        path = work_dir / f"dislike_{i}.png"
        make_icon(path, (0, 0, 200 + 20 * i))
        dislike_icons.append({"file": str(path)})

    request = CompositionRequest.model_validate(
        {
            "background": {
                "file": str(work_dir / "bg.png"), "width": 1584, "height": 396,
            },
            "bgRgba": {"top": [0, 153, 153, 255], "bottom": [192, 192, 192, 255]},
            "like": {"file": str(work_dir / "like.png"), "width": 500, "height": 198},
            "dislike": {
                "file": str(work_dir / "dislike.png"), "width": 500, "height": 198,
            },
            "output": {"file": str(work_dir / "banner.jpg"), "format": "jpg"},
            "likeIcon": like_icons,
            "dislikeIcon": dislike_icons,
        }
    )

    result = BannerBaker().run(request)

    print(f"Saved {result.size[0]}x{result.size[1]} image to {result.output_path}")
    for placement in result.top_placements + result.bottom_placements:
        print(f"  {placement.image.label or placement.image.source} at {placement.position}")


if __name__ == "__main__":
    main()
