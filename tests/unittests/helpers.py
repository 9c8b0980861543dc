import cv2
import numpy as np

TEAL = (0, 153, 153, 255)
GRAY = (192, 192, 192, 255)


def solid(width, height, color):
    """RGBA array filled with one color."""
    image = np.empty((height, width, len(color)), dtype=np.uint8)
    image[:] = color
    return image


def write_image(path, rgba):
    """Write an RGB(A) array with OpenCV, which expects BGR(A) order."""
    if rgba.shape[2] == 4:
        bgr = cv2.cvtColor(rgba, cv2.COLOR_RGBA2BGRA)
    else:
        bgr = cv2.cvtColor(rgba, cv2.COLOR_RGB2BGR)
    assert cv2.imwrite(str(path), bgr)
    return path


def read_rgba(path):
    image = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    if image.shape[2] == 3:
        return cv2.cvtColor(image, cv2.COLOR_BGR2RGBA)
    return cv2.cvtColor(image, cv2.COLOR_BGRA2RGBA)
