import cv2
import numpy as np

from plate_reader.domain.Models.rotation import Rotation

_CV2_ROTATE = {
    Rotation.ROTATION_90: cv2.ROTATE_90_CLOCKWISE,
    Rotation.ROTATION_180: cv2.ROTATE_180,
    Rotation.ROTATION_270: cv2.ROTATE_90_COUNTERCLOCKWISE,
}


def rotate_upright(image: np.ndarray, rotation: Rotation) -> np.ndarray:
    """Gira la imagen en sentido horario según la rotación reportada por la cámara."""
    code = _CV2_ROTATE.get(rotation)
    if code is None:
        return image
    return cv2.rotate(image, code)
