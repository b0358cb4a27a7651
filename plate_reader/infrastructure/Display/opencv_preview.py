import logging
from typing import Optional

import cv2
import numpy as np

from plate_reader.domain.Models.frame import Frame
from plate_reader.utils.image_rotation import rotate_upright

logger = logging.getLogger(__name__)

_BANNER_HEIGHT = 48


class OpenCVPreview:
    """
    Ventana de preview (DEBUG_SHOW): muestra el frame enderezado con la placa
    actual en una franja superior.
    """

    def __init__(self, window_name: str = "plate-reader"):
        self.window_name = window_name
        self._opened = False

    def compose(self, frame: Frame, plate: Optional[str]) -> Optional[np.ndarray]:
        if not frame.has_image():
            return None

        image = rotate_upright(frame.image, frame.rotation).copy()
        if not plate:
            return image

        width = image.shape[1]
        cv2.rectangle(image, (0, 0), (width, _BANNER_HEIGHT), (0, 0, 0), thickness=-1)
        cv2.putText(
            image, plate, (10, _BANNER_HEIGHT - 12),
            cv2.FONT_HERSHEY_SIMPLEX, 1.2, (0, 255, 0), 2, cv2.LINE_AA,
        )
        return image

    def show(self, frame: Frame, plate: Optional[str]) -> None:
        image = self.compose(frame, plate)
        if image is None:
            return
        cv2.imshow(self.window_name, image)
        cv2.waitKey(1)
        self._opened = True

    def close(self) -> None:
        if not self._opened:
            return
        try:
            cv2.destroyWindow(self.window_name)
        except cv2.error:
            logger.debug("La ventana %s ya estaba cerrada", self.window_name)
        self._opened = False
