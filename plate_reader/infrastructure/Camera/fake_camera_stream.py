import cv2
import time
from typing import Optional

from plate_reader.domain.Models.frame import Frame
from plate_reader.domain.Interfaces.camera_stream import ICameraStream


class FakeCameraStream(ICameraStream):
    """
    Simula una cámara usando un archivo de video que se repite en bucle.
    """

    def __init__(self, video_path: str, camera_id: str = "fake", rotation_degrees: int = 0):
        self.video_path = video_path
        self.camera_id = camera_id
        self.rotation_degrees = rotation_degrees
        self.url = f"fake://{video_path}"

        self.cap = None

    def connect(self):
        self.cap = cv2.VideoCapture(self.video_path)

        if not self.cap.isOpened():
            raise ConnectionError(f"No se pudo abrir video {self.video_path}")

    def read_frame(self, timeout: float = 1.0) -> Optional[Frame]:
        """
        Devuelve un Frame o None si pasa el timeout.
        Al llegar al final del video vuelve a empezar.
        """
        if self.cap is None:
            return None

        start = time.time()

        while time.time() - start < timeout:
            ok, image = self.cap.read()

            if ok:
                return Frame(
                    data=image,
                    timestamp=time.time(),
                    source=self.camera_id,
                    rotation_degrees=self.rotation_degrees,
                )

            self._restart_video()

        return None

    def _restart_video(self):
        if self.cap:
            self.cap.release()
        self.cap = cv2.VideoCapture(self.video_path)

    def disconnect(self):
        if self.cap:
            self.cap.release()
            self.cap = None
