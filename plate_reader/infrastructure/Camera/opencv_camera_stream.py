import cv2
import time
import logging
import threading
from typing import Optional, Tuple, Union

from plate_reader.domain.Models.frame import Frame
from plate_reader.domain.Interfaces.camera_stream import ICameraStream

logger = logging.getLogger(__name__)


def _capture_source(url: Union[str, int]) -> Union[str, int]:
    """'0', '1'... son índices de dispositivo local; el resto se pasa tal cual (RTSP/HTTP/archivo)."""
    if isinstance(url, str) and url.isdigit():
        return int(url)
    return url


class OpenCVCameraStream(ICameraStream):
    """
    Implementación de ICameraStream usando OpenCV con lectura en hilo separado.
    - Un hilo interno (_update_frames) lee continuamente y guarda SOLO el último frame.
    - read_frame(timeout=...) consume ese frame (con la rotación configurada); nunca repite uno ya entregado.
    """

    def __init__(
        self,
        url: Union[str, int],
        rotation_degrees: int = 0,
        reconnect_attempts: int = 3,
        resolution: Optional[Tuple[int, int]] = (640, 480),
        camera_id: Optional[str] = None,
    ):
        """
        :param url: índice de dispositivo o URL del stream (RTSP/HTTP/archivo).
        :param rotation_degrees: rotación de la cámara respecto a la imagen derecha.
        :param reconnect_attempts: intentos de reconexión antes de rendirse.
        :param resolution: (ancho, alto) pedido al dispositivo.
        """
        self.url = url
        self.camera_id = camera_id or str(url)
        self.rotation_degrees = rotation_degrees
        self.reconnect_attempts = reconnect_attempts
        self.resolution = resolution

        self.cap = None

        self._frame_lock = threading.Lock()
        self._latest_frame: Optional[Frame] = None
        self._running = False
        self._thread: Optional[threading.Thread] = None

    # ==========================================================
    # CONNECT
    # ==========================================================
    def connect(self) -> None:
        self.cap = self._open()

        if not self.cap or not self.cap.isOpened():
            raise ConnectionError(f"No se pudo abrir la cámara (¿sin permisos o en uso?): {self.url}")

        logger.info(f"🎥 Conectado a {self.camera_id} rot={self.rotation_degrees}")

        self._running = True
        self._thread = threading.Thread(target=self._update_frames, name=f"reader-{self.camera_id}", daemon=True)
        self._thread.start()

    def _open(self):
        source = _capture_source(self.url)
        if isinstance(source, int):
            cap = cv2.VideoCapture(source)
        else:
            cap = cv2.VideoCapture(source, cv2.CAP_FFMPEG)

        if cap is None:
            return None

        # RTSP: buffer mínimo para no quedarse con frames viejos
        if isinstance(source, str) and source.startswith("rtsp://"):
            try:
                cap.set(cv2.CAP_PROP_BUFFERSIZE, 1)
            except cv2.error:
                pass

        if self.resolution:
            width, height = self.resolution
            cap.set(cv2.CAP_PROP_FRAME_WIDTH, width)
            cap.set(cv2.CAP_PROP_FRAME_HEIGHT, height)

        return cap

    # ==========================================================
    # THREAD QUE LEE FRAMES CONTINUAMENTE
    # ==========================================================
    def _update_frames(self):
        while self._running:
            if self.cap is None or not self.cap.isOpened():
                if not self._try_reconnect():
                    time.sleep(1)
                continue

            ret, image = self.cap.read()
            if not ret:
                # el último frame ya no representa a la cámara
                with self._frame_lock:
                    self._latest_frame = None
                logger.warning(f"[{self.camera_id}] Error al leer frame, intentando reconectar...")
                if not self._try_reconnect():
                    time.sleep(1)
                continue

            with self._frame_lock:
                self._latest_frame = Frame(
                    data=image,
                    timestamp=time.time(),
                    source=self.camera_id,
                    rotation_degrees=self.rotation_degrees,
                )

    # ==========================================================
    # READ FRAME
    # ==========================================================
    def read_frame(self, timeout: float = 1.0) -> Optional[Frame]:
        """
        Entrega cada frame capturado una sola vez. Si no llega uno nuevo antes
        del timeout (cámara lenta o caída) devuelve None.
        """
        deadline = time.time() + timeout

        while time.time() < deadline and self._running:
            with self._frame_lock:
                frame = self._latest_frame
                self._latest_frame = None

            if frame is not None:
                return frame

            time.sleep(0.01)

        return None

    # ==========================================================
    # RECONNECT
    # ==========================================================
    def _try_reconnect(self) -> bool:
        for attempt in range(1, self.reconnect_attempts + 1):
            if not self._running:
                return False
            logger.warning(f"[{self.camera_id}] Reintentando conexión {attempt}/{self.reconnect_attempts}...")

            if self.cap is not None:
                self.cap.release()
            cap = self._open()

            if cap is not None and cap.isOpened():
                self.cap = cap
                logger.info(f"[{self.camera_id}] Reconexión exitosa.")
                return True

            time.sleep(1)

        logger.error(f"[{self.camera_id}] No se pudo reconectar al stream.")
        return False

    # ==========================================================
    # DISCONNECT
    # ==========================================================
    def disconnect(self) -> None:
        self._running = False

        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=2.0)

        if self.cap:
            self.cap.release()
            self.cap = None

        logger.info(f"🔌 Stream cerrado ({self.camera_id}).")
