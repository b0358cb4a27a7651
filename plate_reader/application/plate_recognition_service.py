import logging
import time
import threading
import queue
from concurrent.futures import Future
from functools import partial
from typing import Optional

from plate_reader.monitoring.metrics import (
    camera_fps, frames_dropped_total, frames_skipped_total,
    ocr_failures_total, ocr_latency, pipeline_latency, plates_detected_total
)

from plate_reader.application.displayed_plate import DisplayedPlate
from plate_reader.domain.Interfaces.camera_stream import ICameraStream
from plate_reader.domain.Interfaces.ocr_reader import IOCRReader
from plate_reader.domain.Models.frame import Frame
from plate_reader.domain.Models.plate import PlateMatch
from plate_reader.domain.Models.recognized_text import RecognizedText
from plate_reader.domain.Services.plate_extractor import PlateExtractor

logger = logging.getLogger(__name__)


class PlateRecognitionService:
    """
    Pipeline por cámara:
    - hilo de captura: último frame de la cámara -> cola de 1 slot (last-wins)
    - hilo de análisis: cuando hay cupo de OCR, toma el frame más nuevo y lanza el OCR
    - callback del OCR: aplanar -> normalizar -> match -> DisplayedPlate

    No hay orden entre frames: el display refleja el último OCR que terminó,
    no el último frame capturado. Los OCR en curso nunca se cancelan.
    """

    def __init__(
        self,
        camera_stream: ICameraStream,
        ocr_reader: IOCRReader,
        extractor: PlateExtractor,
        displayed_plate: DisplayedPlate,
        preview=None,
        max_fps: float = 10.0,
        max_in_flight: int = 1,
    ):
        self.camera_stream = camera_stream
        self.ocr_reader = ocr_reader
        self.extractor = extractor
        self.displayed_plate = displayed_plate
        self.preview = preview

        self.max_fps = max_fps
        self.frame_interval = 1.0 / max_fps if max_fps > 0 else 0.0

        self.camera_id = getattr(camera_stream, "camera_id", None) or "default"

        self.stop_event = threading.Event()

        # cola de captura de un solo slot: el frame nuevo reemplaza al pendiente
        self.capture_queue: "queue.Queue[Optional[Frame]]" = queue.Queue(maxsize=1)
        self._in_flight = threading.BoundedSemaphore(max(1, max_in_flight))

        self.capture_thread: threading.Thread | None = None
        self.analysis_thread: threading.Thread | None = None

    # ---------------------------------------------------------
    # START / STOP
    # ---------------------------------------------------------
    def start(self):
        logger.info(f"Iniciando cámara {self.camera_id}")

        self.stop_event.clear()
        self.camera_stream.connect()

        self.capture_thread = threading.Thread(
            target=self._capture_loop,
            name=f"capture-{self.camera_id}",
            daemon=True,
        )
        self.capture_thread.start()

        self.analysis_thread = threading.Thread(
            target=self._analysis_loop,
            name=f"analysis-{self.camera_id}",
            daemon=True,
        )
        self.analysis_thread.start()

    def stop(self):
        logger.info(f"Deteniendo cámara {self.camera_id}")

        self.stop_event.set()
        self._offer(None)

        if self.capture_thread:
            self.capture_thread.join(timeout=2)
        if self.analysis_thread:
            self.analysis_thread.join(timeout=2)

        try:
            self.camera_stream.disconnect()
        except Exception:
            logger.exception("Error desconectando cámara")

        try:
            self.ocr_reader.close()
        except Exception:
            logger.exception("Error cerrando lector OCR")

        if self.preview is not None:
            self.preview.close()

    # ---------------------------------------------------------
    # CAPTURE LOOP
    # ---------------------------------------------------------
    def _capture_loop(self):
        last_frame_time = 0.0
        fps_counter = 0
        fps_timer = time.time()

        while not self.stop_event.is_set():
            now = time.perf_counter()

            if now - last_frame_time < self.frame_interval:
                time.sleep(0.001)
                continue

            frame = self.camera_stream.read_frame(timeout=1.0)
            last_frame_time = now

            if frame is None:
                time.sleep(0.1)
                continue

            fps_counter += 1
            if time.time() - fps_timer >= 1:
                camera_fps.labels(camera_id=self.camera_id).set(fps_counter)
                logger.debug(f"[{self.camera_id}] FPS actual: {fps_counter}")
                fps_counter = 0
                fps_timer = time.time()

            if self.preview is not None:
                try:
                    self.preview.show(frame, self.displayed_plate.current)
                except Exception:
                    logger.exception(f"[{self.camera_id}] Error en preview")

            self._offer(frame)

    def _offer(self, frame: Optional[Frame]) -> None:
        """Encola con política "last wins": si hay un frame pendiente, se descarta."""
        try:
            self.capture_queue.put_nowait(frame)
            return
        except queue.Full:
            pass

        try:
            stale = self.capture_queue.get_nowait()
            if stale is not None:
                frames_dropped_total.labels(camera_id=self.camera_id).inc()
        except queue.Empty:
            pass

        try:
            self.capture_queue.put_nowait(frame)
        except queue.Full:
            # el analizador no lo tomó y otro productor ganó el slot; se descarta este
            frames_dropped_total.labels(camera_id=self.camera_id).inc()

    # ---------------------------------------------------------
    # ANALYSIS LOOP
    # ---------------------------------------------------------
    def _analysis_loop(self):
        while not self.stop_event.is_set():
            # esperar cupo de OCR antes de elegir frame: así se analiza el más nuevo
            if not self._in_flight.acquire(timeout=0.5):
                continue

            try:
                frame = self.capture_queue.get(timeout=1.0)
            except queue.Empty:
                self._in_flight.release()
                continue

            if frame is None:
                self._in_flight.release()
                break

            future = self.submit_frame(frame)
            if future is None:
                self._in_flight.release()
            else:
                future.add_done_callback(lambda _f: self._in_flight.release())

        logger.info(f"[{self.camera_id}] Loop de análisis terminado")

    # ---------------------------------------------------------
    # OCR (por frame)
    # ---------------------------------------------------------
    def submit_frame(self, frame: Optional[Frame]) -> Optional[Future]:
        """
        Lanza el OCR de un frame. Devuelve el Future, o None si el frame se saltó.
        """
        if frame is None or not frame.has_image():
            logger.debug(f"[{self.camera_id}] Frame sin imagen, se salta.")
            frames_skipped_total.labels(camera_id=self.camera_id, reason="no_image").inc()
            return None

        started = time.perf_counter()
        try:
            future = self.ocr_reader.recognize(frame)
        except Exception:
            logger.exception(f"[{self.camera_id}] No se pudo lanzar el OCR; se salta el frame")
            ocr_failures_total.labels(camera_id=self.camera_id).inc()
            return None

        future.add_done_callback(partial(self._on_ocr_done, frame, started))
        return future

    def _on_ocr_done(self, frame: Frame, started: float, future: Future) -> None:
        ocr_latency.labels(camera_id=self.camera_id).set(time.perf_counter() - started)

        if future.cancelled():
            logger.debug(f"[{self.camera_id}] OCR cancelado para frame {frame.timestamp}")
            frames_skipped_total.labels(camera_id=self.camera_id, reason="cancelled").inc()
            return

        error = future.exception()
        if error is not None:
            logger.warning(f"[{self.camera_id}] OCR falló, se salta el frame: {error}")
            ocr_failures_total.labels(camera_id=self.camera_id).inc()
            return

        try:
            self.handle_recognized_text(future.result())
        except Exception:
            logger.exception(f"[{self.camera_id}] Error procesando resultado OCR")
            return

        pipeline_latency.labels(camera_id=self.camera_id).set(time.perf_counter() - started)

    # ---------------------------------------------------------
    # EXTRACCIÓN + DISPLAY
    # ---------------------------------------------------------
    def handle_recognized_text(self, recognized: RecognizedText) -> Optional[PlateMatch]:
        match = self.extractor.extract(recognized)
        if match is None:
            return None

        plates_detected_total.labels(camera_id=self.camera_id, shape=match.shape.value).inc()
        logger.info(f"[{self.camera_id}] 🚘 Placa {match.text} ({match.shape.value})")

        self.displayed_plate.update(match.text)
        return match
