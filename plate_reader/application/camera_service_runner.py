import logging
import time
from typing import Optional

from plate_reader.application.displayed_plate import DisplayedPlate
from plate_reader.application.plate_recognition_service import PlateRecognitionService
from plate_reader.domain.Interfaces.ocr_reader import IOCRReader
from plate_reader.domain.Services.plate_extractor import PlateExtractor
from plate_reader.infrastructure.Camera.camera_factory import create_camera_stream
from plate_reader.infrastructure.Display.console_display import ConsoleDisplay
from plate_reader.infrastructure.Normalizer.plate_normalizer import PlateNormalizer
from plate_reader.core.config import settings

logger = logging.getLogger(__name__)

_running_service: Optional[PlateRecognitionService] = None


def create_ocr_reader() -> IOCRReader:
    if settings.ocr_engine.lower() == "dummy":
        from plate_reader.infrastructure.OCR.dummy_ocr_reader import DummyOCRReader
        return DummyOCRReader(text=settings.ocr_dummy_text)

    from plate_reader.infrastructure.OCR.easyocr_reader import EasyOCRReader
    return EasyOCRReader(lang=settings.ocr_lang, gpu=settings.ocr_gpu)


def create_plate_extractor() -> PlateExtractor:
    return PlateExtractor(normalizer=PlateNormalizer())


def extract_plate_number(text: str) -> Optional[str]:
    """Atajo para texto crudo: devuelve la placa o None."""
    match = create_plate_extractor().extract_from_text(text)
    return match.text if match else None


def build_camera_service(displayed_plate: Optional[DisplayedPlate] = None) -> PlateRecognitionService:
    """Arma el servicio de la cámara configurada con todos sus colaboradores."""
    stream = create_camera_stream()
    camera_id = getattr(stream, "camera_id", None) or "default"

    if displayed_plate is None:
        displayed_plate = DisplayedPlate(sinks=[ConsoleDisplay(camera_id=camera_id)])

    preview = None
    if settings.debug_show:
        from plate_reader.infrastructure.Display.opencv_preview import OpenCVPreview
        preview = OpenCVPreview(window_name=f"{settings.app_name} [{camera_id}]")

    return PlateRecognitionService(
        camera_stream=stream,
        ocr_reader=create_ocr_reader(),
        extractor=create_plate_extractor(),
        displayed_plate=displayed_plate,
        preview=preview,
        max_fps=settings.max_fps,
        max_in_flight=settings.ocr_max_in_flight,
    )


def run_camera_service(service: Optional[PlateRecognitionService] = None):
    """
    Levanta el servicio y mantiene el hilo bloqueado
    hasta que alguien llame stop_camera_service().
    """
    global _running_service

    service = service or build_camera_service()
    _running_service = service

    logger.info(f"🎥 Starting service for camera {service.camera_id}")

    try:
        service.start()

        while not service.stop_event.is_set():
            time.sleep(1)

    except ConnectionError as e:
        logger.error(f"❌ Cámara {service.camera_id} no disponible: {e}")
    except Exception:
        logger.exception(f"❌ Error en cámara {service.camera_id}")
    finally:
        try:
            service.stop()
        except Exception:
            logger.exception(f"Error deteniendo servicio de cámara {service.camera_id}")

        _running_service = None


def stop_camera_service():
    """
    Detiene el servicio en curso.
    run_camera_service() hace la limpieza final en su finally.
    """
    service = _running_service
    if service:
        service.stop_event.set()
