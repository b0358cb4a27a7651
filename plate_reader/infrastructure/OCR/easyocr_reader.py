import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from plate_reader.core.config import settings
from plate_reader.domain.Interfaces.ocr_reader import IOCRReader
from plate_reader.domain.Models.frame import Frame
from plate_reader.domain.Models.recognized_text import RecognizedText, TextBlock, TextElement, TextLine
from plate_reader.utils.image_rotation import rotate_upright

logger = logging.getLogger(__name__)


class EasyOCRReader(IOCRReader):
    """
    Implementación usando EasyOCR sobre el frame completo:
    - Endereza la imagen según la rotación del frame
    - Corre el OCR en un único worker dedicado (EasyOCR no es thread-safe)
    - Agrupa las detecciones en líneas y bloques
    """

    def __init__(self, lang: Optional[str] = None, gpu: Optional[bool] = None, reader: Any = None):
        self.lang = lang or settings.ocr_lang
        self.gpu = settings.ocr_gpu if gpu is None else gpu
        self.reader = reader if reader is not None else self._create_reader()
        self.executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="ocr")

    def _create_reader(self):
        try:
            import easyocr
        except Exception as e:
            raise RuntimeError(
                "EasyOCR no está instalado o no carga. Instala con `pip install easyocr`."
            ) from e

        logger.info(f"🔤 Cargando EasyOCR lang={self.lang} gpu={self.gpu}")
        return easyocr.Reader([self.lang], gpu=self.gpu)

    def recognize(self, frame: Frame) -> "Future[RecognizedText]":
        return self.executor.submit(self._read, frame)

    def _read(self, frame: Frame) -> RecognizedText:
        if not frame.has_image():
            raise ValueError(f"Frame sin imagen ({frame.source})")

        image = rotate_upright(frame.image, frame.rotation)
        detections = self.reader.readtext(image)
        recognized = build_recognized_text(detections)

        logger.debug("OCR [%s] rot=%d -> %r", frame.source, frame.rotation.degrees, recognized.text)
        return recognized

    def close(self) -> None:
        self.executor.shutdown(wait=False, cancel_futures=True)


# ==========================================================
# AGRUPACIÓN DE DETECCIONES
# ==========================================================
def build_recognized_text(detections: Iterable[Sequence[Any]]) -> RecognizedText:
    """
    Convierte la salida de readtext ([puntos, texto, confianza], ...) en
    bloques -> líneas -> elementos, en orden de lectura.
    Una detección pertenece a la línea actual si su centro vertical cae dentro de ella;
    un hueco vertical mayor que el alto de la línea anterior abre un bloque nuevo.
    """
    elements: List[TextElement] = []
    for points, text, confidence in detections:
        if not text:
            continue
        elements.append(TextElement(
            text=text,
            confidence=float(confidence),
            bounding_box=_bbox(points),
        ))

    if not elements:
        return RecognizedText()

    elements.sort(key=_center_y)

    raw_lines: List[List[TextElement]] = []
    for element in elements:
        if raw_lines:
            top, bottom = _vertical_extent(raw_lines[-1])
            if top <= _center_y(element) <= bottom:
                raw_lines[-1].append(element)
                continue
        raw_lines.append([element])

    blocks: List[TextBlock] = []
    current: List[TextLine] = []
    previous: Optional[Tuple[int, int]] = None
    for raw in raw_lines:
        raw.sort(key=lambda e: e.bounding_box[0])
        top, bottom = _vertical_extent(raw)
        if previous is not None and top - previous[1] > previous[1] - previous[0]:
            blocks.append(TextBlock(lines=current))
            current = []
        current.append(TextLine(elements=raw))
        previous = (top, bottom)
    blocks.append(TextBlock(lines=current))

    return RecognizedText(blocks=blocks)


def _bbox(points) -> Tuple[int, int, int, int]:
    xs = [int(p[0]) for p in points]
    ys = [int(p[1]) for p in points]
    return min(xs), min(ys), max(xs), max(ys)


def _center_y(element: TextElement) -> float:
    _, y1, _, y2 = element.bounding_box
    return (y1 + y2) / 2


def _vertical_extent(line: List[TextElement]) -> Tuple[int, int]:
    return min(e.bounding_box[1] for e in line), max(e.bounding_box[3] for e in line)
