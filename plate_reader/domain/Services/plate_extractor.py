# plate_reader/domain/Services/plate_extractor.py
import logging
from typing import Optional

from plate_reader.domain.Interfaces.text_normalizer import ITextNormalizer
from plate_reader.domain.Models.plate import PlateMatch
from plate_reader.domain.Models.recognized_text import RecognizedText
from plate_reader.domain.Services.plate_matcher import PlateMatcher
from plate_reader.domain.Services.text_flattener import flatten_text

logger = logging.getLogger(__name__)


class PlateExtractor:
    """
    Pipeline de extracción por frame: aplanar -> normalizar -> match.
    Es síncrono y sin estado; puede correr en el hilo que resuelve el OCR.
    """

    def __init__(self, normalizer: ITextNormalizer, matcher: Optional[PlateMatcher] = None):
        self.normalizer = normalizer
        self.matcher = matcher or PlateMatcher()

    def extract(self, recognized: RecognizedText) -> Optional[PlateMatch]:
        return self.extract_from_text(flatten_text(recognized))

    def extract_from_text(self, text: str) -> Optional[PlateMatch]:
        if not text:
            logger.debug("OCR sin texto, nada que normalizar.")
            return None

        normalized = self.normalizer.normalize(text)
        match = self.matcher.match(normalized)

        if match is None:
            logger.debug("Texto '%s' (normalizado '%s') no coincide con ningún formato.", text, normalized)
        return match
