# plate_reader/infrastructure/Normalizer/plate_normalizer.py
import re
from plate_reader.domain.Interfaces.text_normalizer import ITextNormalizer


class PlateNormalizer(ITextNormalizer):
    """
    Normaliza el texto del OCR antes del matching:
    - Elimina (no reemplaza) todo lo que no sea A-Z, a-z o 0-9
    - Conserva mayúsculas/minúsculas y el orden original
    """
    _NON_ALNUM = re.compile(r"[^A-Za-z0-9]")

    def normalize(self, text: str) -> str:
        if not text:
            return ""
        return self._NON_ALNUM.sub("", text)
