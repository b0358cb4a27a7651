# plate_reader/domain/Services/plate_matcher.py
import re
from typing import Optional, Sequence

from plate_reader.domain.Models.plate import PlateMatch, PlatePattern, PlateShape

# \D acepta cualquier no-dígito como "letra"; re.ASCII deja \d solo en 0-9.
LEGACY_PATTERN = PlatePattern(PlateShape.LEGACY, re.compile(r"\D{3}\d{4}", re.ASCII))
MERCOSUL_PATTERN = PlatePattern(PlateShape.MERCOSUL, re.compile(r"\D{3}\d\D\d{2}", re.ASCII))

# Orden de prioridad: legacy siempre antes que mercosul.
DEFAULT_PATTERNS: tuple[PlatePattern, ...] = (LEGACY_PATTERN, MERCOSUL_PATTERN)


class PlateMatcher:
    """
    Compara el texto normalizado contra los formatos de placa, en orden.
    - El match es del string completo (no se buscan subcadenas)
    - Gana el primer formato que acepte el texto
    """

    def __init__(self, patterns: Optional[Sequence[PlatePattern]] = None):
        self.patterns = tuple(patterns) if patterns is not None else DEFAULT_PATTERNS

    def match(self, text: str) -> Optional[PlateMatch]:
        if not text:
            return None

        for pattern in self.patterns:
            if pattern.fullmatch(text):
                return PlateMatch(text=text, shape=pattern.shape)

        return None
