import re
from dataclasses import dataclass
from enum import Enum


class PlateShape(str, Enum):
    """Formatos de placa soportados."""
    LEGACY = "legacy"        # AAA9999
    MERCOSUL = "mercosul"    # AAA9A99


@dataclass(frozen=True)
class PlatePattern:
    """
    Forma de placa: secuencia fija de slots de "letra" y de dígito.
    Los slots de letra aceptan cualquier carácter que no sea dígito.
    """
    shape: PlateShape
    regex: re.Pattern

    def fullmatch(self, text: str) -> bool:
        return self.regex.fullmatch(text) is not None


@dataclass(frozen=True)
class PlateMatch:
    """
    Placa reconocida en un frame: el texto normalizado completo y el formato que lo aceptó.
    """
    text: str
    shape: PlateShape
