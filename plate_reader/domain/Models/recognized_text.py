# plate_reader/domain/Models/recognized_text.py
from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class TextElement:
    """
    Fragmento mínimo de texto reconocido por el OCR (normalmente una palabra).
    """
    text: str
    confidence: Optional[float] = None
    bounding_box: Optional[Tuple[int, int, int, int]] = None  # (x1, y1, x2, y2)


@dataclass(frozen=True)
class TextLine:
    elements: List[TextElement] = field(default_factory=list)

    @property
    def text(self) -> str:
        return " ".join(e.text for e in self.elements)


@dataclass(frozen=True)
class TextBlock:
    lines: List[TextLine] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "\n".join(line.text for line in self.lines)


@dataclass(frozen=True)
class RecognizedText:
    """
    Resultado jerárquico del OCR para un frame: bloques -> líneas -> elementos.
    Se crea por cada frame analizado y se descarta después del matching.
    """
    blocks: List[TextBlock] = field(default_factory=list)

    @property
    def text(self) -> str:
        """Texto legible (con separadores), útil solo para logs."""
        return "\n".join(block.text for block in self.blocks)

    def is_empty(self) -> bool:
        return not any(e.text for b in self.blocks for line in b.lines for e in line.elements)

    @staticmethod
    def from_text(text: str) -> "RecognizedText":
        """
        Construye un resultado de un solo bloque a partir de texto plano:
        una línea por cada línea del texto y un elemento por cada token.
        """
        lines = [
            TextLine(elements=[TextElement(text=token) for token in raw.split()])
            for raw in (text or "").splitlines()
        ]
        return RecognizedText(blocks=[TextBlock(lines=lines)] if lines else [])
