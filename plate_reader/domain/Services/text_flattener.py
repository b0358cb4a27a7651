# plate_reader/domain/Services/text_flattener.py
from plate_reader.domain.Models.recognized_text import RecognizedText


def flatten_text(recognized: RecognizedText) -> str:
    """
    Concatena el texto de todos los elementos (bloque -> línea -> elemento)
    sin insertar separadores. Un resultado vacío en cualquier nivel aporta "".
    """
    if recognized is None:
        return ""
    return "".join(
        element.text
        for block in recognized.blocks
        for line in block.lines
        for element in line.elements
    )
