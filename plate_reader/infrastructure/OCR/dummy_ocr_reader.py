from concurrent.futures import Future

from plate_reader.domain.Models.frame import Frame
from plate_reader.domain.Models.recognized_text import RecognizedText
from plate_reader.domain.Interfaces.ocr_reader import IOCRReader

class DummyOCRReader(IOCRReader):
    """
    Implementación dummy que devuelve siempre el mismo texto, ya resuelto.
    """

    def __init__(self, text: str = "ABC1234"):
        self.text = text

    def recognize(self, frame: Frame) -> "Future[RecognizedText]":
        future: Future = Future()
        future.set_result(RecognizedText.from_text(self.text))
        return future
