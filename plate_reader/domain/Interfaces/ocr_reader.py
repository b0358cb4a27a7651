from abc import ABC, abstractmethod
from concurrent.futures import Future

from plate_reader.domain.Models.frame import Frame
from plate_reader.domain.Models.recognized_text import RecognizedText

class IOCRReader(ABC):
    """
    Lector OCR asíncrono sobre frames completos.
    """
    @abstractmethod
    def recognize(self, frame: Frame) -> "Future[RecognizedText]":
        """
        Lanza el reconocimiento del frame (respetando frame.rotation) y devuelve
        un Future que se resuelve con el RecognizedText o con la excepción del motor.
        """
        pass

    def close(self) -> None:
        """Libera los recursos del motor. Por defecto no hace nada."""
        pass
