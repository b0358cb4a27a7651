from abc import ABC, abstractmethod
from plate_reader.domain.Models.frame import Frame

class ICameraStream(ABC):
    """
    Abstracción de un stream de cámara.
    """
    @abstractmethod
    def connect(self) -> None:
        """Conecta al stream de video. Lanza ConnectionError si la cámara no está disponible."""
        pass

    @abstractmethod
    def read_frame(self, timeout: float = 1.0) -> Frame | None:
        """Devuelve el frame más reciente, o None si no llegó ninguno antes del timeout."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Cierra la conexión al stream."""
        pass
