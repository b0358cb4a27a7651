import logging
import time
from typing import Iterable, List, Optional

from plate_reader.domain.Interfaces.plate_display import IPlateDisplay

logger = logging.getLogger(__name__)


class DisplayedPlate:
    """
    Estado compartido de la placa mostrada.
    - Solo se escribe vía update(); gana el último frame que TERMINA el OCR
    - Un frame sin placa no limpia el valor anterior
    - Cada update se reenvía a los displays registrados
    """

    def __init__(self, sinks: Iterable[IPlateDisplay] = ()):
        self._sinks: List[IPlateDisplay] = list(sinks)
        self._plate: Optional[str] = None
        self._updated_at: Optional[float] = None

    @property
    def current(self) -> Optional[str]:
        return self._plate

    @property
    def updated_at(self) -> Optional[float]:
        return self._updated_at

    def update(self, plate: str) -> None:
        if not plate:
            return

        self._plate = plate
        self._updated_at = time.time()

        for sink in self._sinks:
            try:
                sink.show(plate)
            except Exception:
                logger.exception(f"Error mostrando placa {plate} en {type(sink).__name__}")

    def snapshot(self) -> dict:
        return {"plate": self._plate, "updated_at": self._updated_at}
