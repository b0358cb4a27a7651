from dataclasses import dataclass
from typing import Optional

import numpy as np

from plate_reader.domain.Models.rotation import Rotation


@dataclass
class Frame:
    """
    Representa un frame capturado desde una cámara.
    """
    data: Optional[np.ndarray]   # imagen en formato numpy array (None si la fuente no entregó píxeles)
    timestamp: float             # momento en que se capturó
    source: str                  # identificador de la cámara o URL
    rotation_degrees: int = 0    # rotación reportada por la fuente (0/90/180/270)

    @property
    def image(self) -> Optional[np.ndarray]:
        """Alias para compatibilidad con librerías que esperan 'image'."""
        return self.data

    @property
    def rotation(self) -> Rotation:
        return Rotation.from_degrees(self.rotation_degrees)

    def has_image(self) -> bool:
        return isinstance(self.data, np.ndarray) and self.data.size > 0
