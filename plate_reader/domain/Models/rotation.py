from enum import IntEnum


class Rotation(IntEnum):
    """
    Rotación que hay que aplicar a la imagen (en sentido horario) para dejarla derecha.
    Los valores siguen la convención de metadata de los motores OCR (0..3).
    """
    ROTATION_0 = 0
    ROTATION_90 = 1
    ROTATION_180 = 2
    ROTATION_270 = 3

    @property
    def degrees(self) -> int:
        return int(self) * 90

    @classmethod
    def from_degrees(cls, degrees) -> "Rotation":
        """Cualquier valor fuera de {0, 90, 180, 270} se trata como 0."""
        return _BY_DEGREES.get(degrees, cls.ROTATION_0)


_BY_DEGREES = {
    0: Rotation.ROTATION_0,
    90: Rotation.ROTATION_90,
    180: Rotation.ROTATION_180,
    270: Rotation.ROTATION_270,
}
