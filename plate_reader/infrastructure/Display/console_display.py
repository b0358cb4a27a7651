import json
import time

from plate_reader.domain.Interfaces.plate_display import IPlateDisplay

class ConsoleDisplay(IPlateDisplay):
    """
    Implementación simple que imprime cada placa en consola como una línea JSON.
    """

    def __init__(self, camera_id: str = "default"):
        self.camera_id = camera_id

    def show(self, plate: str) -> None:
        output = {
            "plate": plate,
            "cameraId": self.camera_id,
            "displayedAt": time.time(),
        }
        print(json.dumps(output, ensure_ascii=False), flush=True)
