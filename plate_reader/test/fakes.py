import time
from concurrent.futures import Future
from typing import List, Optional, Tuple

import numpy as np

from plate_reader.domain.Interfaces.camera_stream import ICameraStream
from plate_reader.domain.Interfaces.ocr_reader import IOCRReader
from plate_reader.domain.Interfaces.plate_display import IPlateDisplay
from plate_reader.domain.Models.frame import Frame


class ManualOCRReader(IOCRReader):
    """OCR controlado por el test: cada llamada deja un Future pendiente."""

    def __init__(self) -> None:
        self.pending: List[Tuple[Frame, Future]] = []
        self.closed = False

    def recognize(self, frame: Frame) -> Future:
        future: Future = Future()
        self.pending.append((frame, future))
        return future

    def close(self) -> None:
        self.closed = True


class InMemoryCameraStream(ICameraStream):
    def __init__(self, camera_id: str = "test-cam", rotation_degrees: int = 0) -> None:
        self.camera_id = camera_id
        self.rotation_degrees = rotation_degrees
        self.connected = False

    def connect(self) -> None:
        self.connected = True

    def read_frame(self, timeout: float = 1.0) -> Optional[Frame]:
        if not self.connected:
            return None
        return make_frame(rotation_degrees=self.rotation_degrees, source=self.camera_id)

    def disconnect(self) -> None:
        self.connected = False


class RecordingDisplay(IPlateDisplay):
    def __init__(self) -> None:
        self.shown: List[str] = []

    def show(self, plate: str) -> None:
        self.shown.append(plate)


def make_frame(
    shape: Tuple[int, ...] = (4, 6, 3),
    rotation_degrees: int = 0,
    source: str = "test-cam",
) -> Frame:
    return Frame(
        data=np.zeros(shape, dtype=np.uint8),
        timestamp=time.time(),
        source=source,
        rotation_degrees=rotation_degrees,
    )
