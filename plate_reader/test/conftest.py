import pytest

from plate_reader.test.fakes import InMemoryCameraStream, ManualOCRReader, RecordingDisplay


@pytest.fixture
def manual_ocr() -> ManualOCRReader:
    return ManualOCRReader()


@pytest.fixture
def camera_stream() -> InMemoryCameraStream:
    return InMemoryCameraStream()


@pytest.fixture
def recording_display() -> RecordingDisplay:
    return RecordingDisplay()
