import time

from plate_reader.application.displayed_plate import DisplayedPlate
from plate_reader.application.plate_recognition_service import PlateRecognitionService
from plate_reader.domain.Interfaces.ocr_reader import IOCRReader
from plate_reader.domain.Models.frame import Frame
from plate_reader.domain.Models.recognized_text import RecognizedText
from plate_reader.domain.Services.plate_extractor import PlateExtractor
from plate_reader.infrastructure.Normalizer.plate_normalizer import PlateNormalizer
from plate_reader.infrastructure.OCR.dummy_ocr_reader import DummyOCRReader
from plate_reader.test.fakes import InMemoryCameraStream, ManualOCRReader, RecordingDisplay, make_frame


class ExplodingOCRReader(IOCRReader):
    def recognize(self, frame: Frame):
        raise RuntimeError("motor no inicializado")


def _service(camera_stream, ocr_reader, display: RecordingDisplay, **kwargs) -> PlateRecognitionService:
    return PlateRecognitionService(
        camera_stream=camera_stream,
        ocr_reader=ocr_reader,
        extractor=PlateExtractor(PlateNormalizer()),
        displayed_plate=DisplayedPlate(sinks=[display]),
        **kwargs,
    )


def test_matching_frame_updates_display(
    camera_stream: InMemoryCameraStream,
    manual_ocr: ManualOCRReader,
    recording_display: RecordingDisplay,
) -> None:
    service = _service(camera_stream, manual_ocr, recording_display)

    future = service.submit_frame(make_frame())
    future.set_result(RecognizedText.from_text("  A-B#C 1*2 3 4 "))

    assert service.displayed_plate.current == "ABC1234"
    assert recording_display.shown == ["ABC1234"]


def test_no_match_keeps_previous_plate(
    camera_stream: InMemoryCameraStream,
    manual_ocr: ManualOCRReader,
    recording_display: RecordingDisplay,
) -> None:
    service = _service(camera_stream, manual_ocr, recording_display)

    service.submit_frame(make_frame()).set_result(RecognizedText.from_text("ABC1D23"))
    service.submit_frame(make_frame()).set_result(RecognizedText.from_text("PARE"))
    service.submit_frame(make_frame()).set_result(RecognizedText())

    assert service.displayed_plate.current == "ABC1D23"
    assert recording_display.shown == ["ABC1D23"]


def test_last_completed_ocr_wins(
    camera_stream: InMemoryCameraStream,
    manual_ocr: ManualOCRReader,
    recording_display: RecordingDisplay,
) -> None:
    service = _service(camera_stream, manual_ocr, recording_display)

    older = service.submit_frame(make_frame())
    newer = service.submit_frame(make_frame())
    newer.set_result(RecognizedText.from_text("NEW1234"))
    older.set_result(RecognizedText.from_text("OLD1D23"))

    assert service.displayed_plate.current == "OLD1D23"
    assert recording_display.shown == ["NEW1234", "OLD1D23"]


def test_frame_without_image_is_skipped(
    camera_stream: InMemoryCameraStream,
    manual_ocr: ManualOCRReader,
    recording_display: RecordingDisplay,
) -> None:
    service = _service(camera_stream, manual_ocr, recording_display)

    assert service.submit_frame(None) is None
    assert service.submit_frame(Frame(data=None, timestamp=time.time(), source="cam")) is None
    assert manual_ocr.pending == []


def test_ocr_failure_skips_frame(
    camera_stream: InMemoryCameraStream,
    manual_ocr: ManualOCRReader,
    recording_display: RecordingDisplay,
) -> None:
    service = _service(camera_stream, manual_ocr, recording_display)
    service.displayed_plate.update("ABC1234")

    service.submit_frame(make_frame()).set_exception(RuntimeError("OCR caído"))

    assert service.displayed_plate.current == "ABC1234"
    assert recording_display.shown == ["ABC1234"]


def test_cancelled_ocr_skips_frame(
    camera_stream: InMemoryCameraStream,
    manual_ocr: ManualOCRReader,
    recording_display: RecordingDisplay,
) -> None:
    service = _service(camera_stream, manual_ocr, recording_display)

    future = service.submit_frame(make_frame())

    assert future.cancel()
    assert service.displayed_plate.current is None


def test_reader_raising_on_dispatch_skips_frame(
    camera_stream: InMemoryCameraStream,
    recording_display: RecordingDisplay,
) -> None:
    service = _service(camera_stream, ExplodingOCRReader(), recording_display)

    assert service.submit_frame(make_frame()) is None
    assert service.displayed_plate.current is None


def test_capture_queue_keeps_only_newest_frame(
    camera_stream: InMemoryCameraStream,
    manual_ocr: ManualOCRReader,
    recording_display: RecordingDisplay,
) -> None:
    service = _service(camera_stream, manual_ocr, recording_display)
    first, second, third = make_frame(), make_frame(), make_frame()

    service._offer(first)
    service._offer(second)
    service._offer(third)

    assert service.capture_queue.get_nowait() is third
    assert service.capture_queue.empty()


def test_handle_recognized_text_returns_match(
    camera_stream: InMemoryCameraStream,
    manual_ocr: ManualOCRReader,
    recording_display: RecordingDisplay,
) -> None:
    service = _service(camera_stream, manual_ocr, recording_display)

    match = service.handle_recognized_text(RecognizedText.from_text("BRA2E19"))

    assert match is not None
    assert match.text == "BRA2E19"
    assert service.handle_recognized_text(RecognizedText.from_text("BRA2E199")) is None


def test_running_service_displays_plate_from_stream(recording_display: RecordingDisplay) -> None:
    stream = InMemoryCameraStream()
    ocr = DummyOCRReader(text="  A-B#C 1*2 3 4 ")
    service = _service(stream, ocr, recording_display, max_fps=100.0)

    service.start()
    try:
        deadline = time.time() + 5
        while service.displayed_plate.current is None and time.time() < deadline:
            time.sleep(0.01)
    finally:
        service.stop()

    assert service.displayed_plate.current == "ABC1234"
    assert not stream.connected
    assert not service.analysis_thread.is_alive()


def test_stop_closes_ocr_reader(
    camera_stream: InMemoryCameraStream,
    manual_ocr: ManualOCRReader,
    recording_display: RecordingDisplay,
) -> None:
    service = _service(camera_stream, manual_ocr, recording_display, max_fps=50.0)

    service.start()
    service.stop()

    assert manual_ocr.closed
    assert not camera_stream.connected
