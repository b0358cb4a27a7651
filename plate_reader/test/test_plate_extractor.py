from plate_reader.domain.Models.plate import PlateShape
from plate_reader.domain.Models.recognized_text import RecognizedText, TextBlock, TextElement, TextLine
from plate_reader.domain.Services.plate_extractor import PlateExtractor
from plate_reader.infrastructure.Normalizer.plate_normalizer import PlateNormalizer


class SpyNormalizer(PlateNormalizer):
    def __init__(self) -> None:
        self.calls = 0

    def normalize(self, text: str) -> str:
        self.calls += 1
        return super().normalize(text)


def test_extract_noisy_ocr_text() -> None:
    recognized = RecognizedText(blocks=[
        TextBlock(lines=[TextLine(elements=[TextElement(text="  A-B#C 1*2 3 4 ")])]),
    ])

    match = PlateExtractor(PlateNormalizer()).extract(recognized)

    assert match is not None
    assert match.text == "ABC1234"
    assert match.shape is PlateShape.LEGACY


def test_extract_joins_split_elements() -> None:
    match = PlateExtractor(PlateNormalizer()).extract(RecognizedText.from_text("BRA 2E\n19"))

    assert match is not None
    assert match.text == "BRA2E19"
    assert match.shape is PlateShape.MERCOSUL


def test_empty_text_skips_normalization() -> None:
    normalizer = SpyNormalizer()
    extractor = PlateExtractor(normalizer)

    assert extractor.extract(RecognizedText()) is None
    assert extractor.extract_from_text("") is None
    assert normalizer.calls == 0


def test_extra_text_around_plate_is_a_miss() -> None:
    extractor = PlateExtractor(PlateNormalizer())

    assert extractor.extract(RecognizedText.from_text("BRASIL ABC1D23")) is None
