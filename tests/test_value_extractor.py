from conftest import FakeReader

from ellipsis_meta.core.value_extractor import extract_values


def test_extracts_present_non_blank_values() -> None:
    reader = FakeReader({"Make": "Canon", "Model": "EOS", "Artist": "   ", "Copyright": ""})
    raw = extract_values(reader, ["Make", "Model", "Artist", "Copyright", "LensMake"])
    assert raw.values == {"Make": "Canon", "Model": "EOS"}
    assert raw.extracted_count == 2
    assert raw.total_size == len("Canon") + len("EOS")


def test_failing_tag_is_isolated() -> None:
    reader = FakeReader({"Make": "Canon", "LensModel": "RF50", "FNumber": "1.8"}, failing=["LensModel"])
    raw = extract_values(reader, ["Make", "LensModel", "FNumber"])
    assert raw.values == {"Make": "Canon", "FNumber": "1.8"}
    assert raw.extracted_count == 2


def test_unexpected_reader_errors_are_isolated() -> None:
    class Exploding(FakeReader):
        def get_attribute(self, tag):
            if tag == "Model":
                raise RuntimeError("corrupt IFD")
            return super().get_attribute(tag)

    raw = extract_values(Exploding({"Make": "Sony", "Model": "A7"}), ["Make", "Model"])
    assert raw.values == {"Make": "Sony"}


def test_preserves_tag_order() -> None:
    reader = FakeReader({"B": "2", "A": "1", "C": "3"})
    raw = extract_values(reader, ["C", "A", "B"])
    assert list(raw.values) == ["C", "A", "B"]


def test_non_string_values_are_coerced() -> None:
    class Loose(FakeReader):
        def get_attribute(self, tag):
            return {"ISOSpeedRatings": 200, "Make": "Canon"}.get(tag)

    raw = extract_values(Loose(), ["ISOSpeedRatings", "Make"])
    assert raw.values == {"ISOSpeedRatings": "200", "Make": "Canon"}
    assert raw.total_size == len("200") + len("Canon")


def test_value_that_cannot_be_stringified_is_isolated() -> None:
    class Unprintable:
        def __str__(self) -> str:
            raise ValueError("bad encoding")

    class Odd(FakeReader):
        def get_attribute(self, tag):
            return Unprintable() if tag == "MakerNote" else super().get_attribute(tag)

    raw = extract_values(Odd({"Make": "Canon"}), ["MakerNote", "Make"])
    assert raw.values == {"Make": "Canon"}
