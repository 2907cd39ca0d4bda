import pytest

from core.exceptions import ValidationError
from core.utils import normalize_tags, sequence_order
from core.validators import DataValidator


class TestFrameContent:
    def test_maps_keys_to_attributes(self):
        cleaned = DataValidator.validate_frame_content(
            {"duration": 2, "ballPosition": {"x": 1, "y": 2.5}, "positions": [], "extra": "ignored"}
        )
        assert cleaned == {"duration": 2.0, "ball_position": {"x": 1, "y": 2.5}, "positions": []}

    def test_absent_keys_left_out(self):
        assert DataValidator.validate_frame_content({}) == {}

    @pytest.mark.parametrize("payload", [
        {"duration": 0},
        {"duration": True},
        {"duration": "1"},
        {"lines": {}},
        {"annotations": "text"},
        {"ballPosition": [1, 2]},
        {"ballPosition": {"x": 1}},
    ])
    def test_rejects(self, payload):
        with pytest.raises(ValidationError):
            DataValidator.validate_frame_content(payload)

    def test_null_ball_position(self):
        assert DataValidator.validate_frame_content({"ballPosition": None}) == {"ball_position": None}


class TestFrameEntries:
    def test_entry_fields(self):
        entry = DataValidator.validate_frame_entry({"id": "7", "frameNumber": 2})
        assert entry == {"id": 7, "frame_number": 2}

    def test_id_required_for_reorder(self):
        with pytest.raises(ValidationError):
            DataValidator.validate_frame_list([{"frameNumber": 0}], require_id=True)

    def test_negative_frame_number(self):
        with pytest.raises(ValidationError):
            DataValidator.validate_frame_entry({"id": 1, "frameNumber": -1})

    def test_list_required(self):
        with pytest.raises(ValidationError):
            DataValidator.validate_frame_list({"id": 1})


class TestScalars:
    def test_name_is_stripped_and_bounded(self):
        assert DataValidator.require_name("  Play  ") == "Play"
        with pytest.raises(ValidationError):
            DataValidator.require_name("x" * 11, max_length=10)

    def test_version(self):
        assert DataValidator.validate_version({}) is None
        assert DataValidator.validate_version({"version": 3}) == 3
        with pytest.raises(ValidationError):
            DataValidator.validate_version({"version": "three"})

    def test_tags(self):
        assert DataValidator.validate_tags(["A", "a ", ""]) == ["a"]
        with pytest.raises(ValidationError):
            DataValidator.validate_tags(["a", "b", "c"], max_tags=2)
        with pytest.raises(ValidationError):
            DataValidator.validate_tags("a,b")

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            DataValidator.validate_category("TRICK")


def test_normalize_tags_keeps_first_seen_order():
    assert normalize_tags(["Zone", "press", "ZONE", " "]) == ["zone", "press"]


def test_sequence_order():
    entries = [
        {"id": 1, "frame_number": 2},
        {"id": 2, "frame_number": None},
        {"id": 3, "frame_number": 0},
        {"id": 4, "frame_number": 2},
    ]
    # entry 2 falls back to its list index (1); ties keep list order
    assert [e["id"] for e in sequence_order(entries)] == [3, 2, 1, 4]
