"""
Unit tests for schedule extraction.

Tests the bracket-delimited array extraction and schedule validation.
"""

import pytest

from route_planner.planner.response_parser import (
    ParseError,
    NoJsonFoundError,
    MalformedJsonError,
    extract_json_array,
    extract_schedule,
)


class TestExtractJsonArray:
    """Tests for extract_json_array."""

    def test_no_brackets(self):
        """Text without brackets has no array."""
        with pytest.raises(NoJsonFoundError):
            extract_json_array("no brackets here")

    def test_only_opening_bracket(self):
        """An unclosed array is not found."""
        with pytest.raises(NoJsonFoundError):
            extract_json_array("here it comes: [")

    def test_closing_before_opening(self):
        """A ']' that precedes every '[' does not delimit an array."""
        with pytest.raises(NoJsonFoundError):
            extract_json_array("] nothing [")

    def test_slices_first_to_last_bracket(self):
        """The slice spans the first '[' through the last ']'."""
        text = "  intro [1, [2]] outro  "
        assert extract_json_array(text) == "[1, [2]]"


class TestExtractSchedule:
    """Tests for extract_schedule."""

    def test_ignores_surrounding_text(self):
        """Prose around the array is ignored."""
        raw = '  blah [ {"action":"演説","location":"X","startTime":"09:00","endTime":"09:20"} ] trailing'
        schedule = extract_schedule(raw)

        assert len(schedule) == 1
        entry = schedule[0]
        assert entry.action == "演説"
        assert entry.location == "X"
        assert entry.start_time == "09:00"
        assert entry.end_time == "09:20"

    def test_no_brackets_fails(self):
        """Responses without an array raise NoJsonFoundError."""
        with pytest.raises(NoJsonFoundError):
            extract_schedule("no brackets here")

    def test_bad_json_fails(self):
        """Undecodable JSON raises MalformedJsonError with the payload."""
        with pytest.raises(MalformedJsonError) as exc_info:
            extract_schedule("[ {bad json ]")
        assert exc_info.value.payload == "[ {bad json ]"

    def test_errors_are_parse_errors(self):
        """Both extraction failures share the ParseError base."""
        assert issubclass(NoJsonFoundError, ParseError)
        assert issubclass(MalformedJsonError, ParseError)

    def test_wrong_field_types_fail(self):
        """Objects missing fields or with wrong types are malformed."""
        with pytest.raises(MalformedJsonError):
            extract_schedule('[{"action": "演説", "location": "X", "startTime": 900}]')

    def test_unknown_action_fails(self):
        """Actions outside travel/speech/meal are malformed."""
        with pytest.raises(MalformedJsonError):
            extract_schedule(
                '[{"action": "休憩", "location": "X", "startTime": "09:00", "endTime": "09:10"}]'
            )

    def test_non_object_items_fail(self):
        """An array of scalars is not a schedule."""
        with pytest.raises(MalformedJsonError):
            extract_schedule("[1, 2, 3]")

    def test_prose_brackets_widen_the_slice(self):
        """Brackets in trailing prose make the slice unparsable."""
        raw = (
            '[{"action": "演説", "location": "X", "startTime": "09:00", "endTime": "09:20"}]'
            " 注意 [参考] 以上"
        )
        with pytest.raises(MalformedJsonError):
            extract_schedule(raw)

    def test_empty_array(self):
        """An empty array is a valid, empty schedule."""
        assert extract_schedule("[]") == []

    def test_order_preserved_without_validation(self):
        """Entries keep model order even when times go backwards."""
        raw = """```json
[
{"action": "演説", "location": "上田駅お城口", "startTime": "10:00", "endTime": "10:20"},
{"action": "移動", "location": "次の場所へ移動", "startTime": "09:00", "endTime": "09:15"},
{"action": "食事", "location": "昼食休憩", "startTime": "12:00", "endTime": "12:45"}
]
```"""
        schedule = extract_schedule(raw)

        assert [e.action for e in schedule] == ["演説", "移動", "食事"]
        assert schedule[0].start_time == "10:00"
        assert schedule[1].start_time == "09:00"

    def test_dump_uses_camel_case_aliases(self):
        """Entries serialize back to the model's field names."""
        schedule = extract_schedule(
            '[{"action": "移動", "location": "丸子へ", "startTime": "11:00", "endTime": "11:15"}]'
        )
        assert schedule[0].model_dump(by_alias=True) == {
            "action": "移動",
            "location": "丸子へ",
            "startTime": "11:00",
            "endTime": "11:15",
        }


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
