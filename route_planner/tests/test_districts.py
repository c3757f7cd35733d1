"""
Unit tests for the district catalog and selection helpers.
"""

import pytest
from pydantic import ValidationError

from route_planner.planner.districts import (
    UEDA_DISTRICTS_GROUPED,
    all_districts,
    is_known_district,
    select_all,
    toggle_district,
    is_all_selected,
)
from route_planner.planner.schemas import PlanningRequest


class TestCatalog:
    """Tests for the catalog contents."""

    def test_seven_areas(self):
        """The catalog has the seven Ueda areas, in display order."""
        areas = list(UEDA_DISTRICTS_GROUPED)
        assert len(areas) == 7
        assert areas[0] == "上田地域（旧上田市中心部）"
        assert areas[-1] == "武石地域"

    def test_flat_list_in_catalog_order(self):
        """all_districts flattens areas in order."""
        flat = all_districts()
        assert flat[0] == "大手"
        assert flat[-1] == "権現"
        assert len(flat) == sum(len(d) for d in UEDA_DISTRICTS_GROUPED.values())

    def test_is_known_district(self):
        """Membership is checked against every area."""
        assert is_known_district("菅平") is True
        assert is_known_district("渋谷") is False


class TestSelectionHelpers:
    """Tests for select-all and toggle helpers."""

    def test_select_all_checked(self):
        """Checking select-all selects the full catalog."""
        assert select_all(True) == all_districts()

    def test_select_all_unchecked(self):
        """Unchecking select-all clears the selection."""
        assert select_all(False) == []

    def test_toggle_adds_and_removes(self):
        """Toggling appends new districts and removes selected ones."""
        selected = toggle_district([], "大手")
        selected = toggle_district(selected, "真田")
        assert selected == ["大手", "真田"]

        selected = toggle_district(selected, "大手")
        assert selected == ["真田"]

    def test_is_all_selected(self):
        """Only the complete catalog counts as all selected."""
        assert is_all_selected(all_districts()) is True
        assert is_all_selected(all_districts()[1:]) is False
        assert is_all_selected([]) is False


class TestPlanningRequest:
    """Tests for PlanningRequest validation."""

    def test_defaults(self):
        """Defaults match the form's initial values."""
        request = PlanningRequest()
        assert request.districts == []
        assert request.total_speeches == "8"
        assert request.start_time == "09:00"
        assert request.end_time == "17:00"

    def test_duplicates_removed_preserving_order(self):
        """Duplicate districts are dropped, first occurrence kept."""
        request = PlanningRequest(districts=["中央", "大手", "中央"])
        assert request.districts == ["中央", "大手"]

    def test_unknown_district_rejected(self):
        """Districts must come from the catalog."""
        with pytest.raises(ValidationError):
            PlanningRequest(districts=["渋谷"])

    def test_speech_count_forms(self):
        """Positive integers and numeric strings are accepted."""
        assert PlanningRequest(totalSpeeches=5).total_speeches == 5
        assert PlanningRequest(totalSpeeches=" 12 ").total_speeches == "12"

    @pytest.mark.parametrize("value", [0, -1, "0", "abc", ""])
    def test_invalid_speech_count_rejected(self, value):
        """Zero, negative and non-numeric counts are rejected."""
        with pytest.raises(ValidationError):
            PlanningRequest(totalSpeeches=value)

    def test_time_format_enforced(self):
        """Times must be HH:MM."""
        with pytest.raises(ValidationError):
            PlanningRequest(startTime="9am")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
