"""
test_adventure_service.py — Unit tests for adventure row building and reshaping

Called by: pytest
Depends on: motion_api/services/adventure_service.py
"""

import pytest

from motion_api.services.adventure_service import (
    all_steps_completed,
    attach_profiles,
    build_community_row,
    build_photo_rows,
    build_saved_row,
    format_cost,
    format_duration,
    merge_user_adventures,
    month_window,
    reorder_steps,
    to_calendar_event,
    to_detail_view,
    toggle_step,
)

NOW = "2026-01-15T12:00:00+00:00"


class TestDetailView:
    def test_formats_duration_and_cost(self):
        view = to_detail_view({"id": "a1", "duration_hours": 3, "estimated_cost": 75})
        assert view["estimatedDuration"] == "3 hours"
        assert view["estimatedCost"] == "$75"

    def test_defaults_when_missing(self):
        view = to_detail_view({"id": "a1"})
        assert view["estimatedDuration"] == "4 hours"
        assert view["estimatedCost"] == "$50"
        assert view["steps"] == []
        assert view["isCompleted"] is False
        assert view["isFavorite"] is False

    def test_whole_floats_render_without_decimal(self):
        assert format_duration(2.0) == "2 hours"
        assert format_duration(2.5) == "2.5 hours"
        assert format_cost(40.0) == "$40"

    def test_scheduled_date_maps_to_scheduled_for(self):
        view = to_detail_view({"id": 7, "scheduled_date": "2026-02-01"})
        assert view["scheduledFor"] == "2026-02-01"


class TestReorderSteps:
    STEPS = [
        {"title": "C", "step_order": 3},
        {"title": "A", "step_order": 1},
        {"title": "B", "step_order": 2},
    ]

    def test_swaps_orders_of_sorted_positions(self):
        result = reorder_steps(self.STEPS, 0, 2)
        by_title = {s["title"]: s["step_order"] for s in result}
        assert by_title == {"A": 3, "B": 2, "C": 1}

    def test_result_is_sorted_before_swap(self):
        result = reorder_steps(self.STEPS, 0, 1)
        assert [s["title"] for s in result] == ["A", "B", "C"]

    def test_input_is_not_mutated(self):
        steps = [dict(s) for s in self.STEPS]
        reorder_steps(steps, 0, 2)
        assert steps == self.STEPS

    def test_same_index_is_noop(self):
        result = reorder_steps(self.STEPS, 1, 1)
        assert [s["step_order"] for s in result] == [1, 2, 3]

    @pytest.mark.parametrize("steps", [[], None, "not-a-list"])
    def test_no_steps(self, steps):
        with pytest.raises(ValueError, match="No steps found"):
            reorder_steps(steps, 0, 0)

    @pytest.mark.parametrize("from_index,to_index", [(-1, 0), (0, 3), (5, 1)])
    def test_out_of_range(self, from_index, to_index):
        with pytest.raises(ValueError, match="Invalid step indices"):
            reorder_steps(self.STEPS, from_index, to_index)


class TestSavedRow:
    def test_defaults(self):
        row = build_saved_row("u1", {"title": "Hike"}, None, NOW)
        assert row["budget"] == "moderate"
        assert row["group_size"] == 1
        assert row["radius"] == 10
        assert row["category"] == "Adventure"
        assert row["is_scheduled"] is False
        assert row["scheduled_for"] is None
        assert row["created_at"] == row["updated_at"] == NOW

    def test_scheduled(self):
        row = build_saved_row("u1", {"title": "Hike"}, "2026-03-01", NOW)
        assert row["is_scheduled"] is True
        assert row["scheduled_for"] == "2026-03-01"


class TestUserAdventures:
    def test_merge_marks_shared_as_completed(self):
        merged = merge_user_adventures(
            [{"id": "p1", "scheduled_date": "2026-04-01"}],
            [{"id": "c1", "shared_date": NOW}],
        )
        personal, shared = merged
        assert personal["scheduled_for"] == "2026-04-01"
        assert personal["is_favorite"] is False
        assert personal["step_completions"] == {}
        assert shared["is_shared"] is True
        assert shared["is_completed"] is True
        assert shared["created_at"] == NOW

    def test_attach_profiles(self):
        result = attach_profiles(
            [{"id": "c1", "user_id": "u1"}, {"id": "c2", "user_id": "u9"}],
            [{"id": "u1", "display_name": "Sam"}],
        )
        assert result[0]["profiles"]["display_name"] == "Sam"
        assert result[1]["profiles"] is None


class TestCommunityRows:
    def test_title_fallback(self):
        row = build_community_row({}, "u1", True, NOW)
        assert row["title"] == "Shared Adventure"
        assert row["is_public"] is True
        assert row["shared_date"] == NOW

    def test_location_from_filters(self):
        row = build_community_row({"filters_used": {"location": "Austin"}}, "u1", False, NOW)
        assert row["location"] == "Austin"

    def test_photo_rows(self):
        rows = build_photo_rows(
            "c1",
            [{"photo_url": "https://img/1.jpg", "step_index": 2}],
            [{"url": "https://img/user.jpg"}],
            NOW,
        )
        copied, uploaded = rows
        assert copied["url"] == "https://img/1.jpg"
        assert copied["source"] == "google"
        assert copied["step_index"] == 2
        assert uploaded["source"] == "user_uploaded"
        assert uploaded["photo_order"] == 99
        assert {r["adventure_id"] for r in rows} == {"c1"}


class TestStepProgress:
    def test_no_steps_counts_as_complete(self):
        assert all_steps_completed([]) is True
        assert all_steps_completed(None) is True

    def test_plain_string_steps_are_never_complete(self):
        assert all_steps_completed(["Walk"]) is False

    def test_toggle_matches_numeric_ids_by_string(self):
        adventure = {"steps": [{"id": 1, "completed": False}], "steps_completed": []}
        changes, all_done = toggle_step(adventure, "1", True, NOW)
        assert changes["steps"] == [{"id": 1, "completed": True}]
        assert changes["steps_completed"] == ["1"]
        assert all_done is True
        assert changes["completed_at"] == NOW

    def test_toggle_does_not_duplicate_completed_id(self):
        adventure = {
            "steps": [{"id": "a", "completed": True}, {"id": "b"}],
            "steps_completed": ["a"],
            "is_completed": False,
        }
        changes, all_done = toggle_step(adventure, "a", True, NOW)
        assert changes["steps_completed"] == ["a"]
        assert all_done is False
        assert "is_completed" not in changes

    def test_toggle_leaves_input_untouched(self):
        steps = [{"id": "a", "completed": False}]
        toggle_step({"steps": steps}, "a", True, NOW)
        assert steps == [{"id": "a", "completed": False}]


class TestCalendar:
    @pytest.mark.parametrize("month,year,expected", [
        ("2", "2024", ("2024-02-01", "2024-02-29")),
        ("2", "2026", ("2026-02-01", "2026-02-28")),
        (12, 2026, ("2026-12-01", "2026-12-31")),
    ])
    def test_month_window(self, month, year, expected):
        assert month_window(month, year) == expected

    @pytest.mark.parametrize("month,year", [("0", "2026"), ("13", "2026"), ("June", "2026"), ("6", "")])
    def test_month_window_rejects(self, month, year):
        with pytest.raises(ValueError):
            month_window(month, year)

    def test_calendar_event_shape(self):
        event = to_calendar_event({
            "id": "a1", "title": "Picnic", "scheduled_date": "2026-05-01",
            "scheduled_start_time": "12:00", "location": "Park", "duration": 2,
            "is_completed": False, "steps": [],
        })
        assert event == {
            "id": "a1", "title": "Picnic", "date": "2026-05-01", "startTime": "12:00",
            "location": "Park", "duration": 2, "is_completed": False, "steps": [],
            "type": "scheduled",
        }
