import pytest

from app.models.enums import Scene, SubtaskType, Weather
from app.services.import_mappings import (
    augment_labels,
    map_day_time,
    map_scene,
    map_subtask_type,
    map_weather,
    normalize_target_car,
    strip_dataco_prefix,
)


class TestDatacoPrefix:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("DATACO-1234", "1234"),
            ("dataco-1234", "1234"),
            ("1234", "1234"),
            (5678, "5678"),
            ("XDATACO-1", "XDATACO-1"),
        ],
    )
    def test_strips_leading_prefix_only(self, value, expected):
        assert strip_dataco_prefix(value) == expected


class TestWeather:
    @pytest.mark.parametrize("value", ["Clear", "Fog", "Overcast", "Rain", "Snow", "Mixed"])
    def test_known_values_pass_through(self, value):
        assert map_weather(value) == Weather(value)

    @pytest.mark.parametrize("value", ["Unknown", "unknown", "UNKNOWN"])
    def test_unknown_maps_to_mixed(self, value):
        assert map_weather(value) == Weather.MIXED

    @pytest.mark.parametrize("value", ["clear", "Sunny", "", None, 3])
    def test_unrecognized_defaults_to_clear(self, value):
        assert map_weather(value) == Weather.CLEAR

    def test_idempotent(self):
        for value in ["Rain", "unknown", "Hail"]:
            once = map_weather(value)
            assert map_weather(once.value) == once


class TestScene:
    def test_direct_lookup(self):
        assert map_scene("Test Track") == Scene.TEST_TRACK
        assert map_scene("Sub-Urban") == Scene.SUB_URBAN

    def test_compound_prefers_table_order(self):
        assert map_scene("Rural/Sub-Urban") == Scene.RURAL
        assert map_scene("Sub-Urban/Rural") == Scene.RURAL
        assert map_scene("Urban / Highway") == Scene.HIGHWAY

    def test_compound_with_one_known_segment(self):
        assert map_scene("Foo/Urban") == Scene.URBAN

    @pytest.mark.parametrize("value", ["Foo/Bar", "Desert", "", None])
    def test_unrecognized_defaults_to_mixed(self, value):
        assert map_scene(value) == Scene.MIXED


class TestDayTime:
    def test_mixed_expands_to_all(self):
        assert map_day_time("Mixed") == ["day", "night", "dusk", "dawn"]

    def test_sequence_passes_through(self):
        assert map_day_time(["day", "night"]) == ["day", "night"]

    def test_single_token(self):
        assert map_day_time("Dusk") == ["dusk"]

    @pytest.mark.parametrize("value", ["Noon", "day", None])
    def test_unrecognized_is_empty(self, value):
        assert map_day_time(value) == []


class TestSubtaskType:
    def test_calibration_forces_events(self):
        assert map_subtask_type("Hours", calibration=True) == SubtaskType.EVENTS

    def test_sub_task_is_events(self):
        assert map_subtask_type("Sub Task", calibration=False) == SubtaskType.EVENTS

    def test_lowercase_mapping(self):
        assert map_subtask_type("Hours", calibration=False) == SubtaskType.HOURS
        assert map_subtask_type("Loops", calibration=False) == SubtaskType.LOOPS
        assert map_subtask_type("Events", calibration=False) == SubtaskType.EVENTS
        assert map_subtask_type("Other", calibration=False) == SubtaskType.EVENTS


class TestLabels:
    def test_non_calibration_keeps_labels(self):
        assert augment_labels(["a"], "GT approval", calibration=False) == ["a"]

    def test_calibration_adds_tags_without_duplicates(self):
        labels = augment_labels(["stability"], "Front camera", calibration=True)
        assert labels == ["stability", "calibration"]

    @pytest.mark.parametrize(
        "summary, label",
        [
            ("Setup Approval - left", "setup-approval"),
            ("calibration approval", "calibration-approval"),
            ("Run DI validations", "di-validation"),
            ("GT Approval", "gt-approval"),
            ("C2L approval pending", "c2l-approval"),
        ],
    )
    def test_derived_approval_label(self, summary, label):
        assert augment_labels([], summary, calibration=True) == ["calibration", "stability", label]

    def test_first_substring_wins(self):
        labels = augment_labels([], "GT approval after setup approval", calibration=True)
        assert labels[-1] == "setup-approval"
        assert "gt-approval" not in labels

    def test_input_is_not_mutated(self):
        original = ["x"]
        augment_labels(original, "gt approval", calibration=True)
        assert original == ["x"]


def test_target_car_normalized_to_list():
    assert normalize_target_car("wstn") == ["wstn"]
    assert normalize_target_car(["a", "b"]) == ["a", "b"]
    assert normalize_target_car(None) == []
