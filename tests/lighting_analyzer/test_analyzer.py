import numpy as np
import pytest
from PIL import Image

from plantlight.apps.lighting_analyzer.core import (
    analyze_lighting,
    analyze_overall,
    dominant_level,
    identify_zones,
    summarize_zones,
)
from plantlight.libs.vision.errors import (
    InvalidGridSize,
    InvalidRegion,
    UnsupportedPixelFormat,
)
from plantlight.libs.vision.levels import LightLevel, Thresholds


def test_black_image_is_all_low(black_rgb):
    result = analyze_lighting(black_rgb)

    assert result.overall_level is LightLevel.LOW
    assert result.overall_brightness == 0
    assert len(result.zones) == 9
    assert all(zone.level is LightLevel.LOW for zone in result.zones)
    assert result.summary[LightLevel.LOW] == pytest.approx(100.0)
    assert result.summary[LightLevel.MEDIUM] == 0.0
    assert result.summary[LightLevel.HIGH] == 0.0


def test_white_image_is_all_high(white_rgb):
    result = analyze_lighting(Image.fromarray(white_rgb), grid_size=2)

    assert result.overall_level is LightLevel.HIGH
    assert len(result.zones) == 4
    assert all(zone.percentage == pytest.approx(25.0) for zone in result.zones)
    assert result.summary[LightLevel.HIGH] == pytest.approx(100.0)


def test_overall_level_can_differ_from_dominant(mixed_rgb):
    result = analyze_lighting(mixed_rgb)

    # mean luma is 4/9 * 255 = 113.3 -> medium, yet no single zone is medium
    assert result.overall_brightness == 113
    assert result.overall_level is LightLevel.MEDIUM
    assert result.summary[LightLevel.MEDIUM] == 0.0
    assert result.summary[LightLevel.LOW] == pytest.approx(500 / 9)
    assert result.summary[LightLevel.HIGH] == pytest.approx(400 / 9)
    assert result.dominant_level is LightLevel.LOW


def test_zone_order_is_row_major(mixed_rgb):
    zones = identify_zones(mixed_rgb, 3)
    levels = [zone.level for zone in zones]
    assert levels == [LightLevel.LOW] * 5 + [LightLevel.HIGH] * 4
    assert zones[5].region.x == pytest.approx(2 / 3)
    assert zones[5].region.y == pytest.approx(1 / 3)


@pytest.mark.parametrize("n", [1, 2, 3, 4, 6])
def test_summary_totals_one_hundred(n):
    rng = np.random.default_rng(n)
    rgb = rng.integers(0, 256, size=(60, 80, 3), dtype=np.uint8)
    result = analyze_lighting(rgb, grid_size=n)

    assert len(result.zones) == n * n
    assert set(result.summary) == set(LightLevel)
    assert sum(result.summary.values()) == pytest.approx(100.0)
    assert all(value >= 0 for value in result.summary.values())


def test_zone_level_matches_its_brightness():
    rgb = np.zeros((30, 30, 3), np.uint8)
    rgb[:, 10:20] = 100
    rgb[:, 20:] = 200
    thresholds = Thresholds(low=85, high=170)
    zones = identify_zones(rgb, 3, thresholds)

    assert [zone.brightness for zone in zones[:3]] == [0, 100, 200]
    assert [zone.level for zone in zones[:3]] == [
        LightLevel.LOW,
        LightLevel.MEDIUM,
        LightLevel.HIGH,
    ]


def test_custom_thresholds_shift_classification():
    gray = np.full((20, 20), 100, np.uint8)
    level, value = analyze_overall(gray, Thresholds(low=20, high=90))
    assert value == 100
    assert level is LightLevel.HIGH


def test_repeated_analysis_is_identical(mixed_rgb):
    assert analyze_lighting(mixed_rgb) == analyze_lighting(mixed_rgb)


def test_summary_property_returns_fresh_mapping(black_rgb):
    result = analyze_lighting(black_rgb)
    result.summary[LightLevel.LOW] = -1
    assert result.summary[LightLevel.LOW] == pytest.approx(100.0)


def test_remainder_pixels_are_measured():
    # 10 px wide with 3 columns: the last column is 4 px and contains the only bright pixels
    gray = np.zeros((9, 10), np.uint8)
    gray[:, 9] = 255
    zones = identify_zones(gray, 3)
    assert zones[2].brightness == 64  # 255 / 4 = 63.75
    assert zones[0].brightness == 0


@pytest.mark.parametrize("n", [0, -2, 1.5, True])
def test_invalid_grid_size(black_rgb, n):
    with pytest.raises(InvalidGridSize):
        analyze_lighting(black_rgb, grid_size=n)


def test_grid_larger_than_image_is_rejected():
    with pytest.raises(InvalidRegion):
        analyze_lighting(np.zeros((2, 2), np.uint8), grid_size=3)


def test_unsupported_input_is_rejected():
    with pytest.raises(UnsupportedPixelFormat):
        analyze_lighting(np.zeros((10, 10, 3), np.float64))


def test_summarize_zones_empty():
    assert summarize_zones([]) == {level: 0.0 for level in LightLevel}


@pytest.mark.parametrize(
    "summary, expected",
    [
        ({LightLevel.LOW: 10.0, LightLevel.MEDIUM: 60.0, LightLevel.HIGH: 30.0}, LightLevel.MEDIUM),
        ({LightLevel.LOW: 50.0, LightLevel.MEDIUM: 0.0, LightLevel.HIGH: 50.0}, LightLevel.LOW),
        ({LightLevel.LOW: 0.0, LightLevel.MEDIUM: 50.0, LightLevel.HIGH: 50.0}, LightLevel.MEDIUM),
        ({LightLevel.HIGH: 100.0}, LightLevel.HIGH),
    ],
)
def test_dominant_level(summary, expected):
    assert dominant_level(summary) is expected


def test_to_dict_is_json_ready(mixed_rgb):
    payload = analyze_lighting(mixed_rgb, grid_size=3).to_dict()

    assert payload["overall_level"] == "medium"
    assert payload["overall_label"] == "Medium Light"
    assert payload["dominant_level"] == "low"
    assert payload["grid_size"] == 3
    assert payload["width"] == 90 and payload["height"] == 90
    assert set(payload["summary"]) == {"low", "medium", "high"}
    assert len(payload["zones"]) == 9
    assert payload["zones"][0]["region"] == {
        "x": 0.0,
        "y": 0.0,
        "w": pytest.approx(1 / 3),
        "h": pytest.approx(1 / 3),
    }
