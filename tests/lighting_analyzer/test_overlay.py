import numpy as np
import pytest
from PIL import Image

from plantlight.apps.lighting_analyzer.core import (
    LEVEL_COLORS,
    analyze_lighting,
    identify_zones,
    render_overlay,
    save_overlay,
)
from plantlight.libs.vision.levels import LightLevel


def test_overlay_keeps_dimensions_and_source(mixed_rgb):
    source = Image.fromarray(mixed_rgb)
    before = source.tobytes()
    zones = identify_zones(source)

    overlay = render_overlay(source, zones)

    assert overlay.size == source.size
    assert overlay.mode == "RGB"
    assert source.tobytes() == before
    assert overlay is not source


def test_overlay_tints_zone_corners(black_rgb):
    zones = identify_zones(black_rgb, 3)
    overlay = np.asarray(render_overlay(black_rgb, zones, alpha=0.3))

    expected = [channel * 77 / 255 for channel in LEVEL_COLORS[LightLevel.LOW]]
    assert overlay[1, 1].tolist() == pytest.approx(expected, abs=1)
    assert overlay[88, 88].tolist() == pytest.approx(expected, abs=1)


def test_opaque_overlay_uses_level_colours(mixed_rgb):
    result = analyze_lighting(mixed_rgb)
    overlay = np.asarray(render_overlay(mixed_rgb, result.zones, alpha=1.0))

    assert tuple(overlay[2, 2]) == LEVEL_COLORS[LightLevel.LOW]
    assert tuple(overlay[87, 87]) == LEVEL_COLORS[LightLevel.HIGH]


def test_zero_alpha_leaves_zone_corners_untouched(white_rgb):
    zones = identify_zones(white_rgb, 3)
    overlay = np.asarray(render_overlay(white_rgb, zones, alpha=0.0))
    assert tuple(overlay[0, 0]) == (255, 255, 255)
    assert tuple(overlay[59, 0]) == (255, 255, 255)


def test_labels_are_drawn_at_zone_centres(black_rgb):
    zones = identify_zones(black_rgb, 1)
    overlay = np.asarray(render_overlay(black_rgb, zones, alpha=0.0))
    centre = overlay[35:55, 10:80]
    assert centre.max() > 200
    assert overlay[0:5, 0:5].max() == 0


def test_overlay_is_deterministic(mixed_rgb):
    zones = identify_zones(mixed_rgb)
    first = render_overlay(mixed_rgb, zones).tobytes()
    second = render_overlay(mixed_rgb, zones).tobytes()
    assert first == second


def test_translucent_sources_stay_translucent():
    rgba = Image.new("RGBA", (40, 40), (0, 0, 0, 128))
    overlay = render_overlay(rgba, identify_zones(rgba, 2))
    assert overlay.mode == "RGBA"
    assert overlay.size == (40, 40)


@pytest.mark.parametrize("alpha", [-0.1, 1.5])
def test_invalid_alpha(black_rgb, alpha):
    with pytest.raises(ValueError):
        render_overlay(black_rgb, identify_zones(black_rgb), alpha=alpha)


def test_save_overlay_creates_parent_dirs(tmp_path, mixed_rgb):
    overlay = render_overlay(mixed_rgb, identify_zones(mixed_rgb))
    target = save_overlay(overlay, tmp_path / "out" / "nested" / "overlay.png")

    assert target.exists()
    with Image.open(target) as reloaded:
        assert reloaded.format == "PNG"
        assert reloaded.size == (90, 90)
