"""Tests for percentage-space geometry, device profiles and colour resolution."""

import pytest

from event_canvas.config.sizes import oriented, page_size
from event_canvas.design.geometry import (
    Box,
    DeviceProfile,
    clamp,
    element_box,
    fit_surface,
    percent_to_abs,
    scale_font,
)
from event_canvas.design.style import Palette, hex_to_rgb, pdf_font_name, resolve_color


class TestResolveColor:
    """Symbolic colours always resolve to a literal hex colour."""

    palette = Palette(primary="#123456", secondary="#ABCDEF", background="#ffffff", text="#1e293b")

    def test_roles(self):
        assert resolve_color("primary", self.palette) == "#123456"
        assert resolve_color("secondary", self.palette) == "#abcdef"
        assert resolve_color("white", self.palette) == "#ffffff"
        assert resolve_color("muted", self.palette) == "#94a3b8"

    def test_literal_hex_passes_through(self):
        assert resolve_color("#FF0000", self.palette) == "#ff0000"
        assert resolve_color("#abc", self.palette) == "#abc"

    @pytest.mark.parametrize("symbol", [None, "", "tertiary", "#12345", "red"])
    def test_unknown_falls_back_to_text_colour(self, symbol):
        assert resolve_color(symbol, self.palette) == "#1e293b"

    def test_malformed_palette_uses_builtin_fallback(self):
        broken = Palette(primary="blue", text="not-a-colour")
        assert resolve_color("primary", broken) == "#1e40af"
        assert resolve_color("whatever", broken) == "#1e40af"

    def test_hex_to_rgb(self):
        assert hex_to_rgb("#ffffff") == (255, 255, 255)
        assert hex_to_rgb("#0f0") == (0, 255, 0)
        assert hex_to_rgb("garbage") == (30, 64, 175)

    def test_pdf_font_faces(self):
        assert pdf_font_name(None, None) == "Helvetica"
        assert pdf_font_name("bold", None) == "Helvetica-Bold"
        assert pdf_font_name("normal", "italic") == "Helvetica-Oblique"
        assert pdf_font_name("bold", "italic") == "Helvetica-BoldOblique"


class TestGeometry:
    def test_percent_to_abs(self):
        assert percent_to_abs(50, 200) == 100
        assert percent_to_abs(0, 200) == 0
        assert percent_to_abs(100, 85.6) == pytest.approx(85.6)

    def test_element_box_is_centre_positioned(self):
        box = element_box(50, 50, 20, 10, 500, 600)
        assert box == Box(left=200, top=270, width=100, height=60)
        assert box.center == (250, 300)

    def test_full_width_bar_spans_surface(self):
        box = element_box(50, 6, 100, 12, 297, 210)
        assert box.left == pytest.approx(0)
        assert box.right == pytest.approx(297)
        assert box.top == pytest.approx(0)

    def test_box_contains(self):
        box = Box(10, 10, 20, 20)
        assert box.contains(10, 10)
        assert box.contains(30, 30)
        assert not box.contains(31, 15)

    def test_clamp(self):
        assert clamp(-5, 0, 100) == 0
        assert clamp(150, 0, 100) == 100
        assert clamp(42, 0, 100) == 42


class TestDeviceProfiles:
    def test_font_scale(self):
        assert scale_font(10, DeviceProfile.DESKTOP) == pytest.approx(8.0)
        assert scale_font(10, DeviceProfile.MOBILE) == pytest.approx(6.0)
        assert scale_font(20, "mobile") == pytest.approx(12.0)

    def test_portrait_credential_on_desktop(self):
        assert fit_surface(53.98, 85.6, DeviceProfile.DESKTOP, landscape=False) == (378, 600)

    def test_landscape_certificate_on_desktop(self):
        assert fit_surface(297, 210, DeviceProfile.DESKTOP, landscape=True) == (500, 354)

    def test_landscape_on_mobile_uses_landscape_cap(self):
        assert fit_surface(297, 210, DeviceProfile.MOBILE, landscape=True) == (184, 130)

    def test_portrait_on_mobile(self):
        width, height = fit_surface(53.98, 85.6, DeviceProfile.MOBILE, landscape=False)
        assert width <= 200 and height <= 280
        assert height == 280

    def test_aspect_ratio_preserved(self):
        width, height = fit_surface(297, 210, DeviceProfile.DESKTOP, landscape=True)
        assert width / height == pytest.approx(297 / 210, rel=0.01)


class TestSizes:
    def test_oriented(self):
        assert oriented(85.6, 53.98, "portrait") == (53.98, 85.6)
        assert oriented(85.6, 53.98, "landscape") == (85.6, 53.98)

    def test_page_size(self):
        assert page_size("a4") == (210.0, 297.0)
        assert page_size("a4", "landscape") == (297.0, 210.0)

    def test_unknown_page_key(self):
        with pytest.raises(ValueError, match="Unknown page key"):
            page_size("a0")
