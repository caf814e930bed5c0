"""Tests for the raster preview renderer."""

import base64

import pytest

from event_canvas.design.document import DesignDocument
from event_canvas.design.geometry import DeviceProfile
from event_canvas.design.subjects import SAMPLE_SUBJECT, subject_variables
from event_canvas.interaction.engine import InteractionEngine
from event_canvas.interaction.pointer import PointerSurface
from event_canvas.renderer.preview_renderer import PreviewRenderer


class TestSurface:
    def test_credential_desktop_size(self, credential_design):
        frame = PreviewRenderer(DeviceProfile.DESKTOP).render(credential_design)
        assert frame.size == (378, 600)

    def test_certificate_mobile_size(self, certificate_design):
        frame = PreviewRenderer(DeviceProfile.MOBILE).render(certificate_design)
        assert frame.size == (184, 130)

    def test_png_output(self, credential_design):
        png = PreviewRenderer().render(credential_design).to_png()
        assert png.startswith(b"\x89PNG")


class TestElements:
    def test_disabled_elements_absent(self, certificate_design):
        frame = PreviewRenderer().render(certificate_design)
        assert "logo-header" not in frame.boxes
        assert "qr-code" not in frame.boxes
        assert "participant-name" in frame.boxes

    def test_credential_flags_respected(self, credential_design):
        design = credential_design.model_copy(update={"show_qr": False})
        frame = PreviewRenderer().render(design)
        assert "qr-code" not in frame.boxes

    def test_render_is_deterministic(self, certificate_design, event_context):
        variables = subject_variables(SAMPLE_SUBJECT, event_context, certificate_design)
        renderer = PreviewRenderer()
        assert renderer.render(certificate_design, variables).to_png() == renderer.render(certificate_design, variables).to_png()

    def test_variables_change_output(self, credential_design):
        renderer = PreviewRenderer()
        one = renderer.render(credential_design, {"nombre": "Ana"}).to_png()
        two = renderer.render(credential_design, {"nombre": "Bartolomé Rodríguez"}).to_png()
        assert one != two

    def test_background_colour(self, credential_design):
        frame = PreviewRenderer(interactive=False).render(credential_design)
        assert frame.image.getpixel((1, 300)) == (255, 255, 255)

    def test_logo_image_drawn(self, credential_design, png_bytes):
        document = DesignDocument(credential_design)
        data_uri = "data:image/png;base64," + base64.b64encode(png_bytes).decode("ascii")
        document.apply_patch("logo", enabled=True, content=data_uri)
        frame = PreviewRenderer(interactive=False).render(document.design)
        assert frame.image.getpixel((321, 48)) == (0, 128, 255)

    def test_broken_logo_falls_back_to_placeholder(self, credential_design):
        document = DesignDocument(credential_design)
        document.apply_patch("logo", enabled=True, content="/does/not/exist.png")
        frame = PreviewRenderer().render(document.design)
        assert "logo" in frame.boxes


class TestHitTesting:
    def test_element_hit(self, credential_design):
        frame = PreviewRenderer().render(credential_design)
        cx, cy = frame.boxes["photo"].center
        target = frame.hit_test(cx, cy)
        assert (target.kind, target.element_id) == ("element", "photo")

    def test_empty_canvas_hit(self, credential_design):
        frame = PreviewRenderer().render(credential_design)
        assert frame.hit_test(1, 300).kind == "canvas"

    def test_topmost_element_wins(self, credential_design):
        frame = PreviewRenderer().render(credential_design)
        # Event name text sits on top of the header bar
        cx, cy = frame.boxes["event-name"].center
        assert frame.hit_test(cx, cy).element_id == "event-name"

    def test_selected_element_has_resize_handle(self, credential_design):
        frame = PreviewRenderer().render(credential_design, selected_id="photo")
        handle = frame.handles["photo"]
        target = frame.hit_test(*handle.center)
        assert (target.kind, target.element_id) == ("resize", "photo")
        assert frame.draw_order[-1] == "photo"

    def test_locked_element_has_no_handle(self, credential_design):
        document = DesignDocument(credential_design)
        document.toggle_locked("photo")
        frame = PreviewRenderer().render(document.design, selected_id="photo")
        assert frame.handles == {}

    def test_static_preview_has_no_handles(self, credential_design):
        frame = PreviewRenderer(interactive=False).render(credential_design, selected_id="photo")
        assert frame.handles == {}


class TestEngineIntegration:
    def test_drag_via_hit_test(self, credential_design):
        renderer = PreviewRenderer()
        document = DesignDocument(credential_design)
        frame = renderer.render(document.design)
        engine = InteractionEngine(document, PointerSurface(*frame.size))

        cx, cy = frame.boxes["photo"].center
        engine.press(frame.hit_test(cx, cy), cx, cy)
        engine.surface.move(cx + frame.size[0] * 0.1, cy)

        during = renderer.render_engine_state(engine)
        assert during.transition_suppressed == {"photo"}
        assert not during.outline_transition("photo")

        engine.surface.release(cx, cy)
        after = renderer.render_engine_state(engine)
        assert after.transition_suppressed == set()
        assert document.get("photo").x == pytest.approx(60)
