"""Tests for the print renderer (one unit on a reportlab canvas)."""

import io
import logging

import pytest
from PIL import Image
from pypdf import PdfReader
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from event_canvas.config.sizes import MM
from event_canvas.design.defaults import default_design
from event_canvas.design.document import DesignDocument
from event_canvas.design.elements import CanvasElement, CredentialDesign
from event_canvas.errors import AssetError
from event_canvas.renderer.assets import AssetLoader, load_image
from event_canvas.renderer.document_renderer import DocumentRenderer, wrap_text


class RecordingCanvas(canvas.Canvas):
    """Canvas that remembers the strings and images drawn on it."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.strings = []
        self.images = 0

    def drawCentredString(self, x, y, text, *args, **kwargs):
        self.strings.append(("center", x, y, text))
        return super().drawCentredString(x, y, text, *args, **kwargs)

    def drawString(self, x, y, text, *args, **kwargs):
        self.strings.append(("left", x, y, text))
        return super().drawString(x, y, text, *args, **kwargs)

    def drawRightString(self, x, y, text, *args, **kwargs):
        self.strings.append(("right", x, y, text))
        return super().drawRightString(x, y, text, *args, **kwargs)

    def drawImage(self, *args, **kwargs):
        self.images += 1
        return super().drawImage(*args, **kwargs)

    def texts(self):
        return [entry[3] for entry in self.strings]


class FailingQrLoader(AssetLoader):
    async def qr(self, payload):
        raise AssetError("encoder exploded")


def _canvas_for(design):
    width, height = design.surface_size
    return RecordingCanvas(io.BytesIO(), pagesize=(width * MM, height * MM), invariant=1)


def _single_text_design(content, width=80, **style):
    return CredentialDesign(
        orientation="landscape",
        elements=[
            CanvasElement(
                id="label", type="text", x=50, y=50, width=width, height=20,
                content=content, style={"font_size": 12, "text_align": "center", **style},
            )
        ],
    )


class TestWrapText:
    def test_short_text_single_line(self):
        assert wrap_text("Congreso X", "Helvetica", 12, 200) == ["Congreso X"]

    def test_wraps_when_too_wide(self):
        text = "Primer Congreso Internacional de Ingeniería y Ciencias Aplicadas"
        lines = wrap_text(text, "Helvetica", 12, 120)
        assert len(lines) > 1
        assert " ".join(lines) == text
        assert all(stringWidth(line, "Helvetica", 12) <= 120 for line in lines if " " in line)

    def test_empty(self):
        assert wrap_text("", "Helvetica", 12, 100) == []


class TestTextElements:
    async def test_event_placeholder_single_centred_line(self, subject, event_context):
        design = _single_text_design("{{evento}}")
        c = _canvas_for(design)
        await DocumentRenderer().render_unit(c, design, subject, event_context)
        assert len(c.strings) == 1
        kind, x, baseline, text = c.strings[0]
        assert (kind, text) == ("center", "Congreso X")
        assert x == pytest.approx(85.6 * MM / 2)
        # Baseline sits near the vertical centre of the unit
        assert abs(baseline - 53.98 * MM / 2) < 12

    async def test_long_text_wraps(self, subject, event_context):
        design = _single_text_design("Participación destacada en todas las sesiones plenarias del congreso", width=40)
        c = _canvas_for(design)
        await DocumentRenderer().render_unit(c, design, subject, event_context)
        assert len(c.strings) > 1
        baselines = [entry[2] for entry in c.strings]
        assert baselines == sorted(baselines, reverse=True)

    async def test_unmatched_placeholder_drawn_verbatim(self, subject, event_context):
        design = _single_text_design("{{desconocido}}")
        c = _canvas_for(design)
        await DocumentRenderer().render_unit(c, design, subject, event_context)
        assert c.texts() == ["{{desconocido}}"]

    async def test_alignment(self, subject, event_context):
        design = _single_text_design("Hola", text_align="left", padding=2)
        c = _canvas_for(design)
        await DocumentRenderer().render_unit(c, design, subject, event_context)
        kind, x, _, _ = c.strings[0]
        assert kind == "left"
        assert x == pytest.approx(0.1 * 85.6 * MM + 2)


class TestAssets:
    async def test_disabled_elements_not_drawn(self, credential_design, subject, event_context):
        c = _canvas_for(credential_design)
        await DocumentRenderer().render_unit(c, credential_design, subject, event_context)
        assert "Chile" not in c.texts()  # country is disabled by default
        assert "María Gómez" in c.texts()
        assert "Revisor" in c.texts()

    async def test_qr_drawn_as_image(self, credential_design, subject, event_context):
        c = _canvas_for(credential_design)
        await DocumentRenderer().render_unit(c, credential_design, subject, event_context)
        assert c.images == 1
        assert "QR" not in c.texts()

    async def test_qr_failure_degrades_to_placeholder(self, credential_design, subject, event_context, caplog):
        c = _canvas_for(credential_design)
        with caplog.at_level(logging.WARNING):
            await DocumentRenderer(FailingQrLoader()).render_unit(c, credential_design, subject, event_context)
        assert "QR" in c.texts()
        assert "María Gómez" in c.texts()
        assert "encoder exploded" in caplog.text

    async def test_photo_placeholder_without_photo(self, credential_design, subject, event_context):
        c = _canvas_for(credential_design)
        await DocumentRenderer().render_unit(c, credential_design, subject, event_context)
        assert "FOTO" in c.texts()

    async def test_photo_drawn_from_file(self, credential_design, subject, event_context, sample_image):
        c = _canvas_for(credential_design)
        with_photo = subject.model_copy(update={"photo": str(sample_image)})
        await DocumentRenderer().render_unit(c, credential_design, with_photo, event_context)
        assert "FOTO" not in c.texts()
        assert c.images == 2

    async def test_missing_logo_file_is_placeholder(self, credential_design, subject, event_context, caplog):
        document = DesignDocument(credential_design)
        document.apply_patch("logo", enabled=True, content="/nowhere/logo.png")
        c = _canvas_for(document.design)
        with caplog.at_level(logging.WARNING):
            await DocumentRenderer().render_unit(c, document.design, subject, event_context)
        assert "Logo" in c.texts()
        assert "logo" in caplog.text

    def test_oversized_image_is_asset_error(self, tmp_path, monkeypatch):
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 300_000)
        path = tmp_path / "huge.png"
        Image.new("RGB", (1000, 1000), "blue").save(path)
        with pytest.raises(AssetError, match="Unreadable image"):
            load_image(str(path))

    async def test_oversized_photo_is_placeholder(self, credential_design, subject, event_context, tmp_path, monkeypatch, caplog):
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 300_000)
        path = tmp_path / "huge.png"
        Image.new("RGB", (1000, 1000), "blue").save(path)
        c = _canvas_for(credential_design)
        with_photo = subject.model_copy(update={"photo": str(path)})
        with caplog.at_level(logging.WARNING):
            await DocumentRenderer().render_unit(c, credential_design, with_photo, event_context)
        assert "FOTO" in c.texts()
        assert "photo asset" in caplog.text


class TestSingleExport:
    async def test_single_pdf(self, certificate_design, subject, event_context):
        pdf = await DocumentRenderer().render_single(certificate_design, subject, event_context)
        reader = PdfReader(io.BytesIO(pdf))
        assert len(reader.pages) == 1
        text = reader.pages[0].extract_text()
        assert "María Gómez" in text
        assert "Congreso X" in text
        assert "Dra. Ana López" in text

    async def test_bit_identical(self, credential_design, subject, event_context):
        first = await DocumentRenderer().render_single(credential_design, subject, event_context)
        second = await DocumentRenderer().render_single(credential_design, subject, event_context)
        assert first == second

    @pytest.mark.parametrize("border_style", ["solid", "double", "dashed"])
    async def test_border_styles(self, subject, event_context, border_style):
        design = default_design("certificate", border_style=border_style)
        pdf = await DocumentRenderer().render_single(design, subject, event_context)
        assert pdf.startswith(b"%PDF")


def _pdf_text(pdf):
    return PdfReader(io.BytesIO(pdf)).pages[0].extract_text()


class TestCertificateText:
    async def test_design_fields_are_printed(self, subject, event_context):
        design = default_design(
            "certificate", certificate_type="reviewer", title="DIPLOMA", header_text="Por la presente"
        )
        text = _pdf_text(await DocumentRenderer().render_single(design, subject, event_context))
        assert "DIPLOMA" in text
        assert "Por la presente" in text
        assert "DE REVISOR CIENTÍFICO" in text
        assert "Revisor Científico" in text
        assert "DE PARTICIPACIÓN" not in text

    async def test_participation_defaults(self, certificate_design, subject, event_context):
        text = _pdf_text(await DocumentRenderer().render_single(certificate_design, subject, event_context))
        assert "CERTIFICADO" in text
        assert "DE PARTICIPACIÓN" in text
        assert "Se certifica que" in text
        assert "ha participado en el evento" in text
        assert "válido sin firma" in text

    async def test_presentation_prints_work(self, subject, event_context):
        design = default_design("certificate", certificate_type="presentation")
        presenter = subject.model_copy(update={"abstract_title": "Redes neuronales en salud", "category": "Póster"})
        text = _pdf_text(await DocumentRenderer().render_single(design, presenter, event_context))
        assert "DE PRESENTACIÓN" in text
        assert "ha presentado el trabajo titulado" in text
        assert "Redes neuronales en salud" in text
        assert "Modalidad: Póster" in text

    async def test_work_title_hidden_on_other_types(self, certificate_design, subject, event_context):
        presenter = subject.model_copy(update={"abstract_title": "Redes neuronales en salud", "category": "Póster"})
        text = _pdf_text(await DocumentRenderer().render_single(certificate_design, presenter, event_context))
        assert "Redes neuronales en salud" not in text
        assert "Modalidad" not in text

    async def test_custom_subtitle_and_footer(self, subject, event_context):
        design = default_design(
            "certificate",
            certificate_type="custom",
            subtitle="DE ASISTENCIA",
            body_template="asistió al taller de apertura",
            footer_text="Verifique este documento en el sitio del evento.",
        )
        text = _pdf_text(await DocumentRenderer().render_single(design, subject, event_context))
        assert "DE ASISTENCIA" in text
        assert "asistió al taller de apertura" in text
        assert "Verifique este documento en el sitio del evento." in text
