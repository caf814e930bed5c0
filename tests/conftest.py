import io
from datetime import date

import pytest
from PIL import Image

from event_canvas.design.defaults import default_design
from event_canvas.design.subjects import EventContext, Subject
from event_canvas.storage.design_store import DesignStore, MemoryStore


# Common test fixtures
@pytest.fixture
def credential_design():
    return default_design("credential")


@pytest.fixture
def certificate_design():
    return default_design("certificate", signer_name="Dra. Ana López", signer_title="Presidenta")


@pytest.fixture
def event_context():
    return EventContext(event_name="Congreso X", start_date=date(2025, 3, 3), end_date=date(2025, 3, 5))


@pytest.fixture
def subject():
    return Subject(
        id="a1b2c3d4e5f6",
        name="María Gómez",
        email="maria@example.com",
        role="REVIEWER",
        affiliation="Universidad de Chile",
        country="Chile",
    )


@pytest.fixture
def make_subjects():
    """Factory for n distinct subject records (plain dicts)."""
    def _make(n: int):
        return [
            {
                "id": f"user{i:04d}",
                "name": f"Participante {i}",
                "email": f"p{i}@example.com",
                "role": "USER",
                "affiliation": "Universidad",
                "country": "Perú",
            }
            for i in range(n)
        ]
    return _make


@pytest.fixture
def memory_store():
    return DesignStore(MemoryStore())


@pytest.fixture
def sample_image(tmp_path):
    """Create a simple test image."""
    img = Image.new("RGB", (120, 60), color="red")
    img_path = tmp_path / "logo.png"
    img.save(img_path)
    return img_path


@pytest.fixture
def png_bytes():
    buffer = io.BytesIO()
    Image.new("RGBA", (40, 40), (0, 128, 255, 255)).save(buffer, format="PNG")
    return buffer.getvalue()
