import io
import random

import pytest
from PIL import Image


def make_image_bytes(
    image_format: str = "PNG",
    size: tuple[int, int] = (32, 32),
    seed: int = 7,
) -> bytes:
    """Generate an image filled with deterministic noise so it does not compress away."""
    rng = random.Random(seed)
    image = Image.new("RGB", size)
    image.putdata(
        [(rng.randrange(256), rng.randrange(256), rng.randrange(256)) for _ in range(size[0] * size[1])]
    )
    buf = io.BytesIO()
    image.save(buf, format=image_format)
    return buf.getvalue()


@pytest.fixture()
def png_bytes() -> bytes:
    """A 32x32 noise PNG, a few KB in size."""
    return make_image_bytes("PNG", (32, 32))


@pytest.fixture()
def jpeg_bytes() -> bytes:
    return make_image_bytes("JPEG", (40, 24))


@pytest.fixture()
def not_an_image_bytes() -> bytes:
    return b"this is plain text pretending to be a picture"
