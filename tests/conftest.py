import pytest
import sys
from pathlib import Path
from PIL import Image

# Add src to sys.path so we can import imageless
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())


# Common test fixtures
@pytest.fixture
def square_image():
    """100x100 RGB canvas."""
    return Image.new("RGB", (100, 100), color=(120, 60, 200))


@pytest.fixture
def wide_image():
    """200x100 RGB canvas, wider than tall."""
    return Image.new("RGB", (200, 100), color=(10, 20, 30))


@pytest.fixture
def gradient_image():
    """64x32 RGB image with distinct pixel values for comparisons."""
    img = Image.new("RGB", (64, 32))
    img.putdata([((x * 4) % 256, (y * 8) % 256, (x + y) % 256) for y in range(32) for x in range(64)])
    return img


@pytest.fixture
def sample_image_path(tmp_path: Path, gradient_image):
    """Gradient image saved as PNG."""
    img_path = tmp_path / "sample.png"
    gradient_image.save(img_path)
    return img_path
