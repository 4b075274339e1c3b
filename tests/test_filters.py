"""
Tests for imageless.pipeline.filters

Test Coverage:
- Grayscale: mode handling, alpha preservation, idempotence
- AdjustBrightness: clamping, alpha untouched, amount validation
- Blur, Invert, Unsharpen
"""
import numpy as np
import pytest
from PIL import Image

from imageless.pipeline.filters import (
    AdjustBrightness,
    Blur,
    BrightnessDirection,
    Grayscale,
    Invert,
    Unsharpen,
    working_copy,
)


def test_grayscale_rgb_to_l(gradient_image):
    result = Grayscale().apply(gradient_image)

    assert result.mode == "L"
    assert result.size == gradient_image.size


def test_grayscale_keeps_alpha():
    img = Image.new("RGBA", (4, 4), color=(200, 100, 50, 77))

    result = Grayscale().apply(img)

    assert result.mode == "LA"
    assert result.getpixel((0, 0))[1] == 77


def test_grayscale_is_idempotent(gradient_image):
    once = Grayscale().apply(gradient_image)
    twice = Grayscale().apply(once)

    assert twice.mode == once.mode
    assert twice.tobytes() == once.tobytes()


def test_grayscale_returns_new_image():
    img = Image.new("L", (4, 4), color=9)

    result = Grayscale().apply(img)

    assert result is not img
    assert result.tobytes() == img.tobytes()


def test_grayscale_converts_palette_image():
    img = Image.new("RGB", (4, 4), color=(255, 0, 0)).convert("P")

    assert Grayscale().apply(img).mode == "L"


def test_working_copy_keeps_supported_modes():
    img = Image.new("RGB", (2, 2))
    assert working_copy(img) is img


def test_brighten_adds_and_clamps():
    img = Image.new("RGB", (2, 2), color=(10, 100, 250))

    result = AdjustBrightness.brighten(20).apply(img)

    assert result.getpixel((0, 0)) == (30, 120, 255)


def test_darken_subtracts_and_clamps():
    img = Image.new("RGB", (2, 2), color=(10, 100, 250))

    result = AdjustBrightness.darken(20).apply(img)

    assert result.getpixel((0, 0)) == (0, 80, 230)


def test_brightness_leaves_alpha_untouched():
    img = Image.new("RGBA", (2, 2), color=(10, 10, 10, 128))

    result = AdjustBrightness.brighten(1000).apply(img)

    assert result.mode == "RGBA"
    assert result.getpixel((1, 1)) == (255, 255, 255, 128)


def test_brightness_on_grayscale():
    img = Image.new("L", (2, 2), color=50)

    assert AdjustBrightness.darken(60).apply(img).getpixel((0, 0)) == 0


def test_brightness_offset_sign():
    assert AdjustBrightness.darken(5).offset == -5
    assert AdjustBrightness.brighten(5).offset == 5
    assert AdjustBrightness.darken(5).direction is BrightnessDirection.DARKEN


@pytest.mark.parametrize("amount", [-1, 65536])
def test_brightness_amount_is_16_bit(amount):
    with pytest.raises(ValueError):
        AdjustBrightness.brighten(amount)


def test_blur_smooths_edges():
    img = Image.new("L", (21, 21), color=0)
    img.putpixel((10, 10), 255)

    result = Blur(sigma=2.0).apply(img)

    assert result.size == img.size
    assert result.getpixel((10, 10)) < 255
    assert result.getpixel((11, 10)) > 0


def test_blur_non_positive_sigma_still_blurs():
    img = Image.new("L", (21, 21), color=0)
    img.putpixel((10, 10), 255)

    assert np.array_equal(np.array(Blur(sigma=0.0).apply(img)), np.array(Blur(sigma=1.0).apply(img)))


def test_invert_keeps_alpha():
    img = Image.new("RGBA", (2, 2), color=(0, 100, 255, 40))

    assert Invert().apply(img).getpixel((0, 0)) == (255, 155, 0, 40)


def test_invert_twice_restores(gradient_image):
    result = Invert().apply(Invert().apply(gradient_image))

    assert result.tobytes() == gradient_image.tobytes()


def test_unsharpen_flat_image_unchanged():
    img = Image.new("RGB", (8, 8), color=(90, 90, 90))

    result = Unsharpen(sigma=1.0, threshold=0).apply(img)

    assert result.tobytes() == img.tobytes()


def test_unsharpen_increases_edge_contrast():
    img = Image.new("L", (20, 20), color=100)
    img.paste(150, (10, 0, 20, 20))

    result = Unsharpen(sigma=2.0, threshold=0).apply(img)

    assert result.getpixel((9, 10)) < 100
    assert result.getpixel((10, 10)) > 150
