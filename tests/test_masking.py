import numpy as np
from PIL import Image

from pattern_art.models import Adjustments, Side
from pattern_art.processing.masking import build_mask, threshold_channel
from pattern_art.processing.tone import adjust


def binary_stripes() -> Image.Image:
    src = Image.new("RGB", (6, 3), (0, 0, 0))
    for x in range(0, 6, 2):
        for y in range(3):
            src.putpixel((x, y), (255, 255, 255))
    return adjust(src, Adjustments(0, 0, 50), (6, 3))


def test_threshold_channel_inverts_on_request():
    channel = Image.new("L", (2, 1))
    channel.putpixel((0, 0), 255)

    plain = threshold_channel(channel, 255)
    inverted = threshold_channel(channel, 255, invert=True)

    assert list(plain.getdata()) == [255, 0]
    assert list(inverted.getdata()) == [0, 255]


def test_dark_side_selects_black_pixels():
    mask = build_mask(binary_stripes(), Side.DARK)

    assert mask.getpixel((0, 0)) == (0, 0, 0, 0)
    assert mask.getpixel((1, 0)) == (0, 0, 0, 255)


def test_light_side_selects_white_pixels():
    mask = build_mask(binary_stripes(), Side.LIGHT)

    assert mask.getpixel((0, 0)) == (0, 0, 0, 255)
    assert mask.getpixel((1, 0)) == (0, 0, 0, 0)


def test_dark_and_light_masks_are_complementary():
    binary = binary_stripes()

    dark = np.asarray(build_mask(binary, Side.DARK))[..., 3].astype(int)
    light = np.asarray(build_mask(binary, Side.LIGHT))[..., 3].astype(int)

    assert ((dark + light) == 255).all()


def test_mask_color_channels_are_zero():
    mask = np.asarray(build_mask(binary_stripes(), Side.DARK))

    assert not mask[..., :3].any()


def test_build_mask_is_idempotent_and_keeps_size():
    binary = binary_stripes()

    first = build_mask(binary, Side.DARK)
    second = build_mask(binary, Side.DARK)

    assert first.size == binary.size
    assert first.tobytes() == second.tobytes()


def test_side_accepts_enum_value():
    binary = binary_stripes()

    assert build_mask(binary, "light").tobytes() == build_mask(binary, Side.LIGHT).tobytes()
