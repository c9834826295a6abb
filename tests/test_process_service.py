import numpy as np
import pytest
from PIL import Image

from asciiconv.models.ascii_model import DetailLevel, GlyphSet
from asciiconv.services.process_service import ProcessService


@pytest.mark.parametrize(
    "src_w, src_h, width, expected",
    [
        (100, 100, 10, 4),     # 10 * 1.0 * 0.43 = 4.3
        (400, 100, 100, 11),   # 100 * 0.25 * 0.43 = 10.75
        (2, 2, 2, 1),          # 0.86 -> 1
        (1000, 10, 10, 1),     # 0.043 would round to 0, clamped to 1
        (10, 1000, 10, 430),
    ],
)
def test_target_height(src_w, src_h, width, expected):
    assert ProcessService.target_height(src_w, src_h, width) == expected


def test_resample_exact_size_and_rgb(process):
    image = Image.new("RGBA", (64, 32), color=(10, 20, 30, 255))
    out = process.resample(image, 40)
    assert out.size == (40, ProcessService.target_height(64, 32, 40))
    assert out.mode == "RGB"


def test_resample_keeps_grayscale_mode(process):
    out = process.resample(Image.new("L", (50, 50), color=7), 20)
    assert out.mode == "L"
    assert out.size == (20, 9)


def test_contrast_identity_at_factor_one(process):
    rng = np.random.default_rng(1)
    arr = rng.integers(0, 256, size=(8, 9, 3), dtype=np.uint8)
    out = process.adjust_contrast(Image.fromarray(arr, mode="RGB"), 1.0)
    np.testing.assert_array_equal(np.asarray(out), arr)


def test_contrast_stretches_and_clamps(process):
    arr = np.array([[[200, 50, 128]]], dtype=np.uint8)
    image = Image.fromarray(arr, mode="RGB")
    out = np.asarray(process.adjust_contrast(image, 2.0))
    np.testing.assert_array_equal(out, [[[255, 0, 128]]])
    # вход не меняется
    np.testing.assert_array_equal(np.asarray(image), arr)


def test_contrast_below_one_flattens_towards_midpoint(process):
    arr = np.array([[[0, 255, 128]]], dtype=np.uint8)
    out = np.asarray(process.adjust_contrast(Image.fromarray(arr, mode="RGB"), 0.5))
    np.testing.assert_array_equal(out, [[[64, 191, 128]]])


@pytest.mark.parametrize("sigma, size", [(0.5, 3), (1.0, 7), (1.2, 9), (2.5, 15), (5.0, 31)])
def test_gaussian_kernel_shape(sigma, size):
    kernel = ProcessService.gaussian_kernel(sigma)
    assert kernel.size == size
    assert kernel.sum() == pytest.approx(1.0)
    np.testing.assert_allclose(kernel, kernel[::-1])
    assert kernel.argmax() == size // 2


def test_blur_zero_sigma_is_noop(process):
    rng = np.random.default_rng(2)
    arr = rng.integers(0, 256, size=(11, 13), dtype=np.uint8)
    out = process.gaussian_blur(arr, 0.0)
    np.testing.assert_array_equal(out, arr)
    assert out is not arr


def test_blur_uniform_stays_uniform(process):
    arr = np.full((9, 17), 77, dtype=np.uint8)
    out = process.gaussian_blur(arr, 2.0)
    assert out.dtype == np.uint8
    np.testing.assert_array_equal(out, arr)


def test_blur_renormalizes_at_borders(process):
    # kernel for sigma 0.5 is [e^-2, 1, e^-2] before normalization
    arr = np.array([[100, 200]], dtype=np.uint8)
    out = process.gaussian_blur(arr, 0.5)
    # zero padding would leave the first pixel at 100
    np.testing.assert_array_equal(out, [[112, 188]])


def test_blur_single_pixel_image(process):
    arr = np.array([[42]], dtype=np.uint8)
    np.testing.assert_array_equal(process.gaussian_blur(arr, 5.0), arr)


def test_blur_smooths_impulse_symmetrically(process):
    arr = np.zeros((9, 9), dtype=np.uint8)
    arr[4, 4] = 255
    out = process.gaussian_blur(arr, 1.0)
    assert out[4, 4] < 255
    assert out[4, 3] == out[4, 5] > 0
    assert out[3, 4] == out[5, 4] > 0
    assert out[0, 0] == 0


def test_equalize_uniform_image(process):
    arr = np.full((5, 6), 93, dtype=np.uint8)
    out = process.equalize_histogram(arr)
    assert np.unique(out).tolist() == [255]


def test_equalize_two_values(process):
    arr = np.array([[0, 255], [0, 255]], dtype=np.uint8)
    out = process.equalize_histogram(arr)
    np.testing.assert_array_equal(out, [[127, 255], [127, 255]])


def test_equalize_spreads_narrow_range(process):
    arr = np.array([[100, 101, 102, 103]], dtype=np.uint8)
    out = process.equalize_histogram(arr)
    np.testing.assert_array_equal(out, [[63, 127, 191, 255]])


@pytest.mark.parametrize("levels", [2, 10, 69])
def test_quantize_levels_is_fixed_point(process, levels):
    arr = np.arange(256, dtype=np.uint8).reshape(16, 16)
    once = process.quantize_levels(arr, levels)
    assert len(np.unique(once)) == levels
    np.testing.assert_array_equal(process.quantize_levels(once, levels), once)


def test_quantize_levels_rejects_single_level(process):
    with pytest.raises(ValueError):
        process.quantize_levels(np.zeros((2, 2), dtype=np.uint8), 1)


def test_adaptive_threshold_uses_only_level_values(process):
    rng = np.random.default_rng(3)
    arr = rng.integers(0, 256, size=(20, 20), dtype=np.uint8)
    out = process.adaptive_threshold(arr, 10)
    allowed = {int(k / 9 * 255) for k in range(10)}
    assert set(np.unique(out).tolist()) <= allowed


def test_adaptive_threshold_uniform_image_single_level(process):
    out = process.adaptive_threshold(np.full((4, 4), 0, dtype=np.uint8), 69)
    assert np.unique(out).tolist() == [255]


def test_map_intensity_extremes():
    assert ProcessService.map_intensity_to_index(0, 10) == 0
    assert ProcessService.map_intensity_to_index(255, 10) == 9
    assert ProcessService.map_intensity_to_index(255, 69) == 68


def test_map_intensity_darkens_midtones():
    # linear mapping would give 4.5; gamma 0.7 pushes mid gray to a denser glyph
    assert ProcessService.map_intensity_to_index(128, 10) == 6


@pytest.mark.parametrize("count", [2, 10, 69])
def test_map_intensity_is_monotonic(count):
    indices = [ProcessService.map_intensity_to_index(v, count) for v in range(256)]
    assert indices == sorted(indices)
    assert indices[0] == 0 and indices[-1] == count - 1


def test_glyph_indices_match_scalar_mapping(process):
    arr = np.arange(256, dtype=np.uint8).reshape(1, 256)
    vector = process.glyph_indices(arr, 69)[0].tolist()
    scalar = [ProcessService.map_intensity_to_index(v, 69) for v in range(256)]
    assert vector == scalar


def test_render_glyphs_rows(process):
    arr = np.array([[0, 255, 0], [255, 0, 255]], dtype=np.uint8)
    text = process.render_glyphs(arr, DetailLevel.LOW.glyphs)
    assert text == " @ \n@ @"


def test_render_glyphs_multibyte_set(process):
    arr = np.array([[0, 255]], dtype=np.uint8)
    assert process.render_glyphs(arr, GlyphSet("·░▒▓█")) == "·█"


def test_to_8bit_shifts_16bit_values(process):
    arr = np.array([[0, 256, 40000, 65535]], dtype=np.uint16)
    out = process.to_8bit(Image.fromarray(arr))
    assert out.mode == "L"
    np.testing.assert_array_equal(np.asarray(out), [[0, 1, 156, 255]])


def test_to_8bit_stretches_float_range(process):
    arr = np.array([[-1.0, 0.0, 1.0]], dtype=np.float32)
    out = process.to_8bit(Image.fromarray(arr, mode="F"))
    np.testing.assert_array_equal(np.asarray(out), [[0, 128, 255]])


def test_to_8bit_flat_32bit_image_is_clamped(process):
    out = process.to_8bit(Image.new("I", (3, 2), color=300))
    assert np.unique(np.asarray(out)).tolist() == [255]


def test_to_8bit_leaves_8bit_modes_alone(process):
    image = Image.new("RGB", (2, 2), color=(1, 2, 3))
    assert process.to_8bit(image) is image


def test_grayscale_of_16bit_keeps_tones(process):
    arr = np.array([[0, 32768, 65535]], dtype=np.uint16)
    out = process.to_grayscale(Image.fromarray(arr))
    np.testing.assert_array_equal(np.asarray(out), [[0, 128, 255]])
