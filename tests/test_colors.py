"""Tests for the hex color codec."""
import random

import pytest

from color_predictor.model_training.colors import hex_to_rgb, random_hex_color, rgb_to_hex


class TestHexToRgb:
    def test_shorthand_and_full_form_agree(self):
        assert hex_to_rgb("#fff") == (1.0, 1.0, 1.0)
        assert hex_to_rgb("ffffff") == (1.0, 1.0, 1.0)

    def test_channels_are_normalized(self):
        assert hex_to_rgb("#000000") == (0.0, 0.0, 0.0)
        assert hex_to_rgb("#ff8000") == pytest.approx((1.0, 128 / 255, 0.0))

    def test_case_and_prefix_insensitive(self):
        assert hex_to_rgb("#AbCdEf") == hex_to_rgb("abcdef") == hex_to_rgb("#ABCDEF")

    def test_shorthand_doubles_each_digit(self):
        assert hex_to_rgb("#bad") == hex_to_rgb("#bbaadd")

    @pytest.mark.parametrize("value", [
        "not-a-color",
        None,
        123,
        "",
        "#",
        "#12345",
        "#1234567",
        "#ggg",
        "##fff",
        "ffffff\n",
        " #ffffff",
        ["#ffffff"],
    ])
    def test_invalid_values_return_none(self, value):
        assert hex_to_rgb(value) is None

    def test_random_colors_stay_in_unit_range(self):
        rng = random.Random(7)
        for _ in range(200):
            channels = hex_to_rgb(random_hex_color(rng))
            assert channels is not None
            assert all(0.0 <= c <= 1.0 for c in channels)


class TestRgbToHex:
    def test_inverts_hex_to_rgb(self):
        for value in ["#000000", "#ffffff", "#12ab9f", "#7f7f80"]:
            assert rgb_to_hex(hex_to_rgb(value)) == value

    def test_round_trip_within_quantization(self):
        rng = random.Random(3)
        for _ in range(100):
            channels = hex_to_rgb(random_hex_color(rng))
            assert hex_to_rgb(rgb_to_hex(channels)) == pytest.approx(channels, abs=1 / 255)

    def test_out_of_range_channels_are_clamped(self):
        assert rgb_to_hex((1.5, -0.2, 0.5)) == "#ff0080"


def test_random_hex_color_is_always_six_digits():
    class LowRng:
        def randint(self, a, b):
            return 0x00000f

    assert random_hex_color(LowRng()) == "#00000f"
