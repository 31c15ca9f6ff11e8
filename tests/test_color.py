"""Tests for the colour model: normalisation, codecs and blending."""

from __future__ import annotations

import random

import pytest

from spaceship_sprites import Color, ValidationError
from spaceship_sprites import validator


# ---------------------------------------------------------------------------
# Tests: construction and normalisation
# ---------------------------------------------------------------------------


class TestConstruction:
    def test_fractions_are_kept(self):
        c = Color(0.25, 0.5, 0.75, 0.1)
        assert c.to_array() == [0.25, 0.5, 0.75, 0.1]

    def test_bytes_are_normalised(self):
        c = Color(128, 64, 255)
        assert c.red == pytest.approx(128 / 255)
        assert c.green == pytest.approx(64 / 255)
        assert c.blue == 1.0
        assert c.alpha == 1.0

    def test_one_is_read_as_a_fraction(self):
        assert Color(1, 0, 0).red == 1.0

    @pytest.mark.parametrize("args, channel", [
        ((256, 0, 0), "Red"),
        ((0, -1, 0), "Green"),
        ((0, 0, 300.5), "Blue"),
        ((0, 0, 0, -0.1), "Alpha"),
    ])
    def test_out_of_range_names_channel(self, args, channel):
        with pytest.raises(ValidationError, match=channel):
            Color(*args)

    def test_range_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            Color(1000, 0, 0)

    def test_setter_revalidates(self):
        c = Color(0, 0, 0)
        c.red = 255
        assert c.red == 1.0
        with pytest.raises(ValidationError, match="Red"):
            c.red = 256

    def test_copy_is_independent(self):
        original = Color(0.1, 0.2, 0.3)
        duplicate = original.copy()
        duplicate.green = 0.9
        assert original.green == 0.2
        assert duplicate is not original

    def test_constants(self):
        assert Color.BLACK.to_hexa() == "ff000000"
        assert Color.WHITE.to_hexa() == "ffffffff"
        assert Color.TRANSPARENT.alpha == 0.0


# ---------------------------------------------------------------------------
# Tests: equality and blending
# ---------------------------------------------------------------------------


class TestBlending:
    def test_equality_compares_all_channels(self):
        assert Color(0.5, 0.5, 0.5) == Color(0.5, 0.5, 0.5)
        assert Color(0.5, 0.5, 0.5).equals(Color(0.5, 0.5, 0.5))
        assert Color(0.5, 0.5, 0.5) != Color(0.5, 0.5, 0.5, 0.5)
        assert Color(0, 0, 0) != "black"

    def test_mix_is_the_mean(self):
        assert Color(0, 0, 0).mix(Color(1, 1, 1)) == Color(0.5, 0.5, 0.5, 1)

    def test_mix_weighed(self):
        mixed = Color(1, 0, 0).mix_weighed(Color(0, 0, 1), 0.25)
        assert mixed.to_array() == pytest.approx([0.75, 0.0, 0.25, 1.0])

    def test_mix_weighed_extremes(self):
        a, b = Color(0.2, 0.4, 0.6), Color(0.9, 0.8, 0.7)
        assert a.mix_weighed(b, 0) == a
        assert a.mix_weighed(b, 1) == b

    def test_mix_weighed_stays_in_range(self):
        white = Color(1, 1, 1)
        for weight in (0.1, 0.3, 0.7, 0.9):
            assert all(0.0 <= v <= 1.0 for v in white.mix_weighed(white, weight).to_array())

    @pytest.mark.parametrize("weight", [-0.1, 1.5])
    def test_mix_weighed_rejects_bad_weight(self, weight):
        with pytest.raises(ValidationError):
            Color(0, 0, 0).mix_weighed(Color(1, 1, 1), weight)


# ---------------------------------------------------------------------------
# Tests: codecs
# ---------------------------------------------------------------------------


class TestCodecs:
    def test_from_hexa(self):
        c1 = Color.from_hexa("#FF102030")
        c2 = Color(0x10, 0x20, 0x30, 0xFF)
        assert c1.alpha == c2.alpha
        assert c1.red == c2.red
        assert c1.green == c2.green
        assert c1.blue == c2.blue

    @pytest.mark.parametrize("text", ["FF102030", "0xFF102030", "#ff102030"])
    def test_from_hexa_prefixes(self, text):
        assert Color.from_hexa(text) == Color(0x10, 0x20, 0x30, 0xFF)

    def test_from_hexa_rejects_garbage(self):
        with pytest.raises(ValidationError):
            Color.from_hexa("#nothex")

    def test_from_int(self):
        assert Color.from_int(0xFF102030) == Color(0x10, 0x20, 0x30, 0xFF)

    def test_from_int_rejects_out_of_range(self):
        with pytest.raises(ValidationError):
            Color.from_int(-1)
        with pytest.raises(ValidationError):
            Color.from_int(0x1FFFFFFFF)

    def test_to_int(self):
        assert Color(0x10, 0x20, 0x30, 0xFF).to_int() == 0xFF102030

    @pytest.mark.parametrize("value", [0, 0xFFFFFFFF, 0x80FF0001, 0x12345678, 0x01010101])
    def test_int_round_trip(self, value):
        assert Color.from_int(value).to_int() == value

    def test_byte_array(self):
        assert Color.from_hexa("#FF102030").to_byte_array() == (0x10, 0x20, 0x30, 0xFF)

    def test_to_hexa(self):
        assert Color.from_hexa("#FF102030").to_hexa().upper() == "FF102030"

    def test_to_hexa_pads_channels(self):
        assert Color.from_bytes(1, 2, 3, 4).to_hexa() == "04010203"

    def test_css_strings(self):
        c = Color(255, 0, 128, 0.5)
        assert c.to_rgb() == "rgb(255, 0, 128)"
        assert c.to_rgba() == "rgba(255, 0, 128, 0.5)"
        assert Color(0, 0, 0).to_rgba() == "rgba(0, 0, 0, 1)"

    @pytest.mark.parametrize("alpha, text", [
        (0.123456, "0.1235"),
        (2 / 3, "0.6667"),
        (0.25, "0.25"),
        (0.0, "0"),
    ])
    def test_rgba_alpha_has_four_decimals(self, alpha, text):
        assert Color(0, 0, 0, alpha).to_rgba() == f"rgba(0, 0, 0, {text})"


# ---------------------------------------------------------------------------
# Tests: random sampling
# ---------------------------------------------------------------------------


class TestRandom:
    def test_opaque_unless_requested(self):
        rng = random.Random(3)
        for _ in range(20):
            assert Color.random(random_alpha=False, rng=rng).alpha == 1.0

    def test_channels_in_range(self):
        rng = random.Random(4)
        for _ in range(20):
            c = Color.random(random_alpha=True, rng=rng)
            assert all(0.0 <= v <= 1.0 for v in c.to_array())

    def test_seeded_source_is_reproducible(self):
        assert Color.random(True, random.Random(9)) == Color.random(True, random.Random(9))


# ---------------------------------------------------------------------------
# Tests: validator
# ---------------------------------------------------------------------------


class TestValidator:
    def test_integer(self):
        validator.integer(3, "n")
        validator.integer(3.0, "n")
        for bad in (2.5, True, "3", None):
            with pytest.raises(ValidationError):
                validator.integer(bad, "n")

    def test_message_names_field(self):
        with pytest.raises(ValidationError, match=r"border\[1\] but found 2.5"):
            validator.border([0, 2.5, 0, 0])

    def test_percentage(self):
        validator.percentage(0, "p")
        validator.percentage(1, "p")
        with pytest.raises(ValidationError):
            validator.percentage(1.5, "p")

    def test_positive_non_zero(self):
        with pytest.raises(ValidationError):
            validator.positive_non_zero(0, "n")

    def test_border_expands_scalar(self):
        assert validator.border(2) == [2, 2, 2, 2]
        assert validator.border((1, 2, 3, 4)) == [1, 2, 3, 4]

    @pytest.mark.parametrize("value", [-1, 2.5, [1, 1, -1, 1], [1, 2]])
    def test_border_rejects(self, value):
        with pytest.raises(ValidationError):
            validator.border(value)

    @pytest.mark.parametrize("dim", [(0, 5), (5, 0), (5, -1), (5.5, 5), (5,)])
    def test_dimensions_reject(self, dim):
        with pytest.raises(ValidationError):
            validator.dimensions(dim)
