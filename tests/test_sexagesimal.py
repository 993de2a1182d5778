"""Tests for RA/Dec string parsing."""

from __future__ import annotations

import pytest

from astroportal.sexagesimal import dec_to_degrees, ra_to_degrees


class TestRightAscension:
    def test_m31(self) -> None:
        assert ra_to_degrees("00h 42m 44s") == pytest.approx(10.683333, abs=1e-3)

    def test_m13(self) -> None:
        assert ra_to_degrees("16h 41m 41s") == pytest.approx(250.420833, abs=1e-3)

    def test_fractional_seconds(self) -> None:
        assert ra_to_degrees("05h 35m 17.3s") == pytest.approx(83.8220833, abs=1e-6)

    def test_colon_separated(self) -> None:
        assert ra_to_degrees("05:35:17") == ra_to_degrees("05h 35m 17s")

    @pytest.mark.parametrize("text", ["", "n/a", "12h 30m", "hours"])
    def test_malformed_is_zero(self, text: str) -> None:
        assert ra_to_degrees(text) == 0.0


class TestDeclination:
    def test_positive(self) -> None:
        assert dec_to_degrees("+41° 16′ 09″") == pytest.approx(41.269167, abs=1e-3)

    def test_negative(self) -> None:
        assert dec_to_degrees("-05° 23′ 28″") == pytest.approx(-5.391111, abs=1e-3)

    def test_unicode_minus(self) -> None:
        assert dec_to_degrees("−05° 23′ 28″") == dec_to_degrees("-05° 23′ 28″")

    def test_unsigned_is_north(self) -> None:
        assert dec_to_degrees("24° 07′ 00″") == pytest.approx(24.116667, abs=1e-3)

    def test_negative_zero_degrees_keeps_sign(self) -> None:
        assert dec_to_degrees("-00° 30′ 00″") == pytest.approx(-0.5)
        assert dec_to_degrees("−00° 00′ 36″") == pytest.approx(-0.01)

    def test_positive_zero_degrees(self) -> None:
        assert dec_to_degrees("+00° 30′ 00″") == pytest.approx(0.5)

    @pytest.mark.parametrize("text", ["", "unknown", "+41° 16′", "−"])
    def test_malformed_is_zero(self, text: str) -> None:
        assert dec_to_degrees(text) == 0.0
