# Copyright (C) 2026 The dfp64 Authors
#
# This file is part of dfp64.
#
#     dfp64 is free software: you can redistribute it and/or modify
#     it under the terms of the GNU General Public License as published by
#     the Free Software Foundation, either version 3 of the License, or
#     (at your option) any later version.
#
#     dfp64 is distributed in the hope that it will be useful,
#     but WITHOUT ANY WARRANTY; without even the implied warranty of
#     MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#     GNU General Public License for more details.
#
#     You should have received a copy of the GNU General Public License
#     along with dfp64.  If not, see <http://www.gnu.org/licenses/>.

# Tests of the BID interchange word codec

import pytest

import dfp64_bid
from dfp64_fp import FPError,QMIN,QMAX,MAX_COEFFICIENT

MAX_WORD=0x77FB86F26FC0FFFF


class TestPack:
    def test_one(self):
        assert dfp64_bid.pack(0,1,0) == 0x31C0000000000001
        assert dfp64_bid.pack(1,1,0) == 0xB1C0000000000001

    def test_zero(self):
        assert dfp64_bid.pack(0,0,0) == 0x31C0000000000000

    # Coefficients over 53 bits use the large layout
    def test_large_layout(self):
        assert dfp64_bid.pack(0,MAX_COEFFICIENT,QMAX) == MAX_WORD

    def test_smallest_exponent(self):
        assert dfp64_bid.pack(0,1,QMIN) == 1

    def test_coefficient_range(self):
        with pytest.raises(FPError):
            dfp64_bid.pack(0,MAX_COEFFICIENT+1,0)
        with pytest.raises(FPError):
            dfp64_bid.pack(0,-1,0)

    def test_exponent_range(self):
        with pytest.raises(FPError):
            dfp64_bid.pack(0,1,QMAX+1)
        with pytest.raises(FPError):
            dfp64_bid.pack(0,1,QMIN-1)


class TestUnpack:
    def test_finite(self):
        assert dfp64_bid.unpack(0x31C0000000000001) == (dfp64_bid.FINITE,0,1,0)
        assert dfp64_bid.unpack(MAX_WORD) == \
            (dfp64_bid.FINITE,0,MAX_COEFFICIENT,QMAX)

    def test_negative(self):
        assert dfp64_bid.unpack(dfp64_bid.pack(1,12345,-2)) == \
            (dfp64_bid.FINITE,1,12345,-2)

    # A large layout coefficient beyond 16 digits decodes as zero
    def test_noncanonical_coefficient(self):
        word=dfp64_bid.STEER_MASK | (398 << dfp64_bid.LARGE_SHIFT) | \
            dfp64_bid.LARGE_COEF
        assert dfp64_bid.unpack(word) == (dfp64_bid.FINITE,0,0,0)

    def test_specials(self):
        assert dfp64_bid.unpack(dfp64_bid.POSITIVE_INFINITY)[:2] == \
            (dfp64_bid.INFINITY,0)
        assert dfp64_bid.unpack(dfp64_bid.NEGATIVE_INFINITY)[:2] == \
            (dfp64_bid.INFINITY,1)
        assert dfp64_bid.unpack(dfp64_bid.NAN)[0] == dfp64_bid.QNAN
        assert dfp64_bid.unpack(dfp64_bid.SIGNALING_NAN)[0] == dfp64_bid.SNAN

    # Bits following the infinity pattern are ignored
    def test_infinity_ignores_trailing_bits(self):
        assert dfp64_bid.kind(0x7812345678901234) == dfp64_bid.INFINITY

    def test_nan_payload(self):
        assert dfp64_bid.kind(0x7C00000000000123) == dfp64_bid.QNAN
        assert dfp64_bid.kind(0xFE00000000000001) == dfp64_bid.SNAN


class TestSpecialWords:
    def test_canonical_words(self):
        assert dfp64_bid.POSITIVE_INFINITY == 0x7800000000000000
        assert dfp64_bid.NEGATIVE_INFINITY == 0xF800000000000000
        assert dfp64_bid.NAN == 0x7C00000000000000
        assert dfp64_bid.SIGNALING_NAN == 0x7E00000000000000

    def test_pack_nan(self):
        assert dfp64_bid.pack_nan() == dfp64_bid.NAN
        assert dfp64_bid.pack_nan(1,signaling=True) == 0xFE00000000000000

    def test_with_sign(self):
        one=dfp64_bid.pack(0,1,0)
        assert dfp64_bid.with_sign(one,1) == dfp64_bid.pack(1,1,0)
        assert dfp64_bid.with_sign(dfp64_bid.NEGATIVE_INFINITY,0) == \
            dfp64_bid.POSITIVE_INFINITY

    def test_is_special(self):
        assert dfp64_bid.is_special(dfp64_bid.NAN)
        assert not dfp64_bid.is_special(MAX_WORD)


class TestBytes:
    def test_little_endian(self):
        byts=dfp64_bid.to_bytes(0x31C0000000000001)
        assert byts == b"\x01\x00\x00\x00\x00\x00\xc0\x31"
        assert dfp64_bid.from_bytes(byts) == 0x31C0000000000001

    def test_big_endian(self):
        byts=dfp64_bid.to_bytes(0x31C0000000000001,byteorder="big")
        assert byts == b"\x31\xc0\x00\x00\x00\x00\x00\x01"
        assert dfp64_bid.from_bytes(byts,byteorder="big") == 0x31C0000000000001

    def test_length(self):
        with pytest.raises(FPError):
            dfp64_bid.from_bytes(b"\x00"*7)
