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

# Tests of declets and DPD interchange words

import pytest

import dfp64_bid
import dfp64_dpd
import dfp64_round
from dfp64_fp import FPError


class TestDeclets:
    def test_known_declets(self):
        assert dfp64_dpd.encode_declet([0,0,0]) == 0x000
        assert dfp64_dpd.encode_declet([0,0,9]) == 0x009
        assert dfp64_dpd.encode_declet([9,9,9]) == 0x0FF
        assert dfp64_dpd.decode_declet(0x0FF) == [9,9,9]

    def test_every_value(self):
        for n in range(1000):
            assert dfp64_dpd.DPD2BIN[dfp64_dpd.BIN2DPD[n]] == n

    # The two ignored bits of format 7 do not change the digits
    def test_noncanonical_declet(self):
        assert dfp64_dpd.DPD2BIN[0x3FF] == 999
        assert dfp64_dpd.declet_format_of(0x3FF) is dfp64_dpd.Format7
        assert not dfp64_dpd.Format7.isCanonical(0x3FF)

    def test_digit_range(self):
        with pytest.raises(FPError):
            dfp64_dpd.encode_declet([0,10,0])

    # Every declet matches exactly one format
    def test_formats_partition(self):
        for declet in range(1024):
            matches=[f for f in dfp64_dpd.formats if f.isFormat(declet)]
            assert len(matches) == 1


class TestDPDWords:
    def test_zero(self):
        assert dfp64_dpd.bid_to_dpd(dfp64_bid.pack(0,0,0)) == 0x2238000000000000

    def test_one(self):
        assert dfp64_dpd.bid_to_dpd(dfp64_bid.pack(0,1,0)) == 0x2238000000000001

    def test_max(self):
        assert dfp64_dpd.bid_to_dpd(dfp64_round.MAX_VALUE) == 0x77FCFF3FCFF3FCFF
        assert dfp64_dpd.dpd_to_bid(0x77FCFF3FCFF3FCFF) == dfp64_round.MAX_VALUE

    def test_both_directions(self):
        words=[dfp64_bid.pack(0,1234567890123456,-5),
               dfp64_bid.pack(1,9000000000000001,100),
               dfp64_bid.pack(0,1,-398)]
        for word in words:
            assert dfp64_dpd.dpd_to_bid(dfp64_dpd.bid_to_dpd(word)) == word

    def test_specials(self):
        assert dfp64_dpd.bid_to_dpd(dfp64_bid.POSITIVE_INFINITY) == \
            0x7800000000000000
        assert dfp64_dpd.bid_to_dpd(dfp64_bid.NEGATIVE_INFINITY) == \
            0xF800000000000000
        assert dfp64_dpd.bid_to_dpd(dfp64_bid.NAN) == 0x7C00000000000000
        assert dfp64_dpd.dpd_to_bid(0x7E00000000000000) == dfp64_bid.SIGNALING_NAN

    def test_canonical_declets(self):
        assert dfp64_dpd.is_canonical_dpd(0x2238000000000001)
        assert not dfp64_dpd.is_canonical_dpd(0x22380000000003FF)
        assert dfp64_dpd.unpack_dpd(0x22380000000003FF) == \
            (dfp64_bid.FINITE,0,999,0)
