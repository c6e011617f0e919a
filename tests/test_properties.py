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

# Whole engine properties exercised across the modules

import dfp64_arith
import dfp64_bid
import dfp64_compare
import dfp64_convert
import dfp64_round
import dfp64_text
from dfp64_fp import DFP_HALF_EVEN

ZERO=dfp64_bid.pack(0,0,0)
ONE=dfp64_bid.pack(0,1,0)

# Finite words of varied magnitudes and encodings
WORDS=[dfp64_bid.pack(0,1,0),
       dfp64_bid.pack(1,10,-1),
       dfp64_bid.pack(0,1234567890123456,-20),
       dfp64_bid.pack(1,9999999999999999,5),
       dfp64_bid.pack(0,5,-398),
       dfp64_bid.pack(0,0,3),
       dfp64_bid.pack(1,0,-2),
       dfp64_bid.pack(0,31415926535,-10),
       dfp64_round.MAX_VALUE,
       dfp64_round.MIN_VALUE]


class TestAlgebra:
    def test_add_commutes(self):
        for a in WORDS:
            for b in WORDS:
                assert dfp64_arith.add(a,b) == dfp64_arith.add(b,a)

    def test_multiply_commutes(self):
        for a in WORDS:
            for b in WORDS:
                assert dfp64_arith.multiply(a,b) == dfp64_arith.multiply(b,a)

    def test_canonicalize_idempotent(self):
        for a in WORDS:
            for b in WORDS:
                canon=dfp64_compare.canonicalize(dfp64_arith.add(a,b))
                assert dfp64_compare.canonicalize(canon) == canon

    def test_multiply_then_divide(self):
        four=dfp64_convert.from_int(4)
        two=dfp64_convert.from_int(2)
        product=dfp64_arith.multiply(four,two)
        assert dfp64_compare.compare(dfp64_arith.divide(product,two),four) == \
            dfp64_compare.EQUAL


class TestEncodings:
    # Equal values need not be identical words
    def test_fixed_point_encodings(self):
        a=dfp64_convert.from_fixed_point(100,2)
        b=dfp64_convert.from_fixed_point(1,0)
        assert dfp64_compare.compare(a,b) == dfp64_compare.EQUAL
        assert not dfp64_compare.identical(a,b)

    def test_text(self):
        for word in WORDS+[dfp64_bid.NAN,dfp64_bid.POSITIVE_INFINITY,
                dfp64_bid.NEGATIVE_INFINITY]:
            assert dfp64_text.parse(dfp64_text.to_string(word)) == \
                dfp64_compare.canonicalize(word)


class TestSpecialResults:
    def test_division(self):
        assert dfp64_compare.is_nan(dfp64_arith.divide(ZERO,ZERO))
        assert dfp64_arith.divide(ONE,ZERO) == dfp64_bid.POSITIVE_INFINITY
        assert dfp64_arith.divide(dfp64_arith.negate(ONE),ZERO) == \
            dfp64_bid.NEGATIVE_INFINITY


class TestRounding:
    def test_ties_to_even(self):
        a=dfp64_convert.from_fixed_point(12345,2)
        b=dfp64_convert.from_fixed_point(12355,2)
        ra=dfp64_arith.round_to_digits(a,1,DFP_HALF_EVEN)
        rb=dfp64_arith.round_to_digits(b,1,DFP_HALF_EVEN)
        assert dfp64_convert.to_fixed_point(ra,1) == 1234
        assert dfp64_convert.to_fixed_point(rb,1) == 1236

    # The fused form keeps the digits of the product beyond 16
    def test_fused_multiply_add(self):
        a=dfp64_convert.from_fixed_point(1000000000000001,15)
        c=dfp64_convert.from_int(-1)
        fused=dfp64_arith.multiply_and_add(a,a,c)
        separate=dfp64_arith.add(dfp64_arith.multiply(a,a),c)
        assert dfp64_compare.compare(fused,separate) != dfp64_compare.EQUAL
