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

# Tests of parsing and formatting

import io

import pytest

import dfp64_bid
import dfp64_compare
import dfp64_round
import dfp64_text
from dfp64_fp import FormatError,PrecisionLossError,QMIN,DFP_DOWN,DFP_UNNECESSARY


class TestParse:
    def test_plain(self):
        assert dfp64_text.parse("123.45") == dfp64_bid.pack(0,12345,-2)
        assert dfp64_text.parse("-0.001") == dfp64_bid.pack(1,1,-3)
        assert dfp64_text.parse(".5") == dfp64_bid.pack(0,5,-1)
        assert dfp64_text.parse("5.") == dfp64_bid.pack(0,5,0)

    def test_scientific(self):
        assert dfp64_text.parse("1.2345E+2") == dfp64_bid.pack(0,12345,-2)
        assert dfp64_text.parse("1e-3") == dfp64_bid.pack(0,1,-3)

    # Parsed values are canonical
    def test_canonical(self):
        assert dfp64_text.parse("1.000") == dfp64_bid.pack(0,1,0)
        assert dfp64_text.parse("-0.00") == dfp64_bid.pack(0,0,0)

    def test_specials(self):
        assert dfp64_text.parse("inf") == dfp64_bid.POSITIVE_INFINITY
        assert dfp64_text.parse("+Infinity") == dfp64_bid.POSITIVE_INFINITY
        assert dfp64_text.parse("-INF") == dfp64_bid.NEGATIVE_INFINITY
        assert dfp64_text.parse("NaN") == dfp64_bid.NAN
        assert dfp64_text.parse("-nan") == dfp64_bid.NAN

    def test_malformed(self):
        for text in ["","."," 1","1e","1.2.3","abc","--1","0x10","infinit"]:
            with pytest.raises(FormatError):
                dfp64_text.parse(text)

    def test_format_error_is_value_error(self):
        with pytest.raises(ValueError) as exc:
            dfp64_text.parse("bad")
        assert exc.value.text == "bad"

    def test_range(self):
        assert dfp64_text.parse("xx12.5yy",2,6) == dfp64_bid.pack(0,125,-1)
        assert dfp64_text.parse("xx12.5",start=2) == dfp64_bid.pack(0,125,-1)
        with pytest.raises(IndexError):
            dfp64_text.parse("12",0,3)
        with pytest.raises(TypeError):
            dfp64_text.parse(12)

    def test_exactness(self):
        res=dfp64_text.try_parse("1.5")
        assert res.exact
        res=dfp64_text.try_parse("1.23456789012345678")
        assert not res.exact
        assert res.value == dfp64_bid.pack(0,1234567890123457,-15)

    def test_rounding_mode(self):
        res=dfp64_text.try_parse("1.23456789012345678",rmode=DFP_DOWN)
        assert res.value == dfp64_bid.pack(0,1234567890123456,-15)
        with pytest.raises(PrecisionLossError):
            dfp64_text.try_parse("1.23456789012345678",rmode=DFP_UNNECESSARY)

    def test_extreme_exponents(self):
        assert dfp64_text.parse("1E400") == dfp64_bid.POSITIVE_INFINITY
        assert dfp64_text.parse("-1E-500") == dfp64_bid.pack(0,0,0)
        assert dfp64_text.parse("1E-398") == dfp64_bid.pack(0,1,QMIN)
        assert dfp64_text.parse("1E99999999999999999999") == \
            dfp64_bid.POSITIVE_INFINITY

    # Digits far beyond the precision still decide the rounding
    def test_long_strings(self):
        text="0."+"5"+"0"*40+"1"
        assert dfp64_text.parse(text) == dfp64_bid.pack(0,5,-1)
        text="1234567890123456"+"5"+"0"*40+"1"
        assert dfp64_text.parse(text) == dfp64_bid.pack(0,1234567890123457,42)


class TestFormat:
    def test_plain(self):
        assert dfp64_text.to_string(dfp64_bid.pack(0,12345,-2)) == "123.45"
        assert dfp64_text.to_string(dfp64_bid.pack(1,1,-3)) == "-0.001"
        assert dfp64_text.to_string(dfp64_bid.pack(0,12,3)) == "12000"
        assert dfp64_text.to_string(dfp64_bid.pack(0,1200,-2)) == "12"

    def test_plain_specials(self):
        assert dfp64_text.to_string(dfp64_bid.NAN) == "NaN"
        assert dfp64_text.to_string(dfp64_bid.SIGNALING_NAN) == "NaN"
        assert dfp64_text.to_string(dfp64_bid.POSITIVE_INFINITY) == "Infinity"
        assert dfp64_text.to_string(dfp64_bid.NEGATIVE_INFINITY) == "-Infinity"
        assert dfp64_text.to_string(dfp64_bid.pack(1,0,5)) == "-0"
        assert dfp64_text.to_string(dfp64_bid.pack(0,0,-5)) == "0"

    def test_scientific(self):
        assert dfp64_text.to_scientific_string(dfp64_bid.pack(0,12345,-2)) == \
            "1.2345E+2"
        assert dfp64_text.to_scientific_string(dfp64_bid.pack(0,1,-3)) == "1E-3"
        assert dfp64_text.to_scientific_string(dfp64_bid.pack(1,1200,0)) == \
            "-1.2E+3"
        assert dfp64_text.to_scientific_string(dfp64_round.MAX_VALUE) == \
            "9.999999999999999E+384"

    def test_scientific_specials(self):
        assert dfp64_text.to_scientific_string(dfp64_bid.pack(0,0,0)) == "0E+0"
        assert dfp64_text.to_scientific_string(dfp64_bid.pack(1,0,0)) == "-0E+0"
        assert dfp64_text.to_scientific_string(dfp64_bid.NAN) == "NaN"

    def test_sinks(self):
        sink=io.StringIO()
        assert dfp64_text.append_to(dfp64_bid.pack(0,15,-1),sink) is sink
        sink.write(" ")
        dfp64_text.scientific_append_to(dfp64_bid.pack(0,15,-1),sink)
        assert sink.getvalue() == "1.5 1.5E+0"

    # Parsing the formatted text gives the canonical word
    def test_both_directions(self):
        words=[dfp64_bid.pack(0,1200,-1),dfp64_bid.pack(1,1234567890123456,-300),
               dfp64_round.MAX_VALUE,dfp64_round.MIN_VALUE,dfp64_bid.pack(0,1,QMIN),
               dfp64_bid.pack(1,0,7),dfp64_bid.POSITIVE_INFINITY,dfp64_bid.NAN]
        for word in words:
            canon=dfp64_compare.canonicalize(word)
            assert dfp64_text.parse(dfp64_text.to_string(word)) == canon
            assert dfp64_text.parse(dfp64_text.to_scientific_string(word)) == canon
