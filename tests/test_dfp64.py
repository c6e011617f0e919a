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

# Tests of the Decimal64 value class and the command-line tool

import functools
import pickle
from decimal import Decimal

import pytest

import dfp64
import dfp64_compare
from dfp64 import Decimal64


class TestConstruction:
    def test_sources(self):
        assert str(Decimal64("1.50")) == "1.5"
        assert str(Decimal64(42)) == "42"
        assert str(Decimal64(Decimal("-0.25"))) == "-0.25"
        assert str(Decimal64(0.5)) == "0.5"
        assert str(Decimal64(Decimal64("7"))) == "7"
        assert str(Decimal64()) == "0"

    def test_unsupported(self):
        with pytest.raises(TypeError):
            Decimal64(True)
        with pytest.raises(TypeError):
            Decimal64([1])
        with pytest.raises(ValueError):
            Decimal64.from_bits(-1)

    def test_factories(self):
        assert str(Decimal64.from_fixed_point(12345,2)) == "123.45"
        assert str(Decimal64.from_int(-3)) == "-3"
        assert Decimal64.from_bits(0x31C0000000000001) == Decimal64.ONE
        assert str(Decimal64.parse("xx2.5",start=2)) == "2.5"

    def test_try_parse(self):
        res=Decimal64.try_parse("1.23456789012345678")
        assert isinstance(res.value,Decimal64)
        assert not res.exact

    def test_immutable(self):
        x=Decimal64("1")
        with pytest.raises(AttributeError):
            x.extra=1
        with pytest.raises(AttributeError):
            x._bits=0

    def test_pickle(self):
        x=Decimal64("-12.5")
        y=pickle.loads(pickle.dumps(x))
        assert y.is_identical_to(x)


class TestConstants:
    def test_values(self):
        assert str(Decimal64.ONE_TENTH) == "0.1"
        assert str(Decimal64.ONE_HUNDREDTH) == "0.01"
        assert str(Decimal64.MILLION) == "1000000"
        assert Decimal64.MAX_VALUE.to_scientific_string() == "9.999999999999999E+384"
        assert Decimal64.MIN_POSITIVE_VALUE.to_scientific_string() == "1E-398"
        assert Decimal64.MAX_NEGATIVE_VALUE.to_scientific_string() == "-1E-398"

    def test_specials(self):
        assert Decimal64.NaN.is_nan()
        assert Decimal64.SIGNALING_NAN.is_signaling_nan()
        assert Decimal64.NEGATIVE_INFINITY.is_negative_infinity()
        assert Decimal64.ZERO.is_zero()


class TestOperators:
    def test_arithmetic(self):
        assert str(Decimal64("1.5") + Decimal64("2")) == "3.5"
        assert str(Decimal64("1.5") - Decimal64("2")) == "-0.5"
        assert str(Decimal64("1.5") * Decimal64("2")) == "3"
        assert str(Decimal64("1") / Decimal64("4")) == "0.25"
        assert str(-Decimal64("1.5")) == "-1.5"
        assert str(abs(Decimal64("-1.5"))) == "1.5"

    def test_integer_operands(self):
        assert str(Decimal64(3) * 2) == "6"
        assert str(2 * Decimal64(3)) == "6"
        assert str(Decimal64(3) / 4) == "0.75"
        assert str(1 - Decimal64("0.5")) == "0.5"
        assert str(1 / Decimal64(4)) == "0.25"
        assert str(Decimal64("0.5") + 1) == "1.5"

    def test_comparisons(self):
        assert Decimal64("1.0") == Decimal64("1")
        assert Decimal64("1") < Decimal64("2")
        assert Decimal64("2") >= Decimal64("2")
        assert Decimal64("-Infinity") < Decimal64.MIN_VALUE

    # NaN compares unordered with every value, itself included
    def test_nan_comparisons(self):
        nan=Decimal64.NaN
        assert not nan == nan
        assert nan != nan
        assert not nan < Decimal64.ONE
        assert not nan >= Decimal64.ONE

    # Integers compare exactly, with no rounding to sixteen digits
    def test_integer_comparisons(self):
        assert Decimal64(1) == 1
        assert 1 == Decimal64("1.0")
        assert Decimal64("1.5") != 1
        assert Decimal64("1.5") > 1
        assert 2 > Decimal64("1.5")
        assert Decimal64("-0") == 0
        assert Decimal64("1E16") != 10**16+1
        assert Decimal64("1E16") < 10**16+1
        assert Decimal64.POSITIVE_INFINITY > 10**400
        assert not Decimal64.NaN == 1
        assert Decimal64.NaN != 1
        assert not Decimal64.NaN <= 1
        assert Decimal64(1) != True
        assert Decimal64(1) != "1"

    def test_integer_hash(self):
        assert hash(Decimal64("1.00")) == hash(1)
        assert hash(Decimal64("1E20")) == hash(10**20)
        assert hash(Decimal64("-0")) == hash(0)
        assert {Decimal64(5):"five"}[5] == "five"

    def test_hash(self):
        a=Decimal64.from_bits(0x31C0000000000001)
        b=Decimal64.from_bits(0x31A000000000000A)
        assert a == b
        assert not a.is_identical_to(b)
        assert hash(a) == hash(b)
        assert len({a,b}) == 1

    def test_conversions(self):
        assert int(Decimal64("1E20")) == 10**20
        assert int(Decimal64("-2.7")) == -2
        assert float(Decimal64("0.1")) == 0.1
        assert not bool(Decimal64("0"))
        assert bool(Decimal64.NaN)
        assert round(Decimal64("2.5")) == 2
        assert str(round(Decimal64("1.25"),1)) == "1.2"

    def test_repr(self):
        assert repr(Decimal64("1.5")) == "Decimal64('1.5')"


class TestMethods:
    def test_sequences(self):
        one=Decimal64.ONE
        assert str(one.add(one,one,one)) == "4"
        assert str(Decimal64.TWO.multiply(Decimal64.TWO,Decimal64.TEN)) == "40"

    def test_fused(self):
        a=Decimal64("1.000000000000001")
        fused=a.multiply_and_add(a,Decimal64("-1"))
        assert fused == Decimal64("2.000000000000001E-15")
        assert a * a - 1 == Decimal64("2E-15")

    def test_min_max(self):
        values=[Decimal64(1),Decimal64(-2),Decimal64(3)]
        assert str(Decimal64.min(*values)) == "-2"
        assert str(Decimal64.max(*values)) == "3"
        assert Decimal64.min(Decimal64.ONE,Decimal64.NaN).is_nan()

    def test_rounding(self):
        assert str(Decimal64("2.5").round()) == "3"
        assert str(Decimal64("7").round(Decimal64("5"))) == "5"
        assert str(Decimal64("1.255").round(2,"ROUND_DOWN")) == "1.25"
        assert str(Decimal64("1.3").round_to_reciprocal(4)) == "1.25"
        assert str(Decimal64("-1.5").ceiling()) == "-1"
        assert str(Decimal64("-1.5").floor()) == "-2"
        assert str(Decimal64("-1.5").truncate()) == "-1"
        assert str(Decimal64("2.5").round_to_nearest_ties_to_even()) == "2"
        assert str(Decimal64("2.5").round_to_nearest_ties_away_from_zero()) == "3"
        assert str(Decimal64("1.1").round_towards_positive_infinity(
            Decimal64("0.5"))) == "1.5"

    def test_neighbors(self):
        assert Decimal64.ZERO.next_up() == Decimal64.MIN_POSITIVE_VALUE
        assert Decimal64.ZERO.next_down() == Decimal64.MAX_NEGATIVE_VALUE
        assert Decimal64.MAX_VALUE.next_up() == Decimal64.POSITIVE_INFINITY

    def test_total_order(self):
        values=[Decimal64.NaN,Decimal64.ONE,Decimal64.NEGATIVE_INFINITY]
        ordered=sorted(values,key=functools.cmp_to_key(Decimal64.compare_to))
        assert [str(v) for v in ordered] == ["-Infinity","1","NaN"]
        assert Decimal64.ONE.compare(Decimal64.NaN) == dfp64_compare.UNORDERED

    def test_interchange(self):
        x=Decimal64("-123.456")
        assert Decimal64.from_dpd(x.to_dpd()).is_identical_to(x)
        assert Decimal64.from_bytes(x.to_bytes()).is_identical_to(x)
        assert Decimal64.from_bytes(x.to_bytes("big"),"big").is_identical_to(x)
        assert Decimal64.ONE.to_dpd() == 0x2238000000000001

    def test_integer_results(self):
        x=Decimal64("-123.456")
        assert x.to_int() == -123
        assert x.to_long() == -123
        assert x.to_fixed_point(2) == -12346
        assert x.unscaled_value() == -123456
        assert x.scale() == 3
        assert x.to_decimal() == Decimal("-123.456")

    # A fixed point value is equal to its integer equivalent
    def test_fixed_point_equality(self):
        assert Decimal64.from_fixed_point(100,2) == Decimal64.from_fixed_point(1,0)


class TestCommandLine:
    def test_decimal_string(self,capsys):
        assert dfp64.main(["-q","1.5"]) == 0
        out=capsys.readouterr().out
        assert "BID:31A000000000000F  DPD:2234000000000015  +15E-1" in out

    def test_hexadecimal(self,capsys):
        assert dfp64.main(["-q","0x31C0000000000001"]) == 0
        assert "+1E0" in capsys.readouterr().out

    def test_dpd_input(self,capsys):
        assert dfp64.main(["-q","--encoding","dpd","0x2238000000000001"]) == 0
        assert "BID:31C0000000000001" in capsys.readouterr().out

    def test_special(self,capsys):
        assert dfp64.main(["-q","-m","inf"]) == 0
        out=capsys.readouterr().out
        assert "BID:F800000000000000" in out
        assert "-infinity" in out

    def test_rounding(self,capsys):
        assert dfp64.main(["-q","-r","down","1.99999999999999999"]) == 0
        out=capsys.readouterr().out
        assert "+1999999999999999E-15" in out
        assert "INEX" in out

    def test_noar(self,capsys):
        assert dfp64.main(["-q","--noar","1"]) == 0
        assert "E0" not in capsys.readouterr().out

    def test_error(self,capsys):
        assert dfp64.main(["-q","bogus"]) == 1
        assert "ERROR" in capsys.readouterr().out

    def test_copyright(self,capsys):
        assert dfp64.main(["1"]) == 0
        assert "Copyright" in capsys.readouterr().out

    def test_length(self,capsys):
        assert dfp64.main(["-q","--length","8","1"]) == 0
        assert "BID:31C0000000000001" in capsys.readouterr().out
        with pytest.raises(SystemExit):
            dfp64.parse_args(["--length","4","1"])

    def test_verbose(self,caplog):
        assert dfp64.main(["-q","-v","1","bogus"]) == 1
        assert "values converted: 1, errors: 1" in caplog.text
        assert "rounding mode: half_even" in caplog.text

    def test_not_verbose(self,caplog):
        assert dfp64.main(["-q","1"]) == 0
        assert "values converted" not in caplog.text
