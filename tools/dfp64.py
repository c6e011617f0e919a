#!/usr/bin/python3
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

# This module provides the Decimal64 value class, a 64-bit IEEE 754-2008 decimal
# floating point number, and a command-line conversion tool.
#
# A Decimal64 object wraps one BID interchange word.  It is immutable.  All of its
# operations are performed by the engine modules on the word:
#
#   dfp64_bid        BID word encoding and decoding
#   dfp64_dpd        DPD word encoding and decoding, BID <-> DPD conversion
#   dfp64_special    special value rules
#   dfp64_round      the rounding engine
#   dfp64_arith      arithmetic
#   dfp64_compare    comparison, classification and canonicalization
#   dfp64_convert    decimal.Decimal, integer and fixed point conversions
#   dfp64_gmpy2      binary floating point conversions
#   dfp64_text       parsing and formatting
#
# Absent values are represented by None.  No word is reserved for them.

this_module="dfp64.py"
copyright="%s Copyright (C) %s The dfp64 Authors" % (this_module,"2026")

# Python imports:
import decimal     # Access Python native decimal floating point support
import logging     # Access the logging configuration of the command-line tool
import re          # Access regular expressions
# dfp64 imports:
import dfp64_arith
import dfp64_bid
import dfp64_compare
import dfp64_convert
import dfp64_dpd
import dfp64_gmpy2
import dfp64_round
import dfp64_text
from dfp64_fp import FPError,eloc,INT32_MIN,INT64_MIN,QMIN,EMIN
from dfp64_fp import mode_names

log=logging.getLogger("dfp64")


#
# +-----------------------------+
# |                             |
# |    Decimal64 Value Class    |
# |                             |
# +-----------------------------+
#

# Instance Argument:
#   value   the value of the object:
#             - a string, parsed,
#             - an int, converted with from_long(),
#             - a decimal.Decimal, converted with from_decimal(),
#             - a float, converted with from_double(), or
#             - a Decimal64 object.
#           Defaults to 0.
class Decimal64(object):
    __slots__=("_bits",)

    # Create an object wrapping a BID word
    @classmethod
    def from_bits(cls,bits):
        if isinstance(bits,bool) or not isinstance(bits,int):
            raise TypeError("%s 'bits' argument must be an integer: %r" \
                % (eloc(cls(),"from_bits",module=this_module),bits))
        if bits < 0 or bits > dfp64_bid.WORD_MASK:
            raise ValueError("%s 'bits' argument out of 64-bit range: %s" \
                % (eloc(cls(),"from_bits",module=this_module),bits))
        obj=object.__new__(cls)
        object.__setattr__(obj,"_bits",bits)
        return obj

    @classmethod
    def from_bytes(cls,byts,byteorder="little"):
        return cls.from_bits(dfp64_bid.from_bytes(byts,byteorder=byteorder))

    # Create an object from a DPD interchange word
    @classmethod
    def from_dpd(cls,bits):
        return cls.from_bits(dfp64_dpd.dpd_to_bid(bits))

    @classmethod
    def from_decimal(cls,d):
        return cls.from_bits(dfp64_convert.from_decimal(d))

    @classmethod
    def from_decimal_exact(cls,d):
        return cls.from_bits(dfp64_convert.from_decimal_exact(d))

    @classmethod
    def from_fixed_point(cls,mantissa,digits):
        return cls.from_bits(dfp64_convert.from_fixed_point(mantissa,digits))

    @classmethod
    def from_double(cls,x):
        return cls.from_bits(dfp64_gmpy2.from_double(x))

    @classmethod
    def from_long(cls,n):
        return cls.from_bits(dfp64_convert.from_long(n))

    @classmethod
    def from_int(cls,n):
        return cls.from_bits(dfp64_convert.from_int(n))

    @classmethod
    def parse(cls,text,start=0,end=None):
        return cls.from_bits(dfp64_text.parse(text,start=start,end=end))

    # Returns a dfp64_text.ParseResult whose value is a Decimal64 object
    @classmethod
    def try_parse(cls,text,start=0,end=None):
        res=dfp64_text.try_parse(text,start=start,end=end)
        return dfp64_text.ParseResult(cls.from_bits(res.value),res.exact)

    @staticmethod
    def min(a,b,*more):
        return Decimal64.from_bits(dfp64_arith.minimum(a._bits,b._bits,\
            *[x._bits for x in more]))

    @staticmethod
    def max(a,b,*more):
        return Decimal64.from_bits(dfp64_arith.maximum(a._bits,b._bits,\
            *[x._bits for x in more]))

    def __init__(self,value=0):
        if isinstance(value,Decimal64):
            bits=value._bits
        elif isinstance(value,str):
            bits=dfp64_text.parse(value)
        elif isinstance(value,bool):
            raise TypeError("%s unsupported value type: %r" \
                % (eloc(self,"__init__",module=this_module),value))
        elif isinstance(value,int):
            bits=dfp64_convert.from_long(value)
        elif isinstance(value,decimal.Decimal):
            bits=dfp64_convert.from_decimal(value)
        elif isinstance(value,float):
            bits=dfp64_gmpy2.from_double(value)
        else:
            raise TypeError("%s unsupported value type: %r" \
                % (eloc(self,"__init__",module=this_module),value))
        object.__setattr__(self,"_bits",bits)

    def __setattr__(self,name,value):
        raise AttributeError("%s Decimal64 objects are immutable" \
            % eloc(self,"__setattr__",module=this_module))

    def __delattr__(self,name):
        raise AttributeError("%s Decimal64 objects are immutable" \
            % eloc(self,"__delattr__",module=this_module))

    def __reduce__(self):
        return (Decimal64.from_bits,(self._bits,))

    # The BID interchange word
    @property
    def bits(self):
        return self._bits

  #
  # Python protocol methods
  #

    def __repr__(self):
        return "Decimal64('%s')" % dfp64_text.to_string(self._bits)

    def __str__(self):
        return dfp64_text.to_string(self._bits)

    # Integral values hash like the equal int
    def __hash__(self):
        if dfp64_compare.is_finite(self._bits):
            value=dfp64_convert.to_decimal(self._bits)
            if value == value.to_integral_value():
                return hash(int(value))
        return dfp64_compare.value_hash(self._bits)

    def __bool__(self):
        return not dfp64_compare.is_zero(self._bits)

    # Truncates toward zero without a range limit
    def __int__(self):
        return dfp64_convert.to_integer(self._bits)

    def __float__(self):
        return dfp64_gmpy2.to_double(self._bits)

    # round(x) returns an int rounded half even, round(x,n) a Decimal64
    def __round__(self,ndigits=None):
        if ndigits is None:
            return int(self.round_to_nearest_ties_to_even())
        return self.round(ndigits)

    # Returns the comparison result with a Decimal64 or int operand, None for
    # other types.  Integers compare exactly, without rounding to 16 digits.
    def _compare_with(self,other):
        if isinstance(other,Decimal64):
            return dfp64_compare.compare(self._bits,other._bits)
        if not isinstance(other,int) or isinstance(other,bool):
            return None
        if dfp64_compare.is_nan(self._bits):
            return dfp64_compare.UNORDERED
        value=dfp64_convert.to_decimal(self._bits)
        if value < other:
            return dfp64_compare.LESS
        if value > other:
            return dfp64_compare.GREATER
        return dfp64_compare.EQUAL

    def __eq__(self,other):
        res=self._compare_with(other)
        if res is None:
            return NotImplemented
        return res == dfp64_compare.EQUAL

    def __ne__(self,other):
        res=self._compare_with(other)
        if res is None:
            return NotImplemented
        return res != dfp64_compare.EQUAL

    def __lt__(self,other):
        res=self._compare_with(other)
        if res is None:
            return NotImplemented
        return res == dfp64_compare.LESS

    def __le__(self,other):
        res=self._compare_with(other)
        if res is None:
            return NotImplemented
        return res in (dfp64_compare.LESS,dfp64_compare.EQUAL)

    def __gt__(self,other):
        res=self._compare_with(other)
        if res is None:
            return NotImplemented
        return res == dfp64_compare.GREATER

    def __ge__(self,other):
        res=self._compare_with(other)
        if res is None:
            return NotImplemented
        return res in (dfp64_compare.GREATER,dfp64_compare.EQUAL)

    def __neg__(self):
        return self.negate()

    def __pos__(self):
        return self

    def __abs__(self):
        return self.abs()

    def __add__(self,other):
        if isinstance(other,Decimal64):
            return self.add(other)
        if isinstance(other,int) and not isinstance(other,bool):
            return self.add(Decimal64.from_long(other))
        return NotImplemented

    def __radd__(self,other):
        return self.__add__(other)

    def __sub__(self,other):
        if isinstance(other,Decimal64):
            return self.subtract(other)
        if isinstance(other,int) and not isinstance(other,bool):
            return self.subtract(Decimal64.from_long(other))
        return NotImplemented

    def __rsub__(self,other):
        if isinstance(other,int) and not isinstance(other,bool):
            return Decimal64.from_long(other).subtract(self)
        return NotImplemented

    def __mul__(self,other):
        if isinstance(other,Decimal64):
            return self.multiply(other)
        if isinstance(other,int) and not isinstance(other,bool):
            return self.multiply_by_integer(other)
        return NotImplemented

    def __rmul__(self,other):
        return self.__mul__(other)

    def __truediv__(self,other):
        if isinstance(other,Decimal64):
            return self.divide(other)
        if isinstance(other,int) and not isinstance(other,bool):
            return self.divide_by_integer(other)
        return NotImplemented

    def __rtruediv__(self,other):
        if isinstance(other,int) and not isinstance(other,bool):
            return Decimal64.from_long(other).divide(self)
        return NotImplemented

  #
  # Arithmetic
  #

    def negate(self):
        return Decimal64.from_bits(dfp64_arith.negate(self._bits))

    def abs(self):
        return Decimal64.from_bits(dfp64_arith.absolute(self._bits))

    # Add one or more values in sequence
    def add(self,other,*more):
        bits=dfp64_arith.add(self._bits,other._bits)
        for x in more:
            bits=dfp64_arith.add(bits,x._bits)
        return Decimal64.from_bits(bits)

    def subtract(self,other):
        return Decimal64.from_bits(dfp64_arith.subtract(self._bits,other._bits))

    # Multiply by one or more values in sequence
    def multiply(self,other,*more):
        bits=dfp64_arith.multiply(self._bits,other._bits)
        for x in more:
            bits=dfp64_arith.multiply(bits,x._bits)
        return Decimal64.from_bits(bits)

    def multiply_by_integer(self,n):
        return Decimal64.from_bits(dfp64_arith.multiply_by_integer(self._bits,n))

    def divide(self,other):
        return Decimal64.from_bits(dfp64_arith.divide(self._bits,other._bits))

    def divide_by_integer(self,n):
        return Decimal64.from_bits(dfp64_arith.divide_by_integer(self._bits,n))

    # self*m+a with a single rounding
    def multiply_and_add(self,m,a):
        return Decimal64.from_bits(\
            dfp64_arith.multiply_and_add(self._bits,m._bits,a._bits))

    def scale_by_power_of_ten(self,n):
        return Decimal64.from_bits(dfp64_arith.scale_by_power_of_ten(self._bits,n))

    def average(self,other):
        return Decimal64.from_bits(dfp64_arith.average(self._bits,other._bits))

    def next_up(self):
        return Decimal64.from_bits(dfp64_arith.next_up(self._bits))

    def next_down(self):
        return Decimal64.from_bits(dfp64_arith.next_down(self._bits))

  #
  # Rounding
  #

    # Method Arguments:
    #   n       the number of fractional digits, or a Decimal64 multiple.  When
    #           omitted the value is rounded to an integer, ties away from zero.
    #   rmode   the rounding mode used with a number of fractional digits.  None
    #           for round half even.
    def round(self,n=None,rmode=None):
        if n is None:
            return Decimal64.from_bits(dfp64_arith.round_default(self._bits))
        if isinstance(n,Decimal64):
            return Decimal64.from_bits(dfp64_arith.round_to_multiple(\
                self._bits,n._bits,dfp64_round.DFP_HALF_UP))
        return Decimal64.from_bits(dfp64_arith.round_to_digits(self._bits,n,rmode))

    def round_to_multiple(self,multiple,rmode=None):
        return Decimal64.from_bits(\
            dfp64_arith.round_to_multiple(self._bits,multiple._bits,rmode))

    def round_to_reciprocal(self,r,rmode=None):
        return Decimal64.from_bits(\
            dfp64_arith.round_to_reciprocal(self._bits,r,rmode))

    def is_rounded(self,n):
        return dfp64_arith.is_rounded(self._bits,n)

    def is_rounded_to_reciprocal(self,r):
        return dfp64_arith.is_rounded_to_reciprocal(self._bits,r)

    def _named(self,function,multiple):
        if multiple is None:
            return Decimal64.from_bits(function(self._bits))
        return Decimal64.from_bits(function(self._bits,multiple._bits))

    def ceiling(self):
        return self._named(dfp64_arith.ceiling,None)

    def floor(self):
        return self._named(dfp64_arith.floor,None)

    def truncate(self):
        return self._named(dfp64_arith.truncate,None)

    def round_towards_positive_infinity(self,multiple=None):
        return self._named(dfp64_arith.round_towards_positive_infinity,multiple)

    def round_towards_negative_infinity(self,multiple=None):
        return self._named(dfp64_arith.round_towards_negative_infinity,multiple)

    def round_towards_zero(self,multiple=None):
        return self._named(dfp64_arith.round_towards_zero,multiple)

    def round_to_nearest_ties_away_from_zero(self,multiple=None):
        return self._named(dfp64_arith.round_to_nearest_ties_away_from_zero,multiple)

    def round_to_nearest_ties_to_even(self,multiple=None):
        return self._named(dfp64_arith.round_to_nearest_ties_to_even,multiple)

  #
  # Comparison and classification
  #

    # Returns dfp64_compare.LESS, EQUAL, GREATER or UNORDERED
    def compare(self,other):
        return dfp64_compare.compare(self._bits,other._bits)

    # Total order: -1, 0 or 1
    def compare_to(self,other):
        return dfp64_compare.compare_to(self._bits,other._bits)

    def is_identical_to(self,other):
        return dfp64_compare.identical(self._bits,other._bits)

    def identity_hash(self):
        return dfp64_compare.identity_hash(self._bits)

    def canonicalize(self):
        return Decimal64.from_bits(dfp64_compare.canonicalize(self._bits))

    def is_canonical(self):
        return dfp64_compare.is_canonical(self._bits)

    def is_nan(self):
        return dfp64_compare.is_nan(self._bits)

    def is_signaling_nan(self):
        return dfp64_compare.is_signaling_nan(self._bits)

    def is_infinity(self):
        return dfp64_compare.is_infinity(self._bits)

    def is_positive_infinity(self):
        return dfp64_compare.is_positive_infinity(self._bits)

    def is_negative_infinity(self):
        return dfp64_compare.is_negative_infinity(self._bits)

    def is_finite(self):
        return dfp64_compare.is_finite(self._bits)

    def is_normal(self):
        return dfp64_compare.is_normal(self._bits)

    def is_zero(self):
        return dfp64_compare.is_zero(self._bits)

    def is_nonzero(self):
        return dfp64_compare.is_nonzero(self._bits)

    def is_positive(self):
        return dfp64_compare.is_positive(self._bits)

    def is_negative(self):
        return dfp64_compare.is_negative(self._bits)

    def is_non_positive(self):
        return dfp64_compare.is_non_positive(self._bits)

    def is_non_negative(self):
        return dfp64_compare.is_non_negative(self._bits)

  #
  # Conversion
  #

    def to_decimal(self):
        return dfp64_convert.to_decimal(self._bits)

    def to_double(self,rmode=None):
        return dfp64_gmpy2.to_double(self._bits,rmode=rmode)

    def to_int(self):
        return dfp64_convert.to_int(self._bits)

    def to_long(self):
        return dfp64_convert.to_long(self._bits)

    def to_fixed_point(self,digits):
        return dfp64_convert.to_fixed_point(self._bits,digits)

    def unscaled_value(self,abnormal=INT64_MIN):
        return dfp64_convert.unscaled_value(self._bits,abnormal=abnormal)

    def scale(self,abnormal=INT32_MIN):
        return dfp64_convert.scale(self._bits,abnormal=abnormal)

    def to_bytes(self,byteorder="little"):
        return dfp64_bid.to_bytes(self._bits,byteorder=byteorder)

    # The DPD interchange word of the value
    def to_dpd(self):
        return dfp64_dpd.bid_to_dpd(self._bits)

    def to_string(self):
        return dfp64_text.to_string(self._bits)

    def to_scientific_string(self):
        return dfp64_text.to_scientific_string(self._bits)

    def append_to(self,sink):
        return dfp64_text.append_to(self._bits,sink)

    def scientific_append_to(self,sink):
        return dfp64_text.scientific_append_to(self._bits,sink)


# Named constants
Decimal64.NaN=Decimal64.from_bits(dfp64_bid.NAN)
Decimal64.SIGNALING_NAN=Decimal64.from_bits(dfp64_bid.SIGNALING_NAN)
Decimal64.POSITIVE_INFINITY=Decimal64.from_bits(dfp64_bid.POSITIVE_INFINITY)
Decimal64.NEGATIVE_INFINITY=Decimal64.from_bits(dfp64_bid.NEGATIVE_INFINITY)
Decimal64.MAX_VALUE=Decimal64.from_bits(dfp64_round.MAX_VALUE)
Decimal64.MIN_VALUE=Decimal64.from_bits(dfp64_round.MIN_VALUE)
Decimal64.MIN_POSITIVE_VALUE=Decimal64.from_bits(dfp64_bid.pack(0,1,QMIN))
Decimal64.MAX_NEGATIVE_VALUE=Decimal64.from_bits(dfp64_bid.pack(1,1,QMIN))
Decimal64.ZERO=Decimal64.from_bits(dfp64_bid.pack(0,0,0))
Decimal64.ONE=Decimal64.from_bits(dfp64_bid.pack(0,1,0))
Decimal64.TWO=Decimal64.from_bits(dfp64_bid.pack(0,2,0))
Decimal64.TEN=Decimal64.from_bits(dfp64_bid.pack(0,10,0))
Decimal64.HUNDRED=Decimal64.from_bits(dfp64_bid.pack(0,100,0))
Decimal64.THOUSAND=Decimal64.from_bits(dfp64_bid.pack(0,1000,0))
Decimal64.MILLION=Decimal64.from_bits(dfp64_bid.pack(0,1000000,0))
Decimal64.ONE_TENTH=Decimal64.from_bits(dfp64_bid.pack(0,1,-1))
Decimal64.ONE_HUNDREDTH=Decimal64.from_bits(dfp64_bid.pack(0,1,-2))


#
# +-------------------------------+
# |                               |
# |    Interchange Format Test    |
# |                               |
# +-------------------------------+
#

# This class is used to raise an exception when an input value can not be converted
class ConvertError(FPError):
    pass

# Perform a conversion of one input value.
# Instance Arguments:
#   value     A decimal floating point string, a hexadecimal string starting with
#             '0x' of 16 hexadecimal digits, or a special value name.
#   rmode     The rounding mode used for decimal floating point strings.  None for
#             round half even.
#   encoding  The interchange encoding of hexadecimal input: 'bid' or 'dpd'.
#   ar        Whether the abstract representation is displayed.  Defaults to True.
class Convert(object):
    has_digits=re.compile("[0-9]+")
    is_special=re.compile(r"(?P<sign>[+-])?(?P<lp>[\(])?(?P<val>([SsQq]?[Nn][Aa][Nn]|"\
        r"[Ii][Nn][Ff]|[Mm][Aa][Xx]|[Dd]?[Mm][Ii][Nn]))(?P<rp>[\)])?\Z")
    is_hexadecimal=re.compile(r"[0-9A-Fa-f]{16}\Z")

    # Special value words by name
    specials={"nan": dfp64_bid.NAN,
              "qnan":dfp64_bid.NAN,
              "snan":dfp64_bid.SIGNALING_NAN,
              "inf": dfp64_bid.POSITIVE_INFINITY,
              "max": dfp64_round.MAX_VALUE,
              "min": dfp64_bid.pack(0,1,EMIN),
              "dmin":dfp64_bid.pack(0,1,QMIN)}

    def __init__(self,value,rmode=None,encoding="bid",ar=True,debug=False):
        self.value=value         # Input value
        self.rmode=rmode         # Rounding mode of decimal strings
        self.encoding=encoding   # Encoding of hexadecimal input
        self.ar=ar               # Whether abstract representation is to be displayed.
        self.debug=debug         # Whether to enable debugging

        self.bits=None           # The resulting BID word
        self.exact=True          # Whether the conversion was exact
        self.special=None        # Normalized special value name

    def __str__(self):
        return "%s(%s,rmode=%s,encoding=%s,ar=%s,debug=%s)" \
            % (self.__class__.__name__,self.value,self.rmode,self.encoding,\
                self.ar,self.debug)

    def convert_hex(self,string):
        mo=Convert.is_hexadecimal.match(string)
        if mo is None:
            raise ConvertError(\
                msg="hexadecimal string '0x%s' must contain 16 hexadecimal digits" \
                    % string)
        word=int(string,16)
        if self.encoding == "dpd":
            word=dfp64_dpd.dpd_to_bid(word,debug=self.debug)
        self.bits=word

    def convert_special_value(self):
        mo=Convert.is_special.match(self.value)
        if mo is None:
            raise ConvertError(msg="unrecognized special value: '%s'" % self.value)
        dct=mo.groupdict()

        # Process parenthesis
        lp=dct["lp"]
        rp=dct["rp"]
        if (lp is None) != (rp is None):
            raise ConvertError(msg="mismatched parenthesis in special value: %s" \
                % self.value)

        val=dct["val"].lower()
        word=Convert.specials[val]
        if dct["sign"] == "-":
            word=dfp64_bid.with_sign(word,1)
        self.special="%s(%s)" % (dct["sign"] or "",val)
        self.bits=word

    def convert_finite_number(self):
        try:
            res=dfp64_text.try_parse(self.value,rmode=self.rmode,debug=self.debug)
        except FPError as fe:
            raise ConvertError(msg=fe.msg) from None
        self.bits=res.value
        self.exact=res.exact

    # Returns the abstract representation of the BID word
    def abstract(self):
        knd,sign,coef,exp=dfp64_bid.unpack(self.bits)
        s="-" if sign else "+"
        if knd == dfp64_bid.FINITE:
            return "%s%sE%s" % (s,coef,exp)
        return "%s%s" % (s,dfp64_bid.kind_names[knd])

    def display(self,indent="",string=False):
        s="%sBID:%016X  DPD:%016X" \
            % (indent,self.bits,dfp64_dpd.bid_to_dpd(self.bits))
        if self.ar:
            s="%s  %s" % (s,self.abstract())
        if self.special:
            s="%s  %s" % (s,self.special)
        elif not self.exact:
            s="%s  INEX" % s
        if string:
            return s
        print(s)

    # Perform the conversion
    def run(self):
        value=self.value
        assert len(value)>0,\
            "%s 'value' argument must not be an empty string" \
                % eloc(self,"run",module=this_module)
        if len(value)>=3 and value[:2].lower() == "0x":
            self.convert_hex(value[2:])
        else:
            mo=Convert.has_digits.search(value)
            if mo is None:
                self.convert_special_value()
            else:
                self.convert_finite_number()
        if __debug__:
            if self.debug:
                log.debug("%s %s -> %016X" % (eloc(self,"run",module=this_module),\
                    self,self.bits))


# The remainder of the module provides a command-line tool for converting decimal
# floating point values.  Command-line arguments may be supplied for conversion.
#
# If the --prompt option is used, user input is queried with a prompt.  User input
# ends when either 'end' or 'quit' is entered by the user.
#
# Regardless of the source of the input the argument or arguments supplied may be a:
#
#   - decimal floating point string,
#   - hexadecimal string starting with the characters '0x', or
#   - a special value.
#
# Each value is displayed as its BID and DPD interchange words and, unless --noar
# is used, its abstract representation: a sign, a coefficient and an exponent.
#
# The following case insensitive special values are supported:
#     qnan - quiet Not-a-Number
#     snan - signaling Not-a-Number
#     nan  - Not-a-Number
#     inf  - Infinity
#     max  - maximum number
#     min  - minimum normal number
#     dmin - minimum subnormal number
#
# All special values may be preceded with an optional sign.  However, negative
# special values may only be entered when queried due to conflicts with argument
# parsing.  Use --minus on the command line.

class ConvertRun(object):
    prompt="DFP64> "
    prompt_intro="\n"\
        "Welcome to the decimal64 conversion tool\n"\
        "At the %sprompt enter a decimal floating point string, a hexadecimal\n"\
        "interchange word starting with 0x, or a special value."\
        "\n\nTo terminate, enter either 'end' or 'quit' (without quotation "\
        "marks) or Cntrl-C."

    def __init__(self,args,out=None):
        self.args=args                 # Argument parser command line arguments
        self.ar=args.noar              # Whether abstract representation printing
        self.values=args.value         # command-line values
        self.minus=args.minus          # Whether to create a negative value
        self.debug=args.debug          # Whether conversions being debugged
        self.encoding=args.encoding    # Encoding of hexadecimal input
        self.rmode=None                # Rounding mode of decimal strings
        if args.rounding is not None:
            for num,name in mode_names.items():
                if name == args.rounding:
                    self.rmode=num
        self.out=out                   # Output file, None for sys.stdout

    def _force_minus(self,value):
        if value[0]=="+":
            return "-%s" % value[1:]
        if value[0]=="-":
            return value
        return "-%s" % value

    def _print(self,string):
        print(string,file=self.out)

    # Convert one value.  Returns True if successful.
    def convert(self,value):
        cvt=Convert(value,rmode=self.rmode,encoding=self.encoding,ar=self.ar,\
            debug=self.debug)
        try:
            cvt.run()
        except ConvertError as ce:
            self._print("ERROR: %s" % ce.msg)
            return False
        self._print(cvt.display(string=True))
        return True

    def query(self):
        if not self.args.quiet:
            self._print(ConvertRun.prompt_intro % ConvertRun.prompt)
        while True:
            string=input(ConvertRun.prompt)
            if not string.isprintable():
                self._print("ERROR: nonprintable characters")
                continue
            if string.lower() in ["end","quit"]:
                return
            args=string.split()
            if len(args) == 0:
                continue
            if len(args) > 1:
                self._print("ERROR: maximum one argument allowed: %s" % len(args))
                continue
            self.convert(args[0])

    # Returns the number of values that failed conversion
    def run(self):
        log.info("%s rounding mode: %s, hexadecimal encoding: %s" \
            % (eloc(self,"run",module=this_module),\
                mode_names.get(self.rmode,"half_even"),self.encoding))
        if self.args.prompt:
            try:
                self.query()
            except (KeyboardInterrupt,EOFError):
                self._print("")
            return 0
        return self.test()

    def test(self):
        errors=0
        for v in self.values:
            if self.minus:
                v=self._force_minus(v)
            if not self.convert(v):
                errors+=1
        log.info("%s values converted: %s, errors: %s" \
            % (eloc(self,"test",module=this_module),len(self.values)-errors,errors))
        return errors


# Parse the command-line arguments
def parse_args(argv=None):
    import argparse
    parser=argparse.ArgumentParser(prog="dfp64",
        epilog=copyright,
        description="Convert decimal64 floating point values")
    parser.add_argument("value",nargs="*",\
        help="one or more strings to be converted to the interchange formats.")
    parser.add_argument("-r","--rounding",default=None,\
        choices=[mode_names[n] for n in sorted(mode_names)],\
        help="rounding mode of decimal strings. Defaults to half_even.")
    parser.add_argument("-e","--encoding",default="bid",choices=["bid","dpd"],\
        help="encoding of hexadecimal input values. Defaults to bid.")
    parser.add_argument("-l","--length",default=8,type=int,choices=[8],\
        help="length in bytes of the interchange format. Only 8 is supported.")
    parser.add_argument("-m","--minus",default=False,action="store_true",\
        help="convert command-line value(s) to negative")
    parser.add_argument("-q","--quiet",default=False,action="store_true",\
        help="disable copyright notice")
    parser.add_argument("--noar",default=True,action="store_false",\
        help="disable abstract representation")
    parser.add_argument("--prompt",default=False,action="store_true",\
        help="enable input prompt mode")
    parser.add_argument("-v","--verbose",default=False,action="store_true",\
        help="print status messages")
    parser.add_argument("--debug",default=False,action="store_true",\
        help="enable debugging of value conversions")
    return parser.parse_args(argv)

# Command-line entry point.  Returns the exit status.
def main(argv=None):
    logging.basicConfig(level=logging.ERROR)
    args=parse_args(argv)

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)
    elif args.verbose:
        logging.getLogger().setLevel(logging.INFO)
    else:
        logging.getLogger().setLevel(logging.WARN)

    if not args.quiet:
        print(copyright)

    if not args.value and not args.prompt:
        args.prompt=True

    errors=ConvertRun(args).run()
    if errors:
        return 1
    return 0


if __name__ == "__main__":
    import sys
    sys.exit(main())
