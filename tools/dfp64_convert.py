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

# This module converts between Decimal64 words and other Python representations of
# numbers:
#
#   - Python decimal.Decimal objects,
#   - machine integers, 32-bit (int) and 64-bit (long) ranges,
#   - fixed point integers with a number of fractional digits, and
#   - the unscaled value and scale of a word.
#
# Binary floating point conversions are provided by the dfp64_gmpy2 module.
#
# Integers outside of a declared machine range raise OverflowError.  NaN can not be
# converted to an integer and raises ValueError.

this_module="dfp64_convert.py"

# Python imports:
import decimal     # Access Python native decimal floating point support
# dfp64 imports:
import dfp64_bid
import dfp64_round
from dfp64_fp import PrecisionLossError,floc
from dfp64_fp import PREC,QMIN,QMAX,MAX_COEFFICIENT,INT32_MIN,INT32_MAX,\
                     INT64_MIN,INT64_MAX,DFP_HALF_EVEN,DFP_HALF_UP,DFP_DOWN


# Check that an integer argument is within a machine range.
# Returns: the integer
# Exceptions:
#   TypeError if the argument is not an integer
#   OverflowError if the argument is outside the range
def _ck_range(n,low,high,function):
    if isinstance(n,bool) or not isinstance(n,int):
        raise TypeError("%s integer required: %r" % (floc(function,this_module),n))
    if n < low or n > high:
        raise OverflowError("%s integer out of range (%s to %s): %s" \
            % (floc(function,this_module),low,high,n))
    return n


#
# +-----------------------+
# |                       |
# |    Integer Sources    |
# |                       |
# +-----------------------+
#

# Create a word from an integer in the 32-bit range.  Always exact.
def from_int(n):
    _ck_range(n,INT32_MIN,INT32_MAX,"from_int")
    if n < 0:
        return dfp64_bid.pack(1,-n,0)
    return dfp64_bid.pack(0,n,0)

# Create a word from an integer in the 64-bit range.  Integers of more than 16
# digits are rounded half even.
def from_long(n):
    _ck_range(n,INT64_MIN,INT64_MAX,"from_long")
    sign=int(n < 0)
    return dfp64_round.finish(sign,abs(n),0)[0]

# Create a word from a fixed point integer: (12345, 2) -> 123.45
# Function Arguments:
#   mantissa   the fixed point value as an integer in the 64-bit range
#   digits     the number of fractional digits in the mantissa
def from_fixed_point(mantissa,digits):
    _ck_range(mantissa,INT64_MIN,INT64_MAX,"from_fixed_point")
    if isinstance(digits,bool) or not isinstance(digits,int):
        raise TypeError("%s 'digits' argument must be an integer: %r" \
            % (floc("from_fixed_point",this_module),digits))
    sign=int(mantissa < 0)
    coef=abs(mantissa)
    exp=-digits
    if coef <= MAX_COEFFICIENT and QMIN <= exp <= QMAX:
        return dfp64_bid.pack(sign,coef,exp)
    return dfp64_round.finish(sign,coef,exp)[0]


#
# +-----------------------------+
# |                             |
# |    Python decimal Module    |
# |                             |
# +-----------------------------+
#

# Returns the sign, coefficient and exponent of a finite decimal.Decimal.  Digits
# beyond those that can influence rounding are replaced by a sticky digit.
def _decimal_fields(d):
    sign,digits,exp=d.as_tuple()
    keep=PREC+2
    if len(digits) > keep:
        sticky=0
        for dg in digits[keep:]:
            if dg:
                sticky=1
                break
        exp+=len(digits)-keep-1
        digits=digits[:keep]+(sticky,)
    coef=0
    for dg in digits:
        coef=coef*10+dg
    return (sign,coef,exp)

# Convert a decimal.Decimal into a word
# Returns:
#   a tuple: tuple[0] the word
#            tuple[1] True if the word differs from the decimal value
def _from_decimal(d,function):
    if not isinstance(d,decimal.Decimal):
        raise TypeError("%s decimal.Decimal required: %r" \
            % (floc(function,this_module),d))
    if d.is_nan():
        return (dfp64_bid.pack_nan(int(d.is_signed()),signaling=d.is_snan()),False)
    if d.is_infinite():
        return (dfp64_bid.pack_infinity(int(d.is_signed())),False)
    sign,coef,exp=_decimal_fields(d)
    return dfp64_round.finish(sign,coef,exp,DFP_HALF_EVEN)

# Create a word from a decimal.Decimal, rounding half even when needed
def from_decimal(d):
    return _from_decimal(d,"from_decimal")[0]

# Create a word from a decimal.Decimal.
# Exception:
#   PrecisionLossError if the value can not be represented without rounding
def from_decimal_exact(d):
    word,inexact=_from_decimal(d,"from_decimal_exact")
    if inexact:
        raise PrecisionLossError("%s value can not be represented exactly: %s" \
            % (floc("from_decimal_exact",this_module),d))
    return word

# Convert a word into a decimal.Decimal.  Special values become the decimal NaN,
# sNaN and Infinity values with the word's sign.
def to_decimal(a):
    knd,sign,coef,exp=dfp64_bid.unpack(a)
    if knd == dfp64_bid.FINITE:
        digits=tuple(int(c) for c in str(coef))
        return decimal.Decimal((sign,digits,exp))
    if knd == dfp64_bid.INFINITY:
        return decimal.Decimal((sign,(0,),"F"))
    if knd == dfp64_bid.SNAN:
        return decimal.Decimal((sign,(),"N"))
    return decimal.Decimal((sign,(),"n"))


#
# +-----------------------+
# |                       |
# |    Integer Results    |
# |                       |
# +-----------------------+
#

# Returns the value truncated toward zero as a Python integer.
# Exceptions:
#   ValueError for a NaN
#   OverflowError for an infinity
def _truncate(a,function):
    knd,sign,coef,exp=dfp64_bid.unpack(a)
    if knd >= dfp64_bid.QNAN:
        raise ValueError("%s NaN can not be converted to an integer" \
            % floc(function,this_module))
    if knd == dfp64_bid.INFINITY:
        raise OverflowError("%s infinity can not be converted to an integer" \
            % floc(function,this_module))
    if exp >= 0:
        value=coef*10**exp
    else:
        value,inexact=dfp64_round.shed(sign,coef,-exp,DFP_DOWN)
    if sign:
        return -value
    return value

# Convert a word to a Python integer of any size, truncating toward zero
def to_integer(a):
    return _truncate(a,"to_integer")

# Convert a word to an integer in the 32-bit range, truncating toward zero
def to_int(a):
    return _ck_range(_truncate(a,"to_int"),INT32_MIN,INT32_MAX,"to_int")

# Convert a word to an integer in the 64-bit range, truncating toward zero
def to_long(a):
    return _ck_range(_truncate(a,"to_long"),INT64_MIN,INT64_MAX,"to_long")

# Convert a word to a fixed point integer: (123.4567, 2) -> 12346.  The value is
# rounded half up, ties away from zero.
# Exceptions:
#   ValueError for a NaN
#   OverflowError for an infinity or a result outside the 64-bit range
def to_fixed_point(a,digits):
    if isinstance(digits,bool) or not isinstance(digits,int):
        raise TypeError("%s 'digits' argument must be an integer: %r" \
            % (floc("to_fixed_point",this_module),digits))
    knd,sign,coef,exp=dfp64_bid.unpack(a)
    if knd >= dfp64_bid.QNAN:
        raise ValueError("%s NaN can not be converted to fixed point" \
            % floc("to_fixed_point",this_module))
    if knd == dfp64_bid.INFINITY:
        raise OverflowError("%s infinity can not be converted to fixed point" \
            % floc("to_fixed_point",this_module))
    exp+=digits
    if coef == 0:
        value=0
    elif exp > 19:
        # At least 20 digits can not fit 64 bits
        raise OverflowError("%s fixed point value out of 64-bit range: %s" \
            % (floc("to_fixed_point",this_module),exp))
    elif exp >= 0:
        value=coef*10**exp
    else:
        value,inexact=dfp64_round.shed(sign,coef,-exp,DFP_HALF_UP)
    if sign:
        value=-value
    return _ck_range(value,INT64_MIN,INT64_MAX,"to_fixed_point")

# Returns the signed coefficient of the word, or abnormal for NaN and infinity
def unscaled_value(a,abnormal=INT64_MIN):
    knd,sign,coef,exp=dfp64_bid.unpack(a)
    if knd != dfp64_bid.FINITE:
        return abnormal
    if sign:
        return -coef
    return coef

# Returns the number of fractional digits of the word, the negated exponent, or
# abnormal for NaN and infinity
def scale(a,abnormal=INT32_MIN):
    knd,sign,coef,exp=dfp64_bid.unpack(a)
    if knd != dfp64_bid.FINITE:
        return abnormal
    return -exp
