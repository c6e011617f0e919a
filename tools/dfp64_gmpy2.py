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

# This module uses the externally installed gmpy2 package (an MPFR wrapper) for
# conversions between Decimal64 words and 64-bit binary floating point values.
#
# Each conversion is exact up to a single rounding:
#   - to_double() builds the exact rational value of the word and lets MPFR round
#     it within an IEEE 754 binary64 context, subnormals included.
#   - from_double() takes the exact binary value as an integer ratio whose
#     denominator is a power of two, turns it into an exact decimal coefficient and
#     rounds it with the dfp64 rounding engine.
#
# The binary64 context is only established for the duration of a conversion.  The
# gmpy2 context of the caller is restored.

this_module="dfp64_gmpy2.py"

# Python imports:
import logging     # Access debug tracing
# gmpy2 imports:
import gmpy2       # Access MPFR binary floating point
# dfp64 imports:
import dfp64_bid
import dfp64_round
from dfp64_fp import floc
from dfp64_fp import BFP_HALF_UP,BFP_HALF_EVEN,BFP_DOWN,BFP_CEILING,BFP_FLOOR,\
                     DFP_HALF_EVEN

log=logging.getLogger("dfp64.gmpy2")

# Returns the MPFR value of x created in an IEEE 754 binary64 context.  The caller's
# context is restored afterwards.
def _binary64(x,rnd=gmpy2.RoundToNearest):
    ctx=gmpy2.ieee(64)
    ctx.round=rnd
    saved=gmpy2.get_context()
    gmpy2.set_context(ctx)
    try:
        return gmpy2.mpfr(x)
    finally:
        gmpy2.set_context(saved)

# Maps numeric binary rounding mode to gmpy2 mode             Num   GMPY2
rounding={BFP_HALF_UP:gmpy2.RoundAwayZero,                  # 1     4
          BFP_HALF_EVEN:gmpy2.RoundToNearest,               # 4     0
          BFP_DOWN:gmpy2.RoundToZero,                       # 5     1
          BFP_CEILING:gmpy2.RoundUp,                        # 6     2
          BFP_FLOOR:gmpy2.RoundDown}                        # 7     3

# Returns the gmpy2 rounding mode of a numeric binary rounding mode.
# Exception:
#   ValueError if the rounding mode is not a binary rounding mode
def gmpy2_rounding(rmode):
    if rmode is None:
        return gmpy2.RoundToNearest
    try:
        return rounding[rmode]
    except KeyError:
        raise ValueError("%s unrecognized BFP rounding mode: %r" \
            % (floc("gmpy2_rounding",this_module),rmode)) from None


# Convert a word into a Python float.
# Function Arguments:
#   a       the Decimal64 word
#   rmode   the binary rounding mode number: 1, 4, 5, 6 or 7.  None for 4, round
#           half even.
#   debug   Specify True to trace the conversion.  Defaults to False.
def to_double(a,rmode=None,debug=False):
    rnd=gmpy2_rounding(rmode)
    knd,sign,coef,exp=dfp64_bid.unpack(a)
    if knd >= dfp64_bid.QNAN:
        return float("nan")
    if knd == dfp64_bid.INFINITY:
        if sign:
            return float("-inf")
        return float("inf")
    if coef == 0:
        if sign:
            return -0.0
        return 0.0

    if sign:
        coef=-coef
    if exp >= 0:
        q=gmpy2.mpq(coef*10**exp,1)
    else:
        q=gmpy2.mpq(coef,10**(-exp))

    result=float(_binary64(q,rnd))

    if __debug__:
        if debug:
            log.debug("%s %016X -> %r" % (floc("to_double",this_module),a,result))

    return result

# Convert a Python float into the nearest word, rounding half even.  The result is
# not canonicalized.
def from_double(x,debug=False):
    if not isinstance(x,(float,int)):
        raise TypeError("%s float required: %r" % (floc("from_double",this_module),x))
    m=_binary64(x)
    sign=int(gmpy2.is_signed(m))

    if gmpy2.is_nan(m):
        return dfp64_bid.NAN
    if gmpy2.is_infinite(m):
        return dfp64_bid.pack_infinity(sign)
    if gmpy2.is_zero(m):
        return dfp64_bid.pack(sign,0,0)

    num,den=m.as_integer_ratio()
    num=abs(int(num))
    den=int(den)
    # den is 2**k, so num/den is exactly num*5**k at exponent -k
    k=den.bit_length()-1
    word=dfp64_round.finish(sign,num*5**k,-k,DFP_HALF_EVEN)[0]

    if __debug__:
        if debug:
            log.debug("%s %r -> %016X" % (floc("from_double",this_module),x,word))

    return word
