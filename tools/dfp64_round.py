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

# This module is the rounding engine.  It takes an exact result, an integer
# coefficient of any length with an exponent of any size, and turns it into a
# Decimal64 word.  Two entry points exist:
#
#   round_digits()   rounds a coefficient so that its exponent is at least a
#                    requested value, and
#   finish()         rounds to the format's precision, applies the exponent range
#                    and packs the word.
#
# The coefficient digits being discarded are never materialized as a list.  They
# are reduced to a comparison with half of a unit in the last kept digit, plus an
# inexact flag, which is all any rounding mode needs.

this_module="dfp64_round.py"

# dfp64 imports:
import dfp64_bid
from dfp64_fp import PrecisionLossError,floc,ndigits,dfp_mode
from dfp64_fp import PREC,QMIN,QMAX,MAX_COEFFICIENT
from dfp64_fp import DFP_HALF_EVEN,DFP_DOWN,DFP_CEILING,DFP_FLOOR,DFP_HALF_UP,\
                     DFP_HALF_DOWN,DFP_UP,DFP_05UP,DFP_UNNECESSARY

# Largest finite words
MAX_VALUE=dfp64_bid.pack(0,MAX_COEFFICIENT,QMAX)
MIN_VALUE=dfp64_bid.pack(1,MAX_COEFFICIENT,QMAX)


#
# +--------------------------------+
# |                                |
# |    Rounding Mode Algorithms    |
# |                                |
# +--------------------------------+
#

# Each rounding mode is a function deciding whether the kept coefficient is
# incremented by one.
# Function Arguments:
#   sign     the sign of the value being rounded, 0 or 1
#   keep     the kept coefficient digits as an integer
#   half     how the discarded digits compare to half a unit of the last kept digit:
#             1 if greater than half, 0 if exactly half, -1 if less than half
#   inexact  whether any discarded digit is not zero
# Returns:
#   True if the kept coefficient is to be incremented, False otherwise

# Round toward +infinity
#   DFP mode: 10
def _round_ceiling(sign,keep,half,inexact):
    return inexact and sign == 0

# Round towards 0, truncate
#  DFP Mode: 9
def _round_down(sign,keep,half,inexact):
    return False

# Round toward -infinity
#  DFP Mode: 11
def _round_floor(sign,keep,half,inexact):
    return inexact and sign == 1

# Round Half Down
#   DFP Mode: 13
def _round_half_down(sign,keep,half,inexact):
    return half > 0

# Round Half Even
#  DFP Mode: 8 - default
def _round_half_even(sign,keep,half,inexact):
    if half > 0:
        return True
    if half == 0:
        # Exactly half, so make the last kept digit even
        return keep & 1 == 1
    return False

# Round Half Up
#  DFP Mode: 12
def _round_half_up(sign,keep,half,inexact):
    return half >= 0

# Round Away from Zero
#  DFP Mode: 14
def _round_up(sign,keep,half,inexact):
    return inexact

# Round Zero or Five Away From Zero
#  DFP Mode: 15
def _round_05up(sign,keep,half,inexact):
    digit=keep % 10
    return inexact and ( digit == 0 or digit == 5 )

# Rounding asserted to be unnecessary
#  DFP Mode: 16
def _round_unnecessary(sign,keep,half,inexact):
    if inexact:
        raise PrecisionLossError("%s rounding necessary with mode unnecessary" \
            % floc("_round_unnecessary",this_module))
    return False

rounding_modes={DFP_CEILING:    _round_ceiling,
                DFP_DOWN:       _round_down,
                DFP_FLOOR:      _round_floor,
                DFP_HALF_DOWN:  _round_half_down,
                DFP_HALF_EVEN:  _round_half_even,
                DFP_HALF_UP:    _round_half_up,
                DFP_UP:         _round_up,
                DFP_05UP:       _round_05up,
                DFP_UNNECESSARY:_round_unnecessary}

# Returns the function implementing a rounding mode.
# Exception:
#   ValueError if the rounding mode is not recognized
def get_rounding_method(rmode):
    return rounding_modes[dfp_mode(rmode)]


#
# +----------------------------+
# |                            |
# |    Coefficient Rounding    |
# |                            |
# +----------------------------+
#

# Discard the low-order digits of a coefficient applying a rounding mode.
# Function Arguments:
#   sign    the sign of the value, 0 or 1
#   coef    the coefficient as a non-negative integer
#   drop    the number of low-order digits discarded
#   rmode   the rounding mode number
# Returns:
#   a tuple: tuple[0] the rounded coefficient.  A carry may add a digit.
#            tuple[1] True if nonzero digits were discarded
def shed(sign,coef,drop,rmode):
    if drop <= 0:
        return (coef,False)

    if drop > ndigits(coef):
        # Every digit is discarded and the coefficient is below half of the unit
        keep=0
        inexact = coef != 0
        half=-1
    else:
        unit=10**drop
        keep,rest=divmod(coef,unit)
        inexact = rest != 0
        twice=rest*2
        if twice > unit:
            half=1
        elif twice == unit:
            half=0
        else:
            half=-1

    if inexact and rounding_modes[rmode](sign,keep,half,inexact):
        keep+=1
    return (keep,inexact)

# Round the rational value num/den to an integer under a rounding mode.
# Function Arguments:
#   sign    the sign of the value, 0 or 1
#   num     non-negative integer numerator
#   den     positive integer denominator
#   rmode   the rounding mode number
# Returns:
#   a tuple: tuple[0] the rounded integer magnitude
#            tuple[1] True if the quotient was inexact
def round_quotient(sign,num,den,rmode):
    assert den > 0,"%s denominator must be positive: %s" \
        % (floc("round_quotient",this_module),den)

    keep,rest=divmod(num,den)
    if rest == 0:
        return (keep,False)
    twice=rest*2
    if twice > den:
        half=1
    elif twice == den:
        half=0
    else:
        half=-1
    if rounding_modes[rmode](sign,keep,half,True):
        keep+=1
    return (keep,True)

# Round a coefficient so its exponent is at least -scale.  A value whose exponent
# already meets the request is returned unchanged.
# Function Arguments:
#   sign    the sign of the value, 0 or 1
#   coef    the coefficient as a non-negative integer
#   exp     the exponent of the coefficient
#   scale   the number of fractional digits kept
#   rmode   the rounding mode: a number, a decimal module name or None
# Returns:
#   a tuple: tuple[0] the rounded coefficient
#            tuple[1] its exponent
#            tuple[2] True if nonzero digits were discarded
def round_digits(sign,coef,exp,scale,rmode=DFP_HALF_EVEN):
    rmode=dfp_mode(rmode)
    target=-scale
    if exp >= target:
        return (coef,exp,False)
    keep,inexact=shed(sign,coef,target-exp,rmode)
    return (keep,target,inexact)


#
# +------------------------+
# |                        |
# |    Result Finishing    |
# |                        |
# +------------------------+
#

# Returns the word produced by an overflow.  Modes rounding toward zero for the
# sign of the result saturate to the largest finite magnitude.
def overflow_word(sign,rmode):
    if rmode == DFP_UNNECESSARY:
        raise PrecisionLossError("%s result overflows the format" \
            % floc("overflow_word",this_module))
    if rmode in (DFP_HALF_EVEN,DFP_HALF_UP,DFP_HALF_DOWN,DFP_UP):
        return dfp64_bid.pack_infinity(sign)
    if sign == 0:
        if rmode == DFP_CEILING:
            return dfp64_bid.POSITIVE_INFINITY
        return MAX_VALUE
    if rmode == DFP_FLOOR:
        return dfp64_bid.NEGATIVE_INFINITY
    return MIN_VALUE

# Round an exact result to a Decimal64 word.
# Function Arguments:
#   sign    the sign of the result, 0 or 1
#   coef    the exact coefficient as a non-negative integer of any length
#   exp     the exponent of the coefficient, of any size
#   rmode   the rounding mode number.  Defaults to DFP_HALF_EVEN.
# Returns:
#   a tuple: tuple[0] the Decimal64 word
#            tuple[1] True if the result differs from the exact value
#
# The coefficient is reduced to 16 digits and raised to the minimum exponent with a
# single rounding.  Results whose exponent exceeds the maximum have zeros appended
# to the coefficient when it can absorb them.  Otherwise the result overflows.
# Results below the smallest subnormal round to a signed zero or to the smallest
# subnormal.
def finish(sign,coef,exp,rmode=DFP_HALF_EVEN):
    inexact=False

    drop=ndigits(coef)-PREC
    if QMIN-exp > drop:
        drop=QMIN-exp
    if drop > 0:
        coef,inexact=shed(sign,coef,drop,rmode)
        exp+=drop
        if coef > MAX_COEFFICIENT:
            # Carry out of the left-most digit
            coef//=10
            exp+=1

    if coef == 0:
        if exp < QMIN:
            exp=QMIN
        elif exp > QMAX:
            exp=QMAX
        return (dfp64_bid.pack(sign,0,exp),inexact)

    if exp > QMAX:
        shift=exp-QMAX
        if ndigits(coef)+shift <= PREC:
            coef*=10**shift
            exp=QMAX
        else:
            return (overflow_word(sign,rmode),True)

    return (dfp64_bid.pack(sign,coef,exp),inexact)
