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

# This module is the arithmetic core.  Every operation takes and returns Decimal64
# words.  An operation first applies the special value rules of the dfp64_special
# module.  When the operands are finite, the result is computed exactly with
# integer coefficients, or exactly enough with a sticky digit standing for digits
# that can only influence rounding as a nonzero remainder, and is rounded once by
# dfp64_round.finish() using round half even.
#
# Operations never raise exceptions for invalid operations.  They return the
# canonical quiet NaN.

this_module="dfp64_arith.py"

# dfp64 imports:
import dfp64_bid
import dfp64_compare
import dfp64_round
import dfp64_special
from dfp64_fp import floc,ndigits,dfp_mode
from dfp64_fp import PREC,QMIN,DFP_HALF_EVEN,DFP_DOWN,DFP_CEILING,DFP_FLOOR,\
                     DFP_HALF_UP

NAN=dfp64_bid.NAN
MIN_POSITIVE=dfp64_bid.pack(0,1,QMIN)

# Extra digits given to the larger-exponent operand when the other operand only
# contributes a sticky unit.  At least two digits then separate the sticky unit
# from the first discarded digit.
STICKY_SHIFT=PREC+2


# Returns the integer argument after checking its type
def _ck_int(n,name,function):
    if isinstance(n,bool) or not isinstance(n,int):
        raise TypeError("%s '%s' argument must be an integer: %r" \
            % (floc(function,this_module),name,n))
    return n


#
# +------------------------------+
# |                              |
# |    Addition & Subtraction    |
# |                              |
# +------------------------------+
#

# Add two finite signed coefficients without rounding.
# Function Arguments:
#   sa, ca, ea   sign, coefficient and exponent of the first operand
#   sb, cb, eb   sign, coefficient and exponent of the second operand
#   rmode        the rounding mode used for the result, which decides the sign of
#                an exact zero sum
# Returns:
#   a tuple of the sign, coefficient and exponent of the sum.  The coefficient is
#   exact, or carries a sticky unit in its last digit when the operand with the
#   smaller exponent lies entirely below the rounding position.
def sum_fields(sa,ca,ea,sb,cb,eb,rmode=DFP_HALF_EVEN):
    if ca == 0 and cb == 0:
        return (dfp64_special.zero_sum_sign(sa,sb,rmode),0,min(ea,eb))

    if ea < eb:
        sa,ca,ea,sb,cb,eb = sb,cb,eb,sa,ca,ea
    d=ea-eb

    if ca == 0:
        return (sb,cb,eb)
    if cb == 0:
        # Move toward the ideal exponent as far as the precision allows
        shift=PREC-ndigits(ca)
        if shift > d:
            shift=d
        if shift < 0:
            shift=0
        return (sa,ca*10**shift,ea-shift)

    if d < ndigits(cb)+STICKY_SHIFT:
        va=ca*10**d
        if sa == sb:
            return (sa,va+cb,eb)
        diff=va-cb
        if diff > 0:
            return (sa,diff,eb)
        if diff < 0:
            return (sb,-diff,eb)
        return (dfp64_special.zero_sum_sign(sa,sb,rmode),0,eb)

    # The second operand is less than one unit of the extended first operand
    x=ca*10**STICKY_SHIFT
    if sa == sb:
        x+=1
    else:
        x-=1
    return (sa,x,ea-STICKY_SHIFT)

def add(a,b):
    res=dfp64_special.classify_add(a,b)
    if res is not None:
        return res[0]
    knd,sa,ca,ea=dfp64_bid.unpack(a)
    knd,sb,cb,eb=dfp64_bid.unpack(b)
    sign,coef,exp=sum_fields(sa,ca,ea,sb,cb,eb)
    return dfp64_round.finish(sign,coef,exp)[0]

def add3(a,b,c):
    return add(add(a,b),c)

def add4(a,b,c,d):
    return add(add(add(a,b),c),d)

def subtract(a,b):
    return add(a,negate(b))


#
# +----------------------+
# |                      |
# |    Multiplication    |
# |                      |
# +----------------------+
#

def multiply(a,b):
    ka,sa,ca,ea=dfp64_bid.unpack(a)
    kb,sb,cb,eb=dfp64_bid.unpack(b)
    sign=sa ^ sb
    if ka != dfp64_bid.FINITE or kb != dfp64_bid.FINITE:
        return dfp64_special.classify_multiply(sign,\
            dfp64_special.operand_class(a),dfp64_special.operand_class(b))[0]
    return dfp64_round.finish(sign,ca*cb,ea+eb)[0]

def multiply3(a,b,c):
    return multiply(multiply(a,b),c)

def multiply4(a,b,c,d):
    return multiply(multiply(multiply(a,b),c),d)

# Multiply a word by a Python integer of any size with a single rounding
def multiply_by_integer(a,n):
    _ck_int(n,"n","multiply_by_integer")
    ka,sa,ca,ea=dfp64_bid.unpack(a)
    sn=int(n < 0)
    sign=sa ^ sn
    if ka != dfp64_bid.FINITE:
        return dfp64_special.classify_multiply(sign,\
            dfp64_special.operand_class(a),dfp64_special.integer_class(n))[0]
    return dfp64_round.finish(sign,ca*abs(n),ea)[0]

# Fused multiply and add: a*m+c with a single rounding
def multiply_and_add(a,m,c):
    res=dfp64_special.classify_multiply_add(a,m,c)
    if res is not None:
        return res[0]
    knd,sa,ca,ea=dfp64_bid.unpack(a)
    knd,sm,cm,em=dfp64_bid.unpack(m)
    knd,sc,cc,ec=dfp64_bid.unpack(c)
    sign,coef,exp=sum_fields(sa ^ sm,ca*cm,ea+em,sc,cc,ec)
    return dfp64_round.finish(sign,coef,exp)[0]

def scale_by_power_of_ten(a,n):
    _ck_int(n,"n","scale_by_power_of_ten")
    res=dfp64_special.classify_unary(a)
    if res is not None:
        return res[0]
    knd,sign,coef,exp=dfp64_bid.unpack(a)
    return dfp64_round.finish(sign,coef,exp+n)[0]


#
# +----------------+
# |                |
# |    Division    |
# |                |
# +----------------+
#

# Divide two finite coefficients, the divisor being nonzero.  The quotient is
# developed to 17 or 18 digits.  A nonzero remainder appends a sticky digit.  An
# exact quotient drops trailing zeros while its exponent is below the ideal
# exponent ea-eb.
def divide_fields(sign,ca,ea,cb,eb):
    assert cb > 0,"%s divisor coefficient must be positive: %s" \
        % (floc("divide_fields",this_module),cb)

    if ca == 0:
        return dfp64_round.finish(sign,0,ea-eb)[0]

    shift=ndigits(cb)-ndigits(ca)+PREC+1
    if shift < 0:
        shift=0
    quotient,remainder=divmod(ca*10**shift,cb)
    exp=ea-eb-shift
    if remainder:
        quotient=quotient*10+1
        exp-=1
    else:
        ideal=ea-eb
        while exp < ideal and quotient % 10 == 0:
            quotient//=10
            exp+=1
    return dfp64_round.finish(sign,quotient,exp)[0]

def divide(a,b):
    ka,sa,ca,ea=dfp64_bid.unpack(a)
    kb,sb,cb,eb=dfp64_bid.unpack(b)
    sign=sa ^ sb
    if ka != dfp64_bid.FINITE or kb != dfp64_bid.FINITE or cb == 0:
        return dfp64_special.classify_divide(sign,\
            dfp64_special.operand_class(a),dfp64_special.operand_class(b))[0]
    return divide_fields(sign,ca,ea,cb,eb)

# Divide a word by a Python integer of any size with a single rounding
def divide_by_integer(a,n):
    _ck_int(n,"n","divide_by_integer")
    ka,sa,ca,ea=dfp64_bid.unpack(a)
    sign=sa ^ int(n < 0)
    if ka != dfp64_bid.FINITE or n == 0:
        return dfp64_special.classify_divide(sign,\
            dfp64_special.operand_class(a),dfp64_special.integer_class(n))[0]
    return divide_fields(sign,ca,ea,abs(n),0)

# The exact mean of two values with a single rounding
def average(a,b):
    res=dfp64_special.classify_add(a,b)
    if res is not None:
        return res[0]
    knd,sa,ca,ea=dfp64_bid.unpack(a)
    knd,sb,cb,eb=dfp64_bid.unpack(b)
    sign,coef,exp=sum_fields(sa,ca,ea,sb,cb,eb)
    if coef == 0:
        return dfp64_round.finish(sign,0,exp)[0]
    # Halving is multiplying by 5 with one less exponent
    return dfp64_round.finish(sign,coef*5,exp-1)[0]


#
# +--------------------------------+
# |                                |
# |    Sign and Minimum/Maximum    |
# |                                |
# +--------------------------------+
#

def negate(a):
    return a ^ dfp64_bid.SIGN_MASK

def absolute(a):
    return a & ~dfp64_bid.SIGN_MASK & dfp64_bid.WORD_MASK

def _min2(a,b):
    cmp=dfp64_compare.compare(a,b)
    if cmp == dfp64_compare.UNORDERED:
        return NAN
    if cmp == dfp64_compare.LESS:
        return a
    if cmp == dfp64_compare.GREATER:
        return b
    # Equal values of opposite sign are zeros
    if (a >> 63) != (b >> 63) and (b >> 63):
        return b
    return a

def _max2(a,b):
    cmp=dfp64_compare.compare(a,b)
    if cmp == dfp64_compare.UNORDERED:
        return NAN
    if cmp == dfp64_compare.GREATER:
        return a
    if cmp == dfp64_compare.LESS:
        return b
    if (a >> 63) != (b >> 63) and (a >> 63):
        return b
    return a

# Returns the smallest of two or more words.  A NaN operand produces NaN.
def minimum(a,b,*more):
    result=_min2(a,b)
    for c in more:
        result=_min2(result,c)
    return result

# Returns the largest of two or more words.  A NaN operand produces NaN.
def maximum(a,b,*more):
    result=_max2(a,b)
    for c in more:
        result=_max2(result,c)
    return result


#
# +--------------------------+
# |                          |
# |    Neighboring Values    |
# |                          |
# +--------------------------+
#

# Returns the least word greater than the operand
def next_up(a):
    knd,sign,coef,exp=dfp64_bid.unpack(a)
    if knd >= dfp64_bid.QNAN:
        return NAN
    if knd == dfp64_bid.INFINITY:
        if sign:
            return dfp64_round.MIN_VALUE
        return a
    if coef == 0:
        return MIN_POSITIVE

    # Widen the coefficient to full precision so one unit is the smallest step
    shift=PREC-ndigits(coef)
    if exp-shift < QMIN:
        shift=exp-QMIN
    coef*=10**shift
    exp-=shift
    # A tenth of a unit toward +infinity, rounded toward +infinity
    if sign:
        coef=coef*10-1
    else:
        coef=coef*10+1
    return dfp64_round.finish(sign,coef,exp-1,DFP_CEILING)[0]

# Returns the greatest word less than the operand
def next_down(a):
    return negate(next_up(negate(a)))


#
# +---------------------------+
# |                           |
# |    Rounding Operations    |
# |                           |
# +---------------------------+
#

# Round to a number of fractional digits.
# Function Arguments:
#   a       the word being rounded
#   n       the number of fractional digits kept.  May be negative.
#   rmode   a rounding mode number or decimal module name.  None for round half even.
def round_to_digits(a,n,rmode=None):
    _ck_int(n,"n","round_to_digits")
    rmode=dfp_mode(rmode)
    res=dfp64_special.classify_unary(a)
    if res is not None:
        return res[0]
    knd,sign,coef,exp=dfp64_bid.unpack(a)
    coef,exp,inexact=dfp64_round.round_digits(sign,coef,exp,n,rmode)
    return dfp64_round.finish(sign,coef,exp)[0]

def round_to_integer(a,rmode=None):
    return round_to_digits(a,0,rmode)

# Round to an integer, ties away from zero
def round_default(a):
    return round_to_digits(a,0,DFP_HALF_UP)

# Round to the nearest multiple of a positive finite word.  A multiple that is not
# a positive finite value produces NaN.
def round_to_multiple(a,multiple,rmode=None):
    rmode=dfp_mode(rmode)
    km,sm,cm,em=dfp64_bid.unpack(multiple)
    if km != dfp64_bid.FINITE or cm == 0 or sm:
        return NAN
    res=dfp64_special.classify_unary(a)
    if res is not None:
        return res[0]
    knd,sign,coef,exp=dfp64_bid.unpack(a)
    if exp >= em:
        num=coef*10**(exp-em)
        den=cm
    else:
        num=coef
        den=cm*10**(em-exp)
    count,inexact=dfp64_round.round_quotient(sign,num,den,rmode)
    return dfp64_round.finish(sign,count*cm,em)[0]

# Round to the nearest multiple of 1/r, r being a positive integer.  Otherwise NaN.
def round_to_reciprocal(a,r,rmode=None):
    _ck_int(r,"r","round_to_reciprocal")
    rmode=dfp_mode(rmode)
    if r <= 0:
        return NAN
    res=dfp64_special.classify_unary(a)
    if res is not None:
        return res[0]
    knd,sign,coef,exp=dfp64_bid.unpack(a)
    if exp >= 0:
        return a
    count,inexact=dfp64_round.round_quotient(sign,coef*r,10**(-exp),rmode)
    if not inexact:
        return a
    return divide_fields(sign,count,0,r,0)

# Returns True if the value has no nonzero digits beyond n fractional digits.
# Infinities and NaNs are not rounded.
def is_rounded(a,n):
    _ck_int(n,"n","is_rounded")
    knd,sign,coef,exp=dfp64_bid.unpack(a)
    if knd != dfp64_bid.FINITE:
        return False
    return not dfp64_round.round_digits(sign,coef,exp,n,DFP_DOWN)[2]

# Returns True if the value is a multiple of 1/r
def is_rounded_to_reciprocal(a,r):
    _ck_int(r,"r","is_rounded_to_reciprocal")
    knd,sign,coef,exp=dfp64_bid.unpack(a)
    if knd != dfp64_bid.FINITE or r <= 0:
        return False
    if exp >= 0:
        return True
    return (coef*r) % 10**(-exp) == 0

# The named integer and multiple rounding operations.  With a multiple they round
# to a multiple of it, otherwise to an integer.
def _named(a,multiple,rmode):
    if multiple is None:
        return round_to_digits(a,0,rmode)
    return round_to_multiple(a,multiple,rmode)

def round_towards_positive_infinity(a,multiple=None):
    return _named(a,multiple,DFP_CEILING)

def round_towards_negative_infinity(a,multiple=None):
    return _named(a,multiple,DFP_FLOOR)

def round_towards_zero(a,multiple=None):
    return _named(a,multiple,DFP_DOWN)

def round_to_nearest_ties_away_from_zero(a,multiple=None):
    return _named(a,multiple,DFP_HALF_UP)

def round_to_nearest_ties_to_even(a,multiple=None):
    return _named(a,multiple,DFP_HALF_EVEN)

ceiling=round_towards_positive_infinity
floor=round_towards_negative_infinity
truncate=round_towards_zero
round_half_up=round_to_nearest_ties_away_from_zero
round_half_even=round_to_nearest_ties_to_even
