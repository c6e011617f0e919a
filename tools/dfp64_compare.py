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

# This module compares, classifies and canonicalizes Decimal64 words.
#
# Several words may encode the same numeric value, for example 1E0 and 10E-1.
# compare() is concerned with numeric values, identical() with words.
# canonicalize() selects one word for each numeric value.

this_module="dfp64_compare.py"

# dfp64 imports:
import dfp64_bid
from dfp64_fp import EMIN,QMAX,ndigits

# compare() results
LESS=-1
EQUAL=0
GREATER=1
UNORDERED=2

compare_names={LESS:"LESS",EQUAL:"EQUAL",GREATER:"GREATER",UNORDERED:"UNORDERED"}

ZERO=dfp64_bid.pack(0,0,0)


#
# +-------------------+
# |                   |
# |    Comparisons    |
# |                   |
# +-------------------+
#

# Compare the magnitudes of two nonzero finite values.  Returns LESS, EQUAL or
# GREATER.
def _compare_magnitude(ca,ea,cb,eb):
    adja=ndigits(ca)+ea
    adjb=ndigits(cb)+eb
    if adja != adjb:
        if adja < adjb:
            return LESS
        return GREATER
    # Equal adjusted exponents, so the exponents differ by less than 16
    if ea >= eb:
        ca*=10**(ea-eb)
    else:
        cb*=10**(eb-ea)
    if ca < cb:
        return LESS
    if ca > cb:
        return GREATER
    return EQUAL

# Compare the numeric values of two words.
# Returns:
#   UNORDERED   if either word is a NaN,
#   EQUAL       if the values are equal, regardless of their encodings,
#   LESS        if a is less than b,
#   GREATER     if a is greater than b.
def compare(a,b):
    ka,sa,ca,ea=dfp64_bid.unpack(a)
    kb,sb,cb,eb=dfp64_bid.unpack(b)

    if ka >= dfp64_bid.QNAN or kb >= dfp64_bid.QNAN:
        return UNORDERED

    if ka == dfp64_bid.INFINITY:
        if kb == dfp64_bid.INFINITY and sa == sb:
            return EQUAL
        if sa:
            return LESS
        return GREATER
    if kb == dfp64_bid.INFINITY:
        if sb:
            return GREATER
        return LESS

    # Both finite.  Zeros are equal regardless of sign.
    if ca == 0:
        if cb == 0:
            return EQUAL
        if sb:
            return GREATER
        return LESS
    if cb == 0:
        if sa:
            return LESS
        return GREATER

    if sa != sb:
        if sa:
            return LESS
        return GREATER

    result=_compare_magnitude(ca,ea,cb,eb)
    if sa:
        return -result
    return result

# Total order used for sorting: a NaN equals another NaN and is greater than any
# other value.
# Returns:
#   -1, 0 or 1
def compare_to(a,b):
    na=is_nan(a)
    nb=is_nan(b)
    if na or nb:
        if na and nb:
            return 0
        if na:
            return 1
        return -1
    return compare(a,b)

# Returns True if the two words are the same bit pattern
def identical(a,b):
    return a == b


#
# +------------------------+
# |                        |
# |    Canonicalization    |
# |                        |
# +------------------------+
#

# Returns the canonical word of a value:
#   - every zero is +0E0,
#   - every NaN is the canonical quiet NaN,
#   - every infinity is the canonical infinity of its sign, and
#   - finite nonzero values have trailing coefficient zeros removed while the
#     exponent allows.
def canonicalize(a):
    knd,sign,coef,exp=dfp64_bid.unpack(a)
    if knd != dfp64_bid.FINITE:
        if knd == dfp64_bid.INFINITY:
            return dfp64_bid.pack_infinity(sign)
        return dfp64_bid.NAN
    if coef == 0:
        return ZERO
    while exp < QMAX and coef % 10 == 0:
        coef//=10
        exp+=1
    return dfp64_bid.pack(sign,coef,exp)

# Returns True if the word is its own canonical word
def is_canonical(a):
    return canonicalize(a) == a

# Hash of the word's bit pattern
def identity_hash(a):
    return hash(a)

# Hash of the word's numeric value.  Equal values have equal hashes.
def value_hash(a):
    return hash(canonicalize(a))


#
# +---------------------------------+
# |                                 |
# |    Classification Predicates    |
# |                                 |
# +---------------------------------+
#

def is_nan(a):
    return (a & dfp64_bid.INF_NAN_MASK) == dfp64_bid.NAN_BITS

def is_signaling_nan(a):
    return (a & dfp64_bid.SNAN_MASK) == dfp64_bid.SNAN_BITS

def is_infinity(a):
    return (a & dfp64_bid.INF_NAN_MASK) == dfp64_bid.INF_BITS

def is_positive_infinity(a):
    return is_infinity(a) and (a >> 63) == 0

def is_negative_infinity(a):
    return is_infinity(a) and (a >> 63) == 1

def is_finite(a):
    return not dfp64_bid.is_special(a)

def is_zero(a):
    knd,sign,coef,exp=dfp64_bid.unpack(a)
    return knd == dfp64_bid.FINITE and coef == 0

# NaN is neither zero nor nonzero
def is_nonzero(a):
    return not is_nan(a) and not is_zero(a)

def is_positive(a):
    return (a >> 63) == 0 and is_nonzero(a)

def is_negative(a):
    return (a >> 63) == 1 and is_nonzero(a)

def is_non_positive(a):
    return not is_nan(a) and ((a >> 63) == 1 or is_zero(a))

def is_non_negative(a):
    return not is_nan(a) and ((a >> 63) == 0 or is_zero(a))

# A normal value is finite, nonzero and has an adjusted (scientific view) exponent
# of at least EMIN.
def is_normal(a):
    knd,sign,coef,exp=dfp64_bid.unpack(a)
    if knd != dfp64_bid.FINITE or coef == 0:
        return False
    return ndigits(coef)+exp-1 >= EMIN
