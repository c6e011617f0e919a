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

# This module holds the special value rules applied by the arithmetic operations
# before their general path.  Each classify_xxx() function inspects the operands
# and either returns None, meaning the general path computes the result, or a
# tuple of the result word and an invalid operation flag.
#
# Operands are placed into one of five classes.  The infinity, zero and finite
# classes index tables giving the result of each operation:
#
#   R_NAN    the canonical quiet NaN, an invalid operation
#   R_INF    an infinity with the exclusive or of the operand signs
#   R_ZERO   a zero with the exclusive or of the operand signs
#
# NaN operands are handled ahead of the tables.  Any NaN operand produces the
# canonical quiet NaN.  A signaling NaN operand is an invalid operation.

this_module="dfp64_special.py"

# dfp64 imports:
import dfp64_bid
from dfp64_fp import QMIN,DFP_FLOOR

# Operand classes
SNAN_OP=0
QNAN_OP=1
INF=2
ZERO=3
FINITE=4

# Table results
R_NAN=0
R_INF=1
R_ZERO=2

# Results of multiplication, with XOR of the signs.  Missing pairs use the general
# path.
MULTIPLY_TABLE={(INF,INF):    R_INF,
                (INF,FINITE): R_INF,
                (FINITE,INF): R_INF,
                (INF,ZERO):   R_NAN,
                (ZERO,INF):   R_NAN}

# Results of division, with XOR of the signs
DIVIDE_TABLE={(INF,INF):      R_NAN,
              (ZERO,ZERO):    R_NAN,
              (INF,FINITE):   R_INF,
              (INF,ZERO):     R_INF,
              (FINITE,ZERO):  R_INF,
              (FINITE,INF):   R_ZERO,
              (ZERO,INF):     R_ZERO}


# Returns the class of an operand word
def operand_class(word):
    knd=dfp64_bid.kind(word)
    if knd == dfp64_bid.FINITE:
        if dfp64_bid.unpack(word)[2] == 0:
            return ZERO
        return FINITE
    if knd == dfp64_bid.INFINITY:
        return INF
    if knd == dfp64_bid.SNAN:
        return SNAN_OP
    return QNAN_OP

# Returns the class of an integer operand
def integer_class(n):
    if n == 0:
        return ZERO
    return FINITE

# Returns None if no operand class is a NaN.  Otherwise returns the tuple of the
# canonical NaN and the invalid operation flag.
def propagate_nan(*classes):
    nan=invalid=False
    for cls in classes:
        if cls == SNAN_OP:
            nan=invalid=True
        elif cls == QNAN_OP:
            nan=True
    if nan:
        return (dfp64_bid.NAN,invalid)
    return None

# Returns the word of a table result
def table_result(result,sign):
    if result == R_NAN:
        return dfp64_bid.NAN
    if result == R_INF:
        return dfp64_bid.pack_infinity(sign)
    return dfp64_bid.pack(sign,0,QMIN)

# Returns the sign of an exact zero sum of operands with signs sa and sb
def zero_sum_sign(sa,sb,rmode):
    if sa == sb:
        return sa
    if rmode == DFP_FLOOR:
        return 1
    return 0


#
# +-----------------------+
# |                       |
# |    Operation Rules    |
# |                       |
# +-----------------------+
#

# Special rules of addition.  Subtraction is addition of the negated subtrahend.
def classify_add(a,b,ca=None,cb=None):
    if ca is None:
        ca=operand_class(a)
    if cb is None:
        cb=operand_class(b)
    res=propagate_nan(ca,cb)
    if res is not None:
        return res
    if ca == INF:
        if cb == INF and (a >> 63) != (b >> 63):
            return (dfp64_bid.NAN,True)
        return (dfp64_bid.pack_infinity(a >> 63),False)
    if cb == INF:
        return (dfp64_bid.pack_infinity(b >> 63),False)
    return None

# Special rules of multiplication
#   sign    the sign of the product
#   ca, cb  the operand classes
def classify_multiply(sign,ca,cb):
    res=propagate_nan(ca,cb)
    if res is not None:
        return res
    try:
        result=MULTIPLY_TABLE[(ca,cb)]
    except KeyError:
        return None
    return (table_result(result,sign),result == R_NAN)

# Special rules of division
#   sign    the sign of the quotient
#   ca, cb  the operand classes
def classify_divide(sign,ca,cb):
    res=propagate_nan(ca,cb)
    if res is not None:
        return res
    try:
        result=DIVIDE_TABLE[(ca,cb)]
    except KeyError:
        return None
    return (table_result(result,sign),result == R_NAN)

# Special rules of the fused multiply and add a*m+c
def classify_multiply_add(a,m,c):
    ca=operand_class(a)
    cm=operand_class(m)
    cc=operand_class(c)
    res=propagate_nan(ca,cm,cc)
    if res is not None:
        return res
    psign=(a >> 63) ^ (m >> 63)
    try:
        product=MULTIPLY_TABLE[(ca,cm)]
    except KeyError:
        product=None
    if product == R_NAN:
        return (dfp64_bid.NAN,True)
    if product == R_INF:
        if cc == INF and (c >> 63) != psign:
            return (dfp64_bid.NAN,True)
        return (dfp64_bid.pack_infinity(psign),False)
    if cc == INF:
        return (dfp64_bid.pack_infinity(c >> 63),False)
    return None

# Special rules of a single operand operation.  Infinities are returned with their
# sign.
def classify_unary(a):
    ca=operand_class(a)
    res=propagate_nan(ca)
    if res is not None:
        return res
    if ca == INF:
        return (dfp64_bid.pack_infinity(a >> 63),False)
    return None
