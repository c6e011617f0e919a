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

# This module encodes and decodes 64-bit decimal floating point interchange words
# using the binary integer decimal (BID) encoding of the significand as described
# in IEEE-754-2008.  Every Decimal64 word handled by the engine uses this layout.
#
# A BID interchange word consists of:
#   - a sign, bit 63,
#   - a combination field holding the biased exponent and the high-order bits of
#     the coefficient, and
#   - a trailing binary coefficient.
#
# Two layouts of the finite number combination field exist.  They are selected by
# the two steering bits 62 and 61:
#
#   Steering bits    Exponent bits   Coefficient
#   not 11           62-53           bits 52-0 (53 bits)
#   11               60-51           0b100 followed by bits 50-0 (54 bits)
#
# When bits 62-58 are 11110 the word is an infinity, all remaining bits being
# ignored.  When bits 62-58 are 11111 the word is a NaN, bit 57 being the signaling
# flag.  The remaining bits of a NaN are its payload, opaque to the engine.
#
# The words are Python integers in the range 0 to 2**64-1.  Functions here perform
# pure bit transformations.  Rounding, clamping and saturation of values that do not
# fit the format are the responsibility of the dfp64_round module.

this_module="dfp64_bid.py"

# Python imports:
import logging     # Access debug tracing
# dfp64 imports:
from dfp64_fp import FPError,floc     # Error reporting
from dfp64_fp import BIAS,QMIN,QMAX,MAX_COEFFICIENT

log=logging.getLogger("dfp64.bid")


#
# +---------------------------+
# |                           |
# |    BID Word Bit Fields    |
# |                           |
# +---------------------------+
#

# Kinds of decoded values returned by unpack()
FINITE=0
INFINITY=1
QNAN=2
SNAN=3

kind_names={FINITE:"finite",INFINITY:"infinity",QNAN:"qnan",SNAN:"snan"}

WORD_MASK    =0xFFFFFFFFFFFFFFFF
SIGN_MASK    =0x8000000000000000    # Bit 63
STEER_MASK   =0x6000000000000000    # Bits 62-61 (11 selects the large layout)
SPECIAL_MASK =0x7800000000000000    # Bits 62-59 (1111 is a special value)
INF_NAN_MASK =0x7C00000000000000    # Bits 62-58
INF_BITS     =0x7800000000000000    # 11110
NAN_BITS     =0x7C00000000000000    # 11111
SNAN_MASK    =0x7E00000000000000    # Bits 62-57
SNAN_BITS    =0x7E00000000000000    # 111111
EXP_MASK     =0x3FF                 # 10-bit biased exponent

SMALL_SHIFT=53                      # Exponent position in the small layout
SMALL_COEF =(1<<53)-1               # Coefficient bits of the small layout
LARGE_SHIFT=51                      # Exponent position in the large layout
LARGE_COEF =(1<<51)-1               # Trailing coefficient bits of the large layout
LARGE_IMPLIED=0b100<<51             # Implied high-order coefficient bits

# Canonical special words
POSITIVE_INFINITY=INF_BITS
NEGATIVE_INFINITY=SIGN_MASK | INF_BITS
NAN=NAN_BITS
SIGNALING_NAN=SNAN_BITS


#
# +---------------------+
# |                     |
# |    Word Decoding    |
# |                     |
# +---------------------+
#

# Returns True if the word encodes an infinity or a NaN
def is_special(word):
    return (word & SPECIAL_MASK) == SPECIAL_MASK

# Returns the kind of value encoded in a word: FINITE, INFINITY, QNAN or SNAN
def kind(word):
    if (word & SPECIAL_MASK) != SPECIAL_MASK:
        return FINITE
    if (word & INF_NAN_MASK) == INF_BITS:
        return INFINITY
    if (word & SNAN_MASK) == SNAN_BITS:
        return SNAN
    return QNAN

# Returns the sign bit of a word
def sign_of(word):
    return word >> 63

# Decode a BID word into its logical fields.
# Function Arguments:
#   word    the interchange word as an integer
#   debug   Specify True to trace the decoded fields.  Defaults to False.
# Returns:
#   a tuple: tuple[0]  the kind of value (FINITE, INFINITY, QNAN or SNAN)
#            tuple[1]  the sign, 0 or 1
#            tuple[2]  the integer coefficient (0 for special values)
#            tuple[3]  the unbiased exponent (0 for special values)
#
# A large layout coefficient in excess of 16 digits is non-canonical and is
# decoded as zero.
def unpack(word,debug=False):
    assert 0 <= word <= WORD_MASK,\
        "%s word out of range: %s" % (floc("unpack",this_module),word)

    sign=word >> 63
    if (word & STEER_MASK) != STEER_MASK:
        exp=((word >> SMALL_SHIFT) & EXP_MASK) - BIAS
        coef=word & SMALL_COEF
        result=(FINITE,sign,coef,exp)
    elif (word & SPECIAL_MASK) != SPECIAL_MASK:
        exp=((word >> LARGE_SHIFT) & EXP_MASK) - BIAS
        coef=(word & LARGE_COEF) | LARGE_IMPLIED
        if coef > MAX_COEFFICIENT:
            coef=0
        result=(FINITE,sign,coef,exp)
    elif (word & INF_NAN_MASK) == INF_BITS:
        result=(INFINITY,sign,0,0)
    elif (word & SNAN_MASK) == SNAN_BITS:
        result=(SNAN,sign,0,0)
    else:
        result=(QNAN,sign,0,0)

    if __debug__:
        if debug:
            log.debug("%s %016X -> %s sign:%s coef:%s exp:%s" \
                % (floc("unpack",this_module),word,kind_names[result[0]],\
                    result[1],result[2],result[3]))

    return result


#
# +---------------------+
# |                     |
# |    Word Encoding    |
# |                     |
# +---------------------+
#

# Encode a finite value into a BID word.  The small layout is used whenever the
# coefficient fits in 53 bits.
# Function Arguments:
#   sign    the sign, 0 or 1
#   coef    the integer coefficient, 0 to 9999999999999999
#   exp     the unbiased exponent, -398 to 369
#   debug   Specify True to trace the encoded word.  Defaults to False.
# Returns:
#   the interchange word as an integer
# Exception:
#   FPError if the coefficient or exponent can not be represented
def pack(sign,coef,exp,debug=False):
    if coef < 0 or coef > MAX_COEFFICIENT:
        raise FPError("%s coefficient out of range (0-%s): %s" \
            % (floc("pack",this_module),MAX_COEFFICIENT,coef))
    if exp < QMIN or exp > QMAX:
        raise FPError("%s exponent out of range (%s-%s): %s" \
            % (floc("pack",this_module),QMIN,QMAX,exp))
    assert sign in (0,1),\
        "%s sign must be 0 or 1: %s" % (floc("pack",this_module),sign)

    bexp=exp+BIAS
    if coef <= SMALL_COEF:
        word=(sign << 63) | (bexp << SMALL_SHIFT) | coef
    else:
        word=(sign << 63) | STEER_MASK | (bexp << LARGE_SHIFT) | (coef & LARGE_COEF)

    if __debug__:
        if debug:
            log.debug("%s sign:%s coef:%s exp:%s -> %016X" \
                % (floc("pack",this_module),sign,coef,exp,word))

    return word

# Returns the canonical infinity word of the supplied sign
def pack_infinity(sign):
    if sign:
        return NEGATIVE_INFINITY
    return POSITIVE_INFINITY

# Returns the canonical NaN word.
# Function Arguments:
#   sign        the sign of the NaN.  Defaults to 0.
#   signaling   Specify True for a signaling NaN.  Defaults to False.
def pack_nan(sign=0,signaling=False):
    if signaling:
        word=SNAN_BITS
    else:
        word=NAN_BITS
    if sign:
        word|=SIGN_MASK
    return word

# Returns a word with the sign bit replaced.  Works for all kinds of values.
def with_sign(word,sign):
    if sign:
        return word | SIGN_MASK
    return word & ~SIGN_MASK & WORD_MASK


#
# +--------------------------------+
# |                                |
# |    Interchange Byte Strings    |
# |                                |
# +--------------------------------+
#

# Convert a word into its 8-byte interchange representation.
# Function Arguments:
#   word        the interchange word as an integer
#   byteorder   "little" or "big".  Defaults to "little".
def to_bytes(word,byteorder="little"):
    return word.to_bytes(8,byteorder=byteorder,signed=False)

# Convert an 8-byte interchange representation into a word.
# Exception:
#   FPError if the bytes are not 8 in length
def from_bytes(byts,byteorder="little"):
    if len(byts) != 8:
        raise FPError("%s 8 bytes required for a 64-bit interchange word: %s" \
            % (floc("from_bytes",this_module),len(byts)))
    return int.from_bytes(byts,byteorder=byteorder,signed=False)
