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

# This module supports the 64-bit decimal floating point interchange format using
# the densely packed decimal (DPD) encoding of the significand as described in
# IEEE-754-2008.  Decimal64 words use the BID layout.  DPD words are produced and
# consumed only by explicit conversion: bid_to_dpd() and dpd_to_bid().
#
# A DPD interchange word consists of:
#   - a sign, bit 63,
#   - a 5-bit combination field, bits 62-58, holding the two high-order bits of the
#     biased exponent and the leading significand digit,
#   - an 8-bit exponent continuation field, bits 57-50, and
#   - a 50-bit trailing significand of five declets, bits 49-0.
#
# Each 10-bit declet encodes three decimal digits.

this_module="dfp64_dpd.py"

# Python imports:
import logging     # Access debug tracing
# dfp64 imports:
import dfp64_bid                      # Access the BID word codec
from dfp64_fp import FPError,eloc,floc
from dfp64_fp import BIAS,QMIN,QMAX,MAX_COEFFICIENT

log=logging.getLogger("dfp64.dpd")


#
# +---------------------------------------------+
# |                                             |
# |    Decimal Floating Point Declet Objects    |
# |                                             |
# +---------------------------------------------+
#

# These objects support declet encoding and decoding.  They are reusable and store
# no data related to an actual declet.  Each of the eight declet formats is
# described by its layout, taken from IEEE 754-2008, Section 3.5.2:
#
#FMT B0 B1 B2 B3 B4 B5 B6 B7 B8 B9       D(1)            D(2)            D(3)
#    x  x  x  F3 F4 x  F6 F7 F8  x
# 0  D1 D1 D1 D2 D2 D2 0  D3 D3 D3  4(b0)+2(b1)+b2  4(b3)+2(b4)+b5  4(b7)+2(b8)+b9
# 1  D1 D1 D1 D2 D2 D2 1  0  0  D3  4(b0)+2(b1)+b2  4(b3)+2(b4)+b5      8+b9
# 2  D1 D1 D1 D3 D3 D2 1  0  1  D3  4(b0)+2(b1)+b2        8+b5      4(b3)+2(b4)+b9
# 3  D3 D3 D1 D2 D2 D2 1  1  0  D3       8+b2       4(b3)+2(b4)+b5  4(b0)+2(b1)+b9
# 4  D3 D3 D1 0  0  D2 1  1  1  D3       8+b2             8+b5      4(b0)+2(b1)+b9
# 5  D2 D2 D1 0  1  D2 1  1  1  D3       8+b2       4(b0)+2(b1)+b5      8+b9
# 6  D1 D1 D1 1  0  D2 1  1  1  D3  4(b0)+2(b1)+b2        8+b5          8+b9
# 7  x  x  D1 1  1  D2 1  1  1  D3       8+b2             8+b5          8+b9
#
# A digit placed in three bits is a small digit (0-7) whose bits are weighted 4, 2
# and 1 in the order they appear in the layout.  A digit placed in one bit is a
# large digit (8 or 9) whose high-order bit is implied.  The 0 and 1 positions are
# the flag bits identifying the format.  Format 7 ignores bits 0 and 1.  When
# either is set the declet is non-canonical, and is decoded as if both were zero.

class declet_format(object):
    # Mask for setting a bit in the declet indexed by bit number
    bits=[0b1000000000,
          0b0100000000,
          0b0010000000,
          0b0001000000,
          0b0000100000,
          0b0000010000,
          0b0000001000,
          0b0000000100,
          0b0000000010,
          0b0000000001,]

    # Convert a declet into a string of binary digits.
    @staticmethod
    def declet_binary(declet):
        return format(declet & 0b1111111111,"010b")

    # Instance Arguments:
    #   number  the format number, 0-7
    #   ldmask  the large digit mask: D1 is 4, D2 is 2, D3 is 1
    #   layout  a sequence of ten strings describing bits B0-B9: "D1", "D2" or
    #           "D3" for a digit bit, "0" or "1" for a flag bit, "x" for an
    #           ignored bit.
    def __init__(self,number,ldmask,layout):
        assert len(layout) == 10,\
            "%s layout must describe 10 bits: %s" \
                % (eloc(self,"__init__",module=this_module),layout)
        self.number=number
        self.ldmask=ldmask
        self.layout=layout

        self.set_mask=0       # Flag bits set for this format
        self.is_mask=0        # Mask to detect a declet format
        self.ignore_mask=0    # Bits ignored when decoding
        # Bit positions of each digit, high-order first
        self.positions={"D1":[],"D2":[],"D3":[]}

        bit=declet_format.bits
        for n,what in enumerate(layout):
            if what == "0":
                self.is_mask|=bit[n]
            elif what == "1":
                self.is_mask|=bit[n]
                self.set_mask|=bit[n]
            elif what == "x":
                self.ignore_mask|=bit[n]
            else:
                self.positions[what].append(bit[n])

        if __debug__:
            for n,digit in enumerate(["D1","D2","D3"]):
                large=self.ldmask & (4 >> n)
                places=len(self.positions[digit])
                assert (large and places==1) or (not large and places==3),\
                    "%s format %s digit %s inconsistent with large digit mask %s"\
                        % (eloc(self,"__init__",module=this_module),number,digit,\
                            ldmask)

    def __str__(self):
        return "declet_format: Format: %s LDM:%s  set_mask: %s  is_mask: %s" \
            % (self.number,self.ldmask,\
                declet_format.declet_binary(self.set_mask),\
                    declet_format.declet_binary(self.is_mask))

    # Returns True if the declet uses none of this format's ignored bits
    def isCanonical(self,declet):
        return (declet & self.ignore_mask) == 0

    # Returns True if the supplied declet is in the format supported by this object,
    # False otherwise.
    def isFormat(self,declet):
        return (declet & self.is_mask) == self.set_mask

    # Convert a declet (integer) into a list of three decimal digits
    def decode(self,declet):
        result=[]
        for digit in ["D1","D2","D3"]:
            places=self.positions[digit]
            if len(places) == 1:
                value = 8 + ((declet & places[0]) != 0)
            else:
                value=0
                for mask in places:
                    value = (value << 1) | ((declet & mask) != 0)
            result.append(value)
        return result

    # Encode a list of three decimal digits into a 10-bit declet
    def encode(self,values):
        wip=self.set_mask
        for n,digit in enumerate(["D1","D2","D3"]):
            places=self.positions[digit]
            value=values[n]
            if len(places) == 1:
                if value & 0b1:
                    wip|=places[0]
            else:
                for weight,mask in zip([0b100,0b010,0b001],places):
                    if value & weight:
                        wip|=mask
        return wip


Format0=declet_format(0,0b000,\
    ["D1","D1","D1","D2","D2","D2","0", "D3","D3","D3"])
Format1=declet_format(1,0b001,\
    ["D1","D1","D1","D2","D2","D2","1", "0", "0", "D3"])
Format2=declet_format(2,0b010,\
    ["D1","D1","D1","D3","D3","D2","1", "0", "1", "D3"])
Format3=declet_format(3,0b100,\
    ["D3","D3","D1","D2","D2","D2","1", "1", "0", "D3"])
Format4=declet_format(4,0b110,\
    ["D3","D3","D1","0", "0", "D2","1", "1", "1", "D3"])
Format5=declet_format(5,0b101,\
    ["D2","D2","D1","0", "1", "D2","1", "1", "1", "D3"])
Format6=declet_format(6,0b011,\
    ["D1","D1","D1","1", "0", "D2","1", "1", "1", "D3"])
Format7=declet_format(7,0b111,\
    ["x", "x", "D1","1", "1", "D2","1", "1", "1", "D3"])

# Formats in the order they are tested when decoding.  Format 0 is identified by
# bit 6 alone, so it is tested first.
formats=[Format0,Format1,Format2,Format3,Format4,Format5,Format6,Format7]

# Formats indexed by large digit mask
ldm_formats={}
for fmt in formats:
    ldm_formats[fmt.ldmask]=fmt
del fmt

# Returns the format object of a declet
def declet_format_of(declet):
    for fmt in formats:
        if fmt.isFormat(declet):
            return fmt
    raise FPError("%s declet does not match a format: %s" \
        % (floc("declet_format_of",this_module),declet_format.declet_binary(declet)))

# Decode a declet into its three decimal digits
def decode_declet(declet):
    return declet_format_of(declet).decode(declet)

# Encode three decimal digits into a canonical declet
def encode_declet(values):
    for n,d in enumerate(values):
        if d < 0 or d > 9:
            raise FPError("%s digit %s out of range (0-9): %s" \
                % (floc("encode_declet",this_module),n+1,values))
    ldm=0
    for d in values:
        ldm = (ldm << 1) | (d > 7)
    return ldm_formats[ldm].encode(values)


# Conversion tables built once at import:
#   DPD2BIN   declet -> integer 0-999 (all 1024 declets, non-canonical included)
#   BIN2DPD   integer 0-999 -> canonical declet
DPD2BIN=[]
for n in range(1024):
    d1,d2,d3=decode_declet(n)
    DPD2BIN.append(d1*100 + d2*10 + d3)
BIN2DPD=[]
for n in range(1000):
    BIN2DPD.append(encode_declet([n // 100, (n // 10) % 10, n % 10]))
del n,d1,d2,d3


#
# +-----------------------------+
# |                             |
# |    DPD Interchange Words    |
# |                             |
# +-----------------------------+
#

COMB_SHIFT=58          # Combination field bits 62-58
ECONT_SHIFT=50         # Exponent continuation bits 57-50
ECONT_MASK=0xFF
DECLETS=5              # Declets in the trailing significand
DECLET_MASK=0x3FF
TRAILING_MASK=(1<<50)-1
LMD_WEIGHT=10**15      # Weight of the leading significand digit

# Decode a DPD word into its logical fields.
# Returns:
#   a tuple (kind, sign, coefficient, exponent) as dfp64_bid.unpack() does
def unpack_dpd(word,debug=False):
    sign=word >> 63
    comb=(word >> COMB_SHIFT) & 0b11111

    if (comb >> 3) != 0b11:
        ehigh=comb >> 3
        lmd=comb & 0b111
    elif ((comb >> 1) & 0b11) != 0b11:
        ehigh=(comb >> 1) & 0b11
        lmd=8 + (comb & 0b1)
    elif comb & 0b1 == 0:
        return (dfp64_bid.INFINITY,sign,0,0)
    elif (word >> 57) & 0b1:
        return (dfp64_bid.SNAN,sign,0,0)
    else:
        return (dfp64_bid.QNAN,sign,0,0)

    exp=((ehigh << 8) | ((word >> ECONT_SHIFT) & ECONT_MASK)) - BIAS
    coef=lmd
    for n in range(DECLETS-1,-1,-1):
        coef = coef*1000 + DPD2BIN[(word >> (n*10)) & DECLET_MASK]

    if __debug__:
        if debug:
            log.debug("%s %016X -> sign:%s comb:%s coef:%s exp:%s" \
                % (floc("unpack_dpd",this_module),word,sign,format(comb,"05b"),\
                    coef,exp))

    return (dfp64_bid.FINITE,sign,coef,exp)

# Encode a finite value into a DPD word.
# Exception:
#   FPError if the coefficient or exponent can not be represented
def pack_dpd(sign,coef,exp,debug=False):
    if coef < 0 or coef > MAX_COEFFICIENT:
        raise FPError("%s coefficient out of range (0-%s): %s" \
            % (floc("pack_dpd",this_module),MAX_COEFFICIENT,coef))
    if exp < QMIN or exp > QMAX:
        raise FPError("%s exponent out of range (%s-%s): %s" \
            % (floc("pack_dpd",this_module),QMIN,QMAX,exp))

    bexp=exp+BIAS
    lmd,rest=divmod(coef,LMD_WEIGHT)
    ehigh=bexp >> 8
    if lmd < 8:
        comb=(ehigh << 3) | lmd
    else:
        comb=0b11000 | (ehigh << 1) | (lmd & 0b1)

    trailing=0
    for n in range(DECLETS):
        rest,three=divmod(rest,1000)
        trailing |= BIN2DPD[three] << (n*10)

    word=(sign << 63) | (comb << COMB_SHIFT) | ((bexp & ECONT_MASK) << ECONT_SHIFT) \
        | trailing

    if __debug__:
        if debug:
            log.debug("%s sign:%s coef:%s exp:%s -> %016X" \
                % (floc("pack_dpd",this_module),sign,coef,exp,word))

    return word

# Returns True if every declet of a finite DPD word is canonical
def is_canonical_dpd(word):
    if (word & dfp64_bid.SPECIAL_MASK) == dfp64_bid.SPECIAL_MASK:
        return True
    for n in range(DECLETS):
        declet=(word >> (n*10)) & DECLET_MASK
        if BIN2DPD[DPD2BIN[declet]] != declet:
            return False
    return True

# Encode the fields returned by unpack() or unpack_dpd() into the requested layout.
# NaN payloads are not carried across layouts.
def _special(knd,sign):
    if knd == dfp64_bid.INFINITY:
        return dfp64_bid.pack_infinity(sign)
    return dfp64_bid.pack_nan(sign,signaling=knd == dfp64_bid.SNAN)

# Convert a BID word into the DPD word of the same value
def bid_to_dpd(word,debug=False):
    knd,sign,coef,exp=dfp64_bid.unpack(word,debug=debug)
    if knd != dfp64_bid.FINITE:
        return _special(knd,sign)
    return pack_dpd(sign,coef,exp,debug=debug)

# Convert a DPD word into the BID word of the same value
def dpd_to_bid(word,debug=False):
    knd,sign,coef,exp=unpack_dpd(word,debug=debug)
    if knd != dfp64_bid.FINITE:
        return _special(knd,sign)
    return dfp64_bid.pack(sign,coef,exp,debug=debug)
