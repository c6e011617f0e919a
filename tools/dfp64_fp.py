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

# This module is the framework shared by all of the dfp64 modules.  It provides:
#
#   - standardized error location reporting (eloc() and floc()),
#   - the exception classes raised by the engine and its boundaries,
#   - the rounding mode numbers and their decimal module aliases, and
#   - the attributes of the 64-bit decimal interchange format.
#
# Nothing in this module holds mutable state.  All attributes are established when
# the module is imported and are never changed afterwards.

this_module="dfp64_fp.py"

# Python imports:
import decimal     # Access the decimal module rounding mode names


#
# +------------------------------------+
# |                                    |
# |    Standardized Error Reporting    |
# |                                    |
# +------------------------------------+
#

# This method returns a standard identification of an error's location.
# It is expected to be used like this:
#
#     cls_str=eloc(self,"method")
# or
#     cls_str=eloc(self,"method",module=this_module)
#     raise FPError("%s %s" % (cls_str,"error information"))
#
# It results in a Exception string of:
#     'module - class_name.method_name() -'
def eloc(clso,method_name,module=None):
    if module is None:
        m=this_module
    else:
        m=module
    return "%s - %s.%s() -" % (m,clso.__class__.__name__,method_name)


# The module level function equivalent of eloc().  Most of the engine is made of
# functions operating on integer words rather than objects.
#
#     raise FPError("%s %s" % (floc("pack",this_module),"error information"))
#
# results in:
#     'module - function_name() - error information'
def floc(function_name,module):
    return "%s - %s() -" % (module,function_name)


#
# +-------------------------------------+
# |                                     |
# |    Decimal Floating Point Errors    |
# |                                     |
# +-------------------------------------+
#

# This class is used to raise an exception during decimal floating point handling.
# Instance Argument:
#    msg    a string descibing the error.  Defaults to an empty string.
class FPError(Exception):
    def __init__(self,msg=""):
        self.msg=msg
        super().__init__(msg)


# Raised when text being parsed is not a recognizable decimal floating point value.
# It is never recovered from internally.
class FormatError(FPError,ValueError):
    def __init__(self,msg="",text=None):
        self.text=text      # The text that failed to parse, when known
        super().__init__(msg)


# Raised when a conversion requested to be exact can not be performed without
# discarding nonzero digits, or when DFP_UNNECESSARY rounding finds rounding is
# in fact necessary.
class PrecisionLossError(FPError,ArithmeticError):
    pass


#
# +---------------------------------------------+
# |                                             |
# |    Decimal Floating Point Rounding Modes    |
# |                                             |
# +---------------------------------------------+
#

# The following rounding modes are supported.  Either the module attribute, its
# number, or the equivalent decimal module name may be used wherever a rounding
# mode argument is accepted.

# DFP Rounding Modes:
DFP_DEFAULT = 8
DFP_HALF_EVEN = 8      # Round to nearest, ties to even
DFP_DOWN = 9           # Round towards zero, truncate
DFP_CEILING = 10       # Round towards +infinity
DFP_FLOOR = 11         # Round towards -infinity
DFP_HALF_UP = 12       # Round to nearest, ties away from zero
DFP_HALF_DOWN = 13     # Round to nearest, ties towards zero
DFP_UP = 14            # Round away from zero
DFP_05UP = 15          # Round away from zero if last kept digit is 0 or 5
DFP_UNNECESSARY = 16   # Rounding is asserted not to be needed

# BFP Rounding Modes (used when producing binary floating point values):
BFP_DEFAULT = 4
BFP_HALF_UP = 1        # Round to nearest, ties away from zero
BFP_HALF_EVEN = 4      # Round ties to even
BFP_DOWN = 5           # Round to zero, truncate
BFP_CEILING = 6        # Round towards +infinity
BFP_FLOOR = 7          # Round towards -infinity

# Map decimal module rounding names to the DFP rounding mode numbers
decimal_modes={decimal.ROUND_HALF_EVEN:DFP_HALF_EVEN,
               decimal.ROUND_DOWN:     DFP_DOWN,
               decimal.ROUND_CEILING:  DFP_CEILING,
               decimal.ROUND_FLOOR:    DFP_FLOOR,
               decimal.ROUND_HALF_UP:  DFP_HALF_UP,
               decimal.ROUND_HALF_DOWN:DFP_HALF_DOWN,
               decimal.ROUND_UP:       DFP_UP,
               decimal.ROUND_05UP:     DFP_05UP}

# Rounding mode names used by the command-line tool and in error messages
mode_names={DFP_HALF_EVEN:  "half_even",
            DFP_DOWN:       "down",
            DFP_CEILING:    "ceiling",
            DFP_FLOOR:      "floor",
            DFP_HALF_UP:    "half_up",
            DFP_HALF_DOWN:  "half_down",
            DFP_UP:         "up",
            DFP_05UP:       "05up",
            DFP_UNNECESSARY:"unnecessary"}


# Returns the DFP rounding mode number for a rounding mode argument.
# Function Argument:
#   rmode   A DFP rounding mode number, a decimal module rounding name (for
#           example decimal.ROUND_HALF_UP), or None for DFP_DEFAULT.
# Exception:
#   ValueError if the rounding mode is not recognized.
def dfp_mode(rmode):
    if rmode is None:
        return DFP_DEFAULT
    if isinstance(rmode,int) and not isinstance(rmode,bool):
        if rmode in mode_names:
            return rmode
    elif isinstance(rmode,str):
        try:
            return decimal_modes[rmode]
        except KeyError:
            pass
    raise ValueError("%s unrecognized DFP rounding mode: %r" \
        % (floc("dfp_mode",this_module),rmode))


#
# +-----------------------------------------------+
# |                                               |
# |    Decimal64 Interchange Format Attributes    |
# |                                               |
# +-----------------------------------------------+
#

# Defines the attributes of a decimal interchange format.  The engine uses the
# integer (right-units) view throughout: the exponent applies to an integer
# coefficient.  The scientific (left-units) view values are retained because the
# IEEE definition of a normal number is expressed in that view.
#
# Instance Arguments:
#   length  the interchange format length in bytes
#   prec    the precision of the format in decimal digits
#   emin    the minimum scientific view exponent
#   emax    the maximum scientific view exponent
class D64Attr(object):
    def __init__(self,length,prec,emin,emax):
        self.length=length           # Interchange format length in bytes
        self.bits=length*8           # Interchange format length in bits
        self.prec=prec               # Precision in decimal digits
        self.emin=emin               # Minimum scientific view exponent
        self.emax=emax               # Maximum scientific view exponent

        # Integer view attributes
        self.qmin=emin-prec+1        # Minimum integer view exponent (-398)
        self.qmax=emax-prec+1        # Maximum integer view exponent (369)
        self.bias=-self.qmin         # Exponent bias (398)
        self.ebmax=self.qmax+self.bias   # Maximum biased exponent (767)

        self.max_coef=10**prec-1     # Largest coefficient (9999999999999999)
        self.min_full=10**(prec-1)   # Smallest coefficient with prec digits

    def __str__(self):
        return "D64Attr - length:%s prec:%s emin:%s emax:%s qmin:%s qmax:%s "\
            "bias:%s" % (self.length,self.prec,self.emin,self.emax,self.qmin,\
                self.qmax,self.bias)


DECIMAL64=D64Attr(8,16,-383,384)

# Format values used throughout the engine
PREC=DECIMAL64.prec              # 16 significant digits
QMIN=DECIMAL64.qmin              # -398
QMAX=DECIMAL64.qmax              # 369
BIAS=DECIMAL64.bias              # 398
EMIN=DECIMAL64.emin              # -383
EMAX=DECIMAL64.emax              # 384
MAX_COEFFICIENT=DECIMAL64.max_coef

# Machine integer ranges honored by the conversion boundary
INT32_MIN=-2**31
INT32_MAX=2**31-1
INT64_MIN=-2**63
INT64_MAX=2**63-1


# Returns the number of decimal digits in a non-negative integer.  Zero has one
# digit.
def ndigits(n):
    if n < 10:
        return 1
    # bit_length gives a lower bound without building a string.  The estimate
    # may fall more than one digit short for large integers.
    d=(n.bit_length()*1233) >> 12
    while n >= 10**d:
        d+=1
    return d
