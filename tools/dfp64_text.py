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

# This module parses and formats the text representations of Decimal64 words.
#
# A decimal floating point string has this format:
#      [+-] [digits] [.[digits]] [e [+-]digits]
#
# where:
#       +-           - is an optional sign
#       digits       - is one or more optional decimal integer digits
#       .[digits]    - is optional fractional decimal digits
#       e [+-]digits - is the optional base 10 exponent
#
# Either the decimal integer or fraction digits is required.  While the above
# description format has spaces, the string itself may not.
#
# Besides numbers, these special values are recognized in any character case, with
# an optional sign: Inf, Infinity and NaN.  A signed NaN parses as NaN.
#
# Parsed values are canonical.  Formatted values are canonical plain or scientific
# notation.

this_module="dfp64_text.py"

# Python imports:
import collections   # Access namedtuple for parse results
import logging       # Access debug tracing
import re            # Access regular expressions
# dfp64 imports:
import dfp64_bid
import dfp64_compare
import dfp64_round
from dfp64_fp import FormatError,floc
from dfp64_fp import PREC,dfp_mode

log=logging.getLogger("dfp64.text")

# Floating Point String recognition regular expression pattern:
String_Pattern=\
        r"(?P<sign>[+-])?(?P<int>[0-9]+)?(?P<frac>\.[0-9]*)?"\
        r"(?P<exp>[eE][+-]?[0-9]+)?\Z"
# Special value recognition regular expression pattern:
Special_Pattern=r"(?P<sign>[+-])?(?P<val>inf|infinity|nan)\Z"

parse_number=re.compile(String_Pattern)
parse_special=re.compile(Special_Pattern,re.IGNORECASE)
sign_str={"+":0,"-":1,None:0}        # Convert string sign to value

# Digits retained from the parsed string.  A further sticky digit stands for the
# remaining digits.
KEEP_DIGITS=PREC+2
# Exponent digits beyond which the exponent only matters by its sign
EXP_DIGITS=12
EXP_LIMIT=10**EXP_DIGITS

# The value returned by try_parse()
#   value   the parsed word
#   exact   True if no rounding was needed
ParseResult=collections.namedtuple("ParseResult",["value","exact"])


#
# +---------------+
# |               |
# |    Parsing    |
# |               |
# +---------------+
#

# Returns the substring being parsed
# Exceptions:
#   TypeError if text is not a string
#   IndexError if start and end do not describe a range of the string
def _substring(text,start,end,function):
    if not isinstance(text,str):
        raise TypeError("%s 'text' argument must be a string: %r" \
            % (floc(function,this_module),text))
    if end is None:
        end=len(text)
    if start < 0 or end > len(text) or start > end:
        raise IndexError("%s invalid range [%s:%s] of text of length %s" \
            % (floc(function,this_module),start,end,len(text)))
    return text[start:end]

# Convert the exponent string, e.g. 'E+12', into an integer.  Exponents with too
# many digits to matter are limited.
def _exponent(string):
    if not string:
        return 0
    digits=string[1:].lstrip("+-").lstrip("0")
    negative=string[1] == "-"
    if len(digits) > EXP_DIGITS:
        value=EXP_LIMIT
    elif digits:
        value=int(digits,10)
    else:
        value=0
    if negative:
        return -value
    return value

# Parse a string into a word.
# Function Arguments:
#   text    the string being parsed
#   start   index of the first character parsed.  Defaults to 0.
#   end     index following the last character parsed.  Defaults to the length of
#           the string.
#   rmode   the rounding mode number used when the value does not fit.  None for
#           round half even.
#   debug   Specify True to trace the parse.  Defaults to False.
# Returns:
#   a ParseResult named tuple
# Exceptions:
#   FormatError if the text is not a decimal floating point value
#   PrecisionLossError if rounding is needed and rmode is DFP_UNNECESSARY
#   IndexError if start or end are out of range
def try_parse(text,start=0,end=None,rmode=None,debug=False):
    rmode=dfp_mode(rmode)
    string=_substring(text,start,end,"try_parse")

    mo=parse_number.match(string)
    if mo is None or (mo.group("int") is None and \
            (mo.group("frac") is None or len(mo.group("frac")) < 2)):
        # Not a number, so it must be a special value
        mo=parse_special.match(string)
        if mo is None:
            raise FormatError("%s unrecognized decimal floating point value: '%s'"\
                % (floc("try_parse",this_module),string),text=string)
        sign=sign_str[mo.group("sign")]
        if mo.group("val").lower() == "nan":
            word=dfp64_bid.NAN
        else:
            word=dfp64_bid.pack_infinity(sign)
        if __debug__:
            if debug:
                log.debug("%s '%s' special -> %016X" \
                    % (floc("try_parse",this_module),string,word))
        return ParseResult(word,True)

    mod=mo.groupdict()
    sign=sign_str[mod["sign"]]
    int_str=mod["int"] or ""
    frac_str=mod["frac"] or "."
    frac_str=frac_str[1:]        # Drop the initiating period
    exp=_exponent(mod["exp"])-len(frac_str)

    digits=(int_str+frac_str).lstrip("0")
    if len(digits) > KEEP_DIGITS:
        if digits[KEEP_DIGITS:].strip("0"):
            sticky="1"
        else:
            sticky="0"
        exp+=len(digits)-KEEP_DIGITS-1
        digits=digits[:KEEP_DIGITS]+sticky
    if digits:
        coef=int(digits,10)
    else:
        coef=0

    word,inexact=dfp64_round.finish(sign,coef,exp,rmode)
    word=dfp64_compare.canonicalize(word)

    if __debug__:
        if debug:
            log.debug("%s '%s' sign:%s coef:%s exp:%s -> %016X inexact:%s" \
                % (floc("try_parse",this_module),string,sign,coef,exp,word,inexact))

    return ParseResult(word,not inexact)

# Parse a string into a word.  See try_parse() for the arguments.
def parse(text,start=0,end=None,debug=False):
    return try_parse(text,start=start,end=end,debug=debug).value


#
# +------------------+
# |                  |
# |    Formatting    |
# |                  |
# +------------------+
#

# Returns the text of a special value or zero, or None for finite nonzero values
def _special_text(knd,sign,coef):
    if knd >= dfp64_bid.QNAN:
        return "NaN"
    if knd == dfp64_bid.INFINITY:
        if sign:
            return "-Infinity"
        return "Infinity"
    if coef == 0:
        if sign:
            return "-0"
        return "0"
    return None

# Returns the canonical plain decimal notation of a word, for example '123.45' or
# '-0.001'.  No exponent is ever used.
def to_string(a):
    knd,sign,coef,exp=dfp64_bid.unpack(a)
    text=_special_text(knd,sign,coef)
    if text is not None:
        return text
    knd,sign,coef,exp=dfp64_bid.unpack(dfp64_compare.canonicalize(a))

    digits=str(coef)
    if exp >= 0:
        text=digits+"0"*exp
    elif len(digits) > -exp:
        text="%s.%s" % (digits[:len(digits)+exp],digits[len(digits)+exp:])
    else:
        text="0.%s%s" % ("0"*(-exp-len(digits)),digits)
    if sign:
        return "-"+text
    return text

# Returns the canonical scientific notation of a word, for example '1.2345E+2'.
# Zero is '0E+0'.
def to_scientific_string(a):
    knd,sign,coef,exp=dfp64_bid.unpack(a)
    text=_special_text(knd,sign,coef)
    if text is not None:
        if coef == 0 and knd == dfp64_bid.FINITE:
            return text+"E+0"
        return text
    knd,sign,coef,exp=dfp64_bid.unpack(dfp64_compare.canonicalize(a))

    digits=str(coef)
    adjusted=exp+len(digits)-1
    if len(digits) > 1:
        mantissa="%s.%s" % (digits[0],digits[1:])
    else:
        mantissa=digits
    if adjusted < 0:
        text="%sE-%s" % (mantissa,-adjusted)
    else:
        text="%sE+%s" % (mantissa,adjusted)
    if sign:
        return "-"+text
    return text

# Write the plain notation to any object with a write() method.  Returns the sink.
def append_to(a,sink):
    sink.write(to_string(a))
    return sink

# Write the scientific notation to any object with a write() method.  Returns the
# sink.
def scientific_append_to(a,sink):
    sink.write(to_scientific_string(a))
    return sink
