# timespan.py
# Parsing of time span strings like "5min 30s".
#
# Copyright (C) 2026  Red Hat, Inc.
#
# This copyrighted material is made available to anyone wishing to use,
# modify, copy, or redistribute it subject to the terms and conditions of
# the GNU General Public License v.2, or (at your option) any later version.
# This program is distributed in the hope that it will be useful, but WITHOUT
# ANY WARRANTY expressed or implied, including the implied warranties of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU General
# Public License for more details.  You should have received a copy of the
# GNU General Public License along with this program; if not, write to the
# Free Software Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA
# 02110-1301, USA.  Any Red Hat trademarks that are incorporated in the
# source code or documentation are not subject to the GNU General Public
# License and may only be used or replicated with the express permission of
# Red Hat, Inc.
#

import re

USEC_INFINITY = (1 << 64) - 1

USEC_PER_MSEC = 1000
USEC_PER_SEC = 1000 * USEC_PER_MSEC
USEC_PER_MINUTE = 60 * USEC_PER_SEC
USEC_PER_HOUR = 60 * USEC_PER_MINUTE
USEC_PER_DAY = 24 * USEC_PER_HOUR
USEC_PER_WEEK = 7 * USEC_PER_DAY
USEC_PER_MONTH = 2629800 * USEC_PER_SEC
USEC_PER_YEAR = 31557600 * USEC_PER_SEC

# Suffixes are matched as prefixes of the remaining text in this order, so a
# longer spelling has to come before any of its own prefixes.
_UNITS = (("seconds", USEC_PER_SEC),
          ("second", USEC_PER_SEC),
          ("sec", USEC_PER_SEC),
          ("s", USEC_PER_SEC),
          ("minutes", USEC_PER_MINUTE),
          ("minute", USEC_PER_MINUTE),
          ("min", USEC_PER_MINUTE),
          ("months", USEC_PER_MONTH),
          ("month", USEC_PER_MONTH),
          ("M", USEC_PER_MONTH),
          ("msec", USEC_PER_MSEC),
          ("ms", USEC_PER_MSEC),
          ("m", USEC_PER_MINUTE),
          ("hours", USEC_PER_HOUR),
          ("hour", USEC_PER_HOUR),
          ("hr", USEC_PER_HOUR),
          ("h", USEC_PER_HOUR),
          ("days", USEC_PER_DAY),
          ("day", USEC_PER_DAY),
          ("d", USEC_PER_DAY),
          ("weeks", USEC_PER_WEEK),
          ("week", USEC_PER_WEEK),
          ("w", USEC_PER_WEEK),
          ("years", USEC_PER_YEAR),
          ("year", USEC_PER_YEAR),
          ("y", USEC_PER_YEAR),
          ("usec", 1),
          ("us", 1),
          ("µs", 1))

_WHITESPACE = " \t\n\r"
_number_re = re.compile(r"([+-]?)(\d*)(?:\.(\d*))?")


def _extract_multiplier(text, pos, default):
    for suffix, multiplier in _UNITS:
        if text.startswith(suffix, pos):
            return (pos + len(suffix), multiplier)

    return (pos, default)


def _skip_whitespace(text, pos):
    while pos < len(text) and text[pos] in _WHITESPACE:
        pos += 1
    return pos


def parse_time(value, default_unit=USEC_PER_SEC):
    """ Parse a time span into microseconds.

        :param str value: e.g. "5min", "1h 30s", "1.5s" or "infinity"
        :param int default_unit: multiplier for numbers without a unit
        :returns: the time span in microseconds
        :rtype: int
        :raises ValueError: if value is not a valid time span
    """
    if value is None:
        raise ValueError("no time span given")

    if value.strip(_WHITESPACE) == "infinity":
        return USEC_INFINITY

    total = 0
    pos = 0
    something = False
    while True:
        pos = _skip_whitespace(value, pos)
        if pos == len(value):
            if not something:
                raise ValueError("invalid time span: %r" % value)
            break

        match = _number_re.match(value, pos)
        sign, whole, fraction = match.groups()
        if sign == "-":
            raise ValueError("negative time span: %r" % value)
        if fraction is not None:
            if not fraction:
                raise ValueError("invalid time span: %r" % value)
        elif not whole:
            raise ValueError("invalid time span: %r" % value)

        pos = _skip_whitespace(value, match.end())
        pos, multiplier = _extract_multiplier(value, pos, default_unit)

        total += int(whole or "0") * multiplier
        if fraction:
            total += int(fraction) * multiplier // 10 ** len(fraction)

        if total >= USEC_INFINITY:
            raise ValueError("time span out of range: %r" % value)

        something = True

    return total


def parse_sec(value):
    """ Parse a time span whose bare numbers are seconds. """
    return parse_time(value, USEC_PER_SEC)


def parse_sec_fix_0(value):
    """ Like :func:`parse_sec`, but a zero time span means "no timeout". """
    usec = parse_sec(value)
    return USEC_INFINITY if usec == 0 else usec
