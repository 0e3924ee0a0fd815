# fstab.py
# Mount table entries and option filtering.
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

from collections import namedtuple

import logging
log = logging.getLogger("mountgen")

FilterResult = namedtuple("FilterResult", ["name", "value", "filtered"])
""" Outcome of :func:`filter_options`.

    name is the option key that matched (None if nothing did), value its
    value (None for a bare key) and filtered the remaining options.
"""


class MountEntry(object):
    """ One processed line of fstab
    """

    def __init__(self, what, where, fstype=None, options=None):
        self._what = what
        self._where = where
        self._fstype = fstype or None
        self._options = options or None

    def __repr__(self):
        return "%s\t%s\t%s\t%s" % (self._what, self._where, self._fstype or "auto",
                                   self._options or "defaults")

    def __eq__(self, other):
        if not isinstance(other, MountEntry):
            return False

        return (self._what, self._where, self._fstype, self._options) == \
            (other._what, other._where, other._fstype, other._options)

    def __hash__(self):
        return hash((self._what, self._where, self._fstype, self._options))

    @property
    def what(self):
        """ Device or other source of the mount """
        return self._what

    @property
    def where(self):
        """ Mount point (or the device itself for swap) """
        return self._where

    @property
    def fstype(self):
        return self._fstype

    @property
    def options(self):
        """ Return mount options

            :returns: comma separated string of mount options or None when not set
            :rtype: str
        """
        return self._options

    @property
    def mntops(self):
        """ Return mount options

            :returns: list of mount options
            :rtype: list of str
        """
        if self._options is None:
            return []

        return self._options.split(",")

    def filter_options(self, *names):
        """ Look up options of this entry, see :func:`filter_options`. """
        return filter_options(self._options, names)

    def has_option(self, *names):
        return test_option(self._options, names)


def _match_option(option, names):
    """ Return (name, value) if option is one of names, else None. """
    for name in names:
        if not option.startswith(name):
            continue

        rest = option[len(name):]
        if rest == "":
            return (name, None)
        elif rest.startswith("="):
            return (name, rest[1:])

    return None


def filter_options(opts, names):
    """ Look for options in a comma separated option string.

        :param opts: options as found in the fourth fstab field
        :type opts: str or NoneType
        :param names: option keys to look for; for each option the keys
                      are tried in this order
        :type names: list of str
        :returns: the match and the options with every matching one removed
        :rtype: :class:`FilterResult`

        If a key is given more than once, the last occurrence wins.
    """
    if isinstance(names, str):
        names = (names,)

    if opts is None:
        return FilterResult(None, None, None)

    found = None
    value = None
    kept = []
    for option in opts.split(","):
        if not option:
            continue

        match = _match_option(option, names)
        if match is None:
            kept.append(option)
        else:
            (found, value) = match

    return FilterResult(found, value, ",".join(kept))


def test_option(opts, names):
    """ Whether any of the named options is present in opts. """
    return filter_options(opts, names).name is not None
