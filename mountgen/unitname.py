# unitname.py
# Derivation of unit names from filesystem paths.
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

import string

from .errors import UnitNameError

import logging
log = logging.getLogger("mountgen")

UNIT_NAME_MAX = 256

UNIT_TYPES = ("service", "socket", "target", "device", "mount", "automount",
              "swap", "timer", "path", "slice", "scope")

VALID_CHARS = frozenset(string.ascii_letters + string.digits + ":-_.\\")
VALID_CHARS_WITH_AT = VALID_CHARS | frozenset("@")

# characters that pass through unit_name_escape unchanged
_ESCAPE_KEEP = frozenset(string.ascii_letters + string.digits + ":_.")

UNIT_NAME_PLAIN = 1
UNIT_NAME_INSTANCE = 2
UNIT_NAME_TEMPLATE = 4


def unit_name_escape(name):
    """ Escape name for use as (part of) a unit name.

        '/' becomes '-'; '-', '\\' and anything not allowed in unit names is
        written as \\xNN, and so is a leading '.' so that no unit name
        starts with a dot.
    """
    result = []
    raw = name.encode("utf-8")
    for (i, c) in enumerate(raw):
        ch = chr(c)
        if ch == "/":
            result.append("-")
        elif (i == 0 and ch == ".") or ch not in _ESCAPE_KEEP:
            result.append("\\x%02x" % c)
        else:
            result.append(ch)

    return "".join(result)


def path_is_normalized(path):
    if not path:
        return False

    parts = path.split("/")
    return "." not in parts and ".." not in parts and "" not in parts[1:-1]


def unit_name_path_escape(path):
    """ Turn a path into the escaped string used in path based unit names.

        :raises UnitNameError: if path is not normalized
    """
    parts = [p for p in path.split("/") if p]
    if not parts:
        return "-"

    if not path_is_normalized("/".join(parts)):
        raise UnitNameError("path %s is not normalized" % path)

    return unit_name_escape("/".join(parts))


def unit_suffix_is_valid(suffix):
    return suffix.startswith(".") and suffix[1:] in UNIT_TYPES


def unit_name_is_valid(name, flags=UNIT_NAME_PLAIN | UNIT_NAME_INSTANCE | UNIT_NAME_TEMPLATE):
    """ Whether name is a valid unit name of one of the requested kinds. """
    if not name or len(name) >= UNIT_NAME_MAX:
        return False

    dot = name.rfind(".")
    if dot <= 0:
        return False

    if name[dot + 1:] not in UNIT_TYPES:
        return False

    prefix = name[:dot]
    if any(c not in VALID_CHARS_WITH_AT for c in prefix):
        return False

    at = prefix.find("@")
    if at == 0:
        return False

    if at < 0:
        return bool(flags & UNIT_NAME_PLAIN)

    if "@" in prefix[at + 1:]:
        return False

    if at == len(prefix) - 1:
        return bool(flags & UNIT_NAME_TEMPLATE)

    return bool(flags & UNIT_NAME_INSTANCE)


def unit_name_from_path(path, suffix):
    """ Return the name of the unit of type suffix that belongs to path.

        :param str path: e.g. "/dev/sda1"
        :param str suffix: unit type suffix, e.g. ".device"
        :returns: e.g. "dev-sda1.device"
        :rtype: str
        :raises UnitNameError: if no valid unit name can be made
    """
    if not unit_suffix_is_valid(suffix):
        raise UnitNameError("invalid unit suffix %s" % suffix)

    name = unit_name_path_escape(path) + suffix
    if not unit_name_is_valid(name, UNIT_NAME_PLAIN):
        raise UnitNameError("failed to make unit name from path %s" % path)

    return name


def unit_name_from_path_instance(prefix, path, suffix):
    """ Return the name of the instance of template prefix for path.

        :param str prefix: template name without "@", e.g. "systemd-fsck"
        :param str path: path used as the instance
        :param str suffix: unit type suffix, e.g. ".service"
        :returns: e.g. "systemd-fsck@dev-sda1.service"
        :rtype: str
        :raises UnitNameError: if no valid unit name can be made
    """
    if not unit_suffix_is_valid(suffix):
        raise UnitNameError("invalid unit suffix %s" % suffix)

    name = "%s@%s%s" % (prefix, unit_name_path_escape(path), suffix)
    if not unit_name_is_valid(name, UNIT_NAME_INSTANCE):
        raise UnitNameError("failed to make instance unit name from path %s" % path)

    return name
