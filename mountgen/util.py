# util.py
# Path, escaping and environment helpers.
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

import os

from .flags import flags

import logging
log = logging.getLogger("mountgen")

INITRD_RELEASE = "/etc/initrd-release"
PROC_MOUNTS = "/proc/self/mounts"

# filesystem types an initrd root lives on
TEMPORARY_FS_TYPES = ("tmpfs", "ramfs")

_C_ESCAPES = {0x07: "\\a", 0x08: "\\b", 0x0c: "\\f", 0x0a: "\\n", 0x0d: "\\r",
              0x09: "\\t", 0x0b: "\\v", 0x5c: "\\\\", 0x22: "\\\"", 0x27: "\\'"}

_saved_in_initrd = None

##
# Paths
##


def path_is_absolute(path):
    return path.startswith("/")


def _path_components(path):
    return [c for c in path.split("/") if c]


def path_equal(a, b):
    """ Compare two paths ignoring duplicate and trailing slashes.

        No symlinks are resolved and no '..' is collapsed.
    """
    if path_is_absolute(a) != path_is_absolute(b):
        return False

    return _path_components(a) == _path_components(b)


def path_startswith(path, prefix):
    """ Whether path is prefix or lies below it, component by component. """
    if path_is_absolute(path) != path_is_absolute(prefix):
        return False

    path_parts = _path_components(path)
    prefix_parts = _path_components(prefix)
    return path_parts[:len(prefix_parts)] == prefix_parts


def makedirs(path, mode=0o755):
    if not os.path.isdir(path):
        os.makedirs(path, mode, exist_ok=True)


def mkdir_parents(path, mode=0o755):
    """ Create all parent directories of path. """
    parent = os.path.dirname(path)
    if parent:
        makedirs(parent, mode)

##
# Escaping
##


def cescape(s):
    """ Escape a string the way C string literals are written.

        Control characters, DEL and bytes of non-ASCII characters that have
        no short escape are written as three digit octal sequences.
    """
    result = []
    for c in s.encode("utf-8"):
        if c in _C_ESCAPES:
            result.append(_C_ESCAPES[c])
        elif c < 0x20 or c >= 0x7f:
            result.append("\\%03o" % c)
        else:
            result.append(chr(c))

    return "".join(result)


def xescape(s, bad):
    """ Replace unprintable characters, backslashes and any of bad with
        \\xNN sequences.
    """
    result = []
    for c in s.encode("utf-8"):
        if c < 0x20 or c >= 0x7f or c == 0x5c or chr(c) in bad:
            result.append("\\x%02x" % c)
        else:
            result.append(chr(c))

    return "".join(result)


def specifier_escape(s):
    """ Protect '%' from unit file specifier expansion. """
    return s.replace("%", "%%")

##
# Environment
##


def parse_boolean(value):
    value = value.strip().lower()
    if value in ("1", "yes", "y", "true", "t", "on"):
        return True
    elif value in ("0", "no", "n", "false", "f", "off"):
        return False

    raise ValueError("invalid boolean value: %s" % value)


def get_root_fstype():
    """ Return the type of the filesystem mounted on / or None. """
    fstype = None
    try:
        with open(PROC_MOUNTS) as f:
            for line in f:
                fields = line.split()
                if len(fields) >= 3 and fields[1] == "/":
                    # the last entry for / is the one that is visible
                    fstype = fields[2]
    except OSError as e:
        log.debug("failed to read %s: %s", PROC_MOUNTS, e)
        return None

    return fstype


def in_initrd():
    """ Whether we are running inside an initrd.

        flags.initrd wins when set, then $SYSTEMD_IN_INITRD. Otherwise the
        initrd-release file has to exist and / has to be a memory filesystem.
    """
    global _saved_in_initrd

    if flags.initrd is not None:
        return flags.initrd

    env = os.environ.get("SYSTEMD_IN_INITRD")
    if env is not None:
        try:
            return parse_boolean(env)
        except ValueError:
            log.debug("failed to parse $SYSTEMD_IN_INITRD, ignoring: %s", env)

    if _saved_in_initrd is None:
        _saved_in_initrd = (os.path.exists(INITRD_RELEASE) and
                            get_root_fstype() in TEMPORARY_FS_TYPES)

    return _saved_in_initrd
