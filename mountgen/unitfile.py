# unitfile.py
# Creation of unit files, drop-ins and dependency symlinks.
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

import errno
import os
import tempfile

from .errors import DropInError, DuplicateUnitError, SymlinkError, UnitFileError
from .generator_log import program_name
from . import util

import logging
log = logging.getLogger("mountgen")

FILENAME_MAX = 255


def banner():
    """ The provenance comment every generated file starts with. """
    return "# Automatically generated by %s\n\n" % program_name()


def open_unit_file(dest, source, name):
    """ Create a new unit file and stamp it with the banner.

        :param str dest: the generator output directory
        :param source: file the unit definition comes from, e.g. /etc/fstab
        :type source: str or NoneType
        :param str name: unit file name
        :returns: the unit file, open for writing
        :raises DuplicateUnitError: if the unit file exists already
        :raises UnitFileError: if the file cannot be created

        The file is created exclusively: a unit that exists already means two
        entries want to define the same unit and we must not hide that.
    """
    unit = "%s/%s" % (dest, name)

    try:
        f = open(unit, "x", encoding="utf-8")
    except FileExistsError as e:
        if source:
            msg = "Failed to create unit file %s, as it already exists. Duplicate entry in %s?" % (unit, source)
        else:
            msg = "Failed to create unit file %s: %s" % (unit, e.strerror)
        raise DuplicateUnitError(msg, errno=e.errno) from e
    except OSError as e:
        raise UnitFileError("Failed to create unit file %s: %s" % (unit, e.strerror), errno=e.errno) from e

    try:
        f.write(banner())
    except OSError as e:
        f.close()
        os.unlink(unit)
        raise UnitFileError("Failed to write unit file %s: %s" % (unit, e.strerror), errno=e.errno) from e

    return f


def write_unit_file(dest, source, name, text):
    """ Create unit file name in dest with the banner followed by text. """
    unit = "%s/%s" % (dest, name)
    log.debug("Creating %s", unit)

    f = open_unit_file(dest, source, name)
    try:
        with f:
            f.write(text)
    except OSError as e:
        os.unlink(unit)
        raise UnitFileError("Failed to write unit file %s: %s" % (unit, e.strerror), errno=e.errno) from e


def add_symlink(dir, dst, dep_type, src):
    """ Add a symlink from <dst>.<dep_type>/ to src.

        :param str dir: the generator output directory
        :param str dst: name of the unit that gets the dependency
        :param str dep_type: "wants", "requires", ...
        :param str src: unit the dependency is on; relative names are taken
                        to live in dir
        :raises SymlinkError: on failure other than an existing link
    """
    target = src if util.path_is_absolute(src) else "../%s" % src
    link = "%s/%s.%s/%s" % (dir, dst, dep_type, os.path.basename(src))

    try:
        util.mkdir_parents(link)
    except OSError as e:
        raise SymlinkError("Failed to create directory for \"%s\": %s" % (link, e.strerror),
                           errno=e.errno) from e

    try:
        os.symlink(target, link)
    except FileExistsError:
        log.debug("symlink %s exists already", link)
    except OSError as e:
        raise SymlinkError("Failed to create symlink \"%s\": %s" % (link, e.strerror),
                           errno=e.errno) from e


def drop_in_file(dir, unit, level, name):
    """ Return the drop-in directory and file for a fragment.

        :raises DropInError: if name does not make a valid file name
    """
    escaped = util.xescape(name, "/.")
    if not escaped or len(escaped) > FILENAME_MAX:
        raise DropInError("invalid drop-in name %r" % name, errno=errno.EINVAL)

    directory = "%s/%s.d" % (dir, unit)
    return (directory, "%s/%d-%s.conf" % (directory, level, escaped))


def write_drop_in(dir, unit, level, name, data):
    """ Write a drop-in fragment for unit.

        :param str dir: the generator output directory
        :param str unit: unit the fragment applies to
        :param int level: priority, lower numbers are merged first
        :param str name: fragment name
        :param str data: fragment content

        The fragment replaces an earlier one with the same level and name.
    """
    (directory, path) = drop_in_file(dir, unit, level, name)
    log.debug("Creating %s", path)

    if not data.endswith("\n"):
        data += "\n"

    tmp = None
    try:
        util.makedirs(directory)
        with tempfile.NamedTemporaryFile("w", encoding="utf-8", dir=directory, prefix=".#",
                                         suffix=".tmp", delete=False) as f:
            tmp = f.name
            os.fchmod(f.fileno(), 0o644)
            f.write(data)
        os.rename(tmp, path)
    except OSError as e:
        if tmp is not None and os.path.exists(tmp):
            os.unlink(tmp)
        raise DropInError("Failed to write drop-in %s: %s" % (path, e.strerror), errno=e.errno) from e


def write_drop_in_format(dir, unit, level, name, text):
    """ Write a drop-in fragment that starts with the banner. """
    write_drop_in(dir, unit, level, name, banner() + text)
