# udev.py
# Device node helpers.
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

import pyudev

from . import util

import logging
log = logging.getLogger("mountgen")

QUOTES = "\"'"

# fstab tags and the /dev/disk/by-* directory udev maintains for them
TAG_DIRECTORIES = (("LABEL=", "label"),
                   ("UUID=", "uuid"),
                   ("PARTUUID=", "partuuid"),
                   ("PARTLABEL=", "partlabel"))

_DEVNODE_WHITELIST = frozenset(string.ascii_letters + string.digits + "#+-.:=@_")

_udev_context = None


def is_device_path(path):
    """ Whether path names a device node or a sysfs device. """
    return util.path_startswith(path, "/dev/") or util.path_startswith(path, "/sys/")


def unquote(value, quotes=QUOTES):
    if len(value) >= 2 and value[0] in quotes and value[-1] == value[0]:
        return value[1:-1]

    return value


def encode_devnode_name(name):
    """ Encode name the way udev does for /dev/disk/by-* symlinks.

        ASCII letters, digits and '#+-.:=@_' are kept as are non-ASCII
        characters; anything else becomes a \\xNN sequence.
    """
    result = []
    for c in name:
        if c in _DEVNODE_WHITELIST or ord(c) > 0x7f:
            result.append(c)
        else:
            result.append("\\x%02x" % ord(c))

    return "".join(result)


def tag_to_udev_node(value, by):
    return "/dev/disk/by-%s/%s" % (by, encode_devnode_name(unquote(value)))


def node_to_udev_node(spec):
    """ Translate the first fstab field into a device node path.

        :param str spec: e.g. "/dev/sda1" or "UUID=..."
        :returns: the path udev will create for spec, or spec itself if it
                  is not a tag
        :rtype: str
    """
    for (tag, by) in TAG_DIRECTORIES:
        if spec.startswith(tag):
            return tag_to_udev_node(spec[len(tag):], by)

    return spec


def _get_context():
    global _udev_context

    if _udev_context is None:
        _udev_context = pyudev.Context()

    return _udev_context


def get_device(device_node):
    """ Look up a device node in the udev database.

        :param str device_node: path of the device node
        :returns: the udev properties of the device or None if udev does not
                  know about it (yet)
        :rtype: dict or NoneType
    """
    try:
        device = pyudev.Devices.from_device_file(_get_context(), device_node)
    except (pyudev.DeviceNotFoundError, ValueError) as e:
        log.debug("udev does not know %s: %s", device_node, e)
        return None
    except (ImportError, OSError) as e:
        # no libudev, e.g. in a minimal container
        log.debug("failed to query udev for %s: %s", device_node, e)
        return None

    result = dict(device.properties)
    result["SYS_NAME"] = device.sys_name
    result["SYS_PATH"] = device.sys_path
    return result


def device_get_format(udev_info):
    """ Return a device's format type as reported by udev. """
    return udev_info.get("ID_FS_TYPE")
