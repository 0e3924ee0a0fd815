# generator.py
# Auxiliary units for mount and swap units generated from fstab.
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

from .errors import AvailabilityError, FSTypeError, InvalidDeviceError, UnitFileError
from .flags import flags
from .fstab import filter_options, test_option
from .generator_log import log_method_call
from .tasks.fsck import fsck_exists
from .timespan import parse_sec_fix_0
from .unitfile import add_symlink, write_drop_in_format, write_unit_file
from .unitname import unit_name_from_path, unit_name_from_path_instance
from . import special
from . import udev
from . import util

import logging
log = logging.getLogger("mountgen")

DEVICE_TIMEOUT_OPTIONS = ("comment=systemd.device-timeout", "x-systemd.device-timeout")
NETDEV_OPTIONS = ("_netdev",)

DROP_IN_LEVEL = 50

FSCK_SYSROOT_SERVICE_TEMPLATE = """\
[Unit]
Description=File System Check on %(what)s
Documentation=man:systemd-fsck-root.service(8)
DefaultDependencies=no
BindsTo=%(device)s
Conflicts=shutdown.target
After=initrd-root-device.target local-fs-pre.target %(device)s
Before=shutdown.target

[Service]
Type=oneshot
RemainAfterExit=yes
ExecStart=%(fsck)s %(escaped)s
TimeoutSec=0
"""

MKSWAP_SERVICE_TEMPLATE = """\
[Unit]
Description=Make Swap on %%f
Documentation=man:systemd-mkswap@.service(8)
DefaultDependencies=no
BindsTo=%%i.device
Conflicts=shutdown.target
After=%%i.device
Before=shutdown.target %(where_unit)s

[Service]
Type=oneshot
RemainAfterExit=yes
ExecStart=%(makefs)s swap %(escaped)s
TimeoutSec=0
"""

# fsck might or might not be used, so order before both the checker and the
# mount unit
MKFS_SERVICE_TEMPLATE = """\
[Unit]
Description=Make File System on %%f
Documentation=man:systemd-makefs@.service(8)
DefaultDependencies=no
BindsTo=%%i.device
Conflicts=shutdown.target
After=%%i.device
Before=shutdown.target systemd-fsck@%%i.service %(where_unit)s

[Service]
Type=oneshot
RemainAfterExit=yes
ExecStart=%(makefs)s %(fstype)s %(escaped)s
TimeoutSec=0
"""

GROWFS_SERVICE_TEMPLATE = """\
[Unit]
Description=Grow File System on %%f
Documentation=man:systemd-growfs@.service(8)
DefaultDependencies=no
BindsTo=%%i.mount
Conflicts=shutdown.target
After=%%i.mount
Before=shutdown.target %(target)s

[Service]
Type=oneshot
RemainAfterExit=yes
ExecStart=%(growfs)s %(escaped)s
TimeoutSec=0
"""

DEVICE_TIMEOUT_TEMPLATE = """\
[Unit]
JobRunningTimeoutSec=%(timeout)s"""

NETDEV_DEPENDENCIES = """\
[Unit]
After=network-online.target network.target
Wants=network-online.target
"""

ROOT_DEVICE_TEMPLATE = """\
[Unit]
Requires=%(device)s
After=%(device)s"""


def _device_node(what):
    """ Return the device node for what, which has to be a device. """
    node = udev.node_to_udev_node(what)
    if not udev.is_device_path(node):
        raise InvalidDeviceError("Cannot format something that is not a device node: %s" % node,
                                 errno=errno.EINVAL)

    return node


def _check_current_format(node, fstype):
    """ Warn if udev already knows of a different format on node.

        The helper leaves a device with an existing filesystem alone, so
        whatever udev reports there is what ends up being used.
    """
    info = udev.get_device(node)
    if info is None:
        log.debug("%s is not known to udev yet", node)
        return

    fmt = udev.device_get_format(info)
    if not fmt:
        return

    if fmt == fstype:
        log.debug("%s already carries %s, it will not be formatted", node, fmt)
    else:
        log.warning("%s was requested for %s, but udev reports existing %s that will be kept",
                    fstype, node, fmt)


def write_fsck_sysroot_service(dir, what):
    """ Write the unit that checks the root filesystem from the initrd.

        :param str dir: the generator output directory
        :param str what: the device holding the root filesystem
    """
    escaped = util.specifier_escape(what)
    device = unit_name_from_path(what, ".device")

    text = FSCK_SYSROOT_SERVICE_TEMPLATE % {"what": escaped,
                                            "device": device,
                                            "fsck": flags.systemd_fsck_path,
                                            "escaped": util.cescape(escaped)}
    write_unit_file(dir, None, special.FSCK_ROOT_SERVICE, text)


def write_fsck_deps(f, dir, what, where, fstype):
    """ Make the unit being written to f depend on a check of its device.

        :param f: the open unit file of the mount unit
        :param str dir: the generator output directory
        :param str what: the device (or other source) that gets mounted
        :param str where: the mount point
        :param fstype: filesystem type
        :type fstype: str or NoneType
    """
    log_method_call(None, dir=dir, what=what, where=where, fstype=fstype)

    if not udev.is_device_path(what):
        log.warning("Checking was requested for \"%s\", but it is not a device.", what)
        return

    if fstype and fstype != "auto":
        try:
            exists = fsck_exists(fstype)
        except AvailabilityError as e:
            log.warning("Checking was requested for %s, but couldn't detect if fsck.%s may be used, proceeding: %s",
                        what, fstype, e)
        else:
            if not exists:
                # treat missing check as essentially OK
                log.debug("Checking was requested for %s, but fsck.%s does not exist.", what, fstype)
                return

    if util.path_equal(where, "/"):
        add_symlink(dir, special.LOCAL_FS_TARGET, "wants",
                    "%s/%s" % (flags.system_data_unit_path, special.FSCK_ROOT_SERVICE))
        return

    if util.in_initrd() and util.path_equal(where, special.SYSROOT_PATH):
        write_fsck_sysroot_service(dir, what)
        fsck = special.FSCK_ROOT_SERVICE
    else:
        fsck = unit_name_from_path_instance(special.FSCK_SERVICE_PREFIX, what, ".service")

    try:
        f.write("Requires=%s\nAfter=%s\n" % (fsck, fsck))
    except OSError as e:
        raise UnitFileError("Failed to write fsck dependencies: %s" % e.strerror, errno=e.errno) from e


def write_timeouts(dir, what, where, opts):
    """ Configure how long to wait for the device backing a mount or swap.

        This is useful to support endless device timeouts for devices that
        show up only after user input, like crypto devices.

        :param str dir: the generator output directory
        :param str what: the device (or other source)
        :param str where: the mount point
        :param opts: the fstab options
        :type opts: str or NoneType
        :returns: opts without the timeout options
        :rtype: str or NoneType
    """
    log_method_call(None, dir=dir, what=what, where=where, opts=opts)

    (name, timeout, filtered) = filter_options(opts, DEVICE_TIMEOUT_OPTIONS)
    if name is None:
        return filtered

    try:
        parse_sec_fix_0(timeout)
    except ValueError:
        log.warning("Failed to parse timeout for %s, ignoring: %s", where, timeout)
        return filtered

    node = udev.node_to_udev_node(what)
    if not udev.is_device_path(node):
        log.warning("x-systemd.device-timeout ignored for %s", what)
        return filtered

    unit = unit_name_from_path(node, ".device")
    write_drop_in_format(dir, unit, DROP_IN_LEVEL, "device-timeout",
                         DEVICE_TIMEOUT_TEMPLATE % {"timeout": timeout})
    return filtered


def write_device_deps(dir, what, where, opts):
    """ Order the device of a _netdev mount after the network.

        Sources that are not devices (NFS, CIFS) get the network ordering on
        the mount unit itself, so there is nothing to do for them here.
    """
    log_method_call(None, dir=dir, what=what, where=where, opts=opts)

    if not test_option(opts, NETDEV_OPTIONS):
        return

    node = udev.node_to_udev_node(what)

    # Nothing to apply dependencies to.
    if not udev.is_device_path(node):
        return

    unit = unit_name_from_path(node, ".device")
    write_drop_in_format(dir, unit, DROP_IN_LEVEL, "netdev-dependencies", NETDEV_DEPENDENCIES)


def write_initrd_root_device_deps(dir, what):
    """ Make initrd-root-device.target wait for the root device. """
    log_method_call(None, dir=dir, what=what)

    device = unit_name_from_path(what, ".device")
    write_drop_in_format(dir, special.INITRD_ROOT_DEVICE_TARGET, DROP_IN_LEVEL, "root-device",
                         ROOT_DEVICE_TEMPLATE % {"device": device})


def hook_up_mkswap(dir, what):
    """ Create swap on what before the swap unit for it is started.

        :raises InvalidDeviceError: if what is not a device
    """
    log_method_call(None, dir=dir, what=what)

    node = _device_node(what)
    unit = unit_name_from_path_instance(special.MKSWAP_SERVICE_PREFIX, node, ".service")
    where_unit = unit_name_from_path(node, ".swap")
    _check_current_format(node, "swap")

    text = MKSWAP_SERVICE_TEMPLATE % {"where_unit": where_unit,
                                      "makefs": flags.systemd_makefs_path,
                                      "escaped": util.cescape(node)}
    write_unit_file(dir, None, unit, text)

    add_symlink(dir, where_unit, "requires", unit)


def hook_up_mkfs(dir, what, where, fstype):
    """ Create a filesystem on what before it is mounted on where.

        :raises InvalidDeviceError: if what is not a device
        :raises FSTypeError: if no filesystem type was given
    """
    log_method_call(None, dir=dir, what=what, where=where, fstype=fstype)

    node = _device_node(what)
    if not fstype or fstype == "auto":
        raise FSTypeError("Cannot format partition %s, filesystem type is not specified" % node,
                          errno=errno.EINVAL)

    unit = unit_name_from_path_instance(special.MAKEFS_SERVICE_PREFIX, node, ".service")
    where_unit = unit_name_from_path(where, ".mount")
    _check_current_format(node, fstype)

    text = MKFS_SERVICE_TEMPLATE % {"where_unit": where_unit,
                                    "makefs": flags.systemd_makefs_path,
                                    "fstype": fstype,
                                    "escaped": util.cescape(node)}
    write_unit_file(dir, None, unit, text)

    add_symlink(dir, where_unit, "requires", unit)


def hook_up_growfs(dir, where, target):
    """ Grow the filesystem mounted on where once it is mounted.

        Growing is best effort, so the mount unit only wants the service.

        :param str dir: the generator output directory
        :param str where: the mount point
        :param str target: the unit the growing has to finish before
    """
    log_method_call(None, dir=dir, where=where, target=target)

    unit = unit_name_from_path_instance(special.GROWFS_SERVICE_PREFIX, where, ".service")
    where_unit = unit_name_from_path(where, ".mount")

    text = GROWFS_SERVICE_TEMPLATE % {"target": target,
                                      "growfs": flags.systemd_growfs_path,
                                      "escaped": util.cescape(where)}
    write_unit_file(dir, None, unit, text)

    add_symlink(dir, where_unit, "wants", unit)


def enable_remount_fs_service(dir):
    """ Pull in systemd-remount-fs.service """
    log_method_call(None, dir=dir)

    add_symlink(dir, special.LOCAL_FS_TARGET, "wants",
                "%s/%s" % (flags.system_data_unit_path, special.REMOUNT_FS_SERVICE))
