# special.py
# Names of well-known units.
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

LOCAL_FS_TARGET = "local-fs.target"
INITRD_ROOT_DEVICE_TARGET = "initrd-root-device.target"

FSCK_ROOT_SERVICE = "systemd-fsck-root.service"
REMOUNT_FS_SERVICE = "systemd-remount-fs.service"

# prefixes of the template services we instantiate
FSCK_SERVICE_PREFIX = "systemd-fsck"
MKSWAP_SERVICE_PREFIX = "systemd-mkswap"
MAKEFS_SERVICE_PREFIX = "systemd-makefs"
GROWFS_SERVICE_PREFIX = "systemd-growfs"

# where the root filesystem is mounted while still in the initrd
SYSROOT_PATH = "/sysroot"
