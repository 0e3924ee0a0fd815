# flags.py
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


class Flags(object):

    def __init__(self):
        #
        # mode of operation
        #
        self.debug = False

        # None means autodetect, see util.in_initrd
        self.initrd = None

        # name stamped into the banner of every generated file; None means
        # the basename of sys.argv[0]
        self.program_name = None

        #
        # install locations of the units and helpers we refer to
        #
        self.system_data_unit_path = "/usr/lib/systemd/system"
        self.systemd_fsck_path = "/usr/lib/systemd/systemd-fsck"
        self.systemd_makefs_path = "/usr/lib/systemd/systemd-makefs"
        self.systemd_growfs_path = "/usr/lib/systemd/systemd-growfs"


flags = Flags()
