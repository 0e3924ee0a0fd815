# errors.py
# Exception classes for the mount unit generator.
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


class GeneratorError(Exception):

    def __init__(self, *args, **kwargs):
        self.errno = kwargs.pop("errno", None)
        super(GeneratorError, self).__init__(*args, **kwargs)

# Unit files


class UnitFileError(GeneratorError):
    pass


class DuplicateUnitError(UnitFileError):
    pass


class DropInError(GeneratorError):
    pass


class SymlinkError(GeneratorError):
    pass


class UnitNameError(GeneratorError):
    pass

# Caller input


class InvalidDeviceError(GeneratorError):
    pass


class FSTypeError(GeneratorError):
    pass

# External resources


class AvailabilityError(GeneratorError):
    pass
