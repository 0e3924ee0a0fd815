# fsck.py
# Detection of filesystem checkers.
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

from ..errors import AvailabilityError

from . import availability

import logging
log = logging.getLogger("mountgen")


def fsck_application(fstype):
    """ Return the external resource for the checker of fstype.

        :param str fstype: filesystem type, e.g. "ext4"
        :rtype: :class:`~.availability.ExternalResource`
        :raises AvailabilityError: if fstype cannot name a checker
    """
    if not fstype or fstype == "auto" or fstype in (".", "..") or "/" in fstype or "\0" in fstype:
        raise AvailabilityError("no checker can exist for filesystem type %r" % fstype,
                                errno=errno.EINVAL)

    return availability.checker_application("fsck.%s" % fstype)


def fsck_exists(fstype):
    """ Whether a checker for fstype is installed.

        :param str fstype: filesystem type, e.g. "ext4"
        :returns: True if fsck.<fstype> is usable, False if it is definitely
                  not
        :rtype: bool
        :raises AvailabilityError: if this could not be determined
    """
    checker = fsck_application(fstype)
    errors = checker.availability_errors
    if errors:
        log.debug("%s", "; ".join(errors))
        return False

    return True
