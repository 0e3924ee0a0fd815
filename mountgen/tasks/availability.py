# availability.py
# Class for tracking availability of an application.
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

import abc
import os
import shutil

from ..errors import AvailabilityError

import logging
log = logging.getLogger("mountgen")

CACHE_AVAILABILITY = True

# an application that is one of these is a placeholder for a missing one
NULL_APPLICATIONS = ("true", "/bin/true", "/usr/bin/true", "/dev/null")


class ExternalResource(object):

    """ An external resource. """

    def __init__(self, method, name):
        """ Initializes an instance of an external resource.

            :param method: A method object
            :type method: :class:`Method`
            :param str name: the name of the external resource
        """
        self._method = method
        self.name = name
        self._availability_errors = None

    def __str__(self):
        return self.name

    @property
    def availability_errors(self):
        """ Whether the resource has any availability errors.

            :returns: [] if the resource is available
            :rtype: list of str
            :raises AvailabilityError: if availability could not be determined
        """
        if CACHE_AVAILABILITY and self._availability_errors is not None:
            return self._availability_errors[:]

        _errors = self._method.availability_errors(self)

        if CACHE_AVAILABILITY:
            self._availability_errors = _errors[:]

        return _errors

    @property
    def available(self):
        """ Whether the resource is available.

            :returns: True if the resource is available
            :rtype: bool
        """
        return self.availability_errors == []


class Method(object, metaclass=abc.ABCMeta):

    """ Method for determining if external resource is available."""

    @abc.abstractmethod
    def availability_errors(self, resource):
        """ Returns [] if the resource is available.

            :param resource: any external resource
            :type resource: :class:`ExternalResource`

            :returns: [] if the external resource is available
            :rtype: list of str
        """
        raise NotImplementedError()


class Path(Method):

    """ Methods for when application is found in  PATH. """

    def availability_errors(self, resource):
        """ Returns [] if the name of the application is in the path.

            :param resource: any application
            :type resource: :class:`ExternalResource`

            :returns: [] if the name of the application is in the path
            :rtype: list of str
        """
        if not shutil.which(resource.name):
            return ["application %s is not in $PATH" % resource.name]
        else:
            return []


Path = Path()


class _CheckerPath(Method):

    """ Methods for applications that distributions may stub out.

        A checker that is a symlink to true (or /dev/null) is installed
        only to silence callers and counts as not available.
    """

    def availability_errors(self, resource):
        errors = Path.availability_errors(resource)
        if errors:
            return errors

        path = shutil.which(resource.name)

        try:
            target = os.readlink(path)
        except OSError as e:
            if not os.path.islink(path):
                return []
            raise AvailabilityError("failed to read link %s: %s" % (path, e), errno=e.errno) from e

        if target in NULL_APPLICATIONS:
            return ["application %s is a link to %s" % (resource.name, target)]

        return []


CheckerPath = _CheckerPath()


def checker_application(name):
    """ Construct an external resource that is a possibly stubbed out
        application.

        This application will be available if its name can be found in $PATH
        and it is not a link to true.
    """
    return ExternalResource(CheckerPath, name)
