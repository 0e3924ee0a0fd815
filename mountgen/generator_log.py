# generator_log.py
# Logging helpers for the mount unit generator.
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

import inspect
import logging
import os
import sys
import traceback

from .flags import flags

log = logging.getLogger("mountgen")

KMSG_PATH = "/dev/kmsg"

# kernel log priorities, see syslog(3)
KMSG_LEVELS = {logging.CRITICAL: 2, logging.ERROR: 3, logging.WARNING: 4,
               logging.INFO: 6, logging.DEBUG: 7}


def function_name_and_depth():
    IGNORED_FUNCS = ["function_name_and_depth",
                     "log_method_call"]
    stack = inspect.stack()

    for i, frame in enumerate(stack):
        methodname = frame[3]
        if methodname not in IGNORED_FUNCS:
            return (methodname, len(stack) - i)

    return ("unknown function?", 0)


def log_method_call(d, *args, **kwargs):
    """ Log a call to a generator operation.

        :param d: the object the method belongs to, or None for a module
                  level function
    """
    (methodname, depth) = function_name_and_depth()
    spaces = depth * ' '
    if d is None:
        fmt = "%s%s:"
        fmt_args = [spaces, methodname]
    else:
        fmt = "%s%s.%s:"
        fmt_args = [spaces, d.__class__.__name__, methodname]

    for arg in args:
        fmt += " %s ;"
        fmt_args.append(arg)

    for k, v in kwargs.items():
        fmt += " %s: %s ;"
        fmt_args.extend([k, v])

    log.debug(fmt, *fmt_args)


def log_exception_info(log_func=log.debug, fmt_str=None, fmt_args=None):
    """Log detailed exception information.

       :param log_func: the desired logging function
       :param str fmt_str: a format string for any additional message
       :param fmt_args: arguments for the format string
       :type fmt_args: a list of str

       Note: the logging function indicates the severity level of
       this exception according to the calling function. log.debug,
       the default, is the lowest level.
    """
    fmt_args = fmt_args or []
    (_methodname, depth) = function_name_and_depth()
    spaces = depth * ' '
    log_func("%sCaught exception, continuing.", spaces)
    if fmt_str:
        fmt_str = "%sProblem description: " + fmt_str
        log_func(fmt_str, spaces, *fmt_args)
    log_func("%sBegin exception details.", spaces)
    tb = traceback.format_exception(*sys.exc_info())
    for line in (l.rstrip() for entry in tb for l in entry.split("\n") if l):
        log_func("%s    %s", spaces, line)
    log_func("%sEnd exception details.", spaces)


def program_name():
    """ Name used in log prefixes and in the banner of generated files. """
    if flags.program_name:
        return flags.program_name

    return os.path.basename(sys.argv[0]) or "mountgen"


class KmsgFormatter(logging.Formatter):

    """ Prefix records with the kernel log priority and the program name. """

    def format(self, record):
        msg = super(KmsgFormatter, self).format(record)
        prio = KMSG_LEVELS.get(record.levelno, 6)
        return "<%d>%s[%d]: %s" % (prio, program_name(), os.getpid(), msg)


def set_up_logging(console=False):
    """ Configure the mountgen logger for use inside a generator.

        Generators run before the journal is up, so records go to the
        kernel log buffer when it can be opened and to stderr otherwise.

        :keyword bool console: log to stderr even if /dev/kmsg is usable
        :returns: the installed handler
        :rtype: :class:`logging.Handler`
    """
    level = logging.DEBUG if flags.debug else logging.INFO
    log.setLevel(level)

    handler = None
    if not console and os.access(KMSG_PATH, os.W_OK):
        try:
            handler = logging.FileHandler(KMSG_PATH, mode="a")
        except OSError:
            log_exception_info(fmt_str="cannot open %s", fmt_args=[KMSG_PATH])
        else:
            handler.setFormatter(KmsgFormatter("%(message)s"))

    if handler is None:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))

    handler.setLevel(level)
    log.addHandler(handler)

    # capture python warnings in our logs
    warning_log = logging.getLogger("py.warnings")
    warning_log.addHandler(handler)

    log.debug("sys.argv = %s", sys.argv)
    return handler
