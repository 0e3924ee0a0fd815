import logging
import unittest
from unittest.mock import patch

from mountgen import generator_log
from mountgen.flags import flags


class LogTestCase(unittest.TestCase):

    def test_log_method_call(self):
        def write_something(dir, what):
            generator_log.log_method_call(None, dir=dir, what=what)

        with self.assertLogs("mountgen", level="DEBUG") as cm:
            write_something("/run/gen", "/dev/sda1")

        self.assertIn("write_something: dir: /run/gen ; what: /dev/sda1 ;", cm.output[0])

    def test_log_exception_info(self):
        with self.assertLogs("mountgen", level="DEBUG") as cm:
            try:
                raise OSError(5, "Input/output error")
            except OSError:
                generator_log.log_exception_info(fmt_str="reading %s", fmt_args=["/dev/sda1"])

        self.assertIn("Caught exception, continuing.", cm.output[0])
        self.assertTrue(any("reading /dev/sda1" in line for line in cm.output))

    def test_kmsg_formatter(self):
        saved = flags.program_name
        flags.program_name = "fstab-generator"
        self.addCleanup(setattr, flags, "program_name", saved)

        formatter = generator_log.KmsgFormatter("%(message)s")
        record = logging.LogRecord("mountgen", logging.WARNING, __file__, 1, "x-systemd.device-timeout ignored", None, None)
        with patch("mountgen.generator_log.os.getpid", return_value=42):
            self.assertEqual(formatter.format(record), "<4>fstab-generator[42]: x-systemd.device-timeout ignored")

    def test_set_up_console_logging(self):
        log = logging.getLogger("mountgen")
        saved_level = log.level
        handler = generator_log.set_up_logging(console=True)
        self.addCleanup(log.removeHandler, handler)
        self.addCleanup(logging.getLogger("py.warnings").removeHandler, handler)
        self.addCleanup(log.setLevel, saved_level)

        self.assertIsInstance(handler, logging.StreamHandler)
        self.assertEqual(handler.level, logging.DEBUG if flags.debug else logging.INFO)
