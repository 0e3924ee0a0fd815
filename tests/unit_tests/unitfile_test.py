import errno
import os
import shutil
import stat
import tempfile
import unittest
from unittest.mock import Mock, patch

from mountgen import unitfile
from mountgen.errors import DropInError, DuplicateUnitError, SymlinkError, UnitFileError
from mountgen.flags import flags


class UnitFileTestCase(unittest.TestCase):

    def setUp(self):
        self.dir = tempfile.mkdtemp(prefix="mountgen-test-")
        self.addCleanup(shutil.rmtree, self.dir)

        saved = flags.program_name
        flags.program_name = "test-generator"
        self.addCleanup(setattr, flags, "program_name", saved)

    def test_open_unit_file(self):
        with unitfile.open_unit_file(self.dir, "/etc/fstab", "mnt-data.mount") as f:
            f.write("[Unit]\n")

        with open(os.path.join(self.dir, "mnt-data.mount")) as f:
            self.assertEqual(f.read(), "# Automatically generated by test-generator\n\n[Unit]\n")

    def test_banner_program_name(self):
        flags.program_name = None
        with patch("mountgen.generator_log.sys.argv", ["/usr/lib/systemd/system-generators/fstab-generator"]):
            self.assertEqual(unitfile.banner(), "# Automatically generated by fstab-generator\n\n")

    def test_duplicate_with_source(self):
        unitfile.open_unit_file(self.dir, "/etc/fstab", "mnt-data.mount").close()
        with self.assertRaisesRegex(DuplicateUnitError, "already exists. Duplicate entry in /etc/fstab\\?") as cm:
            unitfile.open_unit_file(self.dir, "/etc/fstab", "mnt-data.mount")

        self.assertEqual(cm.exception.errno, errno.EEXIST)

    def test_duplicate_without_source(self):
        unitfile.write_unit_file(self.dir, None, "foo.service", "[Unit]\n")
        with self.assertRaises(DuplicateUnitError) as cm:
            unitfile.write_unit_file(self.dir, None, "foo.service", "[Service]\n")

        self.assertNotIn("Duplicate entry", str(cm.exception))
        self.assertIsInstance(cm.exception, UnitFileError)
        with open(os.path.join(self.dir, "foo.service")) as f:
            self.assertEqual(f.read(), "# Automatically generated by test-generator\n\n[Unit]\n")

    def test_write_failure_removes_unit(self):
        real_open_unit_file = unitfile.open_unit_file

        def open_unit_file(dest, source, name):
            f = real_open_unit_file(dest, source, name)
            f.write = Mock(side_effect=OSError(errno.ENOSPC, "No space left on device"))
            return f

        with patch("mountgen.unitfile.open_unit_file", side_effect=open_unit_file):
            with self.assertRaises(UnitFileError) as cm:
                unitfile.write_unit_file(self.dir, None, "foo.service", "[Unit]\n")

        self.assertEqual(cm.exception.errno, errno.ENOSPC)
        self.assertEqual(os.listdir(self.dir), [])

        # nothing left behind to be mistaken for a duplicate
        unitfile.write_unit_file(self.dir, None, "foo.service", "[Unit]\n")

    def test_non_ascii_text(self):
        unitfile.write_unit_file(self.dir, None, "foo.service", "[Unit]\nDescription=Daten-ü\n")
        unitfile.write_drop_in(self.dir, "foo.service", 50, "timeout", "[Unit]\nJobRunningTimeoutSec=5µs\n")

        with open(os.path.join(self.dir, "foo.service"), "rb") as f:
            self.assertIn(b"Description=Daten-\xc3\xbc\n", f.read())

        with open(os.path.join(self.dir, "foo.service.d", "50-timeout.conf"), "rb") as f:
            self.assertEqual(f.read(), b"[Unit]\nJobRunningTimeoutSec=5\xc2\xb5s\n")
        self.assertEqual(os.listdir(os.path.join(self.dir, "foo.service.d")), ["50-timeout.conf"])

    def test_missing_directory(self):
        with self.assertRaises(UnitFileError) as cm:
            unitfile.open_unit_file(os.path.join(self.dir, "missing"), "/etc/fstab", "foo.mount")

        self.assertNotIsInstance(cm.exception, DuplicateUnitError)
        self.assertEqual(cm.exception.errno, errno.ENOENT)

    def test_add_symlink(self):
        unitfile.add_symlink(self.dir, "mnt-data.mount", "requires", "systemd-makefs@dev-sda1.service")
        unitfile.add_symlink(self.dir, "mnt-data.mount", "requires", "systemd-makefs@dev-sda1.service")

        wants = os.path.join(self.dir, "mnt-data.mount.requires")
        self.assertEqual(os.listdir(wants), ["systemd-makefs@dev-sda1.service"])
        self.assertEqual(os.readlink(os.path.join(wants, "systemd-makefs@dev-sda1.service")),
                         "../systemd-makefs@dev-sda1.service")
        self.assertEqual(stat.S_IMODE(os.stat(wants).st_mode) & 0o700, 0o700)

    def test_add_absolute_symlink(self):
        unitfile.add_symlink(self.dir, "local-fs.target", "wants", "/usr/lib/systemd/system/foo.service")

        link = os.path.join(self.dir, "local-fs.target.wants", "foo.service")
        self.assertEqual(os.readlink(link), "/usr/lib/systemd/system/foo.service")

    def test_add_symlink_failure(self):
        # a file where the dependency directory should go
        with open(os.path.join(self.dir, "foo.mount.wants"), "w"):
            pass

        with self.assertRaises(SymlinkError):
            unitfile.add_symlink(self.dir, "foo.mount", "wants", "bar.service")

    def test_write_drop_in(self):
        unitfile.write_drop_in(self.dir, "dev-sda1.device", 50, "device-timeout", "[Unit]\nFoo=bar")

        path = os.path.join(self.dir, "dev-sda1.device.d", "50-device-timeout.conf")
        with open(path) as f:
            self.assertEqual(f.read(), "[Unit]\nFoo=bar\n")
        self.assertEqual(stat.S_IMODE(os.stat(path).st_mode), 0o644)

        unitfile.write_drop_in(self.dir, "dev-sda1.device", 50, "device-timeout", "[Unit]\nFoo=baz\n")
        self.assertEqual(os.listdir(os.path.join(self.dir, "dev-sda1.device.d")), ["50-device-timeout.conf"])
        with open(path) as f:
            self.assertEqual(f.read(), "[Unit]\nFoo=baz\n")

    def test_drop_in_file(self):
        (directory, path) = unitfile.drop_in_file("/run/gen", "foo.service", 10, "a/b.c")
        self.assertEqual(directory, "/run/gen/foo.service.d")
        self.assertEqual(path, "/run/gen/foo.service.d/10-a\\x2fb\\x2ec.conf")

        with self.assertRaises(DropInError):
            unitfile.drop_in_file("/run/gen", "foo.service", 10, "")

    def test_write_drop_in_format(self):
        unitfile.write_drop_in_format(self.dir, "foo.target", 50, "root-device", "[Unit]\nAfter=bar.device")

        with open(os.path.join(self.dir, "foo.target.d", "50-root-device.conf")) as f:
            self.assertEqual(f.read(), "# Automatically generated by test-generator\n\n[Unit]\nAfter=bar.device\n")
