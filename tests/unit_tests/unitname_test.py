import unittest

from mountgen import unitname
from mountgen.errors import UnitNameError


class UnitNameTestCase(unittest.TestCase):

    def test_unit_name_from_path(self):
        self.assertEqual(unitname.unit_name_from_path("/dev/sda1", ".device"), "dev-sda1.device")
        self.assertEqual(unitname.unit_name_from_path("/", ".mount"), "-.mount")
        self.assertEqual(unitname.unit_name_from_path("///", ".mount"), "-.mount")
        self.assertEqual(unitname.unit_name_from_path("/home//user/", ".mount"), "home-user.mount")
        self.assertEqual(unitname.unit_name_from_path("/mnt/my-data", ".mount"), "mnt-my\\x2ddata.mount")
        self.assertEqual(unitname.unit_name_from_path("/mnt/a b", ".mount"), "mnt-a\\x20b.mount")
        self.assertEqual(unitname.unit_name_from_path("/.snapshots", ".mount"), "\\x2esnapshots.mount")
        self.assertEqual(unitname.unit_name_from_path("/srv/.cache", ".mount"), "srv-.cache.mount")
        self.assertEqual(unitname.unit_name_from_path("/mnt/ü", ".mount"), "mnt-\\xc3\\xbc.mount")
        self.assertEqual(unitname.unit_name_from_path("/dev/disk/by-uuid/1234-ab:cd", ".device"),
                         "dev-disk-by\\x2duuid-1234\\x2dab:cd.device")

    def test_unit_name_from_path_errors(self):
        with self.assertRaises(UnitNameError):
            unitname.unit_name_from_path("/mnt/../etc", ".mount")
        with self.assertRaises(UnitNameError):
            unitname.unit_name_from_path("/mnt/./data", ".mount")
        with self.assertRaises(UnitNameError):
            unitname.unit_name_from_path("/dev/sda1", ".foo")
        with self.assertRaises(UnitNameError):
            unitname.unit_name_from_path("/dev/sda1", "device")
        with self.assertRaises(UnitNameError):
            unitname.unit_name_from_path("/" + "a" * 300, ".mount")

    def test_unit_name_from_path_instance(self):
        self.assertEqual(unitname.unit_name_from_path_instance("systemd-fsck", "/dev/sda1", ".service"),
                         "systemd-fsck@dev-sda1.service")
        self.assertEqual(unitname.unit_name_from_path_instance("systemd-growfs", "/", ".service"),
                         "systemd-growfs@-.service")

        with self.assertRaises(UnitNameError):
            unitname.unit_name_from_path_instance("", "/dev/sda1", ".service")
        with self.assertRaises(UnitNameError):
            unitname.unit_name_from_path_instance("systemd-fsck", "/dev/sda1", ".bogus")

    def test_unit_name_is_valid(self):
        self.assertTrue(unitname.unit_name_is_valid("foo.service"))
        self.assertTrue(unitname.unit_name_is_valid("foo@bar.service"))
        self.assertTrue(unitname.unit_name_is_valid("foo@.service"))
        self.assertTrue(unitname.unit_name_is_valid("dev-sda1.device", unitname.UNIT_NAME_PLAIN))

        self.assertFalse(unitname.unit_name_is_valid("foo@bar.service", unitname.UNIT_NAME_PLAIN))
        self.assertFalse(unitname.unit_name_is_valid("foo@.service", unitname.UNIT_NAME_INSTANCE))
        self.assertFalse(unitname.unit_name_is_valid("foo.service", unitname.UNIT_NAME_INSTANCE))
        self.assertFalse(unitname.unit_name_is_valid("@bar.service"))
        self.assertFalse(unitname.unit_name_is_valid("foo@bar@baz.service"))
        self.assertFalse(unitname.unit_name_is_valid("foo"))
        self.assertFalse(unitname.unit_name_is_valid(".service"))
        self.assertFalse(unitname.unit_name_is_valid("foo.bar"))
        self.assertFalse(unitname.unit_name_is_valid("foo bar.service"))
        self.assertFalse(unitname.unit_name_is_valid(""))
        self.assertFalse(unitname.unit_name_is_valid("a" * 300 + ".service"))

    def test_unit_name_escape(self):
        self.assertEqual(unitname.unit_name_escape("foo/bar"), "foo-bar")
        self.assertEqual(unitname.unit_name_escape("a-b\\c"), "a\\x2db\\x5cc")
        self.assertEqual(unitname.unit_name_escape(".foo"), "\\x2efoo")
        self.assertEqual(unitname.unit_name_escape("foo.bar:baz_1"), "foo.bar:baz_1")
