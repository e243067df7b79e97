"""Tests for disks module."""

from collections import namedtuple
from unittest import mock

from DuTree import disks
from DuTree.disks import DiskInfo, list_disks

Partition = namedtuple("Partition", "device mountpoint fstype opts")
Usage = namedtuple("Usage", "total used free percent")


class TestListDisks:
    def test_reports_each_partition(self):
        parts = [
            Partition("/dev/sda1", "/", "ext4", "rw"),
            Partition("/dev/sdb1", "/home", "xfs", "rw"),
        ]
        usages = {
            "/": Usage(1000, 400, 600, 40.0),
            "/home": Usage(2000, 500, 1500, 25.0),
        }
        with mock.patch.object(disks.psutil, "disk_partitions", return_value=parts), \
             mock.patch.object(disks.psutil, "disk_usage", side_effect=usages.__getitem__):
            result = list_disks()
        assert result == [
            DiskInfo("/", "/dev/sda1", "ext4", 1000, 400, 600),
            DiskInfo("/home", "/dev/sdb1", "xfs", 2000, 500, 1500),
        ]

    def test_skips_unreadable_partition(self):
        parts = [
            Partition("/dev/sr0", "/media/cd", "iso9660", "ro"),
            Partition("/dev/sda1", "/", "ext4", "rw"),
        ]

        def usage(mountpoint):
            if mountpoint == "/media/cd":
                raise PermissionError("denied")
            return Usage(10, 5, 5, 50.0)

        with mock.patch.object(disks.psutil, "disk_partitions", return_value=parts), \
             mock.patch.object(disks.psutil, "disk_usage", side_effect=usage):
            result = list_disks()
        assert [d.mountpoint for d in result] == ["/"]

    def test_real_system(self):
        for disk in list_disks():
            assert disk.total >= disk.free


class TestDiskInfo:
    def test_percent_used(self):
        assert DiskInfo("/", "d", "ext4", 200, 50, 150).percent_used == 25.0

    def test_percent_used_zero_total(self):
        assert DiskInfo("/", "d", "tmpfs", 0, 0, 0).percent_used == 0.0
