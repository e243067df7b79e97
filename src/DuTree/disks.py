"""Total and available space of mounted volumes."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import psutil

logger = logging.getLogger(__name__)


@dataclass
class DiskInfo:
    mountpoint: str
    device: str
    fstype: str
    total: int
    used: int
    free: int

    @property
    def percent_used(self) -> float:
        return (self.used / self.total) * 100 if self.total > 0 else 0.0


def list_disks(all_partitions: bool = False) -> list[DiskInfo]:
    """Return capacity figures for every mounted partition.

    Partitions whose usage cannot be read are skipped.
    """
    disks: list[DiskInfo] = []
    for part in psutil.disk_partitions(all=all_partitions):
        try:
            usage = psutil.disk_usage(part.mountpoint)
        except (PermissionError, OSError) as exc:
            logger.warning("Cannot read usage of %s: %s", part.mountpoint, exc)
            continue
        disks.append(
            DiskInfo(
                mountpoint=part.mountpoint,
                device=part.device,
                fstype=part.fstype,
                total=usage.total,
                used=usage.used,
                free=usage.free,
            )
        )
    return disks
