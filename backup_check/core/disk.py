"""Filesystem capacity probes.

The engine only needs ``probe(path) -> DiskStat``. Which adapter is used is
decided once at startup by :func:`get_disk_probe`.
"""

import os
import shutil
import logging
import subprocess
from typing import Dict, Type
from .exceptions import ConfigurationError, DiskProbeError
from .models import DiskStat


class DiskSpaceProbe:
    """Base class for disk capacity probes."""

    name = 'base'

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def probe(self, path: str) -> DiskStat:
        """Return total and free capacity of the filesystem holding path.

        Raises:
            DiskProbeError: If the query cannot be completed.
        """
        raise NotImplementedError

    def __call__(self, path: str) -> DiskStat:
        return self.probe(path)


class StatvfsProbe(DiskSpaceProbe):
    """Uses statvfs block counts; free space is what unprivileged users get."""

    name = 'statvfs'

    def probe(self, path: str) -> DiskStat:
        try:
            st = os.statvfs(path)
        except OSError as e:
            raise DiskProbeError(f"statvfs failed for {path}: {e}") from e

        block = st.f_frsize or st.f_bsize
        return DiskStat(total_bytes=st.f_blocks * block, free_bytes=st.f_bavail * block)


class DfProbe(DiskSpaceProbe):
    """Parses ``df -k`` output, for systems where statvfs is unreliable."""

    name = 'df'

    def __init__(self, df_command: str = 'df'):
        super().__init__()
        self.df_command = df_command

    def probe(self, path: str) -> DiskStat:
        try:
            result = subprocess.run(
                [self.df_command, '-k', path],
                capture_output=True,
                text=True,
                check=True
            )
        except (OSError, subprocess.CalledProcessError) as e:
            raise DiskProbeError(f"df failed for {path}: {e}") from e

        return self.parse_output(result.stdout)

    @staticmethod
    def parse_output(output: str) -> DiskStat:
        """Parse ``df -k`` output into a DiskStat.

        The second line holds: filesystem, 1K-blocks, used, available, ...
        A long filesystem name may push the numbers onto a third line.
        """
        lines = [line for line in output.splitlines() if line.strip()]
        if len(lines) < 2:
            raise DiskProbeError("df output parse error")

        fields = ' '.join(lines[1:]).split()
        if len(fields) < 5:
            raise DiskProbeError("df output parse error")

        try:
            total_kb = int(fields[1])
            free_kb = int(fields[3])
        except ValueError as e:
            raise DiskProbeError(f"df output parse error: {e}") from e

        return DiskStat(total_bytes=total_kb * 1024, free_bytes=free_kb * 1024)


class ShutilProbe(DiskSpaceProbe):
    """Portable fallback for hosts without statvfs."""

    name = 'shutil'

    def probe(self, path: str) -> DiskStat:
        try:
            usage = shutil.disk_usage(path)
        except OSError as e:
            raise DiskProbeError(f"disk usage query failed for {path}: {e}") from e

        return DiskStat(total_bytes=usage.total, free_bytes=usage.free)


PROBES: Dict[str, Type[DiskSpaceProbe]] = {
    StatvfsProbe.name: StatvfsProbe,
    DfProbe.name: DfProbe,
    ShutilProbe.name: ShutilProbe,
}


def get_disk_probe(name: str = 'auto') -> DiskSpaceProbe:
    """Select a disk probe for this host.

    Args:
        name: One of 'auto', 'statvfs', 'df' or 'shutil'.

    Returns:
        A ready to use DiskSpaceProbe.

    Raises:
        ConfigurationError: If the name is unknown or unsupported here.
    """
    if name == 'auto':
        name = StatvfsProbe.name if hasattr(os, 'statvfs') else ShutilProbe.name

    if name not in PROBES:
        raise ConfigurationError(
            f"Unknown disk probe '{name}', expected one of: auto, {', '.join(PROBES)}"
        )
    if name == StatvfsProbe.name and not hasattr(os, 'statvfs'):
        raise ConfigurationError("statvfs disk probe is not available on this platform")

    return PROBES[name]()
