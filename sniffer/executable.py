# sniffer/executable.py

"""
Executable subtype lookup.

Windows can tell what kind of program an MZ file is (`GetBinaryTypeW`).
Other hosts either read the header themselves or give up, in which case the
classifier falls back to the file's own extension.
"""
from __future__ import annotations
import ctypes
import logging
import os
from pathlib import Path
from typing import Optional, Protocol, Union

logger = logging.getLogger(__name__)

# Values returned by GetBinaryTypeW.
SCS_32BIT_BINARY = 0
SCS_DOS_BINARY = 1
SCS_WOW_BINARY = 2
SCS_PIF_BINARY = 3
SCS_POSIX_BINARY = 4
SCS_OS216_BINARY = 5
SCS_64BIT_BINARY = 6

SUBTYPE_DESCRIPTIONS = {
    SCS_32BIT_BINARY: "32 bits Windows application",
    SCS_DOS_BINARY: "MS-DOS application",
    SCS_WOW_BINARY: "16-bit Windows application",
    SCS_PIF_BINARY: "PIF file that executes an MS-DOS application",
    SCS_POSIX_BINARY: "POSIX application",
    SCS_OS216_BINARY: "16-bit OS/2 application",
    SCS_64BIT_BINARY: "64 bits Windows application",
}

PathLike = Union[str, Path]


class ExecutableQuery(Protocol):
    def query_subtype(self, path: PathLike) -> Optional[int]:
        """Return one of the SCS_* values, or None when the subtype is unknown."""
        ...


class ExtensionFallbackQuery:
    """Never knows the subtype. Used where no native lookup exists."""

    def query_subtype(self, path: PathLike) -> Optional[int]:
        return None


class NativeBinaryTypeQuery:
    """Ask the Windows loader through kernel32.GetBinaryTypeW."""

    def __init__(self) -> None:
        # windll only exists on Windows; AttributeError elsewhere.
        self._get_binary_type = ctypes.windll.kernel32.GetBinaryTypeW

    def query_subtype(self, path: PathLike) -> Optional[int]:
        binary_type = ctypes.c_ulong(0)
        ok = self._get_binary_type(ctypes.c_wchar_p(str(path)), ctypes.byref(binary_type))
        if not ok:
            logger.debug("GetBinaryTypeW failed for %s", path)
            return None
        return binary_type.value


class PortableExecutableHeaderQuery:
    """Read the MZ header and the new-style header it points to.

    Works on any host but only tells apart 32-bit PE, 64-bit PE, 16-bit NE
    (Windows or OS/2) and plain DOS programs.
    """

    _PE_MACHINE_64 = {0x8664, 0x0200, 0xAA64}
    _NE_TARGET_OS2 = 0x01

    def query_subtype(self, path: PathLike) -> Optional[int]:
        with open(path, "rb") as f:
            head = f.read(0x40)
            if len(head) < 0x40 or head[:2] != b"MZ":
                return None
            new_header = int.from_bytes(head[0x3C:0x40], "little")
            if new_header < 0x40:
                return SCS_DOS_BINARY
            f.seek(new_header)
            header = f.read(0x40)

        if header[:4] == b"PE\x00\x00" and len(header) >= 6:
            machine = int.from_bytes(header[4:6], "little")
            return SCS_64BIT_BINARY if machine in self._PE_MACHINE_64 else SCS_32BIT_BINARY
        if header[:2] == b"NE" and len(header) > 0x36:
            return SCS_OS216_BINARY if header[0x36] == self._NE_TARGET_OS2 else SCS_WOW_BINARY
        return SCS_DOS_BINARY


def default_executable_query() -> ExecutableQuery:
    """Pick the native lookup on Windows, the fallback everywhere else."""
    if os.name == "nt":
        try:
            return NativeBinaryTypeQuery()
        except (AttributeError, OSError) as exc:
            logger.warning("GetBinaryTypeW unavailable (%s); using extension fallback", exc)
    return ExtensionFallbackQuery()
