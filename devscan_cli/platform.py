"""Platform detection and cross-platform utilities"""

import platform
import shutil

IS_WINDOWS = platform.system() == "Windows"
IS_MACOS = platform.system() == "Darwin"
IS_LINUX = platform.system() == "Linux"


def has_command(name: str) -> bool:
    """Check whether an executable is available on PATH"""
    return shutil.which(name) is not None


def platform_label() -> str:
    """Short human-readable name of the host OS"""
    if IS_WINDOWS:
        return "windows"
    if IS_MACOS:
        return "macos"
    if IS_LINUX:
        return "linux"
    return platform.system().lower() or "unknown"
