"""Configuration: engine selection, SPICE kernel paths and leap seconds from environment."""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

# Defaults used when the environment leaves a setting unset.
DEFAULT_SPICE_PATH = '/var/www/SPICE/'
DEFAULT_ENGINE = 'analytic'
DEFAULT_KERNEL_LIST = 'SPICE_almanac.txt'
ENGINE_NAMES = ('analytic', 'spice')
LSK_NAMES = ('naif0012.tls', 'naif0011.tls', 'naif0010.tls', 'leapseconds.tls')


def get_spice_path() -> str:
    """Return SPICE kernel root directory (SPICE_PATH env var or default).

    Returns:
        Path string.
    """
    return os.environ.get('SPICE_PATH', DEFAULT_SPICE_PATH)


def get_kernel_list_path() -> str:
    """Return path of the kernel list file read by the SPICE engine.

    The file name comes from ALMANAC_KERNELS (default SPICE_almanac.txt) and
    is resolved under SPICE_PATH unless it is absolute.

    Returns:
        Path string.
    """
    name = os.environ.get('ALMANAC_KERNELS', '').strip() or DEFAULT_KERNEL_LIST
    path = Path(name)
    if path.is_absolute():
        return str(path)
    return str(Path(get_spice_path()) / path)


def get_engine_name() -> str:
    """Return the configured ephemeris engine name (ALMANAC_ENGINE env var).

    Unset selects the analytic engine; unknown values log a warning and
    fall back to it.

    Returns:
        'analytic' or 'spice'.
    """
    name = os.environ.get('ALMANAC_ENGINE', '').strip().lower()
    if name in ENGINE_NAMES:
        return name
    if name:
        logger.warning('Unknown ALMANAC_ENGINE %r, using %s engine', name, DEFAULT_ENGINE)
    return DEFAULT_ENGINE


def get_leapsecs_path() -> str:
    """Return path to a NAIF LSK leap seconds file for rms-julian.

    JULIAN_LEAPSECS wins; otherwise the newest known LSK found directly under
    SPICE_PATH. When none is present the returned path does not exist and
    callers fall back to the kernel bundled with rms-julian.
    """
    override = os.environ.get('JULIAN_LEAPSECS', '').strip()
    if override:
        return override
    spice_root = Path(get_spice_path())
    found = [spice_root / name for name in LSK_NAMES if (spice_root / name).exists()]
    return str(found[0] if found else spice_root / LSK_NAMES[0])
