"""SPICE kernel loading for the SPICE engine."""

from __future__ import annotations

import logging
import threading
from pathlib import Path

import cspyce

from almanac_tools.config import get_kernel_list_path, get_spice_path
from almanac_tools.errors import EngineEvaluationFailure

logger = logging.getLogger(__name__)

# Always furnished first when present under SPICE_PATH.
POOL_KERNELS = ('leapseconds.ker', 'p_constants.ker')

_lock = threading.Lock()
_loaded: list[str] = []


def loaded_kernels() -> tuple[str, ...]:
    """Paths of the kernels furnished so far, in load order."""
    with _lock:
        return tuple(_loaded)


def _furnish(path: Path) -> bool:
    try:
        cspyce.furnsh(str(path))
    except Exception as e:
        logger.warning('Failed to load %s: %s', path, e)
        return False
    _loaded.append(str(path))
    return True


def _read_kernel_list(list_path: Path) -> list[str]:
    """File names listed one per line; blank lines and '!' comments skipped."""
    names: list[str] = []
    with list_path.open() as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith('!'):
                continue
            names.append(line.split()[0].strip('"'))
    return names


def load_kernels() -> tuple[str, ...]:
    """Furnish the kernels named in the kernel list file, once per process.

    The list file (see config.get_kernel_list_path) names one kernel per
    line, relative to SPICE_PATH unless absolute. Files that are missing or
    fail to load are logged and skipped.

    Returns:
        Paths of all kernels loaded so far.

    Raises:
        EngineEvaluationFailure: If SPICE_PATH or the list file is missing,
            or no listed kernel could be loaded.
    """
    with _lock:
        if _loaded:
            return tuple(_loaded)
        base = Path(get_spice_path())
        if not base.is_dir():
            raise EngineEvaluationFailure(f'SPICE_PATH is not a directory: {base}')
        for name in POOL_KERNELS:
            pool_path = base / name
            if pool_path.exists():
                _furnish(pool_path)
        list_path = Path(get_kernel_list_path())
        if not list_path.exists():
            _loaded.clear()
            raise EngineEvaluationFailure(
                f'Kernel list {list_path} not found. Set ALMANAC_KERNELS or SPICE_PATH to a '
                'tree that lists its ephemeris kernels.'
            )
        found = False
        for name in _read_kernel_list(list_path):
            kernel_path = Path(name) if Path(name).is_absolute() else base / name
            if not kernel_path.exists():
                logger.warning('Kernel listed in %s not found: %s', list_path, kernel_path)
                continue
            found = _furnish(kernel_path) or found
        if not found:
            _loaded.clear()
            raise EngineEvaluationFailure(f'No kernel listed in {list_path} could be loaded')
        logger.debug('Loaded %d SPICE kernels from %s', len(_loaded), list_path)
        return tuple(_loaded)


def unload_kernels() -> None:
    """Unload every kernel furnished by load_kernels."""
    with _lock:
        for path in reversed(_loaded):
            cspyce.unload(path)
        _loaded.clear()
