"""Taichi runtime configuration.

Every query in this package is a Taichi function, so the Taichi runtime must
be initialised before any kernel that uses them is launched. This module
wraps ``ti.init`` with the settings the geometry kernel depends on:

- ``fast_math`` is off by default. The empty-box sentinel uses +/-inf and the
  slab test guards against NaN produced by ``0 * inf``; both rely on IEEE
  semantics that fast-math lets the compiler assume away.
- A GPU request falls back to the CPU backend when no GPU is available.

Example:
    >>> from src.spatial.core.runtime import RuntimeConfig, init_runtime
    >>> init_runtime(RuntimeConfig(arch="cpu"))
    'cpu'
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any

import taichi as ti

logger = logging.getLogger(__name__)

SUPPORTED_ARCHS = ("cpu", "gpu", "cuda", "vulkan", "metal")

_active_arch: str | None = None


def _arch_from_name(name: str) -> Any:
    return {
        "cpu": ti.cpu,
        "gpu": ti.gpu,
        "cuda": ti.cuda,
        "vulkan": ti.vulkan,
        "metal": ti.metal,
    }[name]


def _env_flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _selected_arch() -> Any:
    """Backend Taichi actually selected, or None if it cannot be queried.

    ``ti.lang.impl.current_cfg()`` is not public Taichi API. If a Taichi
    release moves it, the host-fallback check in init_runtime() is skipped
    with a warning instead of failing.
    """
    try:
        return ti.lang.impl.current_cfg().arch
    except AttributeError as e:
        logger.warning("Cannot query the selected Taichi backend: %s", e)
        return None


@dataclass
class RuntimeConfig:
    """Settings passed to ``ti.init``.

    Attributes:
        arch: Backend name, one of SUPPORTED_ARCHS.
        fast_math: Allow the compiler to assume no inf/NaN. Must stay False
            for the empty-box and slab-test semantics to hold.
        random_seed: Seed for Taichi's random number generator.
        debug: Enable Taichi's debug mode (bounds checks, assertions).
        offline_cache: Cache compiled kernels on disk between runs.
    """

    arch: str = "cpu"
    fast_math: bool = False
    random_seed: int = 0
    debug: bool = False
    offline_cache: bool = True

    def __post_init__(self) -> None:
        self.arch = self.arch.lower()
        if self.arch not in SUPPORTED_ARCHS:
            raise ValueError(
                f"Unknown arch '{self.arch}'. Expected one of: {', '.join(SUPPORTED_ARCHS)}"
            )
        if self.random_seed < 0:
            raise ValueError(f"random_seed must be non-negative, got {self.random_seed}")

    @classmethod
    def from_env(cls) -> RuntimeConfig:
        """Build a config from ``SPATIAL_*`` environment variables.

        Recognised variables:
            SPATIAL_ARCH: Backend name (default "cpu").
            SPATIAL_DEBUG: Enable debug mode ("1", "true", "yes", "on").
            SPATIAL_SEED: Integer random seed.

        Raises:
            ValueError: If a variable holds an invalid value.
        """
        seed_text = os.environ.get("SPATIAL_SEED", "0")
        try:
            seed = int(seed_text)
        except ValueError as e:
            raise ValueError(f"SPATIAL_SEED must be an integer, got '{seed_text}'") from e

        return cls(
            arch=os.environ.get("SPATIAL_ARCH", "cpu"),
            debug=_env_flag(os.environ.get("SPATIAL_DEBUG", "")),
            random_seed=seed,
        )

    def init_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``ti.init`` (without ``arch``)."""
        return {
            "fast_math": self.fast_math,
            "random_seed": self.random_seed,
            "debug": self.debug,
            "offline_cache": self.offline_cache,
        }


def is_initialized() -> bool:
    """Check whether init_runtime() has initialised Taichi."""
    return _active_arch is not None


def active_arch() -> str | None:
    """Name of the backend selected by init_runtime(), or None."""
    return _active_arch


def init_runtime(config: RuntimeConfig | None = None, *, force: bool = False) -> str:
    """Initialise Taichi for the geometry kernel.

    Calling this again without ``force`` is a no-op: re-initialising Taichi
    invalidates every field allocated so far.

    Args:
        config: Runtime settings. Defaults to RuntimeConfig().
        force: Re-initialise even if the runtime is already up.

    Returns:
        The name of the backend actually in use.
    """
    global _active_arch

    if _active_arch is not None and not force:
        logger.debug("Taichi already initialised on %s, skipping", _active_arch)
        return _active_arch

    if config is None:
        config = RuntimeConfig()

    kwargs = config.init_kwargs()
    arch = config.arch
    try:
        ti.init(arch=_arch_from_name(arch), **kwargs)
    except Exception as e:
        if arch == "cpu":
            raise RuntimeError(f"Failed to initialise Taichi on cpu: {e}") from e
        logger.warning("Failed to initialise Taichi on %s, falling back to cpu: %s", arch, e)
        arch = "cpu"
        ti.init(arch=ti.cpu, **kwargs)

    # ti.init may itself fall back to the host backend without raising
    if arch != "cpu" and _selected_arch() == ti.cpu:
        logger.warning("Taichi selected the cpu backend instead of %s", arch)
        arch = "cpu"

    _active_arch = arch
    logger.info(
        "Taichi initialised (arch=%s, fast_math=%s, debug=%s)",
        arch,
        config.fast_math,
        config.debug,
    )
    return arch
