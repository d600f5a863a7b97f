"""Configuration shared by the path algorithms."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .exceptions import ConfigError

RELAXER_NAMES = ("shortest", "critical", "edge_count")


@dataclass(frozen=True)
class AlgorithmConfig:
    """Configuration knobs for the path algorithms.

    Attributes:
        relaxer: Name of the distance relaxer used when none is passed
            explicitly: ``"shortest"``, ``"critical"`` or ``"edge_count"``.
        stop_at_target: If ``True``, Dijkstra and A* stop as soon as the
            target vertex is settled. Ignored when no target is set.
        max_passes: Optional cap on the number of Bellman-Ford passes
            (``None`` runs up to ``|V|`` passes).
        check_negative_cycles: If ``False``, Floyd-Warshall skips the final
            negative-cycle check.
    """

    relaxer: str = "shortest"
    stop_at_target: bool = True
    max_passes: Optional[int] = None
    check_negative_cycles: bool = True

    def __post_init__(self) -> None:
        """Validate option values."""
        if self.relaxer not in RELAXER_NAMES:
            raise ConfigError(f"unknown relaxer '{self.relaxer}'")
        if self.max_passes is not None and self.max_passes < 0:
            raise ConfigError("max_passes must be non-negative.")


DEFAULT_CONFIG = AlgorithmConfig()

__all__ = ["AlgorithmConfig", "DEFAULT_CONFIG", "RELAXER_NAMES"]
