from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

# Global registry -- maps rollup_id -> RollupDefinition
_REGISTRY: dict[str, RollupDefinition] = {}


@dataclass(frozen=True)
class RollupDefinition:
    """A dashboard rollup: which table it reads and how it folds the rows."""

    id: str
    label: str
    description: str
    table: str  # Source table the rows come from
    record_type: type  # Record class with a from_row constructor
    rollup_fn: Callable[..., Any]
    domain: str = "resilience"


def register_rollup(
    rollup_id: str,
    label: str,
    description: str,
    table: str,
    record_type: type,
    domain: str = "resilience",
) -> Callable:
    """Decorator to register a rollup function in the metric library."""

    def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
        definition = RollupDefinition(
            id=rollup_id,
            label=label,
            description=description,
            table=table,
            record_type=record_type,
            rollup_fn=fn,
            domain=domain,
        )
        _REGISTRY[rollup_id] = definition
        return fn

    return decorator


def get_rollup(rollup_id: str) -> Optional[RollupDefinition]:
    """Look up a rollup definition by ID."""
    return _REGISTRY.get(rollup_id)


def get_all_rollups() -> dict[str, RollupDefinition]:
    """Return the full registry (read-only copy)."""
    return dict(_REGISTRY)


def get_domain_rollups(domain: str) -> list[RollupDefinition]:
    return [d for d in _REGISTRY.values() if d.domain == domain]
