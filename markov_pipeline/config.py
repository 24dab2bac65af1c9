"""Generator settings loaded from YAML, the environment and CLI flags."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from .graph import EdgeDirection
from .walk import DEFAULT_WALK_LENGTH

DEFAULT_MAX_INPUT_BYTES = 555_000

ENV_SEED = "MARKOV_SEED"
ENV_WALK_LENGTH = "MARKOV_WALK_LENGTH"
ENV_EDGE_DIRECTION = "MARKOV_EDGE_DIRECTION"


def _optional_int(value: Any, name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be an integer (got {value!r})") from None


def _required_int(value: Any, name: str) -> int:
    parsed = _optional_int(value, name)
    if parsed is None:
        raise ValueError(f"{name} must be an integer (got {value!r})")
    return parsed


@dataclass(frozen=True)
class GeneratorConfig:
    walk_length: int = DEFAULT_WALK_LENGTH
    max_input_bytes: int = DEFAULT_MAX_INPUT_BYTES
    seed: Optional[int] = None
    edge_direction: EdgeDirection = EdgeDirection.FORWARD
    start_token: Optional[str] = None

    def __post_init__(self) -> None:
        if self.walk_length < 0:
            raise ValueError("walk_length must be non-negative")
        if self.max_input_bytes <= 0:
            raise ValueError("max_input_bytes must be positive")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "GeneratorConfig":
        start = data.get("start_token")
        return cls(
            walk_length=_required_int(data.get("walk_length", DEFAULT_WALK_LENGTH), "walk_length"),
            max_input_bytes=_required_int(data.get("max_input_bytes", DEFAULT_MAX_INPUT_BYTES), "max_input_bytes"),
            seed=_optional_int(data.get("seed"), "seed"),
            edge_direction=EdgeDirection.parse(data.get("edge_direction", EdgeDirection.FORWARD)),
            start_token=str(start) if start is not None else None,
        )

    @classmethod
    def from_yaml(cls, path: Path) -> "GeneratorConfig":
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config {path} must contain a YAML mapping.")
        return cls.from_mapping(data)

    def with_env(self, environ: Optional[Mapping[str, str]] = None) -> "GeneratorConfig":
        """Return a copy with ``MARKOV_*`` environment overrides applied."""

        env = os.environ if environ is None else environ
        updates: dict = {}
        if env.get(ENV_SEED):
            updates["seed"] = _optional_int(env[ENV_SEED], ENV_SEED)
        if env.get(ENV_WALK_LENGTH):
            updates["walk_length"] = _optional_int(env[ENV_WALK_LENGTH], ENV_WALK_LENGTH)
        if env.get(ENV_EDGE_DIRECTION):
            updates["edge_direction"] = EdgeDirection.parse(env[ENV_EDGE_DIRECTION])
        return replace(self, **updates) if updates else self

    def with_overrides(self, **overrides: Any) -> "GeneratorConfig":
        """Return a copy with every non-None keyword applied (CLI flags)."""

        updates = {key: value for key, value in overrides.items() if value is not None}
        if "edge_direction" in updates:
            updates["edge_direction"] = EdgeDirection.parse(updates["edge_direction"])
        return replace(self, **updates) if updates else self


def load_config(
    path: Optional[Path] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> GeneratorConfig:
    """Load ``path`` (if given) and layer environment overrides on top."""

    config = GeneratorConfig.from_yaml(path) if path is not None else GeneratorConfig()
    return config.with_env(environ)


__all__ = [
    "DEFAULT_MAX_INPUT_BYTES",
    "ENV_EDGE_DIRECTION",
    "ENV_SEED",
    "ENV_WALK_LENGTH",
    "GeneratorConfig",
    "load_config",
]
