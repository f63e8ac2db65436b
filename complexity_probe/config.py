"""Configuration loading and validation.

A configuration file is YAML (``.yml`` / ``.yaml``) or JSON, for example::

    path: ./sort.out
    gens: 6
    iters: 5
    timeout_s: 30
    seed: 42
    args:
      - array:
          value: {type: int, min: 0, max: 1000}
          start: 100
          end: 100000
          multiplier: 2
      - range: {start: 10, multiplier: 10}

Every problem is reported as ``ConfigError`` before anything is executed.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping

import yaml

from complexity_probe.errors import ConfigError
from complexity_probe.generators import (
    ArgumentSpec,
    ArrayGenerator,
    MatrixGenerator,
    NumberGenerator,
    RangeGenerator,
)
from complexity_probe.models import (
    BoolDomain,
    CharDomain,
    FloatDomain,
    GrowthPolicy,
    IntDomain,
    SizeRange,
    SteppedSize,
    StepPolicy,
    ValueDomain,
)

ELEMENT_KINDS = ("int", "float", "char", "bool")
STEPPED_KEYS = ("min_len", "max_len", "step")


@dataclass
class ProgramConfig:
    """Validated run configuration.

    Fields:
        target_path: Executable to benchmark.
        generators: Argument generators in payload order.
        gens: Number of generations (>= 1).
        iters: Iterations per generation (>= 1).
        temp_dir: Directory for argument files, or None for a temporary one.
        timeout_s: Per-invocation limit in seconds, or None.
        seed: Seed for the random source, or None for fresh entropy.
        log_level: Logging level name.
    """

    target_path: Path
    generators: List[ArgumentSpec]
    gens: int
    iters: int
    temp_dir: Path | None = None
    timeout_s: float | None = None
    seed: int | None = None
    log_level: str = "INFO"
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)


def load_config(config_file: str | os.PathLike) -> ProgramConfig:
    """Read ``config_file`` (YAML or JSON) and validate it."""
    path = Path(config_file)
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")
    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix in (".yml", ".yaml"):
            raw = yaml.safe_load(text) or {}
        else:
            raw = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigError(f"Can't parse config file {path}: {e}") from e
    return parse_config(raw)


def parse_config(raw: Any) -> ProgramConfig:
    if not isinstance(raw, Mapping):
        raise ConfigError("Config root must be a mapping")

    target = raw.get("path")
    if not target or not isinstance(target, str):
        raise ConfigError("Missing 'path' (target executable) in config")

    args = raw.get("args", [])
    if not isinstance(args, list):
        raise ConfigError("'args' must be a list")
    generators = [_parse_argument(entry, f"args[{idx}]") for idx, entry in enumerate(args)]

    gens = _int(raw, "gens", "config")
    iters = _int(raw, "iters", "config")
    if gens < 1:
        raise ConfigError(f"config.gens must be >= 1, got {gens}")
    if iters < 1:
        raise ConfigError(f"config.iters must be >= 1, got {iters}")

    timeout_s = raw.get("timeout_s")
    if timeout_s is not None:
        if isinstance(timeout_s, bool) or not isinstance(timeout_s, (int, float)):
            raise ConfigError("config.timeout_s must be a number")
        if timeout_s <= 0:
            raise ConfigError(f"config.timeout_s must be > 0, got {timeout_s}")
        timeout_s = float(timeout_s)

    seed = raw.get("seed")
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
        raise ConfigError("config.seed must be an integer")

    temp_dir = raw.get("path_to_temp")
    if temp_dir is not None and not isinstance(temp_dir, str):
        raise ConfigError(f"config.path_to_temp must be a string, got {temp_dir!r}")
    return ProgramConfig(
        target_path=Path(target),
        generators=generators,
        gens=gens,
        iters=iters,
        temp_dir=Path(temp_dir) if temp_dir else None,
        timeout_s=timeout_s,
        seed=seed,
        log_level=str(raw.get("log_level", "INFO")),
        raw=dict(raw),
    )


def _int(section: Mapping, key: str, where: str, default: int | None = None) -> int:
    value = section.get(key, default)
    if value is None:
        raise ConfigError(f"Missing '{key}' in {where}")
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{where}.{key} must be an integer, got {value!r}")
    return value


def _number(section: Mapping, key: str, where: str, default: float) -> float:
    value = section.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{where}.{key} must be a number, got {value!r}")
    return float(value)


def _section(section: Mapping, key: str, where: str) -> Mapping:
    value = section.get(key)
    if not isinstance(value, Mapping):
        raise ConfigError(f"Missing mapping '{key}' in {where}")
    return value


def _parse_domain(raw: Mapping, where: str) -> ValueDomain:
    kind = str(raw.get("type", "")).lower()
    if kind == "int":
        return IntDomain(
            min=_int(raw, "min", where, IntDomain.min),
            max=_int(raw, "max", where, IntDomain.max),
        )
    if kind == "float":
        return FloatDomain(
            min=_number(raw, "min", where, FloatDomain.min),
            max=_number(raw, "max", where, FloatDomain.max),
        )
    if kind == "char":
        return CharDomain()
    if kind == "bool":
        return BoolDomain()
    raise ConfigError(f"{where}.type must be one of {ELEMENT_KINDS}, got {raw.get('type')!r}")


def _parse_step(raw: Any, where: str) -> StepPolicy:
    if raw is None:
        return StepPolicy()
    if isinstance(raw, str):
        return StepPolicy(kind=raw.lower())
    if not isinstance(raw, Mapping):
        raise ConfigError(f"{where}.step must be a string or a mapping")
    return StepPolicy(
        kind=str(raw.get("type", "none")).lower(),
        amount=_int(raw, "amount", f"{where}.step", 0),
    )


def _parse_size(raw: Mapping, where: str) -> GrowthPolicy:
    if any(key in raw for key in STEPPED_KEYS):
        min_len = _int(raw, "min_len", where)
        return SteppedSize(
            min_len=min_len,
            max_len=_int(raw, "max_len", where, min_len),
            step=_parse_step(raw.get("step"), where),
        )
    return SizeRange(
        start=_int(raw, "start", where, SizeRange.start),
        end=_int(raw, "end", where, SizeRange.end),
        multiplier=_int(raw, "multiplier", where, SizeRange.multiplier),
    )


def _parse_element(raw: Mapping, where: str) -> str | None:
    element = raw.get("element")
    if element is None:
        return None
    element = str(element).lower()
    if element not in ELEMENT_KINDS:
        raise ConfigError(f"{where}.element must be one of {ELEMENT_KINDS}, got {element!r}")
    return element


def _parse_argument(entry: Any, where: str) -> ArgumentSpec:
    if not isinstance(entry, Mapping) or len(entry) != 1:
        raise ConfigError(f"{where} must be a mapping with exactly one argument kind")
    (tag, body), = entry.items()
    kind = str(tag).lower()
    where = f"{where}.{kind}"
    if not isinstance(body, Mapping):
        raise ConfigError(f"{where} must be a mapping")

    if kind == "range":
        return RangeGenerator(_parse_size(body, where))

    domain = _parse_domain(_section(body, "value", where), f"{where}.value")
    element = _parse_element(body, where)
    if kind == "number":
        return NumberGenerator(domain, element=element)
    if kind == "array":
        return ArrayGenerator(domain, _parse_size(body, where), element=element)
    if kind == "matrix":
        return MatrixGenerator(
            domain,
            rows=_parse_size(_section(body, "rows", where), f"{where}.rows"),
            columns=_parse_size(_section(body, "columns", where), f"{where}.columns"),
            element=element,
        )
    raise ConfigError(f"Unknown argument kind '{tag}' in {where}")
