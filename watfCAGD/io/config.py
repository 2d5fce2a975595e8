"""
Configuration for sampling and interactive editing.

Display geometry is regenerated eagerly after every edit by sampling the
curves and surfaces at fixed parameter steps. The step sizes and the pick
radius used when clicking near control points are collected here.

Example JSON format:
    {
      "sampling": {
        "step_size": 0.01,
        "isoline_step": 0.1,
        "pick_radius": 0.12
      }
    }
"""

import json
from dataclasses import dataclass, fields, asdict
from pathlib import Path
from typing import Any, Dict, Union


@dataclass
class SamplingConfig:
    """
    Sampling and picking parameters.

    Attributes:
        step_size: Parameter step between samples along a curve or isoline
        isoline_step: Parameter step between plain surface isolines
        pick_radius: Distance within which a click grabs a control point
                     (divided by the view's zoom factor)
    """
    step_size: float = 0.01
    isoline_step: float = 0.1
    pick_radius: float = 0.12

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, (int, float)) or isinstance(value, bool):
                raise ValueError(f"{f.name} must be a number, got {value!r}")
            if value <= 0:
                raise ValueError(f"{f.name} must be positive, got {value}")
            setattr(self, f.name, float(value))

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


def config_from_dict(data: Dict[str, Any]) -> SamplingConfig:
    """
    Build a SamplingConfig from a parsed configuration mapping.

    Only the optional "sampling" section is read; unknown keys in it are
    rejected.
    """
    section = data.get("sampling", {})
    if not isinstance(section, dict):
        raise ValueError("'sampling' must be a mapping")

    known = {f.name for f in fields(SamplingConfig)}
    unknown = set(section) - known
    if unknown:
        raise ValueError(f"Unknown sampling option(s): {', '.join(sorted(unknown))}")

    return SamplingConfig(**section)


def load_config(filename: Union[str, Path]) -> SamplingConfig:
    """
    Load sampling configuration from a JSON file.

    Parameters:
        filename: Path to the JSON file

    Returns:
        SamplingConfig with defaults for missing options
    """
    with open(filename, 'r') as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Configuration file {filename} must contain a JSON object")
    return config_from_dict(data)
