"""Protocol loading utilities (YAML configuration)."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from visitsched.core.errors import ProtocolConfigError
from visitsched.schedule.models import DEFAULT_PROTOCOL, ProtocolConfig

__all__ = ["load_protocol", "protocol_from_mapping"]


def protocol_from_mapping(data: dict[str, Any]) -> ProtocolConfig:
    """Validate a protocol mapping, rejecting keys the model does not define."""

    unknown = sorted(set(data) - set(ProtocolConfig.model_fields))
    if unknown:
        allowed = ", ".join(sorted(ProtocolConfig.model_fields))
        raise ProtocolConfigError(f"Unknown protocol keys {unknown}. Allowed keys: {allowed}.")
    payload = dict(data)
    extended = payload.get("extended_after")
    if isinstance(extended, list):
        payload["extended_after"] = tuple(extended)
    try:
        return ProtocolConfig.model_validate(payload)
    except ValidationError as exc:
        raise ProtocolConfigError(str(exc)) from exc


def load_protocol(yaml_path: str | Path | None = None) -> ProtocolConfig:
    """Load a protocol definition from YAML.

    Parameters
    ----------
    yaml_path:
        Path to a YAML file. Keys may sit at the document root or under a ``protocol:`` mapping.
        ``None`` returns :data:`visitsched.schedule.models.DEFAULT_PROTOCOL`.

    Notes
    -----
    Missing keys fall back to the defaults, so a file containing only ``name: pilot`` and
    ``window_days: 3`` is a valid protocol.
    """
    if yaml_path is None:
        return DEFAULT_PROTOCOL
    path = Path(yaml_path)
    if not path.exists():
        raise FileNotFoundError(path)
    with path.open("r", encoding="utf-8") as handle:
        meta = yaml.safe_load(handle) or {}
    if not isinstance(meta, dict):
        raise ProtocolConfigError(f"Protocol file {path} must contain a mapping")
    section = meta.get("protocol", meta)
    if not isinstance(section, dict):
        raise ProtocolConfigError(f"'protocol' entry in {path} must be a mapping")
    return protocol_from_mapping(section)
