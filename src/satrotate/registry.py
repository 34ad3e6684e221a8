"""
--------------------------------------------------------------------------------
<satrotate project>
satrotate/registry.py

Name -> adapter class registries for the local and multiple aligners.

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from __future__ import annotations

from typing import Dict, Type

from ._logging import get_logger
from .errors import ConfigError

_LOG = get_logger(__name__)

_LOCAL_REGISTRY: Dict[str, Type] = {}
_MULTI_REGISTRY: Dict[str, Type] = {}


def register_local_aligner(name: str, adapter_cls: Type) -> None:
    if name in _LOCAL_REGISTRY:
        _LOG.warning(f"Local aligner '{name}' already registered; overriding.")
    _LOCAL_REGISTRY[name] = adapter_cls


def register_multi_aligner(name: str, adapter_cls: Type) -> None:
    if name in _MULTI_REGISTRY:
        _LOG.warning(f"Multiple aligner '{name}' already registered; overriding.")
    _MULTI_REGISTRY[name] = adapter_cls


def get_local_aligner_cls(name: str) -> Type:
    try:
        return _LOCAL_REGISTRY[name]
    except KeyError as e:
        raise ConfigError(f"Unknown local aligner '{name}'. Is the adapter registered?") from e


def get_multi_aligner_cls(name: str) -> Type:
    try:
        return _MULTI_REGISTRY[name]
    except KeyError as e:
        raise ConfigError(f"Unknown multiple aligner '{name}'. Is the adapter registered?") from e


def list_local_aligners() -> Dict[str, Type]:
    return dict(_LOCAL_REGISTRY)


def list_multi_aligners() -> Dict[str, Type]:
    return dict(_MULTI_REGISTRY)
