"""
Builder for nested optional payload sections.

OpenRTB extension objects (user.ext, regs.ext, source.ext, ...) must only
exist when at least one of their fields is set. PayloadBuilder creates
intermediate objects on the first write below them, so callers decide
presence once per field instead of checking parents at every step.
"""

from typing import Any, Optional


def deep_get(data: Any, path: str, default: Any = None) -> Any:
    """Read a dotted path from nested dicts, returning default on any gap."""
    current = data
    for key in path.split("."):
        if not isinstance(current, dict) or key not in current:
            return default
        current = current[key]
    return current


class PayloadBuilder:
    """Wraps a payload dict and writes dotted paths into it."""

    def __init__(self, payload: Optional[dict[str, Any]] = None):
        self._payload: dict[str, Any] = payload if payload is not None else {}

    def set(self, path: str, value: Any, when: bool = True) -> "PayloadBuilder":
        """
        Write value at path, creating parent objects as needed.

        Nothing is written (and no parent created) when value is None
        or when is False.
        """
        if value is None or not when:
            return self

        keys = path.split(".")
        target = self._payload
        for key in keys[:-1]:
            child = target.get(key)
            if not isinstance(child, dict):
                child = {}
                target[key] = child
            target = child
        target[keys[-1]] = value
        return self

    def get(self, path: str, default: Any = None) -> Any:
        return deep_get(self._payload, path, default)

    def build(self) -> dict[str, Any]:
        return self._payload
