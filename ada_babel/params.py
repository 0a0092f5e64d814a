"""
Header parameter normalization for Ada/SPARK blocks.

The host hands us a loosely-typed mapping (keys possibly written `:unit`,
values usually strings). `parse_params` turns it into a `BlockParams`
record with strict types:

  unit        — Ada identifier used as the artifact base name, or None
  ada-version — integer language version, 0 = use the configured default
  assertions  — bool, adds the assertion flag to the compile command
  prove       — bool, switches from compile+run to gnatprove
  mode        — gnatprove --mode value, or None
  level       — gnatprove --level value, or None

Boolean flags accept Python bools or exactly the tokens `t` (true) and `nil`
(false); absence is false. Anything else is rejected with ParameterError
instead of being treated as false.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

logger = logging.getLogger(__name__)

TRUE_TOKENS = frozenset({"t"})
FALSE_TOKENS = frozenset({"nil", ""})

# Ada identifier: letter first, then letters/digits, underscores only
# between two alphanumerics.
ADA_IDENTIFIER = re.compile(r"^[A-Za-z](?:_?[A-Za-z0-9])*$")

# `session` values that mean "no session".
_NO_SESSION_VALUES = frozenset({"none", "nil", ""})


class ParameterError(ValueError):
    """Raised when a header parameter cannot be coerced to its type."""


@dataclass(frozen=True)
class BlockParams:
    """Canonical, typed form of a block's header parameters."""

    unit: str | None = None
    ada_version: int = 0
    assertions: bool = False
    prove: bool = False
    mode: str | None = None
    level: str | None = None
    session: str | None = None
    result_params: tuple[str, ...] = field(default_factory=tuple)

    def effective_version(self, default_version: int) -> int:
        """First non-zero of the block override and the configured default."""
        return self.ada_version or default_version

    @property
    def wants_session(self) -> bool:
        return self.session is not None and self.session.lower() not in _NO_SESSION_VALUES


def is_ada_identifier(name: str) -> bool:
    return bool(ADA_IDENTIFIER.match(name))


def parse_flag(value: Any, key: str = "flag") -> bool:
    """Map a raw flag value to a bool, rejecting unknown tokens."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    token = str(value).strip()
    if token in TRUE_TOKENS:
        return True
    if token in FALSE_TOKENS:
        return False
    raise ParameterError(
        f"Unrecognized value for {key!r}: {value!r} "
        f"(expected one of {sorted(TRUE_TOKENS | FALSE_TOKENS - {''})})"
    )


def parse_version(value: Any) -> int:
    """Coerce `ada-version` to an int. None and "default" mean 0."""
    if value is None:
        return 0
    if isinstance(value, bool):
        raise ParameterError(f"'ada-version' must be an integer, got {value!r}")
    if isinstance(value, int):
        version = value
    else:
        token = str(value).strip().lower()
        if token in ("", "default"):
            return 0
        try:
            version = int(token)
        except ValueError:
            raise ParameterError(
                f"'ada-version' must be an integer, got {value!r}"
            ) from None
    if version < 0:
        raise ParameterError(f"'ada-version' must not be negative, got {version}")
    return version


def _normalize_key(key: Any) -> str:
    return str(key).strip().lstrip(":").strip().lower()


def _normalize_value(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip()
    return value


def resolve_params(raw: Mapping[str, Any] | Iterable[tuple[Any, Any]] | None) -> dict[str, Any]:
    """Flatten a dict or (key, value) pairs into a dict with clean keys.

    For duplicated keys in pair form the first occurrence wins.
    """
    if raw is None:
        return {}
    items = raw.items() if isinstance(raw, Mapping) else raw
    resolved: dict[str, Any] = {}
    for key, value in items:
        resolved.setdefault(_normalize_key(key), _normalize_value(value))
    return resolved


def _optional_string(resolved: dict[str, Any], key: str) -> str | None:
    value = resolved.get(key)
    if isinstance(value, str):
        return value
    if value is not None:
        logger.debug("Ignoring non-string %r parameter: %r", key, value)
    return None


def parse_params(raw: Mapping[str, Any] | Iterable[tuple[Any, Any]] | None) -> BlockParams:
    """Build a BlockParams from the host's raw parameter set."""
    resolved = resolve_params(raw)

    unit = _optional_string(resolved, "unit") or None
    if unit is not None and not is_ada_identifier(unit):
        raise ParameterError(f"'unit' is not a valid Ada unit name: {unit!r}")

    results = resolved.get("results")
    if isinstance(results, str):
        result_params = tuple(results.split())
    elif isinstance(results, (list, tuple)):
        result_params = tuple(str(item) for item in results)
    else:
        result_params = ()

    session = resolved.get("session")

    return BlockParams(
        unit=unit,
        ada_version=parse_version(resolved.get("ada-version")),
        assertions=parse_flag(resolved.get("assertions"), "assertions"),
        prove=parse_flag(resolved.get("prove"), "prove"),
        mode=_optional_string(resolved, "mode"),
        level=_optional_string(resolved, "level"),
        session=None if session is None else str(session),
        result_params=result_params,
    )
