"""
Environment Snapshot and Config Resolver

DESIGN DECISION: The process environment is read exactly once, at startup,
into an immutable snapshot. Everything downstream receives the snapshot (or
a resolver wrapping it) explicitly - nothing re-reads os.environ later.

The resolver NEVER raises. Absence is data; callers decide what it means.
Raw values are strings; typed accessors interpret them at the boundary.
"""

import os
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Optional

from dotenv import dotenv_values

from kharch_baant.config.keys import BUILD_TOOL_PREFIX


TRUTHY_VALUES = ("true", "1")


class EnvironmentSnapshot(Mapping):
    """
    Read-only mapping of environment variable name to value.

    An explicitly empty variable is kept as "". A variable that was never
    set is simply not in the mapping.
    """

    def __init__(self, values: Optional[Mapping[str, str]] = None):
        self._values = dict(values or {})

    @classmethod
    def capture(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        env_file: Optional[str] = None,
    ) -> "EnvironmentSnapshot":
        """
        Capture the environment at process start.

        Args:
            environ: Environment to capture. Defaults to os.environ.
            env_file: Optional dotenv file. Its values are used only for
                     variables the process environment does not set.
        """
        merged: dict[str, str] = {}

        if env_file and Path(env_file).is_file():
            for key, value in dotenv_values(env_file).items():
                if value is not None:
                    merged[key] = value

        merged.update(os.environ if environ is None else environ)

        # Web client .env files use VITE_-prefixed names; expose them
        # under the plain name unless the plain name is set itself.
        for key, value in list(merged.items()):
            if key.startswith(BUILD_TOOL_PREFIX) and len(key) > len(BUILD_TOOL_PREFIX):
                merged.setdefault(key[len(BUILD_TOOL_PREFIX):], value)

        return cls(merged)

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"EnvironmentSnapshot({len(self._values)} keys)"


class ConfigResolver:
    """
    Reads named configuration values from an environment snapshot.

    Usage:
        resolver = ConfigResolver(EnvironmentSnapshot.capture())
        url = resolver.resolve("SUPABASE_URL")
        debug = resolver.resolve_bool("DEBUG_ENABLED")
    """

    def __init__(self, snapshot: Mapping[str, str]):
        self._snapshot = snapshot

    @property
    def snapshot(self) -> Mapping[str, str]:
        return self._snapshot

    def resolve(self, key: str, fallback: Optional[str] = None) -> Optional[str]:
        """
        Get a value by key.

        Returns the fallback only when the key is absent. An empty
        string is returned as-is.
        """
        value = self._snapshot.get(key)
        if value is None:
            return fallback
        return value

    def resolve_bool(self, key: str, fallback: bool = False) -> bool:
        """True for exactly "true" or "1"; fallback when the key is absent."""
        value = self._snapshot.get(key)
        if value is None:
            return fallback
        return value in TRUTHY_VALUES

    def resolve_int(self, key: str, fallback: Optional[int] = None) -> Optional[int]:
        """Parse a base-10 integer; fallback when absent or unparseable."""
        value = self._snapshot.get(key)
        if value is None:
            return fallback
        try:
            return int(value.strip(), 10)
        except ValueError:
            return fallback
