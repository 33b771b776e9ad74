"""
Variable scopes for the evaluator.

An Environment maps names to runtime values and optionally points at an
enclosing scope. Lookups walk outward; bindings always land in the scope
they are made in, so an inner binding shadows an outer one of the same name.
"""

from __future__ import annotations

from monkeycc.core.values import Value


class Environment:
    """A name -> Value store with an optional outer scope."""

    def __init__(self, outer: Environment | None = None) -> None:
        self._store: dict[str, Value] = {}
        self.outer = outer

    def get(self, name: str) -> Value | None:
        """Resolve ``name`` in this scope or the nearest enclosing one."""
        env: Environment | None = self
        while env is not None:
            if name in env._store:
                return env._store[name]
            env = env.outer
        return None

    def set(self, name: str, value: Value) -> Value:
        """Bind ``name`` in this scope, replacing any previous binding here."""
        self._store[name] = value
        return value

    def enclosed(self) -> Environment:
        """Create a child scope whose lookups fall back to this one."""
        return Environment(outer=self)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None

    def __repr__(self) -> str:
        names = ", ".join(sorted(self._store))
        return f"Environment([{names}], outer={'yes' if self.outer else 'no'})"
