"""
Variable bindings resolved by earlier submissions.

Sent back to the solving service with every submission so later drawings can
refer to variables assigned in earlier ones.
"""
from typing import Dict, Iterator


class VariableBindings:
    """Mapping of variable name to its last resolved value."""

    def __init__(self):
        self._values: Dict[str, str] = {}

    def assign(self, name: str, value: str) -> None:
        """Bind name to value, replacing any earlier value."""
        self._values[name] = value

    def get(self, name: str, default=None):
        return self._values.get(name, default)

    def as_dict(self) -> Dict[str, str]:
        """Copy of the bindings, safe to send or serialize."""
        return dict(self._values)

    def clear(self) -> None:
        self._values.clear()

    def __getitem__(self, name: str) -> str:
        return self._values[name]

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __repr__(self) -> str:
        return f"VariableBindings({self._values!r})"
