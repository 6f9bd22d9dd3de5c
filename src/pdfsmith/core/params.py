"""Ordered command-line flag collections."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Param:
    """A single renderer flag with an optional value."""

    name: str
    value: str | None = None

    @property
    def flag(self) -> str:
        """Return the flag token as it appears on the command line."""
        if self.name.startswith("-"):
            return self.name
        return f"--{self.name}"

    def render(self) -> list[str]:
        if self.value is None:
            return [self.flag]
        return [self.flag, str(self.value)]


ParamLike = Param | tuple[str, str | None] | str


def _coerce(param: ParamLike) -> Param:
    if isinstance(param, Param):
        return param
    if isinstance(param, str):
        return Param(param)
    name, value = param
    return Param(name, value)


@dataclass(slots=True)
class ParameterSet:
    """Insertion-ordered flags; duplicates are kept because the renderer accepts repeats."""

    _params: list[Param] = field(default_factory=list)

    def add(self, name: str, value: str | None = None) -> Param:
        param = Param(name, value)
        self._params.append(param)
        return param

    def add_all(self, *params: ParamLike) -> None:
        """Append a batch of flags, preserving their relative order."""
        self._params.extend(_coerce(param) for param in params)

    def extend(self, params: Iterable[ParamLike]) -> None:
        self.add_all(*params)

    def render(self) -> list[str]:
        tokens: list[str] = []
        for param in self._params:
            tokens.extend(param.render())
        return tokens

    def __iter__(self) -> Iterator[Param]:
        return iter(self._params)

    def __len__(self) -> int:
        return len(self._params)

    def __bool__(self) -> bool:
        return bool(self._params)

    def __str__(self) -> str:
        return " ".join(self.render())


__all__ = ["Param", "ParamLike", "ParameterSet"]
