from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Iterable

if TYPE_CHECKING:
    from .model import Bound

INDENT_WIDTH = 4


@dataclass
class Formatter:
    """
    Indentation-aware text sink used by every renderer.
    Tracks nesting depth and whether the cursor sits at the start of a line.
    """
    indent_level: int = 0
    _parts: list[str] = field(default_factory=list)
    _at_line_start: bool = True

    def is_start_of_line(self) -> bool:
        return self._at_line_start

    def write(self, text: str) -> None:
        if not text:
            return
        for i, line in enumerate(text.split("\n")):
            if i > 0:
                self._parts.append("\n")
                self._at_line_start = True
            if not line:
                continue
            if self._at_line_start and self.indent_level > 0:
                self._parts.append(" " * (INDENT_WIDTH * self.indent_level))
            self._parts.append(line)
            self._at_line_start = False

    def writeln(self, text: str = "") -> None:
        self.write(text + "\n")

    def block(self) -> "_Block":
        return _Block(self)

    def enter_block(self, body: Callable[["Formatter"], None]) -> None:
        with self.block():
            body(self)

    def getvalue(self) -> str:
        return "".join(self._parts)

    def render(self) -> str:
        out = self.getvalue()
        if out.endswith("\n"):
            out = out[:-1]
        return out


class _Block:
    def __init__(self, fmt: Formatter) -> None:
        self.fmt = fmt

    def __enter__(self) -> None:
        if not self.fmt.is_start_of_line():
            self.fmt.write(" ")
        self.fmt.writeln("{")
        self.fmt.indent_level += 1

    def __exit__(self, exc_type, exc, tb) -> None:
        self.fmt.indent_level -= 1
        if exc_type is None:
            self.fmt.write("}")


def fmt_generics(generics: Iterable[str], fmt: Formatter) -> None:
    names = list(generics)
    if names:
        fmt.write(f"<{', '.join(names)}>")


def fmt_bound_rhs(traits: Iterable[str], fmt: Formatter) -> None:
    fmt.write(" + ".join(traits))


def fmt_bounds(bounds: list[Bound], fmt: Formatter) -> None:
    if not bounds:
        return
    fmt.write("\n")
    for i, bound in enumerate(bounds):
        fmt.write(f"where {bound.name}: " if i == 0 else f"      {bound.name}: ")
        fmt_bound_rhs(bound.traits, fmt)
        fmt.writeln(",")
