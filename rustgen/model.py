"""Leaf records of the declaration tree.

Visibility, documentation, lints, types, generics, bounds, fields, enum
variants, associated items, statement blocks and import records. Each knows
how to write itself through a :class:`~rustgen.codegen.Formatter`; the
declarations that combine them live in :mod:`rustgen.items`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Union

from .codegen import Formatter, fmt_bound_rhs


# -----------------------------
# Visibility
# -----------------------------

class Vis(Enum):
    PRIVATE = ""
    PUB = "pub"
    PUB_CRATE = "pub(crate)"
    PUB_SELF = "pub(self)"
    PUB_SUPER = "pub(super)"

    def prefix(self) -> str:
        return f"{self.value} " if self.value else ""

    def fmt(self, fmt: Formatter) -> None:
        fmt.write(self.prefix())


@dataclass(frozen=True)
class CustomVis:
    """Any visibility not covered by :class:`Vis`, e.g. ``pub(in crate::a)``."""
    text: str

    def prefix(self) -> str:
        return f"{self.text} "

    def fmt(self, fmt: Formatter) -> None:
        fmt.write(self.prefix())


Visibility = Union[Vis, CustomVis]


def as_vis(value: Visibility | str | None) -> Visibility:
    if value is None:
        return Vis.PRIVATE
    if isinstance(value, (Vis, CustomVis)):
        return value
    try:
        return Vis(value.strip())
    except ValueError:
        return CustomVis(value)


# -----------------------------
# Docs & lints
# -----------------------------

@dataclass
class Doc:
    text: str

    def fmt(self, fmt: Formatter) -> None:
        for line in self.text.splitlines():
            fmt.writeln(f"/// {line}" if line else "///")


def as_doc(value: Doc | str | None) -> Doc | None:
    if value is None or isinstance(value, Doc):
        return value
    return Doc(value)


@dataclass(frozen=True)
class Lint:
    level: str
    name: str

    @classmethod
    def allow(cls, name: str) -> "Lint":
        return cls("allow", name)

    @classmethod
    def expect(cls, name: str) -> "Lint":
        return cls("expect", name)

    @classmethod
    def warn(cls, name: str) -> "Lint":
        return cls("warn", name)

    @classmethod
    def force_warn(cls, name: str) -> "Lint":
        return cls("force-warn", name)

    @classmethod
    def deny(cls, name: str) -> "Lint":
        return cls("deny", name)

    @classmethod
    def forbid(cls, name: str) -> "Lint":
        return cls("forbid", name)

    def fmt(self, fmt: Formatter) -> None:
        fmt.writeln(f"#[{self.level}({self.name})]")


# -----------------------------
# Types, generics & bounds
# -----------------------------

@dataclass
class GenericParameter:
    name: str
    traits: list[str] = field(default_factory=list)

    def push_trait(self, trait: str) -> "GenericParameter":
        self.traits.append(trait)
        return self

    def fmt(self, fmt: Formatter) -> None:
        fmt.write(self.name)
        if self.traits:
            fmt.write(": ")
            fmt_bound_rhs(self.traits, fmt)


def as_generic(value: GenericParameter | str) -> GenericParameter:
    return value if isinstance(value, GenericParameter) else GenericParameter(value)


@dataclass
class Type:
    name: str
    generics: list[GenericParameter] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.generics = [as_generic(g) for g in self.generics]

    def push_generic(self, generic: GenericParameter | str) -> "Type":
        self.generics.append(as_generic(generic))
        return self

    def fmt(self, fmt: Formatter) -> None:
        fmt.write(self.name)
        if self.generics:
            fmt.write("<")
            for i, g in enumerate(self.generics):
                if i:
                    fmt.write(", ")
                g.fmt(fmt)
            fmt.write(">")


def as_type(value: Type | str) -> Type:
    return value if isinstance(value, Type) else Type(value)


@dataclass
class Bound:
    """A where-clause predicate: ``name: Trait1 + Trait2``."""
    name: str
    traits: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.traits = list(self.traits)

    def push_trait(self, trait: str) -> "Bound":
        self.traits.append(trait)
        return self


# -----------------------------
# Fields & variants
# -----------------------------

@dataclass
class Field:
    name: str
    ty: Type
    doc: Doc | None = None
    annotations: list[str] = field(default_factory=list)
    vis: Visibility = Vis.PRIVATE

    def __post_init__(self) -> None:
        self.ty = as_type(self.ty)
        self.doc = as_doc(self.doc)
        self.vis = as_vis(self.vis)

    def set_doc(self, doc: Doc | str | None) -> "Field":
        self.doc = as_doc(doc)
        return self

    def set_vis(self, vis: Visibility | str) -> "Field":
        self.vis = as_vis(vis)
        return self

    def push_annotation(self, annotation: str) -> "Field":
        self.annotations.append(annotation)
        return self

    def fmt(self, fmt: Formatter) -> None:
        if self.doc is not None:
            self.doc.fmt(fmt)
        for ann in self.annotations:
            fmt.writeln(ann)
        self.vis.fmt(fmt)
        fmt.write(f"{self.name}: ")
        self.ty.fmt(fmt)
        fmt.writeln(",")


@dataclass
class Fields:
    """Either named or tuple fields; the first push fixes the style."""
    named: list[Field] | None = None
    tuple_types: list[Type] | None = None

    def __post_init__(self) -> None:
        if self.named is not None and self.tuple_types is not None:
            raise ValueError("a field list cannot be both named and tuple")

    def is_empty(self) -> bool:
        return not (self.named or self.tuple_types)

    def is_tuple(self) -> bool:
        return self.tuple_types is not None

    def push_named(self, f: Field) -> "Fields":
        if self.tuple_types is not None:
            raise ValueError("cannot push a named field onto a tuple field list")
        if self.named is None:
            self.named = []
        self.named.append(f)
        return self

    def push_tuple(self, ty: Type | str) -> "Fields":
        if self.named is not None:
            raise ValueError("cannot push a tuple field onto a named field list")
        if self.tuple_types is None:
            self.tuple_types = []
        self.tuple_types.append(as_type(ty))
        return self

    def fmt(self, fmt: Formatter) -> None:
        if self.named:
            with fmt.block():
                for f in self.named:
                    f.fmt(fmt)
        elif self.tuple_types:
            fmt.write("(")
            for i, ty in enumerate(self.tuple_types):
                if i:
                    fmt.write(", ")
                ty.fmt(fmt)
            fmt.write(")")


@dataclass
class Variant:
    name: str
    fields: Fields = field(default_factory=Fields)
    annotations: list[str] = field(default_factory=list)

    def push_named_field(self, name: str, ty: Type | str) -> "Variant":
        self.fields.push_named(Field(name, as_type(ty)))
        return self

    def push_tuple_field(self, ty: Type | str) -> "Variant":
        self.fields.push_tuple(ty)
        return self

    def push_annotation(self, annotation: str) -> "Variant":
        self.annotations.append(annotation)
        return self

    def fmt(self, fmt: Formatter) -> None:
        for ann in self.annotations:
            fmt.writeln(ann)
        fmt.write(self.name)
        self.fields.fmt(fmt)
        fmt.writeln(",")


def as_variant(value: Variant | str) -> Variant:
    return value if isinstance(value, Variant) else Variant(value)


# -----------------------------
# Associated items
# -----------------------------

@dataclass
class AssociatedConst:
    name: str
    ty: str
    concrete_vis: Visibility = Vis.PRIVATE
    concrete_value: str | None = None

    def __post_init__(self) -> None:
        self.concrete_vis = as_vis(self.concrete_vis)

    def set_concrete_value(self, value: str) -> "AssociatedConst":
        self.concrete_value = value
        return self

    def set_concrete_vis(self, vis: Visibility | str) -> "AssociatedConst":
        self.concrete_vis = as_vis(vis)
        return self

    def fmt_declaration(self, fmt: Formatter) -> None:
        fmt.writeln(f"const {self.name}: {self.ty};")

    def fmt_definition(self, fmt: Formatter) -> None:
        if self.concrete_value is None:
            raise ValueError(
                f"Associated consts must have a concrete value in impl blocks: {self.name}"
            )
        self.concrete_vis.fmt(fmt)
        fmt.writeln(f"const {self.name}: {self.ty} = {self.concrete_value};")


@dataclass
class AssociatedType:
    name: str
    trait_bounds: list[str] = field(default_factory=list)
    concrete_ty: tuple[str, list[str]] | None = None

    def __post_init__(self) -> None:
        self.trait_bounds = list(self.trait_bounds)

    def push_trait_bound(self, trait: str) -> "AssociatedType":
        self.trait_bounds.append(trait)
        return self

    def set_concrete_ty(self, name: str, generics: Iterable[str] = ()) -> "AssociatedType":
        self.concrete_ty = (name, list(generics))
        return self

    def fmt_declaration(self, fmt: Formatter) -> None:
        fmt.write(f"type {self.name}")
        if self.trait_bounds:
            fmt.write(": ")
            fmt_bound_rhs(self.trait_bounds, fmt)
        fmt.writeln(";")

    def fmt_definition(self, fmt: Formatter) -> None:
        if self.concrete_ty is None:
            raise ValueError(
                f"Associated types must have a concrete type in impl blocks: {self.name}"
            )
        name, generics = self.concrete_ty
        args = f"<{', '.join(generics)}>" if generics else ""
        fmt.writeln(f"type {self.name} = {name}{args};")


# -----------------------------
# Statement bodies
# -----------------------------

@dataclass
class Block:
    """A nested ``{ ... }`` statement group inside a function body."""
    body: list["Block | str"] = field(default_factory=list)

    def push_line(self, line: str) -> "Block":
        self.body.append(line)
        return self

    def push_block(self, block: "Block") -> "Block":
        self.body.append(block)
        return self

    def fmt(self, fmt: Formatter) -> None:
        with fmt.block():
            fmt_body(self.body, fmt)
        fmt.writeln()


def fmt_body(body: Iterable[Block | str], fmt: Formatter) -> None:
    for entry in body:
        if isinstance(entry, Block):
            entry.fmt(fmt)
        else:
            fmt.writeln(entry)


# -----------------------------
# Imports
# -----------------------------

@dataclass(frozen=True)
class Import:
    path: str
    name: str
    vis: Visibility = Vis.PRIVATE

    @property
    def line(self) -> str:
        return f"{self.path}::{self.name}"
