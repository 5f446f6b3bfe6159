"""Declarations: structs, enums, type aliases, traits, impl blocks and functions.

Named type declarations share :class:`TypeDef`, which owns everything written
before the declaration's keyword (docs, lints, derives, repr, attributes,
macros, visibility) plus the generic parameters and where-clause.
"""

from __future__ import annotations

import enum
from dataclasses import KW_ONLY, dataclass, field
from typing import Iterable, Self

from .codegen import Formatter, fmt_bounds, fmt_generics
from .model import (
    AssociatedConst,
    AssociatedType,
    Block,
    Bound,
    Doc,
    Field,
    Fields,
    GenericParameter,
    Lint,
    Type,
    Variant,
    Vis,
    Visibility,
    as_doc,
    as_generic,
    as_type,
    as_variant,
    as_vis,
    fmt_body,
)


@dataclass
class TypeDef:
    name: str
    _: KW_ONLY
    generics: list[GenericParameter] = field(default_factory=list)
    vis: Visibility = Vis.PRIVATE
    doc: Doc | None = None
    derives: list[str] = field(default_factory=list)
    lints: list[Lint] = field(default_factory=list)
    attributes: list[str] = field(default_factory=list)
    repr: str | None = None
    bounds: list[Bound] = field(default_factory=list)
    macros: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.generics = [as_generic(g) for g in self.generics]
        self.vis = as_vis(self.vis)
        self.doc = as_doc(self.doc)

    @property
    def ty(self) -> Type:
        return Type(self.name, self.generics)

    # ----------- builder ------------

    def set_vis(self, vis: Visibility | str) -> Self:
        self.vis = as_vis(vis)
        return self

    def set_doc(self, doc: Doc | str | None) -> Self:
        self.doc = as_doc(doc)
        return self

    def set_repr(self, repr: str | None) -> Self:
        self.repr = repr
        return self

    def push_generic(self, generic: GenericParameter | str) -> Self:
        self.generics.append(as_generic(generic))
        return self

    def push_bound(self, bound: Bound) -> Self:
        self.bounds.append(bound)
        return self

    def push_derive(self, derive: str) -> Self:
        self.derives.append(derive)
        return self

    def push_lint(self, lint: Lint) -> Self:
        self.lints.append(lint)
        return self

    def push_attribute(self, attribute: str) -> Self:
        self.attributes.append(attribute)
        return self

    def push_macro(self, macro: str) -> Self:
        self.macros.append(macro)
        return self

    # ----------- codegen ------------

    def fmt_head(self, keyword: str, parents: Iterable[Type], fmt: Formatter) -> None:
        if self.doc is not None:
            self.doc.fmt(fmt)
        for lint in self.lints:
            lint.fmt(fmt)
        if self.derives:
            fmt.writeln(f"#[derive({', '.join(self.derives)})]")
        if self.repr is not None:
            fmt.writeln(f"#[repr({self.repr})]")
        for attr in self.attributes:
            fmt.writeln(f"#[{attr}]")
        for m in self.macros:
            fmt.writeln(m)
        self.vis.fmt(fmt)

        fmt.write(f"{keyword} ")
        self.ty.fmt(fmt)
        for i, parent in enumerate(parents):
            fmt.write(": " if i == 0 else " + ")
            parent.fmt(fmt)
        fmt_bounds(self.bounds, fmt)


@dataclass
class Struct(TypeDef):
    fields: Fields = field(default_factory=Fields)

    def push_named_field(self, named_field: Field) -> Self:
        self.fields.push_named(named_field)
        return self

    def push_tuple_field(self, ty: Type | str) -> Self:
        self.fields.push_tuple(ty)
        return self

    def fmt(self, fmt: Formatter) -> None:
        self.fmt_head("struct", (), fmt)
        self.fields.fmt(fmt)
        if self.fields.named:
            fmt.writeln()
        else:
            # unit and tuple structs are terminated declarations
            fmt.writeln(";")


@dataclass
class Enum(TypeDef):
    variants: list[Variant] = field(default_factory=list)

    def push_variant(self, variant: Variant | str) -> Self:
        self.variants.append(as_variant(variant))
        return self

    def fmt(self, fmt: Formatter) -> None:
        self.fmt_head("enum", (), fmt)
        with fmt.block():
            for variant in self.variants:
                variant.fmt(fmt)
        fmt.writeln()


@dataclass
class TypeAlias(TypeDef):
    target: Type

    def __post_init__(self) -> None:
        super().__post_init__()
        self.target = as_type(self.target)

    def fmt(self, fmt: Formatter) -> None:
        self.fmt_head("type", (), fmt)
        fmt.write(" = ")
        self.target.fmt(fmt)
        fmt.writeln(";")


class SelfArg(enum.Enum):
    NONE = ""
    SELF = "self"
    REF = "&self"
    MUT = "mut self"
    MUT_REF = "&mut self"


@dataclass
class Function:
    name: str
    _: KW_ONLY
    doc: Doc | None = None
    lints: list[Lint] = field(default_factory=list)
    vis: Visibility = Vis.PRIVATE
    is_async: bool = False
    generics: list[str] = field(default_factory=list)
    self_arg: SelfArg = SelfArg.NONE
    args: list[Field] = field(default_factory=list)
    ret: Type | None = None
    bounds: list[Bound] = field(default_factory=list)
    body: list[Block | str] = field(default_factory=list)
    attributes: list[str] = field(default_factory=list)
    extern_abi: str | None = None

    def __post_init__(self) -> None:
        self.doc = as_doc(self.doc)
        self.vis = as_vis(self.vis)
        if self.ret is not None:
            self.ret = as_type(self.ret)

    # ----------- builder ------------

    def set_doc(self, doc: Doc | str | None) -> Self:
        self.doc = as_doc(doc)
        return self

    def set_vis(self, vis: Visibility | str) -> Self:
        self.vis = as_vis(vis)
        return self

    def set_async(self, is_async: bool) -> Self:
        self.is_async = is_async
        return self

    def set_self_arg(self, self_arg: SelfArg) -> Self:
        self.self_arg = self_arg
        return self

    def set_ret(self, ty: Type | str) -> Self:
        self.ret = as_type(ty)
        return self

    def set_extern_abi(self, abi: str) -> Self:
        self.extern_abi = abi
        return self

    def push_lint(self, lint: Lint) -> Self:
        self.lints.append(lint)
        return self

    def push_attribute(self, attribute: str) -> Self:
        self.attributes.append(attribute)
        return self

    def push_generic(self, generic: str) -> Self:
        self.generics.append(generic)
        return self

    def push_bound(self, bound: Bound) -> Self:
        self.bounds.append(bound)
        return self

    def push_arg(self, name: str, ty: Type | str) -> Self:
        self.args.append(Field(name, as_type(ty)))
        return self

    def push_line(self, line: str) -> Self:
        self.body.append(line)
        return self

    def push_block(self, block: Block) -> Self:
        self.body.append(block)
        return self

    # ----------- codegen ------------

    def fmt(self, fmt: Formatter, is_trait: bool = False) -> None:
        if self.doc is not None:
            self.doc.fmt(fmt)
        for lint in self.lints:
            lint.fmt(fmt)
        for attr in self.attributes:
            fmt.writeln(f"#[{attr}]")

        if is_trait:
            if self.vis is not Vis.PRIVATE:
                raise ValueError("trait functions do not have visibility modifiers")
        else:
            self.vis.fmt(fmt)

        if self.extern_abi is not None:
            fmt.write(f'extern "{self.extern_abi}" ')
        if self.is_async:
            fmt.write("async ")

        fmt.write(f"fn {self.name}")
        fmt_generics(self.generics, fmt)

        params = [self.self_arg.value] if self.self_arg is not SelfArg.NONE else []
        fmt.write("(" + ", ".join(params))
        for i, arg in enumerate(self.args):
            if i or params:
                fmt.write(", ")
            fmt.write(f"{arg.name}: ")
            arg.ty.fmt(fmt)
        fmt.write(")")

        if self.ret is not None:
            fmt.write(" -> ")
            self.ret.fmt(fmt)
        fmt_bounds(self.bounds, fmt)

        if not self.body:
            if not is_trait:
                raise ValueError("impl blocks must define fn bodies")
            fmt.writeln(";")
            return
        with fmt.block():
            fmt_body(self.body, fmt)
        fmt.writeln()


@dataclass
class Trait(TypeDef):
    parents: list[Type] = field(default_factory=list)
    associated_consts: list[AssociatedConst] = field(default_factory=list)
    associated_types: list[AssociatedType] = field(default_factory=list)
    functions: list[Function] = field(default_factory=list)

    def __post_init__(self) -> None:
        super().__post_init__()
        self.parents = [as_type(p) for p in self.parents]

    def push_parent(self, parent: Type | str) -> Self:
        self.parents.append(as_type(parent))
        return self

    def push_associated_const(self, associated_const: AssociatedConst) -> Self:
        self.associated_consts.append(associated_const)
        return self

    def push_associated_type(self, associated_type: AssociatedType) -> Self:
        self.associated_types.append(associated_type)
        return self

    def push_function(self, function: Function) -> Self:
        self.functions.append(function)
        return self

    def new_function(self, name: str) -> Function:
        self.functions.append(Function(name))
        return self.functions[-1]

    def fmt(self, fmt: Formatter) -> None:
        self.fmt_head("trait", self.parents, fmt)
        with fmt.block():
            for cst in self.associated_consts:
                cst.fmt_declaration(fmt)
            for ty in self.associated_types:
                ty.fmt_declaration(fmt)
            has_assoc = bool(self.associated_consts or self.associated_types)
            for i, func in enumerate(self.functions):
                if i or has_assoc:
                    fmt.writeln()
                func.fmt(fmt, is_trait=True)
        fmt.writeln()


@dataclass
class Impl:
    target: Type
    _: KW_ONLY
    generics: list[str] = field(default_factory=list)
    impl_trait: Type | None = None
    associated_consts: list[AssociatedConst] = field(default_factory=list)
    associated_types: list[AssociatedType] = field(default_factory=list)
    bounds: list[Bound] = field(default_factory=list)
    macros: list[str] = field(default_factory=list)
    functions: list[Function] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.target = as_type(self.target)
        if self.impl_trait is not None:
            self.impl_trait = as_type(self.impl_trait)

    def set_impl_trait(self, ty: Type | str) -> Self:
        self.impl_trait = as_type(ty)
        return self

    def push_generic(self, generic: str) -> Self:
        self.generics.append(generic)
        return self

    def push_bound(self, bound: Bound) -> Self:
        self.bounds.append(bound)
        return self

    def push_macro(self, macro: str) -> Self:
        self.macros.append(macro)
        return self

    def push_associated_const(self, associated_const: AssociatedConst) -> Self:
        self.associated_consts.append(associated_const)
        return self

    def push_associated_type(self, associated_type: AssociatedType) -> Self:
        self.associated_types.append(associated_type)
        return self

    def push_function(self, function: Function) -> Self:
        self.functions.append(function)
        return self

    def new_function(self, name: str) -> Function:
        self.functions.append(Function(name))
        return self.functions[-1]

    def fmt(self, fmt: Formatter) -> None:
        for m in self.macros:
            fmt.writeln(m)
        fmt.write("impl")
        fmt_generics(self.generics, fmt)
        if self.impl_trait is not None:
            fmt.write(" ")
            self.impl_trait.fmt(fmt)
            fmt.write(" for")
        fmt.write(" ")
        self.target.fmt(fmt)
        fmt_bounds(self.bounds, fmt)

        with fmt.block():
            for cst in self.associated_consts:
                cst.fmt_definition(fmt)
            for ty in self.associated_types:
                ty.fmt_definition(fmt)
            has_assoc = bool(self.associated_consts or self.associated_types)
            for i, func in enumerate(self.functions):
                if i or has_assoc:
                    fmt.writeln()
                func.fmt(fmt)
        fmt.writeln()
