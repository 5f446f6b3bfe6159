"""Scopes, modules and the top-level item sequencer.

A :class:`Scope` holds an import table and an ordered list of items. Rendering
writes the scope doc, the consolidated ``use`` statements, then every item
separated by exactly one blank line.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import KW_ONLY, dataclass, field
from typing import Self, Union

from .codegen import Formatter
from .items import Enum, Function, Impl, Struct, Trait, TypeAlias
from .model import Doc, Import, Lint, Type, Vis, Visibility, as_doc, as_vis

logger = logging.getLogger(__name__)


@dataclass
class LineBreak:
    """Placeholder item; the sequencer's separator supplies the blank line."""

    def fmt(self, fmt: Formatter) -> None:
        pass


Item = Union["Module", Struct, Function, Trait, Enum, Impl, TypeAlias, LineBreak, str]
ImportTable = dict[str, dict[str, Import]]


def consolidate_imports(imports: ImportTable) -> list[str]:
    """Group the import table into ``use`` statements.

    Visibility groups come first, in first-seen order; within a group paths
    keep table order and names keep insertion order. Several names under one
    path and visibility collapse into a single brace list.
    """
    visibilities: list[Visibility] = []
    for names in imports.values():
        for imp in names.values():
            if imp.vis not in visibilities:
                visibilities.append(imp.vis)

    statements: list[str] = []
    for vis in visibilities:
        for path, names in imports.items():
            tys = [name for name, imp in names.items() if imp.vis == vis]
            if not tys:
                continue
            if len(tys) == 1:
                statements.append(f"{vis.prefix()}use {path}::{tys[0]};")
            else:
                statements.append(f"{vis.prefix()}use {path}::{{{', '.join(tys)}}};")
    return statements


class _ItemBuilder(ABC):
    """Fluent item and import builders shared by :class:`Scope` and :class:`Module`."""

    @abstractmethod
    def _items_scope(self) -> "Scope": ...
    def push_import(self, path: str, ty: str, vis: Visibility | str = Vis.PRIVATE) -> Self:
        # "a::B" imported from `path` only brings `a` into scope
        name = ty.split("::", 1)[0]
        names = self._items_scope().imports.setdefault(path, {})
        if name not in names:
            names[name] = Import(path, name, as_vis(vis))
        return self

    def new_module(self, name: str) -> "Module":
        module = Module(name)
        self.push_module(module)
        return module

    def push_module(self, module: "Module") -> Self:
        if self.get_module(module.name) is not None:
            raise ValueError(f"module `{module.name}` is already defined in this scope")
        self._items_scope().items.append(module)
        return self

    def get_module(self, name: str) -> "Module | None":
        for item in self._items_scope().items:
            if isinstance(item, Module) and item.name == name:
                return item
        return None

    def get_or_new_module(self, name: str) -> "Module":
        module = self.get_module(name)
        return module if module is not None else self.new_module(name)

    def new_struct(self, name: str) -> Struct:
        return self._push(Struct(name))

    def push_struct(self, item: Struct) -> Self:
        self._push(item)
        return self

    def new_function(self, name: str) -> Function:
        return self._push(Function(name))

    def push_function(self, item: Function) -> Self:
        self._push(item)
        return self

    def new_trait(self, name: str) -> Trait:
        return self._push(Trait(name))

    def push_trait(self, item: Trait) -> Self:
        self._push(item)
        return self

    def new_enum(self, name: str) -> Enum:
        return self._push(Enum(name))

    def push_enum(self, item: Enum) -> Self:
        self._push(item)
        return self

    def new_impl(self, target: Type | str) -> Impl:
        return self._push(Impl(target))

    def push_impl(self, item: Impl) -> Self:
        self._push(item)
        return self

    def new_type_alias(self, name: str, target: Type | str) -> TypeAlias:
        return self._push(TypeAlias(name, target))

    def push_type_alias(self, item: TypeAlias) -> Self:
        self._push(item)
        return self

    def raw(self, text: str) -> Self:
        self._push(text)
        return self

    def push_line_break(self) -> Self:
        self._push(LineBreak())
        return self

    def push_item(self, item: Item) -> Self:
        if isinstance(item, Module):
            return self.push_module(item)
        self._push(item)
        return self

    def _push(self, item):
        self._items_scope().items.append(item)
        return item


@dataclass
class Scope(_ItemBuilder):
    doc: Doc | None = None
    imports: ImportTable = field(default_factory=dict)
    items: list[Item] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.doc = as_doc(self.doc)

    def _items_scope(self) -> "Scope":
        return self

    def set_doc(self, doc: Doc | str | None) -> Self:
        self.doc = as_doc(doc)
        return self

    # ----------- codegen ------------

    def fmt(self, fmt: Formatter) -> None:
        if self.doc is not None:
            self.doc.fmt(fmt)

        statements = consolidate_imports(self.imports)
        for line in statements:
            fmt.writeln(line)
        if statements:
            fmt.writeln()

        for i, item in enumerate(self.items):
            if i:
                fmt.writeln()
            if isinstance(item, str):
                fmt.writeln(item)
            else:
                item.fmt(fmt)

    def to_string(self) -> str:
        logger.debug("rendering scope: %d import paths, %d items", len(self.imports), len(self.items))
        fmt = Formatter()
        self.fmt(fmt)
        return fmt.render()

    def __str__(self) -> str:
        return self.to_string()


@dataclass
class Module(_ItemBuilder):
    name: str
    _: KW_ONLY
    vis: Visibility = Vis.PRIVATE
    doc: Doc | None = None
    scope: Scope = field(default_factory=Scope)
    attributes: list[str] = field(default_factory=list)
    lints: list[Lint] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.vis = as_vis(self.vis)
        self.doc = as_doc(self.doc)

    def _items_scope(self) -> Scope:
        return self.scope

    @property
    def imports(self) -> ImportTable:
        return self.scope.imports

    def set_vis(self, vis: Visibility | str) -> Self:
        self.vis = as_vis(vis)
        return self

    def set_doc(self, doc: Doc | str | None) -> Self:
        self.doc = as_doc(doc)
        return self

    def push_attribute(self, attribute: str) -> Self:
        self.attributes.append(attribute)
        return self

    def push_lint(self, lint: Lint) -> Self:
        self.lints.append(lint)
        return self

    def fmt(self, fmt: Formatter) -> None:
        if self.doc is not None:
            self.doc.fmt(fmt)
        for attr in self.attributes:
            fmt.writeln(f"#[{attr}]")
        for lint in self.lints:
            lint.fmt(fmt)
        self.vis.fmt(fmt)
        fmt.write(f"mod {self.name}")
        with fmt.block():
            self.scope.fmt(fmt)
        fmt.writeln()
