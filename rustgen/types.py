"""Plain-dict manifests for the declaration tree.

Lets a tree be described as JSON and built with the ``mk_*`` factories. Every
item inside a scope manifest carries a ``"kind"`` key naming its declaration.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, NotRequired, TypedDict

from .files import LIB_FILE, File, Library
from .items import Enum, Function, Impl, SelfArg, Struct, Trait, TypeAlias, TypeDef
from .model import AssociatedConst, AssociatedType, Block, Bound, Field, Lint, Type, Variant
from .scope import Item, LineBreak, Module, Scope


class LintSpec(TypedDict):
    level: str
    name: str


class BoundSpec(TypedDict):
    name: str
    traits: list[str]


class FieldSpec(TypedDict):
    name: str
    ty: str
    doc: NotRequired[str]
    vis: NotRequired[str]
    annotations: NotRequired[list[str]]


class VariantSpec(TypedDict):
    name: str
    fields: NotRequired[list[FieldSpec]]
    tuple_fields: NotRequired[list[str]]
    annotations: NotRequired[list[str]]


class TypeDefSpec(TypedDict, total=False):
    vis: str
    doc: str
    generics: list[str]
    derives: list[str]
    lints: list[LintSpec]
    attributes: list[str]
    repr: str
    bounds: list[BoundSpec]
    macros: list[str]


class StructSpec(TypeDefSpec):
    name: str
    fields: NotRequired[list[FieldSpec]]
    tuple_fields: NotRequired[list[str]]


class EnumSpec(TypeDefSpec):
    name: str
    variants: NotRequired[list[VariantSpec | str]]


class TypeAliasSpec(TypeDefSpec):
    name: str
    target: str


class ArgSpec(TypedDict):
    name: str
    ty: str


class FunctionSpec(TypedDict):
    name: str
    vis: NotRequired[str]
    doc: NotRequired[str]
    is_async: NotRequired[bool]
    generics: NotRequired[list[str]]
    self_arg: NotRequired[str]
    args: NotRequired[list[ArgSpec]]
    ret: NotRequired[str]
    bounds: NotRequired[list[BoundSpec]]
    body: NotRequired[list[Any]]  # str lines or {"block": [...]}
    attributes: NotRequired[list[str]]
    lints: NotRequired[list[LintSpec]]
    extern_abi: NotRequired[str]


class ConstSpec(TypedDict):
    name: str
    ty: str
    value: NotRequired[str]
    vis: NotRequired[str]


class AssocTypeSpec(TypedDict):
    name: str
    bounds: NotRequired[list[str]]
    concrete: NotRequired[str]
    concrete_generics: NotRequired[list[str]]


class TraitSpec(TypeDefSpec):
    name: str
    parents: NotRequired[list[str]]
    consts: NotRequired[list[ConstSpec]]
    types: NotRequired[list[AssocTypeSpec]]
    functions: NotRequired[list[FunctionSpec]]


class ImplSpec(TypedDict):
    target: str
    target_generics: NotRequired[list[str]]
    trait: NotRequired[str]
    trait_generics: NotRequired[list[str]]
    generics: NotRequired[list[str]]
    bounds: NotRequired[list[BoundSpec]]
    macros: NotRequired[list[str]]
    consts: NotRequired[list[ConstSpec]]
    types: NotRequired[list[AssocTypeSpec]]
    functions: NotRequired[list[FunctionSpec]]


class ImportSpec(TypedDict):
    path: str
    name: str
    vis: NotRequired[str]


class ScopeSpec(TypedDict, total=False):
    doc: str
    imports: list[ImportSpec]
    items: list[dict[str, Any]]


class ModuleSpec(ScopeSpec):
    name: str
    vis: NotRequired[str]
    attributes: NotRequired[list[str]]
    lints: NotRequired[list[LintSpec]]


class FileSpec(TypedDict):
    path: str
    scope: ScopeSpec


class LibrarySpec(TypedDict):
    name: str
    path: str
    lib: NotRequired[ScopeSpec]
    files: NotRequired[list[FileSpec]]


_SELF_ARGS: dict[str, SelfArg] = {arg.value: arg for arg in SelfArg}


def mk_lint(ld: LintSpec) -> Lint:
    return Lint(ld["level"], ld["name"])


def mk_bound(bd: BoundSpec) -> Bound:
    return Bound(bd["name"], list(bd["traits"]))


def mk_field(fd: FieldSpec) -> Field:
    return Field(
        name=fd["name"],
        ty=fd["ty"],
        doc=fd.get("doc"),
        vis=fd.get("vis", ""),
        annotations=list(fd.get("annotations", [])),
    )


def mk_variant(vd: VariantSpec | str) -> Variant:
    if isinstance(vd, str):
        return Variant(vd)
    v = Variant(vd["name"], annotations=list(vd.get("annotations", [])))
    for fd in vd.get("fields", []):
        v.fields.push_named(mk_field(fd))
    for ty in vd.get("tuple_fields", []):
        v.push_tuple_field(ty)
    return v


def _apply_type_def(td: TypeDef, td_spec: TypeDefSpec) -> None:
    td.set_vis(td_spec.get("vis", ""))
    td.set_doc(td_spec.get("doc"))
    td.set_repr(td_spec.get("repr"))
    for g in td_spec.get("generics", []):
        td.push_generic(g)
    td.derives.extend(td_spec.get("derives", []))
    td.lints.extend(mk_lint(ld) for ld in td_spec.get("lints", []))
    td.attributes.extend(td_spec.get("attributes", []))
    td.bounds.extend(mk_bound(bd) for bd in td_spec.get("bounds", []))
    td.macros.extend(td_spec.get("macros", []))


def mk_struct(sd: StructSpec) -> Struct:
    s = Struct(sd["name"])
    _apply_type_def(s, sd)
    for fd in sd.get("fields", []):
        s.push_named_field(mk_field(fd))
    for ty in sd.get("tuple_fields", []):
        s.push_tuple_field(ty)
    return s


def mk_enum(ed: EnumSpec) -> Enum:
    e = Enum(ed["name"])
    _apply_type_def(e, ed)
    for vd in ed.get("variants", []):
        e.push_variant(mk_variant(vd))
    return e


def mk_type_alias(ad: TypeAliasSpec) -> TypeAlias:
    alias = TypeAlias(ad["name"], ad["target"])
    _apply_type_def(alias, ad)
    return alias


def mk_block(entries: list[Any]) -> Block:
    return Block(_mk_body(entries))


def _mk_body(entries: list[Any]) -> list[Block | str]:
    body: list[Block | str] = []
    for entry in entries:
        if isinstance(entry, str):
            body.append(entry)
        elif isinstance(entry, dict) and "block" in entry:
            body.append(mk_block(entry["block"]))
        else:
            raise ValueError(f"body entries must be strings or {{'block': [...]}}, got {entry!r}")
    return body


def mk_function(fd: FunctionSpec) -> Function:
    self_arg = fd.get("self_arg", "")
    if self_arg not in _SELF_ARGS:
        raise ValueError(f"Unsupported self_arg '{self_arg}'. Allowed: {tuple(_SELF_ARGS)}")
    func = Function(
        fd["name"],
        vis=fd.get("vis", ""),
        doc=fd.get("doc"),
        is_async=bool(fd.get("is_async", False)),
        generics=list(fd.get("generics", [])),
        self_arg=_SELF_ARGS[self_arg],
        ret=fd.get("ret"),
        bounds=[mk_bound(bd) for bd in fd.get("bounds", [])],
        body=_mk_body(fd.get("body", [])),
        attributes=list(fd.get("attributes", [])),
        lints=[mk_lint(ld) for ld in fd.get("lints", [])],
        extern_abi=fd.get("extern_abi"),
    )
    for arg in fd.get("args", []):
        func.push_arg(arg["name"], arg["ty"])
    return func


def _mk_type(name: str, generics: list[str]) -> Type:
    return Type(name, list(generics))


def mk_const(cd: ConstSpec) -> AssociatedConst:
    return AssociatedConst(
        cd["name"], cd["ty"], concrete_vis=cd.get("vis", ""), concrete_value=cd.get("value")
    )


def mk_assoc_type(td: AssocTypeSpec) -> AssociatedType:
    ty = AssociatedType(td["name"], list(td.get("bounds", [])))
    if "concrete" in td:
        ty.set_concrete_ty(td["concrete"], td.get("concrete_generics", []))
    return ty


def mk_trait(td: TraitSpec) -> Trait:
    t = Trait(td["name"])
    _apply_type_def(t, td)
    for parent in td.get("parents", []):
        t.push_parent(parent)
    t.associated_consts.extend(mk_const(cd) for cd in td.get("consts", []))
    t.associated_types.extend(mk_assoc_type(ad) for ad in td.get("types", []))
    t.functions.extend(mk_function(fd) for fd in td.get("functions", []))
    return t


def mk_impl(idd: ImplSpec) -> Impl:
    impl = Impl(_mk_type(idd["target"], idd.get("target_generics", [])))
    if "trait" in idd:
        impl.set_impl_trait(_mk_type(idd["trait"], idd.get("trait_generics", [])))
    impl.generics.extend(idd.get("generics", []))
    impl.bounds.extend(mk_bound(bd) for bd in idd.get("bounds", []))
    impl.macros.extend(idd.get("macros", []))
    impl.associated_consts.extend(mk_const(cd) for cd in idd.get("consts", []))
    impl.associated_types.extend(mk_assoc_type(ad) for ad in idd.get("types", []))
    impl.functions.extend(mk_function(fd) for fd in idd.get("functions", []))
    return impl


def mk_raw(rd: dict[str, Any]) -> str:
    return rd["text"]


def mk_line_break(_: dict[str, Any]) -> LineBreak:
    return LineBreak()


def mk_module(md: ModuleSpec) -> Module:
    module = Module(
        md["name"],
        vis=md.get("vis", ""),
        doc=md.get("doc"),
        attributes=list(md.get("attributes", [])),
        lints=[mk_lint(ld) for ld in md.get("lints", [])],
    )
    _fill_scope(module, md)
    return module


_ITEM_FACTORIES: dict[str, Callable[[Any], Item]] = {
    "struct": mk_struct,
    "enum": mk_enum,
    "trait": mk_trait,
    "function": mk_function,
    "impl": mk_impl,
    "module": mk_module,
    "type_alias": mk_type_alias,
    "raw": mk_raw,
    "line_break": mk_line_break,
}


def mk_item(item: dict[str, Any]) -> Item:
    kind = item.get("kind")
    factory = _ITEM_FACTORIES.get(kind) if isinstance(kind, str) else None
    if factory is None:
        raise ValueError(f"Unsupported item kind '{kind}'. Allowed: {tuple(_ITEM_FACTORIES)}")
    return factory(item)


def _fill_scope(builder: Scope | Module, sd: ScopeSpec) -> None:
    for imp in sd.get("imports", []):
        builder.push_import(imp["path"], imp["name"], imp.get("vis", ""))
    for item in sd.get("items", []):
        builder.push_item(mk_item(item))


def mk_scope(sd: ScopeSpec) -> Scope:
    scope = Scope(doc=sd.get("doc"))
    _fill_scope(scope, sd)
    return scope


def mk_file(fd: FileSpec) -> File:
    return File(Path(fd["path"]), mk_scope(fd.get("scope", {})))


def mk_library(ld: LibrarySpec) -> Library:
    lib = Library(ld["name"], Path(ld["path"]), lib=File(Path(LIB_FILE), mk_scope(ld.get("lib", {}))))
    for fd in ld.get("files", []):
        lib.push_file(mk_file(fd))
    return lib
