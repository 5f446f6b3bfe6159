from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

from .items import Function, Impl, Trait
from .model import Vis
from .scope import Module, Scope

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    errors: List[str]


def validate_scope(scope: Scope) -> ValidationResult:
    """
    Collect every construction error in the tree without rendering it.
    Rendering stops at the first such error; this reports all of them.
    """
    errors: List[str] = []
    _check_scope(scope, "crate", errors)
    if errors:
        logger.debug("validation found %d problem(s)", len(errors))
    return ValidationResult(len(errors) == 0, errors)


def _check_scope(scope: Scope, where: str, errors: List[str]) -> None:
    seen: set[str] = set()
    for item in scope.items:
        if isinstance(item, Module):
            if item.name in seen:
                errors.append(f"{where}: module `{item.name}` is defined more than once")
            seen.add(item.name)
            _check_scope(item.scope, f"{where}::{item.name}", errors)
        elif isinstance(item, Function):
            _check_function(item, where, False, errors)
        elif isinstance(item, Trait):
            for func in item.functions:
                _check_function(func, f"{where}::{item.name}", True, errors)
        elif isinstance(item, Impl):
            _check_impl(item, where, errors)


def _check_function(func: Function, where: str, is_trait: bool, errors: List[str]) -> None:
    if is_trait and func.vis is not Vis.PRIVATE:
        errors.append(f"{where}: trait function `{func.name}` has a visibility modifier")
    if not is_trait and not func.body:
        errors.append(f"{where}: function `{func.name}` has no body")


def _check_impl(impl: Impl, where: str, errors: List[str]) -> None:
    target = impl.target.name
    for cst in impl.associated_consts:
        if cst.concrete_value is None:
            errors.append(f"{where}: impl {target}: const `{cst.name}` has no value")
    for ty in impl.associated_types:
        if ty.concrete_ty is None:
            errors.append(f"{where}: impl {target}: type `{ty.name}` has no concrete type")
    for func in impl.functions:
        _check_function(func, f"{where}::{target}", False, errors)
