from .codegen import Formatter, INDENT_WIDTH
from .model import (
    Vis, CustomVis, Doc, Lint, GenericParameter, Type, Bound, Field, Fields,
    Variant, AssociatedConst, AssociatedType, Block, Import,
)
from .items import TypeDef, Struct, Enum, TypeAlias, SelfArg, Function, Trait, Impl
from .scope import Scope, Module, LineBreak, consolidate_imports
from .files import (
    File, Library, CodegenFileError, FileAlreadyExistsError,
    FileGenerationError, LibraryGenerationError,
)
from .validation import ValidationResult, validate_scope

__all__ = [
    # formatter
    "Formatter", "INDENT_WIDTH",
    # model
    "Vis", "CustomVis", "Doc", "Lint", "GenericParameter", "Type", "Bound", "Field", "Fields",
    "Variant", "AssociatedConst", "AssociatedType", "Block", "Import",
    # declarations & scopes
    "TypeDef", "Struct", "Enum", "TypeAlias", "SelfArg", "Function", "Trait", "Impl",
    "Scope", "Module", "LineBreak", "consolidate_imports",
    # persistence
    "File", "Library", "CodegenFileError", "FileAlreadyExistsError",
    "FileGenerationError", "LibraryGenerationError",
    # validation
    "ValidationResult", "validate_scope",
]
