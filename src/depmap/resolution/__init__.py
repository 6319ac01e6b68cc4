"""Import resolution: path aliases and specifier-to-file resolution."""

from .aliases import AliasEntry, AliasTable, build_alias_table, load_alias_table
from .resolver import ModuleResolver

__all__ = [
    "AliasEntry",
    "AliasTable",
    "ModuleResolver",
    "build_alias_table",
    "load_alias_table",
]
