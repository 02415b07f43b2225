"""
IDL Package Generator

Turns a resolved IDL package (aliases, constants, enums, structs and
resources) into TypeScript declaration modules:
  1. Type aliases and constants
  2. String-union enums
  3. Interfaces for structs
  4. Resource classes with validating constructors, plus their Args interfaces
"""

from .types import (
    Basic, Named, MapOf, PointerTo, SliceOf, Field, StructShape, PropertyOptions,
    Position, Alias, Const, Enum, Struct, Resource, File, Package,
)
from .errors import ContractError, EmitError
from .config import GeneratorConfig
from .flattener import flatten_fields, for_each_field
from .type_mapper import TypeMapper, MappedType
from .imports import ImportSet, ImportResolver
from .ts_generator import TypeScriptGenerator
from .pack_generator import PackGenerator
from .loader import LoadError, load_package, parse_type

__all__ = [
    'Basic', 'Named', 'MapOf', 'PointerTo', 'SliceOf', 'Field', 'StructShape',
    'PropertyOptions', 'Position', 'Alias', 'Const', 'Enum', 'Struct', 'Resource',
    'File', 'Package',
    'ContractError', 'EmitError', 'LoadError',
    'GeneratorConfig', 'flatten_fields', 'for_each_field',
    'TypeMapper', 'MappedType', 'ImportSet', 'ImportResolver',
    'TypeScriptGenerator', 'PackGenerator',
    'load_package', 'parse_type',
]
