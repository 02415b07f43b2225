"""Flattening of struct fields through anonymous embedding"""

from typing import Callable, Optional, Sequence

from .errors import require
from .types import Field, Named, PropertyOptions, StructShape, TypeMember

FieldAction = Callable[[Field, PropertyOptions], None]


def for_each_field(member: TypeMember, action: Optional[FieldAction] = None) -> int:
    """Visit every leaf field of a struct or resource, returning the leaf count"""
    return for_each_struct_field(member.shape, member.options, action)


def for_each_struct_field(shape: StructShape, opts: Sequence[PropertyOptions],
                          action: Optional[FieldAction] = None) -> int:
    """Walk fields depth-first, consuming options in lock-step.

    An embedded struct consumes a contiguous run of ``opts``; the number of
    options it used is returned so the caller can advance its own cursor.
    """
    n = 0
    j = 0
    for fld in shape.fields:
        if fld.anonymous:
            embedded = _embedded_shape(fld)
            k = for_each_struct_field(embedded, opts[j:], action)
            j += k
            n += k
        else:
            require(j < len(opts), f"Missing property options for field '{fld.name}'")
            if action is not None:
                action(fld, opts[j])
            j += 1
            n += 1
    return n


def flatten_fields(member: TypeMember) -> list[tuple[Field, PropertyOptions]]:
    pairs = []
    for_each_field(member, lambda fld, opt: pairs.append((fld, opt)))
    return pairs


def _embedded_shape(fld: Field) -> StructShape:
    require(isinstance(fld.type, Named),
            f"Embedded field '{fld.name}' must be a named type, got {type(fld.type).__name__}")
    require(fld.type.underlying is not None,
            f"Embedded field '{fld.name}' does not refer to a struct type")
    return fld.type.underlying
