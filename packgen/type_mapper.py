"""Type mapping from IDL field shapes to TypeScript types"""

from dataclasses import dataclass

from .errors import fail
from .types import Basic, FieldType, MapOf, Named, Package, PointerTo, SliceOf


@dataclass(frozen=True)
class MappedType:
    """TypeScript type text plus the imports needed to make it resolve"""
    text: str
    local: frozenset[str] = frozenset()
    foreign: tuple[tuple[str, str], ...] = ()


class TypeMapper:
    """Maps field shapes to TypeScript type expressions for one output file"""

    TS_TYPES = {
        'bool': 'boolean',
        'string': 'string',
        'float64': 'number',
    }

    def __init__(self, pkg: Package, current_file: str):
        self.pkg = pkg
        self.current_file = current_file

    def map(self, t: FieldType) -> MappedType:
        if isinstance(t, Basic):
            if t.kind not in self.TS_TYPES:
                fail(f"Unrecognized basic type: {t.kind}")
            return MappedType(self.TS_TYPES[t.kind])

        if isinstance(t, Named):
            return self._named(t)

        if isinstance(t, MapOf):
            key = self.map(t.key)
            elem = self.map(t.elem)
            return _combine(f'{{[key: {key.text}]: {elem.text}}}', key, elem)

        if isinstance(t, PointerTo):
            # No pointers in TypeScript; emit the underlying type
            return self.map(t.elem)

        if isinstance(t, SliceOf):
            elem = self.map(t.elem)
            return _combine(f'{elem.text}[]', elem)

        fail(f"Unrecognized type shape: {type(t).__name__}")

    def _named(self, t: Named) -> MappedType:
        if t.package == self.pkg.path:
            home = self.pkg.member_files.get(t.name)
            if home is None:
                fail(f"Member '{t.name}' is not declared in package {self.pkg.path}")
            if home.path != self.current_file:
                return MappedType(t.name, local=frozenset([t.name]))
            return MappedType(t.name)

        alias = t.package_name or t.package.rsplit('/', 1)[-1]
        return MappedType(f'{alias}.{t.name}', foreign=((t.package, alias),))


def _combine(text: str, *parts: MappedType) -> MappedType:
    local = frozenset().union(*(p.local for p in parts))
    foreign = tuple(dict.fromkeys(f for p in parts for f in p.foreign))
    return MappedType(text, local, foreign)
