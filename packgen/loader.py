"""Loads a resolved package description from JSON"""

import json
import re
from pathlib import Path
from typing import Any, Union

from .types import (
    Alias, Basic, Const, Enum, Field, FieldType, File, MapOf, Member, Named,
    Package, PointerTo, Position, PropertyOptions, Resource, SliceOf, Struct,
    StructShape,
)

BASIC_KINDS = {'bool', 'string', 'float64', 'int', 'int32', 'int64', 'uint',
               'uint32', 'uint64', 'float32', 'byte', 'rune'}

_IDENT = re.compile(r'[A-Za-z_]\w*')


class LoadError(ValueError):
    """Raised when a package description is malformed"""


def load_package(path: Union[str, Path]) -> Package:
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as exc:
        raise LoadError(f"{path}: not UTF-8 text: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise LoadError(f"{path}: invalid JSON: {exc}") from exc
    return PackageLoader(data).load()


def parse_type(text: str, pkg_path: str, pkg_name: str = "") -> FieldType:
    """Parse a Go-like type expression such as ``map[string][]*Bucket``"""
    t, rest = _parse(text.strip(), pkg_path, pkg_name)
    if rest.strip():
        raise LoadError(f"Unexpected trailing text in type '{text}': '{rest}'")
    return t


def _parse(text: str, pkg_path: str, pkg_name: str) -> tuple[FieldType, str]:
    if text.startswith('*'):
        elem, rest = _parse(text[1:].lstrip(), pkg_path, pkg_name)
        return PointerTo(elem), rest

    if text.startswith('[]'):
        elem, rest = _parse(text[2:].lstrip(), pkg_path, pkg_name)
        return SliceOf(elem), rest

    if text.startswith('map['):
        key, rest = _parse(text[4:].lstrip(), pkg_path, pkg_name)
        rest = rest.lstrip()
        if not rest.startswith(']'):
            raise LoadError(f"Expected ']' after map key in '{text}'")
        elem, rest = _parse(rest[1:].lstrip(), pkg_path, pkg_name)
        return MapOf(key, elem), rest

    # Qualified or bare name; stop at the first delimiter
    if m := re.match(r'[^\s\[\]*]+', text):
        word = m.group(0)
        rest = text[m.end():]
        if word in BASIC_KINDS:
            return Basic(word), rest
        if '.' in word:
            foreign_path, name = word.rsplit('.', 1)
            if not _IDENT.fullmatch(name):
                raise LoadError(f"Invalid type name '{word}'")
            return Named(name, foreign_path, foreign_path.rsplit('/', 1)[-1]), rest
        if not _IDENT.fullmatch(word):
            raise LoadError(f"Invalid type name '{word}'")
        return Named(word, pkg_path, pkg_name), rest

    raise LoadError(f"Cannot parse type '{text}'")


def const_value(value: Any) -> str:
    """Literal text of a constant; JSON scalars keep their JSON spelling"""
    if isinstance(value, str):
        return value
    return json.dumps(value)


def default_property_name(field_name: str) -> str:
    return field_name[:1].lower() + field_name[1:]


class PackageLoader:
    """Builds a Package from its decoded JSON description"""

    def __init__(self, data: Any):
        if not isinstance(data, dict):
            raise LoadError("Package description must be an object")
        self.data = data
        self.name = self._str(data, 'name', 'package')
        self.path = data.get('path') or self.name
        self._decls: dict[str, dict] = {}
        self._shapes: dict[str, StructShape] = {}
        self._options: dict[str, list[PropertyOptions]] = {}
        self._resolving: set[str] = set()
        self.pkg = Package(name=self.name, path=self.path)

    def load(self) -> Package:
        pkg = self.pkg
        files = self.data.get('files')
        if not isinstance(files, dict):
            raise LoadError("'files' must map relative paths to member lists")

        for relpath, decls in files.items():
            if not isinstance(decls, list):
                raise LoadError(f"{relpath}: members must be a list")
            for decl in decls:
                self._decls[self._str(decl, 'name', relpath)] = decl

        for relpath, decls in files.items():
            file = File(path=relpath)
            for line, decl in enumerate(decls, 1):
                file.add(self._member(decl, Position(relpath, line)))
            pkg.add_file(file)
        return pkg

    def _member(self, decl: dict, pos: Position) -> Member:
        kind = decl.get('kind')
        name = decl['name']
        if kind == 'alias':
            return Alias(name, self._type(decl, 'target'), pos)
        if kind == 'const':
            return Const(name, self._type(decl, 'type'), const_value(decl.get('value', '')), pos)
        if kind == 'enum':
            values = decl.get('values')
            if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
                raise LoadError(f"{name}: enum values must be a list of strings")
            return Enum(name, list(values), pos)
        if kind in ('struct', 'resource'):
            self._resolve(name)
            cls = Struct if kind == 'struct' else Resource
            return cls(name, self._shapes[name], list(self._options[name]), pos)
        raise LoadError(f"{name}: unknown member kind '{kind}'")

    def _resolve(self, name: str):
        """Build the field shape and flattened options of a struct-like member"""
        if name in self._shapes:
            return
        if name in self._resolving:
            raise LoadError(f"{name}: recursive embedding")
        decl = self._decls.get(name)
        if decl is None or decl.get('kind') not in ('struct', 'resource'):
            raise LoadError(f"'{name}' is not a struct and cannot be embedded")

        self._resolving.add(name)
        fields = []
        options = []
        entries = decl.get('fields', [])
        if not isinstance(entries, list):
            raise LoadError(f"{name}: fields must be a list")
        for entry in entries:
            if not isinstance(entry, dict):
                raise LoadError(f"{name}: fields must be objects")
            if 'embed' in entry:
                embedded = self._str(entry, 'embed', name)
                self._resolve(embedded)
                named = self.pkg.named(embedded, self._shapes[embedded])
                fields.append(Field(embedded, named, anonymous=True))
                options.extend(self._options[embedded])
                continue
            fname = self._str(entry, 'name', name)
            fields.append(Field(fname, self._type(entry, 'type')))
            opts = entry.get('options', {})
            if not isinstance(opts, dict):
                raise LoadError(f"{name}.{fname}: options must be an object")
            options.append(PropertyOptions(
                name=opts.get('name') or default_property_name(fname),
                optional=bool(opts.get('optional', False)),
                out=bool(opts.get('out', False)),
                replaces=bool(opts.get('replaces', False)),
            ))
        self._resolving.discard(name)
        self._shapes[name] = StructShape(tuple(fields))
        self._options[name] = options

    def _type(self, decl: dict, key: str) -> FieldType:
        return parse_type(self._str(decl, key, decl.get('name', '?')), self.path, self.name)

    @staticmethod
    def _str(decl: Any, key: str, where: str) -> str:
        if not isinstance(decl, dict) or not isinstance(decl.get(key), str):
            raise LoadError(f"{where}: missing string '{key}'")
        return decl[key]
