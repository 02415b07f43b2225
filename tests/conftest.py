import logging
from pathlib import Path

import pytest

from packgen import (
    Basic, Field, File, GeneratorConfig, Named, Package, PropertyOptions,
    Resource, Struct, StructShape,
)

STRING = Basic('string')
BOOL = Basic('bool')
NUMBER = Basic('float64')


class PackageBuilder:
    """Assembles an in-memory package the way the loader would"""

    def __init__(self, name: str = "aws", path: str = "github.com/acme/aws"):
        self.pkg = Package(name=name, path=path)

    def file(self, relpath: str, *members) -> File:
        file = File(path=relpath)
        for m in members:
            file.add(m)
        self.pkg.add_file(file)
        return file

    def ref(self, name: str, underlying: StructShape = None) -> Named:
        return self.pkg.named(name, underlying)


def shape(*fields) -> StructShape:
    return StructShape(tuple(fields))


def opt(name: str, **flags) -> PropertyOptions:
    return PropertyOptions(name=name, **flags)


def struct(name: str, fields, options) -> Struct:
    return Struct(name, shape(*fields), list(options))


def resource(name: str, fields, options) -> Resource:
    return Resource(name, shape(*fields), list(options))


def embed(named: Named) -> Field:
    return Field(named.name, named, anonymous=True)


@pytest.fixture
def builder() -> PackageBuilder:
    return PackageBuilder()


@pytest.fixture
def config(tmp_path: Path) -> GeneratorConfig:
    return GeneratorConfig(out=tmp_path / "out", root=tmp_path / "src")


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo configure_logging so handlers never outlive a captured stream"""
    yield
    logger = logging.getLogger("packgen")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
