import pytest

from packgen import ContractError, Field, flatten_fields, for_each_field
from packgen.flattener import for_each_struct_field

from conftest import NUMBER, STRING, BOOL, embed, opt, shape, struct


def names(member):
    return [(fld.name, o.name) for fld, o in flatten_fields(member)]


def test_zero_fields():
    s = struct("Empty", [], [])
    assert flatten_fields(s) == []
    assert for_each_field(s) == 0


def test_direct_fields_keep_declared_order():
    s = struct("Point", [Field("X", NUMBER), Field("Y", NUMBER), Field("Label", STRING)],
               [opt("x"), opt("y"), opt("label")])
    assert names(s) == [("X", "x"), ("Y", "y"), ("Label", "label")]


def test_one_level_embedding_is_transparent(builder):
    base = shape(Field("B", STRING), Field("C", BOOL))
    s = struct("Outer", [Field("A", STRING), embed(builder.ref("Base", base)), Field("D", NUMBER)],
               [opt("a"), opt("b"), opt("c"), opt("d")])
    assert names(s) == [("A", "a"), ("B", "b"), ("C", "c"), ("D", "d")]


def test_deep_embedding_counts_every_leaf(builder):
    inner = shape(Field("I1", STRING), Field("I2", STRING))
    middle = shape(embed(builder.ref("Inner", inner)), Field("M", BOOL))
    empty = shape()
    s = struct("Top", [
        embed(builder.ref("Middle", middle)),
        embed(builder.ref("Nothing", empty)),
        Field("T", NUMBER),
        embed(builder.ref("Inner", inner)),
    ], [opt(n) for n in ["i1", "i2", "m", "t", "j1", "j2"]])

    assert for_each_field(s) == 6
    assert [o.name for _, o in flatten_fields(s)] == ["i1", "i2", "m", "t", "j1", "j2"]
    assert [f.name for f, _ in flatten_fields(s)] == ["I1", "I2", "M", "T", "I1", "I2"]


def test_embedded_struct_reports_consumed_count(builder):
    inner = shape(Field("X", STRING), Field("Y", STRING), Field("Z", STRING))
    seen = []
    consumed = for_each_struct_field(inner, [opt("x"), opt("y"), opt("z"), opt("after")],
                                     lambda f, o: seen.append(o.name))
    assert consumed == 3
    assert seen == ["x", "y", "z"]


def test_embedding_a_non_named_type_fails():
    s = struct("Bad", [Field("Weird", STRING, anonymous=True)], [opt("weird")])
    with pytest.raises(ContractError):
        flatten_fields(s)


def test_embedding_a_named_non_struct_fails(builder):
    s = struct("Bad", [embed(builder.ref("Color"))], [])
    with pytest.raises(ContractError):
        flatten_fields(s)


def test_missing_options_fail():
    s = struct("Short", [Field("A", STRING), Field("B", STRING)], [opt("a")])
    with pytest.raises(ContractError):
        flatten_fields(s)
