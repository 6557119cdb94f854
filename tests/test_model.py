import pytest

from deepcopygen.model import (
    Kind,
    Name,
    Package,
    Signature,
    Type,
    Universe,
    extract_comment_tags,
    parse_fully_qualified_name,
)


def test_name_str_with_package():
    assert str(Name(package="pkgname", name="typename")) == "pkgname.typename"


def test_name_str_without_package():
    assert str(Name(name="int")) == "int"


def test_type_str_uses_name():
    t = Type(name=Name(package="pkgname", name="typename"), kind=Kind.STRUCT)
    assert str(t) == "pkgname.typename"


def test_parse_fully_qualified_name():
    n = parse_fully_qualified_name("k8s.io/kubernetes/runtime.Object")
    assert n.package == "k8s.io/kubernetes/runtime"
    assert n.name == "Object"


def test_parse_fully_qualified_name_without_package():
    n = parse_fully_qualified_name("typename")
    assert n == Name(name="typename")


@pytest.mark.parametrize(
    "fqn",
    [
        "k8s.io/gengo/examples/deepcopy-gen/output_tests/otherpkg.Object",
        "k8s.io/gengo/examples/deepcopy-gen/output_tests/wholepkg.Selector",
    ],
)
def test_parse_round_trip(fqn):
    assert str(parse_fully_qualified_name(fqn)) == fqn


def test_extract_comment_tags_collects_values():
    lines = [
        "Human comment",
        "+k8s:deepcopy-gen=package",
        "  +k8s:deepcopy-gen:interfaces=a.B  ",
        "+k8s:deepcopy-gen:interfaces=c.D",
        "",
        "+flag",
    ]
    tags = extract_comment_tags("+", lines)
    assert tags == {
        "k8s:deepcopy-gen": ["package"],
        "k8s:deepcopy-gen:interfaces": ["a.B", "c.D"],
        "flag": [""],
    }


def test_extract_comment_tags_splits_on_first_equals():
    tags = extract_comment_tags("+", ["+k8s:deepcopy-gen=package,register=true"])
    assert tags["k8s:deepcopy-gen"] == ["package,register=true"]


def test_extract_comment_tags_ignores_other_markers():
    assert extract_comment_tags("+", ["// +x=y", "-z"]) == {}


def _builtin(name):
    return Type(name=Name(name=name), kind=Kind.BUILTIN)


def test_builtin_is_assignable():
    assert _builtin("int").is_assignable() is True


def test_alias_of_builtin_is_assignable():
    alias = Type(name=Name("p", "Builtin"), kind=Kind.ALIAS, underlying=_builtin("int"))
    assert alias.is_assignable() is True


def test_struct_assignability_depends_on_members():
    plain = Type(
        name=Name("p", "Plain"),
        kind=Kind.STRUCT,
        members={"X": _builtin("int"), "S": _builtin("string")},
    )
    ptr = Type(kind=Kind.POINTER, elem=_builtin("int"))
    with_pointer = Type(
        name=Name("p", "WithPtr"),
        kind=Kind.STRUCT,
        members={"X": _builtin("int"), "P": ptr},
    )
    nested = Type(name=Name("p", "Nested"), kind=Kind.STRUCT, members={"Inner": plain})
    assert plain.is_assignable() is True
    assert with_pointer.is_assignable() is False
    assert nested.is_assignable() is True


def test_slice_and_map_not_assignable():
    assert Type(kind=Kind.SLICE, elem=_builtin("int")).is_assignable() is False
    assert Type(kind=Kind.MAP, key=_builtin("string"), elem=_builtin("int")).is_assignable() is False


def test_is_anonymous_struct():
    anon = Type(name=Name(name="struct{}"), kind=Kind.STRUCT)
    alias = Type(name=Name("p", "A"), kind=Kind.ALIAS, underlying=anon)
    named = Type(name=Name("p", "Foo"), kind=Kind.STRUCT)
    assert anon.is_anonymous_struct() is True
    assert alias.is_anonymous_struct() is True
    assert named.is_anonymous_struct() is False


def test_universe_lookup():
    foo = Type(name=Name("pkgname", "typename"), kind=Kind.STRUCT)
    universe = Universe()
    universe["pkgname"] = Package(path="pkgname", types={"typename": foo})
    assert universe.type(Name("pkgname", "typename")) is foo
    assert universe.type(Name("pkgname", "other")) is None
    assert universe.type(Name("missing", "typename")) is None


def test_signature_holds_parts():
    target = Type(name=Name("pkgname", "typename"), kind=Kind.STRUCT)
    receiver = Type(kind=Kind.POINTER, elem=target)
    sig = Signature(receiver=receiver, results=[receiver])
    assert sig.receiver.elem is target
    assert sig.parameters == []
    assert len(sig.results) == 1


def test_kind_str_is_value():
    assert str(Kind.STRUCT) == "Struct"
    assert Kind("Pointer") is Kind.POINTER