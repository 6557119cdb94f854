from deepcopygen.model import Kind, Name, Type
from deepcopygen.naming import ImportTracker, public_name, raw_name

OTHER = "k8s.io/gengo/examples/deepcopy-gen/output_tests/otherpkg"
WHOLE = "k8s.io/gengo/examples/deepcopy-gen/output_tests/wholepkg"


def named(package, name, kind=Kind.STRUCT):
    return Type(name=Name(package=package, name=name), kind=kind)


def builtin(name):
    return Type(name=Name(name=name), kind=Kind.BUILTIN)


def test_local_type_is_unqualified_and_not_imported():
    tracker = ImportTracker()
    t = named(WHOLE, "Struct_B")
    assert raw_name(t, WHOLE, tracker) == "Struct_B"
    assert tracker.import_lines() == []


def test_other_package_type_is_qualified_and_imported():
    tracker = ImportTracker()
    t = named(OTHER, "Object", Kind.INTERFACE)
    name = raw_name(t, WHOLE, tracker)
    qualifier, _, short = name.partition(".")
    assert short == "Object"
    lines = tracker.import_lines()
    assert len(lines) == 1
    assert lines[0] == f'{qualifier} "{OTHER}"'


def test_composite_raw_name():
    tracker = ImportTracker()
    obj = named(OTHER, "Object", Kind.INTERFACE)
    ptr = Type(kind=Kind.POINTER, elem=obj)
    m = Type(kind=Kind.MAP, key=builtin("string"), elem=ptr)
    assert raw_name(m, WHOLE, tracker) == "map[string]*otherpkg.Object"
    assert tracker.import_lines() == [f'otherpkg "{OTHER}"']


def test_slice_and_pointer_prefixes():
    elem = builtin("int")
    assert raw_name(Type(kind=Kind.SLICE, elem=elem)) == "[]int"
    assert raw_name(Type(kind=Kind.POINTER, elem=elem)) == "*int"


def test_array_keeps_length_from_name():
    arr = Type(name=Name(name="[3]int"), kind=Kind.ARRAY, elem=builtin("int"))
    assert raw_name(arr) == "[3]int"


def test_colliding_package_names_get_distinct_local_names():
    tracker = ImportTracker()
    first = raw_name(named("a.com/x/api", "T"), WHOLE, tracker)
    second = raw_name(named("b.com/y/api", "T"), WHOLE, tracker)
    q1 = first.split(".")[0]
    q2 = second.split(".")[0]
    assert q1 != q2
    lines = tracker.import_lines()
    assert len(lines) == 2
    assert lines[0].endswith('"a.com/x/api"')
    assert lines[1].endswith('"b.com/y/api"')


def test_add_type_is_idempotent_and_stable():
    tracker = ImportTracker()
    t = named(OTHER, "List", Kind.INTERFACE)
    tracker.add_type(t)
    before = tracker.import_lines()
    tracker.add_type(Type(kind=Kind.SLICE, elem=t))
    tracker.add_type(t)
    assert tracker.import_lines() == before
    assert raw_name(t, WHOLE, tracker) == before[0].split(" ")[0] + ".List"


def test_import_lines_are_sorted_by_path():
    tracker = ImportTracker()
    tracker.add_type(named("z.io/last", "A"))
    tracker.add_type(named("a.io/first", "B"))
    paths = [line.split(" ", 1)[1] for line in tracker.import_lines()]
    assert paths == sorted(paths)


def test_public_name_of_named_type():
    assert public_name(named(WHOLE, "Struct_B")) == "wholepkg_Struct_B"


def test_public_name_of_builtin_is_its_name():
    assert public_name(builtin("string")) == "string"


def test_public_names_distinguish_composites():
    elem = named(WHOLE, "Struct_B")
    ptr = public_name(Type(kind=Kind.POINTER, elem=elem))
    sl = public_name(Type(kind=Kind.SLICE, elem=elem))
    assert ptr != sl
    assert ptr.endswith(public_name(elem))
    assert sl.endswith(public_name(elem))