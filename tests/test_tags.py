import pytest

from deepcopygen.model import Kind, Name, Type
from deepcopygen.tags import (
    EnabledTagValue,
    TagError,
    extract_enabled_tag,
    extract_enabled_type_tag,
    extract_interfaces_tag,
    extract_nonpointer_interfaces,
)


@pytest.mark.parametrize(
    "comments, expect",
    [
        (["Human comment"], None),
        (["Human comment", "+k8s:deepcopy-gen"], EnabledTagValue("", False)),
        (["Human comment", "+k8s:deepcopy-gen=package"], EnabledTagValue("package", False)),
        (
            ["Human comment", "+k8s:deepcopy-gen=package,register"],
            EnabledTagValue("package", True),
        ),
        (
            ["Human comment", "+k8s:deepcopy-gen=package,register=true"],
            EnabledTagValue("package", True),
        ),
        (
            ["Human comment", "+k8s:deepcopy-gen=package,register=false"],
            EnabledTagValue("package", False),
        ),
    ],
)
def test_extract_enabled_tag(comments, expect):
    assert extract_enabled_tag(comments) == expect


def test_extract_enabled_tag_rejects_multiple():
    with pytest.raises(TagError):
        extract_enabled_tag(["+k8s:deepcopy-gen=true", "+k8s:deepcopy-gen=false"])


def test_extract_enabled_tag_rejects_unknown_param():
    with pytest.raises(TagError):
        extract_enabled_tag(["+k8s:deepcopy-gen=package,bogus"])


def test_extract_enabled_type_tag_reads_both_comment_blocks():
    t = Type(
        name=Name("pkgname", "typename"),
        kind=Kind.STRUCT,
        second_closest_comment_lines=["+k8s:deepcopy-gen=false"],
    )
    assert extract_enabled_type_tag(t) == EnabledTagValue("false", False)


@pytest.mark.parametrize(
    "comments, second_comments, expect",
    [
        ([], [], []),
        (
            ["+k8s:deepcopy-gen:interfaces=k8s.io/kubernetes/runtime.Object"],
            [],
            ["k8s.io/kubernetes/runtime.Object"],
        ),
        (
            [
                "+k8s:deepcopy-gen:interfaces=k8s.io/kubernetes/runtime.Object",
                "+k8s:deepcopy-gen:interfaces=k8s.io/kubernetes/runtime.List",
            ],
            [],
            ["k8s.io/kubernetes/runtime.Object", "k8s.io/kubernetes/runtime.List"],
        ),
        (
            [
                "+k8s:deepcopy-gen:interfaces=k8s.io/kubernetes/runtime.Object",
                "+k8s:deepcopy-gen:interfaces=k8s.io/kubernetes/runtime.Object",
            ],
            [],
            ["k8s.io/kubernetes/runtime.Object", "k8s.io/kubernetes/runtime.Object"],
        ),
        (
            [],
            ["+k8s:deepcopy-gen:interfaces=k8s.io/kubernetes/runtime.Object"],
            ["k8s.io/kubernetes/runtime.Object"],
        ),
        (
            ["+k8s:deepcopy-gen:interfaces=k8s.io/kubernetes/runtime.Object"],
            ["+k8s:deepcopy-gen:interfaces=k8s.io/kubernetes/runtime.List"],
            ["k8s.io/kubernetes/runtime.List", "k8s.io/kubernetes/runtime.Object"],
        ),
        (
            ["+k8s:deepcopy-gen:interfaces=k8s.io/kubernetes/runtime.Object"],
            ["+k8s:deepcopy-gen:interfaces=k8s.io/kubernetes/runtime.Object"],
            ["k8s.io/kubernetes/runtime.Object", "k8s.io/kubernetes/runtime.Object"],
        ),
    ],
)
def test_extract_interfaces_tag(comments, second_comments, expect):
    t = Type(comment_lines=comments, second_closest_comment_lines=second_comments)
    assert extract_interfaces_tag(t) == expect


def test_extract_interfaces_tag_splits_commas_and_drops_empty():
    t = Type(
        comment_lines=[
            "+k8s:deepcopy-gen:interfaces=k8s.io/kubernetes/runtime.Object,,k8s.io/kubernetes/runtime.List",
            "+k8s:deepcopy-gen:interfaces=",
        ]
    )
    assert extract_interfaces_tag(t) == [
        "k8s.io/kubernetes/runtime.Object",
        "k8s.io/kubernetes/runtime.List",
    ]


def test_nonpointer_interfaces_absent():
    assert extract_nonpointer_interfaces(Type()) is False


def test_nonpointer_interfaces_true():
    t = Type(comment_lines=["+k8s:deepcopy-gen:nonpointer-interfaces=true"])
    assert extract_nonpointer_interfaces(t) is True


def test_nonpointer_interfaces_false_value():
    t = Type(comment_lines=["+k8s:deepcopy-gen:nonpointer-interfaces=false"])
    assert extract_nonpointer_interfaces(t) is False


def test_nonpointer_interfaces_contradiction():
    t = Type(
        comment_lines=[
            "+k8s:deepcopy-gen:nonpointer-interfaces=true",
            "+k8s:deepcopy-gen:nonpointer-interfaces=false",
        ]
    )
    with pytest.raises(TagError):
        extract_nonpointer_interfaces(t)