"""Reading the deep-copy comment tags of packages and types."""

from __future__ import annotations

from dataclasses import dataclass

from .model import Type, extract_comment_tags

TAG_ENABLED_NAME = "k8s:deepcopy-gen"
INTERFACES_TAG_NAME = TAG_ENABLED_NAME + ":interfaces"
INTERFACES_NONPOINTER_TAG_NAME = TAG_ENABLED_NAME + ":nonpointer-interfaces"
TAG_VALUE_PACKAGE = "package"


class TagError(ValueError):
    """A deep-copy comment tag is malformed or contradictory."""


@dataclass(frozen=True)
class EnabledTagValue:
    """Parameters of the enabling tag."""

    value: str = ""
    register: bool = False


def _type_comments(t: Type) -> list[str]:
    return [*t.second_closest_comment_lines, *t.comment_lines]


def extract_enabled_tag(comments: list[str]) -> EnabledTagValue | None:
    """Parse the enabling tag from comment lines, or return None if absent."""
    values = extract_comment_tags("+", comments).get(TAG_ENABLED_NAME)
    if values is None:
        return None
    if len(values) > 1:
        raise TagError(f"Found {len(values)} {TAG_ENABLED_NAME} tags: {values!r}")

    primary, *extras = values[0].split(",")
    register = False
    for part in extras:
        key, _, value = part.partition("=")
        if key != "register":
            raise TagError(f"Unsupported {TAG_ENABLED_NAME} param: {part!r}")
        if value != "false":
            register = True
    return EnabledTagValue(value=primary, register=register)


def extract_enabled_type_tag(t: Type) -> EnabledTagValue | None:
    """Parse the enabling tag from a type's comments."""
    return extract_enabled_tag(_type_comments(t))


def extract_interfaces_tag(t: Type) -> list[str]:
    """Return the interface names named in a type's interfaces tags, in order."""
    values = extract_comment_tags("+", _type_comments(t)).get(INTERFACES_TAG_NAME, [])
    return [intf for value in values for intf in value.split(",") if intf]


def extract_nonpointer_interfaces(t: Type) -> bool:
    """Return whether interface copies should use a non-pointer receiver."""
    values = extract_comment_tags("+", _type_comments(t)).get(
        INTERFACES_NONPOINTER_TAG_NAME, []
    )
    if not values:
        return False
    result = values[0] == "true"
    for value in values:
        if (value == "true") != result:
            raise TagError(
                f"contradicting {INTERFACES_NONPOINTER_TAG_NAME} value {value!r} "
                f"found to previous value {str(result).lower()}"
            )
    return result