"""Checks on hand-written deep-copy methods and on which types can be copied."""

from __future__ import annotations

from .model import Kind, Signature, Type
from .tags import extract_enabled_type_tag


class SignatureError(ValueError):
    """A hand-written DeepCopy or DeepCopyInto method has the wrong signature."""


def _is_private_name(name: str) -> bool:
    return not name or name[0].lower() == name[0]


def _points_to(candidate: Type | None, t: Type) -> bool:
    return (
        candidate is not None
        and candidate.kind is Kind.POINTER
        and candidate.elem is not None
        and candidate.elem.name == t.name
    )


def _names(candidate: Type | None, t: Type) -> bool:
    return candidate is not None and candidate.name == t.name


def deep_copy_method(t: Type) -> Signature | None:
    """Return the signature of the type's DeepCopy method, or None if it has none.

    The accepted forms are ``func (t T) DeepCopy() T`` and
    ``func (t *T) DeepCopy() *T``; anything else raises SignatureError.
    """
    method = t.methods.get("DeepCopy")
    if method is None:
        return None
    sig = method.signature or Signature()
    short = t.name.name
    if sig.parameters:
        raise SignatureError(
            f"type {t}: invalid DeepCopy signature, expected no parameters"
        )
    if len(sig.results) != 1:
        raise SignatureError(
            f"type {t}: invalid DeepCopy signature, expected exactly one result"
        )

    result = sig.results[0]
    ptr_result = _points_to(result, t)
    non_ptr_result = _names(result, t)
    if not ptr_result and not non_ptr_result:
        raise SignatureError(
            f"type {t}: invalid DeepCopy signature, "
            f"expected to return {short} or *{short}"
        )

    ptr_receiver = _points_to(sig.receiver, t)
    non_ptr_receiver = _names(sig.receiver, t)
    if ptr_receiver and not ptr_result:
        raise SignatureError(
            f"type {t}: invalid DeepCopy signature, "
            f"expected a *{short} result for a *{short} receiver"
        )
    if non_ptr_receiver and not non_ptr_result:
        raise SignatureError(
            f"type {t}: invalid DeepCopy signature, "
            f"expected a {short} result for a {short} receiver"
        )
    return sig


def deep_copy_into_method(t: Type) -> Signature | None:
    """Return the signature of the type's DeepCopyInto method, or None if it has none.

    The accepted forms are ``func (t T) DeepCopyInto(*T)`` and
    ``func (t *T) DeepCopyInto(*T)``; anything else raises SignatureError.
    """
    method = t.methods.get("DeepCopyInto")
    if method is None:
        return None
    sig = method.signature or Signature()
    short = t.name.name
    if len(sig.parameters) != 1:
        raise SignatureError(
            f"type {t}: invalid DeepCopy signature, expected exactly one parameter"
        )
    if sig.results:
        raise SignatureError(
            f"type {t}: invalid DeepCopy signature, expected no result type"
        )
    if not _points_to(sig.parameters[0], t):
        raise SignatureError(
            f"type {t}: invalid DeepCopy signature, expected parameter of type *{short}"
        )
    if not _points_to(sig.receiver, t) and not _names(sig.receiver, t):
        raise SignatureError(
            f"type {t}: invalid DeepCopy signature, "
            f"expected a receiver of type {short} or *{short}"
        )
    return sig


def is_rooted_under(pkg: str, roots: list[str] | None) -> bool:
    """True if ``pkg`` is one of ``roots`` or lies below one of them."""
    pkg = pkg + "/"
    return any(pkg.startswith(root + "/") for root in roots or ())


def copyable_type(t: Type) -> bool:
    """True if deep-copy functions can be generated for ``t``."""
    tag = extract_enabled_type_tag(t)
    if tag is not None and tag.value == "false":
        return False
    if _is_private_name(t.name.name):
        return False
    if t.kind is Kind.ALIAS:
        if deep_copy_method(t) is not None or deep_copy_into_method(t) is not None:
            return True
        underlying = t.underlying
        if underlying is None:
            return False
        return underlying.kind is not Kind.BUILTIN or copyable_type(underlying)
    return t.kind is Kind.STRUCT


def underlying_type(t: Type) -> Type:
    """Follow aliases down to the type they finally stand for."""
    while t.kind is Kind.ALIAS and t.underlying is not None:
        t = t.underlying
    return t


def is_reference(t: Type) -> bool:
    """True for pointers, maps, slices and aliases of those."""
    if t.kind in (Kind.POINTER, Kind.MAP, Kind.SLICE):
        return True
    return t.kind is Kind.ALIAS and is_reference(underlying_type(t))