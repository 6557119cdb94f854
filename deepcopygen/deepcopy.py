"""Generation of DeepCopy, DeepCopyInto and DeepCopy<Interface> functions."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from .model import Kind, Type, Universe, parse_fully_qualified_name
from .naming import ImportTracker, raw_name
from .signatures import (
    copyable_type,
    deep_copy_into_method,
    deep_copy_method,
    is_reference,
    underlying_type,
)
from .tags import (
    INTERFACES_TAG_NAME,
    TAG_ENABLED_NAME,
    extract_enabled_type_tag,
    extract_interfaces_tag,
    extract_nonpointer_interfaces,
)

_EMPTY_INTERFACE = "interface{}"


class GenerationError(ValueError):
    """Deep-copy code cannot be generated for a type."""


def _empty_interface_error(name: str) -> GenerationError:
    return GenerationError(
        f"DeepCopy of {name!r} is unsupported. Instead, use named interfaces "
        "with DeepCopy<named-interface> as one of the methods."
    )


def _has_custom_copy(t: Type) -> bool:
    return deep_copy_method(t) is not None or deep_copy_into_method(t) is not None


def _right_pointer(t: Type) -> bool:
    """Whether the copy produced for ``t`` by its custom methods is a pointer."""
    dc = deep_copy_method(t)
    if dc is not None:
        return dc.results[0].kind is Kind.POINTER
    return not is_reference(t)


@dataclass
class DeepCopyGenerator:
    """Produces the deep-copy functions of one target package."""

    name: str
    target_package: str
    bounding_dirs: list[str] = field(default_factory=list)
    all_types: bool = False
    register_types: bool = False
    import_tracker: ImportTracker = field(default_factory=ImportTracker)
    types_for_init: list[Type] = field(default_factory=list)

    def filter(self, t: Type) -> bool:
        """Return whether functions are generated for ``t``, remembering it if so."""
        enabled = self.all_types
        if not enabled:
            tag = extract_enabled_type_tag(t)
            enabled = tag is not None and tag.value == "true"
        if not enabled or not copyable_type(t):
            return False
        self.types_for_init.append(t)
        return True

    def _is_other_package(self, line: str) -> bool:
        if line == self.target_package:
            return False
        return not line.endswith(f'"{self.target_package}"')

    def imports(self) -> list[str]:
        """Return the import lines needed by the generated code."""
        return [
            line
            for line in self.import_tracker.import_lines()
            if self._is_other_package(line)
        ]

    def needs_generation(self, t: Type) -> bool:
        """Return whether the tags of ``t`` ask for generation."""
        tag = extract_enabled_type_tag(t)
        value = ""
        if tag is not None:
            value = tag.value
            if value not in ("true", "false"):
                raise GenerationError(
                    f"Type {t}: unsupported {TAG_ENABLED_NAME} value: {value!r}"
                )
        if self.all_types and value == "false":
            return False
        if not self.all_types and value != "true":
            return False
        return True

    def _raw(self, t: Type) -> str:
        return raw_name(t, self.target_package, self.import_tracker)

    def _tagged_interfaces(self, t: Type, universe: Universe) -> list[Type]:
        if t.kind is not Kind.STRUCT:
            return []
        found = []
        for intf in extract_interfaces_tag(t):
            name = parse_fully_qualified_name(intf)
            intf_type = universe.type(name)
            if intf_type is None:
                raise GenerationError(
                    f"unknown type {intf!r} in {INTERFACES_TAG_NAME} tag of type {t}"
                )
            if intf_type.kind is not Kind.INTERFACE:
                raise GenerationError(
                    f"type {intf!r} in {INTERFACES_TAG_NAME} tag of type {t} "
                    f"is not an interface, but: {str(intf_type.kind)!r}"
                )
            self.import_tracker.add_type(intf_type)
            found.append(intf_type)
        return found

    def _deep_copyable_interfaces(
        self, t: Type, universe: Universe
    ) -> tuple[list[Type], bool]:
        unique = {str(intf): intf for intf in self._tagged_interfaces(t, universe)}
        ordered = [unique[key] for key in sorted(unique)]
        return ordered, extract_nonpointer_interfaces(t)

    def generate_type(self, t: Type, universe: Universe) -> str:
        """Return the generated functions for ``t``, or "" if none are wanted."""
        if not self.needs_generation(t):
            return ""
        out: list[str] = []
        raw = self._raw(t)
        reference = is_reference(t)

        if deep_copy_into_method(t) is None:
            out.append(
                "// DeepCopyInto is an autogenerated deepcopy function, copying the "
                "receiver, writing into out. in must be non-nil.\n"
            )
            if reference:
                out.append(f"func (in {raw}) DeepCopyInto(out *{raw}) {{\n")
                out.append("{in:=&in\n")
            else:
                out.append(f"func (in *{raw}) DeepCopyInto(out *{raw}) {{\n")
            if deep_copy_method(t) is not None:
                receiver = t.methods["DeepCopy"].signature.receiver
                if receiver is not None and receiver.kind is Kind.POINTER:
                    out.append("clone := in.DeepCopy()\n")
                    out.append("*out = *clone\n")
                else:
                    out.append("*out = in.DeepCopy()\n")
            else:
                self._generate_for(t, out)
            out.append("return\n")
            if reference:
                out.append("}\n")
            out.append("}\n\n")

        if deep_copy_method(t) is None:
            out.append(
                "// DeepCopy is an autogenerated deepcopy function, copying the "
                f"receiver, creating a new {raw}.\n"
            )
            if reference:
                out.append(f"func (in {raw}) DeepCopy() {raw} {{\n")
            else:
                out.append(f"func (in *{raw}) DeepCopy() *{raw} {{\n")
            out.append("if in == nil { return nil }\n")
            out.append(f"out := new({raw})\n")
            out.append("in.DeepCopyInto(out)\n")
            out.append("return *out\n" if reference else "return out\n")
            out.append("}\n\n")

        interfaces, non_pointer = self._deep_copyable_interfaces(t, universe)
        for intf in interfaces:
            short = intf.name.name
            intf_raw = self._raw(intf)
            out.append(
                f"// DeepCopy{short} is an autogenerated deepcopy function, copying "
                f"the receiver, creating a new {intf_raw}.\n"
            )
            if non_pointer:
                out.append(f"func (in {raw}) DeepCopy{short}() {intf_raw} {{\n")
                out.append("return *in.DeepCopy()")
                out.append("}\n\n")
            else:
                out.append(f"func (in *{raw}) DeepCopy{short}() {intf_raw} {{\n")
                out.append("if c := in.DeepCopy(); c != nil {\n")
                out.append("return c\n")
                out.append("}\n")
                out.append("return nil\n")
                out.append("}\n\n")
        return "".join(out)

    def _generate_for(self, t: Type, out: list[str]) -> None:
        ut = underlying_type(t)
        handlers: dict[Kind, Callable[[Type, list[str]], None]] = {
            Kind.BUILTIN: self._do_builtin,
            Kind.MAP: self._do_map,
            Kind.SLICE: self._do_slice,
            Kind.STRUCT: self._do_struct,
            Kind.POINTER: self._do_pointer,
        }
        if ut.kind is Kind.INTERFACE:
            raise GenerationError(
                f"Hit an interface type {t}. This should never happen."
            )
        if ut.kind is Kind.ALIAS:
            raise GenerationError(f"Hit an alias type {t}. This should never happen.")
        handler = handlers.get(ut.kind)
        if handler is None:
            raise GenerationError(f"Hit an unsupported type {t}.")
        handler(t, out)

    def _do_builtin(self, t: Type, out: list[str]) -> None:
        if _has_custom_copy(t):
            out.append("*out = in.DeepCopy()\n")
        else:
            out.append("*out = *in\n")

    def _do_map(self, t: Type, out: list[str]) -> None:
        ut = underlying_type(t)
        elem = ut.elem
        uet = underlying_type(elem)

        if _has_custom_copy(t):
            out.append("*out = in.DeepCopy()\n")
            return
        if ut.key is None or not ut.key.is_assignable():
            raise GenerationError(f"Hit an unsupported type {uet} for: {t}")

        out.append(f"*out = make({self._raw(t)}, len(*in))\n")
        out.append("for key, val := range *in {\n")
        if _has_custom_copy(elem):
            left_pointer = elem.kind is Kind.POINTER
            right_pointer = _right_pointer(elem)
            if left_pointer == right_pointer:
                out.append("(*out)[key] = val.DeepCopy()\n")
            elif left_pointer:
                out.append("x := val.DeepCopy()\n")
                out.append("(*out)[key] = &x\n")
            else:
                out.append("(*out)[key] = *val.DeepCopy()\n")
        elif elem.is_anonymous_struct() or uet.is_assignable():
            out.append("(*out)[key] = val\n")
        elif uet.kind is Kind.INTERFACE:
            if uet.name.name == _EMPTY_INTERFACE:
                raise _empty_interface_error(uet.name.name)
            out.append("if val == nil {(*out)[key]=nil} else {\n")
            out.append(f"(*out)[key] = val.DeepCopy{uet.name.name}()\n")
            out.append("}\n")
        elif uet.kind in (Kind.SLICE, Kind.MAP, Kind.POINTER):
            out.append(f"var outVal {self._raw(uet)}\n")
            out.append("if val == nil { (*out)[key] = nil } else {\n")
            out.append("in, out := &val, &outVal\n")
            self._generate_for(elem, out)
            out.append("}\n")
            out.append("(*out)[key] = outVal\n")
        elif uet.kind is Kind.STRUCT:
            out.append("(*out)[key] = *val.DeepCopy()\n")
        else:
            raise GenerationError(f"Hit an unsupported type {uet} for {t}")
        out.append("}\n")

    def _do_slice(self, t: Type, out: list[str]) -> None:
        ut = underlying_type(t)
        elem = ut.elem
        uet = underlying_type(elem)

        if _has_custom_copy(t):
            out.append("*out = in.DeepCopy()\n")
            return

        out.append(f"*out = make({self._raw(t)}, len(*in))\n")
        if _has_custom_copy(elem):
            out.append("for i := range *in {\n")
            out.append("(*in)[i].DeepCopyInto(&(*out)[i])\n")
            out.append("}\n")
            return
        if uet.kind is Kind.BUILTIN or uet.is_assignable():
            out.append("copy(*out, *in)\n")
            return

        out.append("for i := range *in {\n")
        if uet.kind in (Kind.SLICE, Kind.MAP, Kind.POINTER):
            out.append("if (*in)[i] != nil {\n")
            out.append("in, out := &(*in)[i], &(*out)[i]\n")
            self._generate_for(elem, out)
            out.append("}\n")
        elif uet.kind is Kind.INTERFACE:
            if uet.name.name == _EMPTY_INTERFACE:
                raise _empty_interface_error(uet.name.name)
            out.append("if (*in)[i] != nil {\n")
            out.append(f"(*out)[i] = (*in)[i].DeepCopy{uet.name.name}()\n")
            out.append("}\n")
        elif uet.kind is Kind.STRUCT:
            out.append("(*in)[i].DeepCopyInto(&(*out)[i])\n")
        else:
            raise GenerationError(f"Hit an unsupported type {uet} for {t}")
        out.append("}\n")

    def _do_struct(self, t: Type, out: list[str]) -> None:
        ut = underlying_type(t)

        if _has_custom_copy(t):
            out.append("*out = in.DeepCopy()\n")
            return

        out.append("*out = *in\n")
        for name, ft in ut.members.items():
            uft = underlying_type(ft)
            if _has_custom_copy(ft):
                left_pointer = ft.kind is Kind.POINTER
                right_pointer = _right_pointer(ft)
                if left_pointer == right_pointer:
                    out.append(f"out.{name} = in.{name}.DeepCopy()\n")
                elif left_pointer:
                    out.append(f"x := in.{name}.DeepCopy()\n")
                    out.append(f"out.{name} = &x\n")
                else:
                    out.append(f"in.{name}.DeepCopyInto(&out.{name})\n")
            elif uft.kind is Kind.BUILTIN:
                continue
            elif uft.kind in (Kind.MAP, Kind.SLICE, Kind.POINTER):
                out.append(f"if in.{name} != nil {{\n")
                out.append(f"in, out := &in.{name}, &out.{name}\n")
                self._generate_for(ft, out)
                out.append("}\n")
            elif uft.kind is Kind.ARRAY:
                out.append(f"out.{name} = in.{name}\n")
            elif uft.kind is Kind.STRUCT:
                if ft.is_assignable():
                    out.append(f"out.{name} = in.{name}\n")
                else:
                    out.append(f"in.{name}.DeepCopyInto(&out.{name})\n")
            elif uft.kind is Kind.INTERFACE:
                if uft.name.name == _EMPTY_INTERFACE:
                    raise _empty_interface_error(uft.name.name)
                out.append(f"if in.{name} != nil {{\n")
                out.append(f"out.{name} = in.{name}.DeepCopy{uft.name.name}()\n")
                out.append("}\n")
            else:
                raise GenerationError(
                    f"Hit an unsupported type {uft} for {ft}, from {t}"
                )

    def _do_pointer(self, t: Type, out: list[str]) -> None:
        ut = underlying_type(t)
        elem = ut.elem
        uet = underlying_type(elem)

        if _has_custom_copy(elem):
            if _right_pointer(elem):
                out.append("*out = (*in).DeepCopy()\n")
            else:
                out.append("x := (*in).DeepCopy()\n")
                out.append("*out = &x\n")
        elif uet.is_assignable():
            out.append(f"*out = new({self._raw(elem)})\n")
            out.append("**out = **in")
        elif uet.kind in (Kind.MAP, Kind.SLICE, Kind.POINTER):
            out.append(f"*out = new({self._raw(elem)})\n")
            out.append("if **in != nil {\n")
            out.append("in, out := *in, *out\n")
            self._generate_for(uet, out)
            out.append("}\n")
        elif uet.kind is Kind.STRUCT:
            out.append(f"*out = new({self._raw(elem)})\n")
            out.append("(*in).DeepCopyInto(*out)\n")
        else:
            raise GenerationError(f"Hit an unsupported type {uet} for {t}")