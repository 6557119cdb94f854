"""Choosing the packages that need deep-copy code and describing their output."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass, field

from .args import GeneratorArgs
from .deepcopy import DeepCopyGenerator, GenerationError
from .model import Type, Universe
from .signatures import copyable_type
from .tags import (
    TAG_ENABLED_NAME,
    TAG_VALUE_PACKAGE,
    TagError,
    extract_enabled_tag,
    extract_enabled_type_tag,
)


@dataclass
class CustomArgs:
    """Arguments specific to the deep-copy generator.

    ``bounding_dirs`` limits the packages whose types are deep-copied; when
    left as None it is filled in with the input packages.
    """

    bounding_dirs: list[str] | None = None


@dataclass
class GeneratedPackage:
    """A package that receives a generated deep-copy file."""

    package_name: str
    package_path: str
    header_text: bytes
    source_package: str
    output_file_base_name: str = ""
    bounding_dirs: list[str] = field(default_factory=list)
    all_types: bool = False
    register_types: bool = False

    def generators(self) -> list[DeepCopyGenerator]:
        """Return fresh generators for this package's output file."""
        return [
            DeepCopyGenerator(
                name=self.output_file_base_name,
                target_package=self.source_package,
                bounding_dirs=list(self.bounding_dirs),
                all_types=self.all_types,
                register_types=self.register_types,
            )
        ]

    def includes(self, t: Type) -> bool:
        """True if ``t`` is declared in the source package."""
        return t.name.package == self.source_package


def build_header(build_tag: str, boilerplate: bytes) -> bytes:
    """Return the build-constraint lines that exclude ``build_tag``, then the boilerplate."""
    constraint = f"//go:build !{build_tag}\n// +build !{build_tag}\n\n"
    return constraint.encode() + boilerplate


def _bounding_dirs(arguments: GeneratorArgs, inputs: list[str]) -> list[str]:
    custom = arguments.custom_args
    if not isinstance(custom, CustomArgs):
        return []
    if custom.bounding_dirs is None:
        custom.bounding_dirs = list(inputs)
    return [d.rstrip("/") for d in custom.bounding_dirs]


def _output_path(package_path: str, source_path: str, output_base: str) -> str:
    # Packages inside a vendor directory are written to their vendored location.
    if source_path.startswith(output_base):
        expanded = source_path[len(output_base):]
        if "/vendor/" in expanded:
            return expanded
    return package_path


def select_packages(
    universe: Universe,
    inputs: list[str],
    arguments: GeneratorArgs,
    boilerplate: bytes,
) -> list[GeneratedPackage]:
    """Return the input packages that need deep-copy functions, in input order.

    Raises TagError for a package tag other than ``package`` and
    GenerationError when types ask for generation but cannot be copied.
    """
    header = build_header(arguments.generated_build_tag, boilerplate)
    bounding = _bounding_dirs(arguments, inputs)
    selected: list[GeneratedPackage] = []

    for path in inputs:
        pkg = universe.get(path)
        if pkg is None:
            continue

        tag = extract_enabled_tag(pkg.comments)
        tag_value = ""
        register = False
        if tag is not None:
            tag_value = tag.value
            if tag_value != TAG_VALUE_PACKAGE:
                raise TagError(
                    f"Package {path}: unsupported {TAG_ENABLED_NAME} value: {tag_value!r}"
                )
            register = tag.register

        whole_package = tag_value == TAG_VALUE_PACKAGE
        needs_generation = whole_package
        if not needs_generation:
            uncopyable: list[str] = []
            for t in pkg.types.values():
                type_tag = extract_enabled_type_tag(t)
                if type_tag is None or type_tag.value != "true":
                    continue
                if copyable_type(t):
                    needs_generation = True
                else:
                    uncopyable.append(str(t))
            if uncopyable:
                raise GenerationError(
                    "Types requested deepcopy generation but are not copyable: "
                    + ", ".join(uncopyable)
                )

        if not needs_generation:
            continue

        selected.append(
            GeneratedPackage(
                package_name=posixpath.basename(pkg.path).split(".")[0],
                package_path=_output_path(
                    pkg.path, pkg.source_path, arguments.output_base
                ),
                header_text=header,
                source_package=pkg.path,
                output_file_base_name=arguments.output_file_base_name,
                bounding_dirs=bounding,
                all_types=whole_package,
                register_types=register,
            )
        )
    return selected