"""Common command-line arguments for code generators."""

from __future__ import annotations

import argparse
import csv
import datetime
import os
import sys
from dataclasses import dataclass, field
from typing import Any

BOILERPLATE_RELATIVE_PATH = "k8s.io/gengo/boilerplate/boilerplate.go.txt"
DEFAULT_BUILD_TAG = "ignore_autogenerated"
DEFAULT_GENERATED_BY_TEMPLATE = "// Code generated by GENERATOR_NAME. DO NOT EDIT."


def default_source_tree() -> str:
    """Return the src directory of the first GOPATH entry, or ``./`` if unset."""
    first = os.environ.get("GOPATH", "").split(os.pathsep)[0]
    if first:
        return os.path.join(first, "src")
    return "./"


@dataclass
class GeneratorArgs:
    """Arguments passed to generators."""

    input_dirs: list[str] = field(default_factory=list)
    output_base: str = ""
    output_package_path: str = ""
    output_file_base_name: str = ""
    go_header_file_path: str = ""
    generated_by_comment_template: str = ""
    verify_only: bool = False
    include_test_files: bool = False
    generated_build_tag: str = ""
    custom_args: Any = None
    trim_path_prefix: str = ""
    default_command_line_flags: bool = False

    def without_default_flag_parsing(self) -> GeneratorArgs:
        """Disable implicit command-line parsing and return self."""
        self.default_command_line_flags = False
        return self

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        """Register the common flags on ``parser``, binding them to this object."""
        parser.add_argument(
            "-i", "--input-dirs",
            action=_BindList, target=self, attr="input_dirs",
            metavar="DIRS",
            help="Comma-separated list of import paths to get input types from.",
        )
        parser.add_argument(
            "-o", "--output-base",
            action=_Bind, target=self, attr="output_base",
            help="Output base; defaults to $GOPATH/src/ or ./ if $GOPATH is not set.",
        )
        parser.add_argument(
            "-p", "--output-package",
            action=_Bind, target=self, attr="output_package_path",
            help="Base package path.",
        )
        parser.add_argument(
            "-O", "--output-file-base",
            action=_Bind, target=self, attr="output_file_base_name",
            help="Base name (without .go suffix) for output files.",
        )
        header_help = (
            "File containing boilerplate header text. "
            "The string YEAR will be replaced with the current 4-digit year."
        )
        try:
            parser.add_argument(
                "-h", "--go-header-file",
                action=_Bind, target=self, attr="go_header_file_path",
                help=header_help,
            )
        except argparse.ArgumentError:
            # -h is already taken by the parser's help option.
            parser.add_argument(
                "--go-header-file",
                action=_Bind, target=self, attr="go_header_file_path",
                help=header_help,
            )
        parser.add_argument(
            "--verify-only",
            action=_BindTrue, target=self, attr="verify_only",
            help="If true, only verify existing output, do not write anything.",
        )
        parser.add_argument(
            "--build-tag",
            action=_Bind, target=self, attr="generated_build_tag",
            help="A build tag to use to identify files generated by this command. "
            "Should be unique.",
        )
        parser.add_argument(
            "--trim-path-prefix",
            action=_Bind, target=self, attr="trim_path_prefix",
            help="If set, trim the specified prefix from --output-package "
            "when generating files.",
        )

    def load_boilerplate(self, generator_name: str | None = None) -> bytes:
        """Read the header file, fill in the year and append the generated-by line.

        ``generator_name`` defaults to the name of the running program; any
        extension is stripped from it.
        """
        with open(self.go_header_file_path, "rb") as fh:
            text = fh.read()
        year = str(datetime.datetime.now(datetime.timezone.utc).year)
        text = text.replace(b"YEAR", year.encode())

        if self.generated_by_comment_template:
            if text:
                text += b"\n"
            name = os.path.basename(
                generator_name if generator_name is not None else sys.argv[0]
            )
            dot = name.rfind(".")
            if dot >= 0:
                name = name[:dot]
            comment = self.generated_by_comment_template.replace("GENERATOR_NAME", name)
            text += f"{comment}\n\n".encode()
        return text


def default_args() -> GeneratorArgs:
    """Return arguments with the standard defaults filled in."""
    tree = default_source_tree()
    return GeneratorArgs(
        output_base=tree,
        go_header_file_path=os.path.join(tree, BOILERPLATE_RELATIVE_PATH),
        generated_build_tag=DEFAULT_BUILD_TAG,
        generated_by_comment_template=DEFAULT_GENERATED_BY_TEMPLATE,
        default_command_line_flags=True,
    )


class _Bind(argparse.Action):
    """Store the value on a target object as well as on the namespace."""

    def __init__(self, option_strings, dest, target, attr, **kwargs):
        self.target = target
        self.attr = attr
        kwargs.setdefault("default", getattr(target, attr))
        super().__init__(option_strings, dest, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        setattr(self.target, self.attr, values)
        setattr(namespace, self.dest, values)


class _BindTrue(_Bind):
    def __init__(self, option_strings, dest, target, attr, **kwargs):
        super().__init__(option_strings, dest, target, attr, nargs=0, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        super().__call__(parser, namespace, True, option_string)


class _BindList(_Bind):
    """Comma-separated list: the first use replaces the default, later ones append."""

    def __init__(self, option_strings, dest, target, attr, **kwargs):
        super().__init__(option_strings, dest, target, attr, **kwargs)
        self.default = list(self.default or [])
        self._changed = False

    def __call__(self, parser, namespace, values, option_string=None):
        items = next(csv.reader([values])) if values else []
        if self._changed:
            items = [*getattr(self.target, self.attr), *items]
        self._changed = True
        super().__call__(parser, namespace, items, option_string)