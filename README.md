# deepcopygen

`deepcopygen` writes deep-copy functions for Go types. You describe the types
with a small type model, and the generator returns the source text of
`DeepCopyInto`, `DeepCopy` and `DeepCopy<Interface>` methods for each type that
asks for them.

## Choosing types with comment tags

Comment tags on packages and types control what is generated:

- `+k8s:deepcopy-gen=package` on a package generates for every copyable type in it.
- `+k8s:deepcopy-gen=true` on a type opts that type in.
- `+k8s:deepcopy-gen=false` on a type opts it out.
- `+k8s:deepcopy-gen=package,register` also sets the `register` flag.
- `+k8s:deepcopy-gen:interfaces=<pkg>.<Interface>` adds a `DeepCopy<Interface>` method.
- `+k8s:deepcopy-gen:nonpointer-interfaces=true` puts those methods on the value receiver.

```python
from deepcopygen.tags import extract_enabled_tag

tag = extract_enabled_tag(["Human comment", "+k8s:deepcopy-gen=package,register"])
print(tag.value, tag.register)   # package True
```

Unsupported tag parameters, more than one enabling tag, or contradicting
`nonpointer-interfaces` values raise `deepcopygen.tags.TagError`.

## Generating code for a type

```python
from deepcopygen.deepcopy import DeepCopyGenerator
from deepcopygen.model import Kind, Name, Type, Universe

string = Type(name=Name(name="string"), kind=Kind.BUILTIN)
foo = Type(
    name=Name(package="example.com/pkg", name="Foo"),
    kind=Kind.STRUCT,
    members={"Name": string, "Nick": Type(kind=Kind.POINTER, elem=string)},
)

gen = DeepCopyGenerator(name="zz_generated", target_package="example.com/pkg", all_types=True)
code = gen.generate_type(foo, Universe())   # Go source text
imports = gen.imports()                     # import lines the code needs
```

`generate_type` returns an empty string for types whose tags do not ask for
generation, and raises `deepcopygen.deepcopy.GenerationError` for types that
cannot be copied (for example fields of type `interface{}`) or for interface
tags that name unknown or non-interface types in the `Universe`.

## Modules

- `deepcopygen.model`: the type model (`Kind`, `Name`, `Signature`, `Type`,
  `Package`, `Universe`), plus `parse_fully_qualified_name` and
  `extract_comment_tags`.
- `deepcopygen.tags`: `extract_enabled_tag`, `extract_enabled_type_tag`,
  `extract_interfaces_tag` and `extract_nonpointer_interfaces`.
- `deepcopygen.signatures`: checks of hand-written `DeepCopy` /
  `DeepCopyInto` methods (`deep_copy_method`, `deep_copy_into_method`, which
  raise `SignatureError` for wrong signatures), `copyable_type`,
  `is_reference`, `underlying_type` and `is_rooted_under`.
- `deepcopygen.naming`: `raw_name`, `public_name` and an `ImportTracker` that
  assigns local names to imported packages and lists their import lines.
- `deepcopygen.deepcopy`: `DeepCopyGenerator`, with `filter`,
  `needs_generation`, `generate_type` and `imports`.
- `deepcopygen.packages`: `select_packages` picks the input packages of a
  `Universe` that need generation and returns a `GeneratedPackage` for each,
  whose `generators()` gives ready `DeepCopyGenerator`s and whose
  `includes(t)` tells whether a type belongs to it. `CustomArgs` carries the
  bounding directories; `build_header` prepends the build-tag lines to the
  boilerplate.
- `deepcopygen.args`: `GeneratorArgs` and `default_args()` hold the generator
  options. `add_arguments` registers them on an `argparse` parser, and
  `load_boilerplate` reads the header file, replaces `YEAR` with the current
  year and appends the "Code generated by" line. `default_source_tree()`
  returns `$GOPATH/src` or `./`.
- `deepcopygen.reflectcopy`: `reflect_deep_copy` (a generic deep copy of
  Python object graphs) and `value_fuzz` (changes every basic value inside an
  object), useful for checking copies are independent of their originals.

```python
from deepcopygen.signatures import is_rooted_under

is_rooted_under("/foo/bar", ["/foo"])       # True
is_rooted_under("/foo/barn", ["/foo/bar"])  # False
```

## What it does not do

- It does not read Go source files. The `Universe` of packages and types must
  be built by the caller with the classes in `deepcopygen.model`.
- It does not write or verify output files. `generate_type` returns text;
  assembling files from `GeneratedPackage` headers and generated code, and
  acting on options such as `verify_only`, is left to the caller.
- It has no command-line program. `GeneratorArgs.add_arguments` only
  registers the options on a parser you supply.