"""Helper functionality that is used in other modules of this package."""

from __future__ import annotations

import re
from collections.abc import Sequence

from wsdl_stub_generator.wsdl_types import XSD_TYPE_TO_RUST

RESERVED_NAMES = {"type": "rs_type"}

DERIVE_LINE = "#[derive(Debug, Default, YaSerialize, YaDeserialize)]\n"

_SEPARATORS = re.compile(r"[\W_]+")


def _starts_word(previous: str, current: str, following: str) -> bool:
    if not current.isupper():
        return False

    # Lower case or digit to upper case, or the last capital of an acronym that is followed by a word.
    return previous.islower() or previous.isdigit() or (previous.isupper() and following.islower())


def _split_case(chunk: str) -> list[str]:
    words = []
    start = 0
    for index in range(1, len(chunk)):
        following = chunk[index + 1] if index + 1 < len(chunk) else ""
        if _starts_word(chunk[index - 1], chunk[index], following):
            words.append(chunk[start:index])
            start = index

    words.append(chunk[start:])
    return words


def split_words(name: str) -> list[str]:
    """Split an identifier into its words.

    Word boundaries are separators (anything that is not a letter or digit) and
    case changes, e.g. `getHTTPResponse_code` becomes `get`, `HTTP`, `Response`, `code`.
    Letters outside of ASCII are part of words, e.g. `naïveValue` becomes `naïve`, `Value`.

    Args:
        name (str): The identifier to split.

    Returns:
        list[str]: The words, in order.
    """
    words: list[str] = []
    for chunk in _SEPARATORS.split(name):
        if chunk:
            words.extend(_split_case(chunk))

    return words


def to_pascal_case(name: str) -> str:
    """Converts an identifier to the casing of generated type names.

    E.g. `sayHello_request` becomes `SayHelloRequest`.

    Args:
        name (str): The original identifier.

    Returns:
        str: The type name.
    """
    return "".join(word[:1].upper() + word[1:].lower() for word in split_words(name))


def to_snake_case(name: str) -> str:
    """Converts an identifier to the casing of generated field and function names.

    E.g. `SayHelloRequest` becomes `say_hello_request`.

    Args:
        name (str): The original identifier.

    Returns:
        str: The field name.
    """
    return "_".join(word.lower() for word in split_words(name))


def shield_reserved_name(name: str) -> str:
    """Replace a field name that collides with a keyword of the generated language.

    Args:
        name (str): The field name.

    Returns:
        str: A safe field name, the input itself if there is no collision.
    """
    return RESERVED_NAMES.get(name, name)


def split_type(type_reference: str) -> str:
    """Strip the namespace prefix of a qualified name, e.g. `xs:string` becomes `string`."""
    return type_reference.split(":")[-1]


def resolve_type(type_reference: str) -> str:
    """Map a schema type reference to the name of a generated type.

    Known XSD primitives map to fixed types, everything else is assumed to be a
    user-defined type and is only converted to type-name casing.

    Args:
        type_reference (str): The (possibly prefixed) type reference, e.g. `xs:int` or `tns:Person`.

    Returns:
        str: The generated type name.
    """
    local_name = split_type(type_reference)
    return XSD_TYPE_TO_RUST.get(local_name, to_pascal_case(local_name))


def join_parameters(parameters: Sequence[str] | None) -> str:
    """Joins parameters by means of ', ', skipping empty ones.

    Args:
        parameters (Sequence[str] | None): The parameters to join.

    Returns:
        str: The joined parameters.
    """
    if parameters:
        return ", ".join(p for p in parameters if p)

    else:
        return ""


def new_group(name: str, members: list[str]) -> str:
    """Create a generic type, e.g. `Vec<String>` or `Result<A, B>`.

    Args:
        name (str): The name of the generic type.
        members (list[str]): The type parameters.

    Returns:
        str: The resulting type string.
    """
    return f"{name}<{join_parameters(members)}>"


def new_type_alias(name: str, target: str) -> str:
    """Create a type alias statement, e.g. `pub type Foo = String;`."""
    return f"pub type {name} = {target};\n"


def new_yaserde_attribute(parameters: Sequence[str], indent: str = "") -> str:
    """Create a yaserde attribute line.

    Args:
        parameters (Sequence[str]): The attribute parameters, e.g. `rename = "foo"` or `default`.
        indent (str): Indentation prepended to the line.

    Returns:
        str: The attribute line.
    """
    return f"{indent}#[yaserde({join_parameters(parameters)})]\n"


def new_field(name: str, type_name: str) -> str:
    """Create a public struct field line."""
    return f"\tpub {name}: {type_name},\n"


def new_struct_declaration(name: str) -> str:
    """Create the opening line of a struct declaration."""
    return f"pub struct {name} {{\n"


def new_function(
    name: str,
    parameters: Sequence[str] | None = None,
    return_type: str | None = None,
) -> str:
    """Create a function signature that takes `&self`, without a trailing body or semicolon.

    Args:
        name (str): The function name.
        parameters (Sequence[str] | None, optional): Parameters after `&self`, if any. Defaults to None.
        return_type (str | None, optional): The return type, if any. Defaults to None.

    Returns:
        str: The function signature.
    """
    arguments = join_parameters(["&self", *(parameters or [])])
    if return_type:
        return f"fn {name}({arguments}) -> {return_type}"
    return f"fn {name}({arguments})"
