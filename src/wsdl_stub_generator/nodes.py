"""Node kinds of a WSDL/XSD document, decided once while loading a document.

Each schema construct the generator knows about has its own node class. Tags
that carry no meaning for generation are kept as `IgnoredNode`, so that the
writer decides explicitly what to skip.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TypeVar

NodeT = TypeVar("NodeT", bound="SchemaNode")


@dataclass(frozen=True)
class SchemaNode:
    """Base class of all node kinds.

    Attributes:
        tag: The local tag name, without namespace.
        attributes: The attributes of the node, keyed by local name.
        children: The child nodes, in document order.
    """

    tag: str
    attributes: dict[str, str] = field(default_factory=dict)
    children: tuple[SchemaNode, ...] = ()

    def attribute(self, name: str) -> str | None:
        """Get an attribute value by its local name, `None` if the attribute is absent."""
        return self.attributes.get(name)

    def has_attribute(self, name: str) -> bool:
        """Whether the attribute is present, regardless of its value."""
        return name in self.attributes

    def children_of(self, kind: type[NodeT]) -> Iterator[NodeT]:
        """Iterate over all children of a given node kind."""
        for child in self.children:
            if isinstance(child, kind):
                yield child

    def first_child(self, kind: type[NodeT]) -> NodeT | None:
        """Get the first child of a given node kind, if any."""
        return next(self.children_of(kind), None)


@dataclass(frozen=True)
class Definitions(SchemaNode):
    """The root of a WSDL document."""


@dataclass(frozen=True)
class Types(SchemaNode):
    """The WSDL `types` container holding embedded schemas."""


@dataclass(frozen=True)
class Schema(SchemaNode):
    """An XSD schema, either embedded in a WSDL document or as a document root."""


@dataclass(frozen=True)
class Import(SchemaNode):
    """An XSD import of another schema document."""


@dataclass(frozen=True)
class Element(SchemaNode):
    """An XSD element declaration."""


@dataclass(frozen=True)
class ComplexType(SchemaNode):
    """An XSD complex type, named or inline."""


@dataclass(frozen=True)
class Sequence(SchemaNode):
    """An XSD sequence group."""


@dataclass(frozen=True)
class ComplexContent(SchemaNode):
    """An XSD complex content block."""


@dataclass(frozen=True)
class Extension(SchemaNode):
    """An XSD extension of a base type."""


@dataclass(frozen=True)
class Message(SchemaNode):
    """A WSDL message."""


@dataclass(frozen=True)
class Part(SchemaNode):
    """A part of a WSDL message."""


@dataclass(frozen=True)
class PortType(SchemaNode):
    """A WSDL port type, i.e. an interface."""


@dataclass(frozen=True)
class Operation(SchemaNode):
    """An operation of a WSDL port type."""


@dataclass(frozen=True)
class Binding(SchemaNode):
    """A WSDL binding of a port type."""


@dataclass(frozen=True)
class BindingOperation(SchemaNode):
    """An operation of a WSDL binding."""


@dataclass(frozen=True)
class Input(SchemaNode):
    """The input of a port type or binding operation."""


@dataclass(frozen=True)
class Output(SchemaNode):
    """The output of a port type or binding operation."""


@dataclass(frozen=True)
class Fault(SchemaNode):
    """The fault of a port type or binding operation."""


@dataclass(frozen=True)
class IgnoredNode(SchemaNode):
    """A node without meaning for generation, e.g. documentation or SOAP extensibility elements."""
