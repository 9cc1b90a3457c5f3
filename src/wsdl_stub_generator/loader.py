"""Loading of WSDL and XSD documents into node trees."""

from __future__ import annotations

import logging
import pathlib

from lxml import etree

from wsdl_stub_generator import nodes

logger = logging.getLogger(__name__)


class SchemaLoadError(Exception):
    """Raised when a schema document cannot be read or is not well-formed XML."""

    pass


class ImportCycleError(SchemaLoadError):
    """Raised when a schema document imports itself, directly or transitively."""

    pass


# Node kinds of the children of each node kind, by local tag name.
# `None` stands for the document root. Tags missing here load as `IgnoredNode`.
CHILD_KINDS: dict[type[nodes.SchemaNode] | None, dict[str, type[nodes.SchemaNode]]] = {
    None: {"definitions": nodes.Definitions, "schema": nodes.Schema},
    nodes.Definitions: {
        "types": nodes.Types,
        "message": nodes.Message,
        "portType": nodes.PortType,
        "binding": nodes.Binding,
    },
    nodes.Types: {"schema": nodes.Schema},
    nodes.Schema: {"import": nodes.Import, "element": nodes.Element, "complexType": nodes.ComplexType},
    nodes.Element: {"complexType": nodes.ComplexType},
    nodes.ComplexType: {"sequence": nodes.Sequence, "complexContent": nodes.ComplexContent},
    nodes.Sequence: {"element": nodes.Element},
    nodes.ComplexContent: {"extension": nodes.Extension},
    nodes.Extension: {"sequence": nodes.Sequence},
    nodes.Message: {"part": nodes.Part},
    nodes.PortType: {"operation": nodes.Operation},
    nodes.Operation: {"input": nodes.Input, "output": nodes.Output, "fault": nodes.Fault},
    nodes.Binding: {"operation": nodes.BindingOperation},
    nodes.BindingOperation: {"input": nodes.Input, "output": nodes.Output, "fault": nodes.Fault},
}


def build_node(element: etree._Element, parent_kind: type[nodes.SchemaNode] | None = None) -> nodes.SchemaNode:
    """Convert an XML element and its descendants into a node tree.

    The kind of a node depends on its local tag name and on the kind of its parent,
    e.g. an `operation` below a `binding` is a `BindingOperation`, while the SOAP
    `operation` below that is ignored.

    Args:
        element (etree._Element): The XML element.
        parent_kind (type[nodes.SchemaNode] | None): The kind of the parent node, `None` for the root.

    Returns:
        nodes.SchemaNode: The node.
    """
    tag = etree.QName(element).localname
    attributes = {etree.QName(key).localname: value for key, value in element.attrib.items()}
    kind = CHILD_KINDS.get(parent_kind, {}).get(tag, nodes.IgnoredNode)

    if kind is nodes.IgnoredNode:
        return nodes.IgnoredNode(tag=tag, attributes=attributes)

    children = tuple(build_node(child, kind) for child in element if isinstance(child.tag, str))
    return kind(tag=tag, attributes=attributes, children=children)


def load_document(path: pathlib.Path) -> nodes.SchemaNode:
    """Read and parse a schema document.

    Args:
        path (pathlib.Path): The document path.

    Raises:
        SchemaLoadError: If the file cannot be read or does not contain well-formed XML.

    Returns:
        nodes.SchemaNode: The root node of the document.
    """
    try:
        content = path.read_bytes()

    except OSError as e:
        raise SchemaLoadError(f"Can not read schema document '{path}'.") from e

    parser = etree.XMLParser(remove_comments=True, remove_pis=True, resolve_entities=False, no_network=True)

    try:
        root = etree.fromstring(content, parser=parser)

    except etree.XMLSyntaxError as e:
        raise SchemaLoadError(f"Schema document '{path}' is not well-formed: {e}") from e

    logger.info("Loaded schema document '%s'.", path)
    return build_node(root)
