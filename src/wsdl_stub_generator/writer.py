"""Generate Rust bindings for WSDL documents.

The writer walks a document once, depth-first, and writes the generated text
for every construct into the section it belongs to. Ordering that can not be
achieved by a single forward pass is left to the staging in `section`.
"""

from __future__ import annotations

import logging
import os
import pathlib

from wsdl_stub_generator import helper, nodes
from wsdl_stub_generator.loader import ImportCycleError, load_document
from wsdl_stub_generator.section import SectionRouter
from wsdl_stub_generator.writer_dto import OperationMessages, WalkContext
from wsdl_stub_generator.wsdl_types import MESSAGES_MOD, PORTS_MOD, SOAP_ENV, SOAP_ENV_NAMESPACE, TYPES_MOD, Section

logger = logging.getLogger(__name__)

PREAMBLE = """use yaserde::{YaSerialize, YaDeserialize};
use std::io::{Read, Write};
use soap_client::soap::Header;
use soap_client::envelop;

"""

SOAP_ENVELOPE_TEMPLATE = """#[derive(Debug, Default, YaSerialize, YaDeserialize)]
#[yaserde(
\troot = "Envelope",
\tnamespace = "{prefix}: {namespace}",
\tprefix = "{prefix}"
)]
pub struct {name}SoapEnvelope {{
\t#[yaserde(rename = "encodingStyle", prefix = "{prefix}", attribute)]
\tpub encoding_style: String,
\t#[yaserde(rename = "tns", prefix = "xmlns", attribute)]
\tpub tnsattr: String,
\t#[yaserde(rename = "urn", prefix = "xmlns", attribute)]
\tpub urnattr: Option<String>,
\t#[yaserde(rename = "xsi", prefix = "xmlns", attribute)]
\tpub xsiattr: String,
\t#[yaserde(rename = "Header", prefix = "{prefix}")]
\tpub header: Option<Header>,
\t#[yaserde(rename = "Body", prefix = "{prefix}")]
\tpub body: {body},
}}

"""


class Writer:
    """A class that handles writing the bindings of a WSDL document and all schemas it imports."""

    def __init__(self, base_path: str | os.PathLike[str]):
        """Initialize the writer.

        Args:
            base_path (str | os.PathLike[str]): The directory that contains the entry document.
                Schema locations of imports are resolved relative to it.
        """
        self.base_path = pathlib.Path(base_path)

    def new_context(self) -> WalkContext:
        """Create a traversal context with empty sections and the preamble in place."""
        context = WalkContext(base_path=self.base_path, router=SectionRouter())
        context.router.switch_section(Section.ROOT)
        context.router.write(PREAMBLE)
        return context

    def process_file(self, file_name: str, context: WalkContext | None = None) -> WalkContext:
        """Generate the bindings for an entry document.

        Args:
            file_name (str): The name of the entry document, relative to the base path.
            context (WalkContext | None): The context to write into. A new one is created if omitted.

        Raises:
            SchemaLoadError: If the entry document or any imported document can not be loaded.

        Returns:
            WalkContext: The context that holds the staged output.
        """
        if context is None:
            context = self.new_context()

        self.process_file_in_path(file_name, context)
        return context

    def process_file_in_path(self, file_name: str, context: WalkContext):
        """Load a document relative to the base path and visit it in place.

        Args:
            file_name (str): The document name, relative to the base path.
            context (WalkContext): The traversal context.

        Raises:
            ImportCycleError: If the document is already being visited further up the import chain.
        """
        path = (context.base_path / file_name).resolve()

        if path in context.import_chain:
            chain = " -> ".join(p.name for p in [*context.import_chain, path])
            raise ImportCycleError(f"Schema import cycle detected: {chain}")

        document = load_document(path)

        context.import_chain.append(path)
        try:
            self.visit(document, context)
        finally:
            context.import_chain.pop()

    def dumps(self, context: WalkContext) -> list[tuple[Section, str]]:
        """Finalize all sections of a context.

        Returns:
            list[tuple[Section, str]]: The text of every section, in output order.
        """
        return list(context.router.finalize())

    def visit(self, node: nodes.SchemaNode, context: WalkContext):
        """Visit the root node of a document."""
        if isinstance(node, nodes.Definitions):
            self.visit_definitions(node, context)

        elif isinstance(node, nodes.Schema):
            self.visit_schema(node, context)

        elif isinstance(node, nodes.IgnoredNode):
            logger.warning("Skipping document with unsupported root element '%s'.", node.tag)

        else:
            raise AssertionError(node)

    def visit_definitions(self, node: nodes.Definitions, context: WalkContext):
        for child in node.children:
            if isinstance(child, nodes.Types):
                self.visit_types(child, context)

            elif isinstance(child, nodes.Message):
                self.gen_message(child, context)

            elif isinstance(child, nodes.PortType):
                self.gen_port_type(child, context)

            elif isinstance(child, nodes.Binding):
                self.gen_binding(child, context)

            elif isinstance(child, nodes.IgnoredNode):
                logger.debug("Ignoring '%s' in definitions.", child.tag)

            else:
                raise AssertionError(child)

    def visit_types(self, node: nodes.Types, context: WalkContext):
        context.router.switch_section(Section.TYPES)

        for child in node.children:
            if isinstance(child, nodes.Schema):
                self.visit_schema(child, context)

            elif isinstance(child, nodes.IgnoredNode):
                logger.debug("Ignoring '%s' in types.", child.tag)

            else:
                raise AssertionError(child)

    # XSD schemas

    def visit_schema(self, node: nodes.Schema, context: WalkContext):
        context.router.switch_section(Section.TYPES)
        context.target_namespace = node.attribute("targetNamespace")

        for child in node.children:
            if isinstance(child, nodes.Import):
                self.visit_import(child, context)

            elif isinstance(child, nodes.Element):
                self.gen_element(child, context)

            elif isinstance(child, nodes.ComplexType):
                name = child.attribute("name")
                if name is None:
                    logger.debug("Skipping complex type without a name.")
                    continue

                self.gen_record(child, name, context)

            elif isinstance(child, nodes.IgnoredNode):
                logger.debug("Ignoring '%s' in schema.", child.tag)

            else:
                raise AssertionError(child)

    def visit_import(self, node: nodes.Import, context: WalkContext):
        """Visit an imported document in place, so that its output lands in the current buffers."""
        location = node.attribute("schemaLocation")
        if location is None:
            logger.debug("Skipping import of namespace '%s' without schema location.", node.attribute("namespace"))
            return

        logger.info("Importing schema '%s'.", location)
        target_namespace = context.target_namespace

        self.process_file_in_path(location, context)

        context.target_namespace = target_namespace
        context.router.switch_section(Section.TYPES)

    def gen_element(self, node: nodes.Element, context: WalkContext):
        """Generate an element.

        At nesting level 0, an element with a type is an alias of that type.
        Inside a record it is a field, repeated if `maxOccurs` is present and
        optional if `nillable` is present. Only the presence of these attributes
        counts, not their values.
        """
        name = node.attribute("name")
        if name is None:
            logger.debug("Skipping element without a name.")
            return

        complex_type = node.first_child(nodes.ComplexType)
        if complex_type is not None:
            self.gen_record(complex_type, name, context)
            return

        type_reference = node.attribute("type")
        if type_reference is None:
            logger.debug("Skipping element '%s' without a type.", name)
            return

        if context.level == 0:
            alias = helper.new_type_alias(helper.to_pascal_case(name), helper.resolve_type(type_reference))
            context.router.write(alias + "\n")
            return

        parameters = [f'rename = "{name}"', "default"]
        if context.target_namespace:
            parameters.insert(0, 'prefix = "ns"')

        field_type = helper.resolve_type(type_reference)
        if node.has_attribute("maxOccurs"):
            field_type = helper.new_group("Vec", [field_type])

        elif node.has_attribute("nillable"):
            field_type = helper.new_group("Option", [field_type])

        context.router.write(helper.new_yaserde_attribute(parameters, indent="\t"))
        context.router.write(helper.new_field(helper.shield_reserved_name(helper.to_snake_case(name)), field_type))

    def gen_record(self, node: nodes.ComplexType, name: str, context: WalkContext):
        """Generate a record for a complex type, one nesting level deeper than the current one."""
        router = context.router
        router.inc_level()

        parameters = [f'rename = "{name}"', "default"]
        if context.target_namespace:
            parameters = ['prefix = "ns"', f'namespace = "ns: {context.target_namespace}"', *parameters]

        router.write(helper.DERIVE_LINE)
        router.write(helper.new_yaserde_attribute(parameters))
        router.write(helper.new_struct_declaration(helper.to_pascal_case(name)))

        sequence = node.first_child(nodes.Sequence)
        if sequence is not None:
            self.visit_sequence(sequence, context)

        complex_content = node.first_child(nodes.ComplexContent)
        if complex_content is not None:
            self.visit_complex_content(complex_content, context)

        router.write("}\n\n")
        router.dec_level()

    def visit_sequence(self, node: nodes.Sequence, context: WalkContext):
        for child in node.children:
            if isinstance(child, nodes.Element):
                self.gen_element(child, context)

            elif isinstance(child, nodes.IgnoredNode):
                logger.debug("Ignoring '%s' in sequence.", child.tag)

            else:
                raise AssertionError(child)

    def visit_complex_content(self, node: nodes.ComplexContent, context: WalkContext):
        """Generate an extension as a flattened field of its base type, followed by its own fields."""
        extension = node.first_child(nodes.Extension)
        if extension is None:
            logger.debug("Skipping complex content without extension.")
            return

        base = extension.attribute("base")
        if base is not None:
            base_type = helper.resolve_type(base)
            context.router.write(helper.new_yaserde_attribute(["flatten"], indent="\t"))
            context.router.write(helper.new_field(helper.to_snake_case(base_type), base_type))

        sequence = extension.first_child(nodes.Sequence)
        if sequence is not None:
            self.visit_sequence(sequence, context)

    # WSDL messages

    def gen_message(self, node: nodes.Message, context: WalkContext):
        """Generate a wrapper record for a message. Only the first part is used."""
        context.router.switch_section(Section.MESSAGES)

        name = node.attribute("name")
        if name is None:
            logger.debug("Skipping message without a name.")
            return

        router = context.router
        router.write(helper.DERIVE_LINE)
        router.write(helper.new_yaserde_attribute([f'rename = "{name}"', "default"]))
        router.write(helper.new_struct_declaration(helper.to_pascal_case(name)))

        part = node.first_child(nodes.Part)
        if part is not None:
            self.gen_part(part, context)

        router.write("}\n\n")

    def gen_part(self, node: nodes.Part, context: WalkContext):
        name = node.attribute("name")
        element = node.attribute("element")
        if name is None or element is None:
            logger.debug("Skipping message part without name or element.")
            return

        context.router.write(helper.new_yaserde_attribute(["flatten"], indent="\t"))
        context.router.write(
            helper.new_field(
                helper.shield_reserved_name(helper.to_snake_case(name)),
                f"{TYPES_MOD}::{helper.resolve_type(element)}",
            )
        )

    # WSDL port types

    def gen_port_type(self, node: nodes.PortType, context: WalkContext):
        """Generate a trait for a port type, followed by the aliases its methods use."""
        context.router.switch_section(Section.INTERFACES)

        name = node.attribute("name")
        if name is None:
            logger.debug("Skipping port type without a name.")
            return

        router = context.router
        router.reset_seen()
        router.write(f"pub trait {helper.to_pascal_case(name)} {{\n")

        for child in node.children:
            if isinstance(child, nodes.Operation):
                self.gen_operation(child, context)

            elif isinstance(child, nodes.IgnoredNode):
                logger.debug("Ignoring '%s' in port type '%s'.", child.tag, name)

            else:
                raise AssertionError(child)

        router.write("}\n\n")
        router.flush_deferred()
        router.reset_seen()

    def _port_type_alias(self, name: str, message: str) -> str:
        return helper.new_type_alias(helper.to_pascal_case(name), f"{MESSAGES_MOD}::{helper.resolve_type(message)}")

    def gen_operation(self, node: nodes.Operation, context: WalkContext):
        """Generate the method signature of an operation and queue the aliases of its messages."""
        name = node.attribute("name")
        if name is None:
            logger.debug("Skipping operation without a name.")
            return

        messages = OperationMessages.create(node)
        parameters: list[str] = []
        return_type: str | None = None
        aliases: list[str] = []

        if messages.input is not None:
            input_name, input_message = messages.input
            if input_name and input_message:
                aliases.append(self._port_type_alias(input_name, input_message))
                parameters.append(f"{helper.to_snake_case(input_name)}: {helper.to_pascal_case(input_name)}")

        if messages.output is not None:
            output_name, output_message = messages.output
            if output_name and output_message:
                aliases.append(self._port_type_alias(output_name, output_message))
                return_type = helper.to_pascal_case(output_name)

                if messages.fault is not None:
                    fault_name, fault_message = messages.fault
                    if fault_name and fault_message:
                        aliases.append(self._port_type_alias(fault_name, fault_message))
                        return_type = helper.new_group("Result", [return_type, helper.to_pascal_case(fault_name)])

        # Aliases go after the trait, once per trait
        for alias in aliases:
            context.router.deferred_write_once(alias)

        context.router.write(f"\t{helper.new_function(helper.to_snake_case(name), parameters, return_type)};\n")

    # WSDL bindings

    def gen_binding(self, node: nodes.Binding, context: WalkContext):
        """Generate the implementation of a port type, followed by the envelopes of its operations."""
        context.router.switch_section(Section.BINDINGS)

        name = node.attribute("name")
        type_reference = node.attribute("type")
        if name is None or type_reference is None:
            logger.debug("Skipping binding without name or type.")
            return

        router = context.router
        struct_name = helper.to_pascal_case(name)
        trait_name = helper.resolve_type(type_reference)

        router.write(f"pub struct {struct_name} {{}}\n\n")
        router.write(f"impl {PORTS_MOD}::{trait_name} for {struct_name} {{\n")

        for child in node.children:
            if isinstance(child, nodes.BindingOperation):
                self.gen_binding_operation(child, context)

            elif isinstance(child, nodes.IgnoredNode):
                logger.debug("Ignoring '%s' in binding '%s'.", child.tag, name)

            else:
                raise AssertionError(child)

        router.write("}\n\n")
        self.gen_default_constructor(struct_name, context)
        router.flush_deferred()

    def gen_default_constructor(self, struct_name: str, context: WalkContext):
        context.router.write(
            f"impl Default for {struct_name} {{\n\tfn default() -> Self {{\n\t\t{struct_name} {{}}\n\t}}\n}}\n\n"
        )

    def gen_binding_operation(self, node: nodes.BindingOperation, context: WalkContext):
        """Generate a stub method for a binding operation and queue the envelopes of its input and output."""
        name = node.attribute("name")
        if name is None:
            logger.debug("Skipping binding operation without a name.")
            return

        messages = OperationMessages.create(node)
        input_name = messages.input[0] if messages.input is not None else None
        output_name = messages.output[0] if messages.output is not None else None
        fault_name = messages.fault[0] if messages.fault is not None else None

        parameters: list[str] = []
        return_type: str | None = None
        wrappers: list[str] = []

        if input_name:
            parameters.append(f"{helper.to_snake_case(input_name)}: {PORTS_MOD}::{helper.to_pascal_case(input_name)}")
            wrappers.append(self.gen_soap_wrapper(input_name, name))

        if output_name:
            return_type = f"{PORTS_MOD}::{helper.to_pascal_case(output_name)}"
            if fault_name:
                fault_type = f"{PORTS_MOD}::{helper.to_pascal_case(fault_name)}"
                return_type = helper.new_group("Result", [return_type, fault_type])
            wrappers.append(self.gen_soap_wrapper(output_name, name))

        router = context.router
        router.write(f"\t{helper.new_function(helper.to_snake_case(name), parameters, return_type)} {{\n")
        router.write("\t\tunimplemented!();\n")
        router.write("\t}\n")

        for wrapper in wrappers:
            router.deferred_write(wrapper)

    def gen_soap_wrapper(self, message_name: str, element_name: str) -> str:
        """Create the body record and the envelope record for a message of a binding operation.

        Args:
            message_name (str): The name of the operation input or output, which is also the name of its alias.
            element_name (str): The name of the operation, used as the element name inside the body.

        Returns:
            str: The text of both records.
        """
        pascal_name = helper.to_pascal_case(message_name)
        soap_name = f"Soap{pascal_name}"

        body = "".join(
            [
                helper.DERIVE_LINE,
                helper.new_struct_declaration(soap_name),
                helper.new_yaserde_attribute([f'rename = "{element_name}"', "default"], indent="\t"),
                helper.new_field("body", f"{PORTS_MOD}::{pascal_name}"),
                "}\n\n",
            ]
        )
        envelope = SOAP_ENVELOPE_TEMPLATE.format(
            name=pascal_name,
            body=soap_name,
            prefix=SOAP_ENV,
            namespace=SOAP_ENV_NAMESPACE,
        )
        return body + envelope
