from __future__ import annotations

import pathlib
from dataclasses import dataclass, field

from wsdl_stub_generator import nodes
from wsdl_stub_generator.section import SectionRouter

# Type alias for the (name, message) attribute pair of an operation input, output or fault
NameMessage = tuple[str | None, str | None]


@dataclass
class WalkContext:
    """Traversal state that is passed to every visit of the writer.

    Attributes:
        base_path: The directory that schema locations of imports are relative to
        router: The staged output, shared by the entry document and all imported documents
        target_namespace: The target namespace of the schema that is currently visited
        import_chain: Resolved paths of the documents that are currently being visited,
            outermost first
    """

    base_path: pathlib.Path
    router: SectionRouter = field(default_factory=SectionRouter)
    target_namespace: str | None = None
    import_chain: list[pathlib.Path] = field(default_factory=list)

    @property
    def level(self) -> int:
        """The current nesting level."""
        return self.router.level


@dataclass
class OperationMessages:
    """The named messages of a port type or binding operation.

    Every attribute is `None` if the operation has no such child, and a pair of
    the child's `name` and `message` attributes otherwise.

    Attributes:
        input: The input of the operation
        output: The output of the operation
        fault: The first fault of the operation
    """

    input: NameMessage | None
    output: NameMessage | None
    fault: NameMessage | None

    @classmethod
    def create(cls, operation: nodes.Operation | nodes.BindingOperation) -> OperationMessages:
        """Collect the messages of an operation.

        Args:
            operation: The operation node

        Returns:
            The collected messages
        """

        def name_message(node: nodes.SchemaNode | None) -> NameMessage | None:
            if node is None:
                return None
            return node.attribute("name"), node.attribute("message")

        return cls(
            input=name_message(operation.first_child(nodes.Input)),
            output=name_message(operation.first_child(nodes.Output)),
            fault=name_message(operation.first_child(nodes.Fault)),
        )
