"""Types definitions that are common in WSDL documents and the generated modules."""

from __future__ import annotations

from enum import Enum

XSD_TYPE_TO_RUST = {
    "string": "String",
    "base64Binary": "String",
    "decimal": "f64",
    "integer": "u64",
    "int": "u64",
    "long": "u64",
    "short": "u8",
    "boolean": "bool",
    "date": "SystemTime",
    "time": "SystemTime",
    "dateTime": "SystemTime",
}

TYPES_MOD = "types"
MESSAGES_MOD = "messages"
PORTS_MOD = "ports"
BINDINGS_MOD = "bindings"

SOAP_ENV = "soapenv"
SOAP_ENV_NAMESPACE = "http://schemas.xmlsoap.org/soap/envelope/"


class Section(Enum):
    """Output sections of a generated file.

    The member order is the order in which sections are written to the output.
    """

    ROOT = None
    TYPES = TYPES_MOD
    MESSAGES = MESSAGES_MOD
    INTERFACES = PORTS_MOD
    BINDINGS = BINDINGS_MOD

    @property
    def module_name(self) -> str | None:
        """The name of the generated module, `None` for the root section."""
        return self.value
