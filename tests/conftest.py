"""Pytest configuration and fixtures for WSDL stub generator tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from wsdl_stub_generator.run import generate_bindings
from wsdl_stub_generator.wsdl_types import Section

# Test directory structure
TESTS_DIR = Path(__file__).parent
SCHEMAS_DIR = TESTS_DIR / "schemas"

GREETER_DIR = SCHEMAS_DIR / "greeter"
BANK_DIR = SCHEMAS_DIR / "bank"

XS_NAMESPACE = "http://www.w3.org/2001/XMLSchema"
WSDL_NAMESPACE = "http://schemas.xmlsoap.org/wsdl/"


def generate_sections(base_path: Path, file_name: str) -> dict[Section, str]:
    """Generate bindings and return the text of every section.

    Args:
        base_path: Directory of the entry document
        file_name: Name of the entry document

    Returns:
        Dictionary mapping each section to its generated text
    """
    return dict(generate_bindings(str(base_path), file_name))


def schema_document(body: str, target_namespace: str | None = None) -> str:
    """Wrap schema declarations in a standalone XSD document."""
    tns = f' targetNamespace="{target_namespace}"' if target_namespace else ""
    return f'<?xml version="1.0" encoding="UTF-8"?>\n<xs:schema xmlns:xs="{XS_NAMESPACE}"{tns}>\n{body}\n</xs:schema>\n'


def wsdl_document(body: str) -> str:
    """Wrap WSDL declarations in a definitions document with the `tns` prefix bound."""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<wsdl:definitions xmlns:wsdl="{WSDL_NAMESPACE}" xmlns:xs="{XS_NAMESPACE}" '
        'xmlns:tns="http://example.com/test" targetNamespace="http://example.com/test">\n'
        f"{body}\n</wsdl:definitions>\n"
    )


@pytest.fixture
def write_document(tmp_path):
    """Provide a function that writes a document into a temporary directory and returns its name."""

    def write(name: str, content: str) -> str:
        (tmp_path / name).write_text(content, encoding="utf8")
        return name

    return write


@pytest.fixture
def generate(tmp_path):
    """Provide a function that generates the sections of a document in the temporary directory."""

    def run_generation(file_name: str) -> dict[Section, str]:
        return generate_sections(tmp_path, file_name)

    return run_generation


@pytest.fixture(scope="session")
def greeter_sections():
    """Generated sections of the greeter example."""
    return generate_sections(GREETER_DIR, "greeter.wsdl")


@pytest.fixture(scope="session")
def bank_sections():
    """Generated sections of the bank example, which imports a common schema."""
    return generate_sections(BANK_DIR, "bank.wsdl")
