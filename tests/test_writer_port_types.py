"""Tests for generated interfaces and their deferred message aliases."""

from __future__ import annotations

from conftest import wsdl_document

from wsdl_stub_generator.wsdl_types import Section

PORTS_HEADER = "pub mod ports {\nuse yaserde::{YaSerialize, YaDeserialize};\n\nuse super::*;\n\n"


def test_greeter_interface(greeter_sections):
    """One trait with one method, followed by exactly the request and response aliases."""
    assert greeter_sections[Section.INTERFACES] == PORTS_HEADER + (
        "pub trait Greeter {\n"
        "\tfn say_hello(&self, say_hello_request: SayHelloRequest) -> SayHelloResponse;\n"
        "}\n\n"
        "pub type SayHelloRequest = messages::SayHelloRequest;\n"
        "pub type SayHelloResponse = messages::SayHelloResponse;\n"
        "}\n\n"
    )


def test_fault_yields_result(bank_sections):
    text = bank_sections[Section.INTERFACES]

    assert (
        "\tfn get_balance(&self, get_balance_request: GetBalanceRequest) -> Result<GetBalanceResponse, BankFault>;\n"
    ) in text
    assert "\tfn transfer(&self, transfer_request: TransferRequest) -> Result<TransferResponse, BankFault>;\n" in text


def test_aliases_are_deduplicated_per_interface(bank_sections):
    """Shared messages are aliased once per trait, and again for the next trait."""
    text = bank_sections[Section.INTERFACES]

    assert text.count("pub type BankFault = messages::BankFault;\n") == 1
    assert text.count("pub type GetBalanceRequest = messages::GetBalanceRequest;\n") == 2
    assert text.count("pub type TransferRequest = messages::TransferRequest;\n") == 1


def test_aliases_follow_their_interface(bank_sections):
    text = bank_sections[Section.INTERFACES]

    accounts_end = text.index("}\n\n", text.index("pub trait Accounts {"))
    audit_start = text.index("pub trait Audit {")
    accounts_aliases = text[accounts_end:audit_start]

    assert accounts_aliases == (
        "}\n\n"
        "pub type GetBalanceRequest = messages::GetBalanceRequest;\n"
        "pub type GetBalanceResponse = messages::GetBalanceResponse;\n"
        "pub type BankFault = messages::BankFault;\n"
        "pub type TransferRequest = messages::TransferRequest;\n"
        "pub type TransferResponse = messages::TransferResponse;\n"
    )

    assert text[audit_start:].endswith(
        "}\n\n"
        "pub type GetBalanceRequest = messages::GetBalanceRequest;\n"
        "pub type GetBalanceResponse = messages::GetBalanceResponse;\n"
        "}\n\n"
    )


def test_same_message_in_two_operations(write_document, generate):
    name = write_document(
        "service.wsdl",
        wsdl_document(
            """
            <wsdl:portType name="Store">
              <wsdl:operation name="get">
                <wsdl:input name="Lookup" message="tns:Lookup"/>
              </wsdl:operation>
              <wsdl:operation name="delete">
                <wsdl:input name="Lookup" message="tns:Lookup"/>
              </wsdl:operation>
            </wsdl:portType>
            """
        ),
    )
    text = generate(name)[Section.INTERFACES]

    assert text.count("pub type Lookup = messages::Lookup;\n") == 1
    assert "\tfn get(&self, lookup: Lookup);\n" in text
    assert "\tfn delete(&self, lookup: Lookup);\n" in text


def test_operation_without_messages(write_document, generate):
    name = write_document(
        "service.wsdl",
        wsdl_document(
            """
            <wsdl:portType name="Health">
              <wsdl:operation name="ping"/>
              <wsdl:operation name="status">
                <wsdl:output name="Status" message="tns:StatusMessage"/>
                <wsdl:fault name="Down" message="tns:DownMessage"/>
              </wsdl:operation>
              <wsdl:operation name="unnamed">
                <wsdl:input message="tns:Anonymous"/>
              </wsdl:operation>
            </wsdl:portType>
            """
        ),
    )
    text = generate(name)[Section.INTERFACES]

    assert "\tfn ping(&self);\n" in text
    assert "\tfn status(&self) -> Result<Status, Down>;\n" in text
    assert "\tfn unnamed(&self);\n" in text
    assert "Anonymous" not in text
    assert "pub type Status = messages::StatusMessage;\n" in text
    assert "pub type Down = messages::DownMessage;\n" in text


def test_fault_without_output_is_ignored(write_document, generate):
    name = write_document(
        "service.wsdl",
        wsdl_document(
            """
            <wsdl:portType name="Events">
              <wsdl:operation name="notify">
                <wsdl:input name="Event" message="tns:Event"/>
                <wsdl:fault name="Rejected" message="tns:Rejected"/>
              </wsdl:operation>
            </wsdl:portType>
            """
        ),
    )
    text = generate(name)[Section.INTERFACES]

    assert "\tfn notify(&self, event: Event);\n" in text
    assert "Rejected" not in text
