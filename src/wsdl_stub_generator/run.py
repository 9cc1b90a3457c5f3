"""Top-level module for bindings generation."""

from __future__ import annotations

import argparse
import contextlib
import io
import logging
import os.path
import subprocess
import sys
from collections.abc import Iterable
from typing import TextIO

from wsdl_stub_generator.writer import Writer
from wsdl_stub_generator.wsdl_types import Section

logger = logging.getLogger(__name__)

RUST_EDITION = "2021"


def format_outputs(raw_input: str) -> str:
    """Formats raw input using rustfmt.

    Args:
        raw_input (str): The unformatted input.

    Returns:
        str: The formatted outputs, or the unformatted input if rustfmt is unavailable or fails.
    """
    if not raw_input.strip():
        return raw_input

    try:
        result = subprocess.run(
            ["rustfmt", "--edition", RUST_EDITION],
            input=raw_input,
            capture_output=True,
            text=True,
            check=True,
        )
        return result.stdout

    except FileNotFoundError:
        logger.warning("rustfmt was not found, writing unformatted output.")
        return raw_input

    except subprocess.CalledProcessError as e:
        logger.error(f"rustfmt formatting failed: {e}")
        logger.error(f"Stderr: {e.stderr}")
        # Return unformatted output on error
        return raw_input


def generate_bindings(
    base_path: str,
    file_name: str,
    format_output: bool = False,
) -> list[tuple[Section, str]]:
    """Entry-point for generating bindings from a WSDL document.

    Nothing is written here, so that a document that fails to load leaves no partial output behind.

    Args:
        base_path (str): The directory of the entry document, which imports are relative to.
        file_name (str): The name of the entry document.
        format_output (bool): Whether to run rustfmt on every section.

    Raises:
        SchemaLoadError: If the entry document or an imported document can not be loaded.

    Returns:
        list[tuple[Section, str]]: The generated text of every section, in output order.
    """
    writer = Writer(base_path)
    context = writer.process_file(file_name)
    sections = writer.dumps(context)

    if format_output:
        sections = [(section, format_outputs(text)) for section, text in sections]

    return sections


def write_sections(sections: Iterable[tuple[Section, str]], sink: TextIO) -> int:
    """Write all sections to an output, one after the other.

    A section that fails to be written is logged and skipped, the remaining ones are still written.

    Args:
        sections (Iterable[tuple[Section, str]]): The sections in output order.
        sink (TextIO): The output.

    Returns:
        int: The number of sections that were written.
    """
    written = 0
    for section, text in sections:
        try:
            sink.write(text)
            written += 1

        except (OSError, UnicodeError) as e:
            logger.warning("Failed to write section %s to output: %s", section.name, e)

    try:
        sink.flush()

    except OSError as e:
        logger.warning("Failed to flush output: %s", e)

    return written


def _utf8_stdout(stack: contextlib.ExitStack) -> TextIO:
    """Standard output with the same encoding as output files, independent of the locale.

    The wrapper is detached when the stack closes, so standard output itself stays open.
    """
    buffer = getattr(sys.stdout, "buffer", None)
    if buffer is None:
        return sys.stdout

    sys.stdout.flush()
    sink = io.TextIOWrapper(buffer, encoding="utf8")
    stack.callback(sink.detach)
    return sink


def run(args: argparse.Namespace, root_directory: str):
    """Run the generator on an entry document and write the result.

    Args:
        args (argparse.Namespace): The arguments that were passed when calling the generator.
        root_directory (str): The directory, from which the generator is executed.
    """
    base_dir: str = getattr(args, "base_dir", "") or ""
    file_name: str = args.file
    output: str = getattr(args, "output", "") or ""
    format_output: bool = getattr(args, "format", False)

    base_path = os.path.join(root_directory, base_dir)
    sections = generate_bindings(base_path, file_name, format_output)

    with contextlib.ExitStack() as stack:
        if output:
            output_path = os.path.join(root_directory, output)
            output_directory = os.path.dirname(output_path)
            if output_directory:
                os.makedirs(output_directory, exist_ok=True)

            sink: TextIO = stack.enter_context(open(output_path, "w", encoding="utf8"))

        else:
            output_path = "<stdout>"
            sink = _utf8_stdout(stack)

        written = write_sections(sections, sink)

    logger.info("Wrote %d of %d sections to '%s'.", written, len(sections), output_path)
