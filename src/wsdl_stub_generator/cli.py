"""Command-line interface for generating Rust bindings from WSDL documents.

Notes:
    - The generated code uses `yaserde` for (de)serialization and the `soap_client` crate
      for the envelope header.
"""

from __future__ import annotations

import argparse
import logging
import os.path
from collections.abc import Sequence

from wsdl_stub_generator.loader import SchemaLoadError
from wsdl_stub_generator.run import run

logger = logging.getLogger(__name__)


def _add_verbose_argument(parser: argparse.ArgumentParser):
    """Add a verbose argument to a parser.

    Args:
        parser (argparse.ArgumentParser): The parser to add the argument to.
    """
    parser.add_argument(
        "-v",
        "--verbose",
        dest="verbose",
        default=False,
        action="store_true",
        help="log skipped and ignored schema nodes.",
    )


def setup_parser() -> argparse.ArgumentParser:
    """Setup for the parser.

    Returns:
        argparse.ArgumentParser: The parser after setup.
    """
    parser = argparse.ArgumentParser(description="Generate Rust bindings for a WSDL document.")

    parser.add_argument(
        "-d",
        "--base-dir",
        dest="base_dir",
        type=str,
        default="",
        help="directory of the entry document; schema imports are resolved relative to it.",
    )

    parser.add_argument(
        "-f",
        "--file",
        dest="file",
        type=str,
        required=True,
        help="name of the entry WSDL document, relative to the base directory.",
    )

    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default="",
        help="file to write the generated bindings to; defaults to standard output if omitted.",
    )

    parser.add_argument(
        "--format",
        dest="format",
        default=False,
        action="store_true",
        help="format the generated bindings with rustfmt.",
    )

    _add_verbose_argument(parser)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point of the bindings generator.

    Args:
        argv (Sequence[str] | None, optional): Run arguments. Defaults to None.

    Returns:
        int: Error code.
    """
    parser = setup_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    root_directory = os.getcwd()
    logging.info("Working from root directory: %s", root_directory)

    try:
        run(args, root_directory)

    except SchemaLoadError as e:
        logger.error("Generation aborted: %s", e)
        return 1

    except OSError as e:
        logger.error("Can not write output: %s", e)
        return 1

    return 0
