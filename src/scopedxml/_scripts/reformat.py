# SPDX-FileCopyrightText: Copyright scopedxml contributors
# SPDX-License-Identifier: Apache-2.0

import logging
import pathlib
import sys

import click
from lxml import etree

from scopedxml import config, lxmlbridge, serializer

logger = logging.getLogger(__name__)


@click.command()
@click.argument(
    "input",
    type=click.Path(exists=True, dir_okay=False, path_type=pathlib.Path),
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, writable=True, path_type=pathlib.Path),
    help="File to write the result to, instead of standard output",
)
@click.option(
    "--encoding",
    default=config.DEFAULT_ENCODING,
    help="Encoding to declare and write the output in",
    show_default=True,
    envvar=config.ENV_ENCODING,
    show_envvar=True,
)
@click.option(
    "--declaration/--no-declaration",
    default=False,
    help="Start the output with an XML declaration",
    show_default=True,
    envvar=config.ENV_DECLARATION,
    show_envvar=True,
)
def main(
    input: pathlib.Path,
    output: pathlib.Path | None,
    encoding: str,
    declaration: bool,
) -> None:
    """Re-serialize an XML file.

    Namespace declarations are written only on the elements where a
    binding is introduced or changed.
    """
    try:
        options = config.SerializerOptions(encoding, declaration)
    except LookupError:
        raise click.BadParameter(
            f"Unknown encoding: {encoding}", param_hint="--encoding"
        ) from None

    try:
        root = lxmlbridge.parse_file(input)
    except etree.XMLSyntaxError as err:
        raise click.ClickException(f"Cannot parse {input}: {err}") from None
    logger.info("Parsed %s", input)

    xml = serializer.XMLSerializer.from_options(options)
    if output is None:
        sys.stdout.flush()
        xml.serialize_document(root, sys.stdout.buffer)
        sys.stdout.buffer.write(b"\n")
        sys.stdout.flush()
        return

    try:
        xml.serialize_document(root, output)
    except OSError as err:
        raise click.ClickException(f"Cannot write {output}: {err}") from None
    logger.info("Wrote %s", output)
