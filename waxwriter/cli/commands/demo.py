"""Demo command - Write the sample music catalog document.

Shows the writer's prolog handling (XSLT and DTD), namespace declarations
with schema locations, comments and child elements in one small document.
"""

from __future__ import annotations

from pathlib import Path

import click

from ...config import ConfigLoader, WriterConfig
from ...exceptions import WAXError
from ...infrastructure.logging import ConsoleLogger
from ...xml.writer import WAX

MUSIC_NS = "http://www.ociweb.com/music"
DATE_NS = "http://www.ociweb.com/date"


def write_catalog(wax: WAX) -> None:
    """Write the catalog entry for one artist.

    Elements are left open; closing the writer ends them.
    """
    (
        wax.xslt("artist.xslt")
        .dtd("http://www.ociweb.com/xml/music.dtd")
        .start("artist")
        .attr("name", "Gardot, Melody")
        .default_namespace(MUSIC_NS, "http://www.ociweb.com/xml/music.xsd")
        .namespace(
            DATE_NS, prefix="date", schema_path="http://www.ociweb.com/xml/date.xsd"
        )
        .comment("This is one of my favorite CDs!")
        .start("cd")
        .attr("year", 2007)
        .child("title", "Worrisome Heart")
        .child("purchaseDate", "4/3/2008", prefix="date")
    )


@click.command()
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, path_type=Path),
    help="Path to a waxwriter.toml config file (default: ./waxwriter.toml)",
)
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="File to write (default: standard output)",
)
@click.option(
    "--indent",
    type=click.IntRange(0, 4),
    help="Number of spaces per nesting level",
)
@click.option(
    "--no-indent",
    is_flag=True,
    help="Write the whole document on a single line",
)
@click.option(
    "--xml-version",
    type=click.Choice(["1.0", "1.1", "1.2"]),
    help="Write an XML declaration for this version",
)
@click.option("-v", "--verbose", count=True, help="Increase verbosity")
def demo_command(
    config_file: Path | None,
    output: Path | None,
    indent: int | None,
    no_indent: bool,
    xml_version: str | None,
    verbose: int,
) -> None:
    """Write a sample music catalog document.

    Examples:

    \b
        # Print the document
        waxwriter demo

    \b
        # Single line, with an XML declaration, into a file
        waxwriter demo --no-indent --xml-version 1.0 --output artist.xml
    """
    logger = ConsoleLogger(verbosity=verbose)
    base = ConfigLoader.load(config_file)
    if no_indent:
        indent_value: str | None = None
    elif indent is not None:
        indent_value = " " * indent
    else:
        indent_value = base.indent
    config = WriterConfig(
        indent=indent_value,
        trust_me=base.trust_me,
        line_separator=base.line_separator,
        space_in_empty_elements=base.space_in_empty_elements,
        version=xml_version or base.version,
    )

    logger.set_context(root_element="artist", operation="demo")
    try:
        with WAX(output, config=config, logger=logger) as wax:
            write_catalog(wax)
    except WAXError as e:
        logger.error(str(e))
        raise click.ClickException("Demo document could not be written") from e

    if output is not None:
        logger.success(f"Wrote {output}")
    logger.log_final_stats()
