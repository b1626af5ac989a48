"""ZeroNovel Toolkit CLI."""

import sys
from pathlib import Path
from typing import Optional

import click
from loguru import logger

from . import __version__

LOG_LEVELS = ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]


def configure_logging(level: str) -> None:
    """Send the package's log records to stderr at ``level``."""
    logger.remove()
    logger.add(
        lambda message: click.echo(message, err=True, nl=False),
        level=level.upper(),
        format="<level>{level: <8}</level> {name}: {message}",
        colorize=False,
    )
    logger.enable("zeronovel_toolkit")


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", is_flag=True, help="Log debug messages to stderr")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    envvar="ZERONOVEL_LOG_LEVEL",
    show_default=True,
    help="Log level (ignored with --verbose)",
)
def main(verbose: bool, log_level: str):
    """ZeroNovel Toolkit - Inspect and extract ZeroNovel ARCH archives."""
    configure_logging("DEBUG" if verbose else log_level)


@main.command()
@click.argument("archive", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def info(archive: Path):
    """Show the header of an ARCH archive."""
    from .arch import open_archive

    try:
        with open_archive(archive) as arc:
            header = arc.header
            compressed = sum(1 for e in arc if e.is_compressed)

            click.echo(f"Archive:      {archive}")
            click.echo(f"Size:         {arc.view.max_offset} bytes")
            click.echo(f"Version:      {header.version}")
            click.echo(f"Flags:        0x{header.flags:08X}")
            click.echo(f"Index offset: 0x{header.index_offset:X}")
            click.echo(f"Records:      {header.file_count}")
            click.echo(f"Entries:      {len(arc)} ({compressed} compressed)")

    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@main.command(name="list")
@click.argument("archive", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def list_entries(archive: Path):
    """List the entries of an ARCH archive."""
    from .arch import open_archive

    try:
        with open_archive(archive) as arc:
            for entry in arc:
                packed = "zlib" if entry.is_compressed else ""
                click.echo(
                    f"{entry.name:<40} {entry.semantic_type:<7} "
                    f"{entry.logical_size:>10} {entry.stored_size:>10} {packed}".rstrip()
                )
            click.echo(f"\n{len(arc)} entries")

    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@main.command()
@click.argument("archive", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "-o",
    "--output",
    type=click.Path(file_okay=False, path_type=Path),
    help="Output directory (default: <archive_name>_extracted)",
)
@click.option(
    "--list-only",
    is_flag=True,
    help="List files without extracting",
)
def extract(archive: Path, output: Optional[Path], list_only: bool):
    """Extract files from an ARCH archive.

    Compressed entries are inflated on the way out.
    """
    from .arch import open_archive

    click.echo(f"Opening: {archive}")

    try:
        with open_archive(archive) as arc:
            if list_only:
                click.echo(f"\nFiles in archive ({len(arc)}):")
                for filename in arc.list_files():
                    click.echo(f"  {filename}")
                return

            if output is None:
                output = archive.parent / f"{archive.stem}_extracted"

            click.echo(f"Output:  {output}")
            click.echo()

            extracted_count = 0
            with click.progressbar(
                arc.extract_all(output),
                length=len(arc),
                label="Extracting",
                item_show_func=lambda x: x[0] if x else "",
            ) as items:
                for _filename, _path in items:
                    extracted_count += 1

            click.echo()
            click.echo(f"Extracted: {extracted_count} files")

    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
