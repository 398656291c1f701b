"""
Command-line interface for geocodec.

Usage:
    geocodec inspect <hex> [--format auto|ewkb|spatialite] [--json]
    geocodec inspect <file.bin> --file
    geocodec convert <hex> --to spatialite [--from ewkb] [--byte-order little]
"""

import json
import logging
import sys
from pathlib import Path

import click

from .errors import GeometryError
from .formats import FORMATS, get_format, sniff_format
from .geometry import Geometry, validate_srid
from .payload import ByteOrder

FORMAT_CHOICES = ["auto", *FORMATS]
BYTE_ORDERS = {
    "native": None,
    "little": ByteOrder.LITTLE,
    "big": ByteOrder.BIG,
}


def _read_input(data: str, from_file: bool) -> bytes:
    """Read a blob from a binary file, or parse it as a hex string"""
    if from_file:
        try:
            return Path(data).read_bytes()
        except OSError as e:
            raise click.BadParameter(
                f"cannot read {data}: {e.strerror}", param_hint="DATA"
            ) from e
    text = data.strip()
    if text.lower().startswith("0x"):
        text = text[2:]
    try:
        return bytes.fromhex(text)
    except ValueError as e:
        raise click.BadParameter(f"not a hex string: {e}", param_hint="DATA") from e


def _decode(blob: bytes, input_format: str) -> tuple[str, Geometry]:
    fmt = sniff_format(blob) if input_format == "auto" else input_format
    try:
        return fmt, get_format(fmt).decode(blob)
    except GeometryError as e:
        click.echo(f"Error decoding {fmt} geometry: {e}", err=True)
        sys.exit(1)


@click.group()
@click.version_option()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """
    Encode and decode PostGIS EWKB and SpatiaLite geometry blobs.

    Input blobs are given as hex strings (as printed by psql or
    sqlite3's hex()) or as binary files with --file.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("data")
@click.option("--file", "from_file", is_flag=True, help="Treat DATA as a file path")
@click.option(
    "--format",
    "-f",
    "input_format",
    type=click.Choice(FORMAT_CHOICES),
    default="auto",
    help="Input format (default: detect from framing bytes)",
)
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def inspect(data: str, from_file: bool, input_format: str, output_json: bool):
    """
    Decode a geometry blob and describe it.

    Shows the format, geometry kind, SRID, dimension, bounding box and WKT.

    Example:
        geocodec inspect 0101000020E6100000000000000000244000000000000034C0
    """
    fmt, geom = _decode(_read_input(data, from_file), input_format)

    try:
        mbr: list[float] | None = list(geom.mbr())
    except GeometryError:
        mbr = None

    if output_json:
        info: dict[str, str | int | list[float] | None] = {
            "format": fmt,
            "kind": geom.kind.label,
            "srid": geom.srid,
            "dimension": geom.dimension,
            "mbr": mbr,
            "wkt": geom.wkt,
        }
        click.echo(json.dumps(info, indent=2))
        return

    click.echo(f"Format: {fmt}")
    click.echo(f"Kind: {geom.kind.label}")
    click.echo(f"SRID: {geom.srid if geom.srid is not None else 'unspecified'}")
    click.echo(f"Dimension: {geom.dimension}D")
    if mbr is not None:
        click.echo("MBR: " + " ".join(f"{v}" for v in mbr))
    else:
        click.echo("MBR: n/a")
    click.echo(f"WKT: {geom.wkt}")


@main.command()
@click.argument("data")
@click.option("--file", "from_file", is_flag=True, help="Treat DATA as a file path")
@click.option(
    "--from",
    "input_format",
    type=click.Choice(FORMAT_CHOICES),
    default="auto",
    help="Input format (default: detect from framing bytes)",
)
@click.option(
    "--to",
    "output_format",
    type=click.Choice(list(FORMATS)),
    required=True,
    help="Output format",
)
@click.option(
    "--byte-order",
    type=click.Choice(list(BYTE_ORDERS)),
    default="native",
    help="Byte order of the output (default: native)",
)
@click.option("--srid", type=int, help="Override the SRID of the output")
@click.option("--output", "-o", type=click.Path(), help="Write binary output to a file")
def convert(
    data: str,
    from_file: bool,
    input_format: str,
    output_format: str,
    byte_order: str,
    srid: int | None,
    output: str | None,
):
    """
    Re-encode a geometry blob in another format.

    Prints the result as hex, or writes raw bytes with --output.

    Examples:
        geocodec convert 0101000000000000000000244000000000000034C0 --to spatialite
        geocodec convert blob.bin --file --to ewkb --byte-order big -o out.bin
    """
    _, geom = _decode(_read_input(data, from_file), input_format)

    try:
        if srid is not None:
            geom.srid = validate_srid(srid)
        encoded = get_format(output_format).encode(geom, BYTE_ORDERS[byte_order])
    except GeometryError as e:
        click.echo(f"Error encoding {output_format} geometry: {e}", err=True)
        sys.exit(1)

    if output:
        Path(output).write_bytes(encoded)
        click.echo(f"Wrote {len(encoded):,} bytes to {output}")
    else:
        click.echo(encoded.hex().upper())


if __name__ == "__main__":
    main()
