# filename : scripts.py
# created  : 02/16/2026


import logging
import sys

import click

from tachoparse.core.wire.logging import ELEMENT, TRACE

lg = logging.getLogger(__name__)


@click.command()
@click.option("-v", "--verbose", is_flag=True, help="TRACE level (show raw element bytes).")
@click.option("--card", is_flag=True, help="Input is a card download.")
@click.option("--vu", is_flag=True, help="Input is a vehicle unit download.")
@click.option(
    "--input",
    "input_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Input file (stdin if not set).",
)
@click.option(
    "--output",
    "output_path",
    default=None,
    help="Output file (stdout if not set or '-').",
)
@click.option(
    "--input-list",
    type=click.Path(dir_okay=False),
    default=None,
    help="Newline-separated list of files, each written to <file>.json.",
)
@click.option("--format", "pretty", is_flag=True, help="Pretty-print JSON output.")
@click.option(
    "--certificates",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Certificate dataset to use instead of the embedded one.",
)
@click.option("--verify", is_flag=True, help="Check signatures against the certificates.")
def tachoparse(verbose, card, vu, input_path, output_path, input_list, pretty, certificates, verify):

    logging.basicConfig(
        level=TRACE if verbose else ELEMENT,
        format="%(levelname)-8s %(name)s: %(message)s",
    )

    if card == vu:
        raise click.UsageError("either --card or --vu must be set")
    if input_list is not None and input_path is not None:
        raise click.UsageError("--input-list and --input are mutually exclusive")

    from tachoparse.app.main import main
    rc = main(
        vu=vu,
        input_path=input_path,
        output_path=output_path,
        input_list=input_list,
        pretty=pretty,
        certificates=certificates,
        verify=verify,
    )
    if rc:
        sys.exit(rc)
