# filename : main.py
# created  : 02/16/2026


import logging
import sys
from pathlib import Path

from tachoparse.core import (
    CertificateError,
    CertificateStore,
    DecodeError,
    Generation,
    TachoError,
    decode_card,
    decode_vu,
    default_store,
    load_store,
    to_json,
)

lg = logging.getLogger(__name__)


class ProcessError(TachoError):
    """A download could not be turned into JSON."""


def process(
    data: bytes,
    vu: bool = False,
    pretty: bool = False,
    store: CertificateStore | None = None,
) -> str:
    """Decode one download and return its JSON text.

    A hard decode failure or a fatal diagnostic raises ProcessError.
    """
    what = "vu data" if vu else "card"
    decode = decode_vu if vu else decode_card
    try:
        result, diagnostics = decode(data, store=store)
    except DecodeError as e:
        raise ProcessError(f"could not parse {what}: {e}") from e
    for diag in diagnostics:
        if diag.fatal:
            raise ProcessError(f"could not parse {what}: {diag}")
        lg.info("%s", diag)
    return to_json(result, pretty=pretty)


def process_single(
    input_path: str | None,
    output_path: str | None,
    vu: bool = False,
    pretty: bool = False,
    store: CertificateStore | None = None,
) -> int:
    try:
        data = sys.stdin.buffer.read() if input_path is None else Path(input_path).read_bytes()
    except OSError as e:
        lg.error("could not read %s: %s", input_path or "stdin", e)
        return 1

    try:
        text = process(data, vu=vu, pretty=pretty, store=store)
    except ProcessError as e:
        lg.error("%s", e)
        return 1

    if output_path is None or output_path == "-":
        sys.stdout.write(text)
        return 0
    try:
        Path(output_path).write_text(text, encoding="utf-8")
    except OSError as e:
        lg.error("could not write output file: %s", e)
        return 1
    return 0


def process_batch(
    list_path: str,
    vu: bool = False,
    pretty: bool = False,
    store: CertificateStore | None = None,
) -> int:
    """Decode every file named in list_path into <file>.json beside it.

    Files that cannot be read, decoded or written are skipped with a warning.
    """
    try:
        lines = Path(list_path).read_text(encoding="utf-8").splitlines()
    except OSError as e:
        lg.error("could not read input list file: %s", e)
        return 1
    files = [line.strip() for line in lines if line.strip()]
    if not files:
        lg.error("no input files found in list")
        return 1

    for name in files:
        try:
            data = Path(name).read_bytes()
        except OSError as e:
            lg.warning("could not read file %s: %s", name, e)
            continue
        try:
            text = process(data, vu=vu, pretty=pretty, store=store)
        except ProcessError as e:
            lg.warning("could not process file %s: %s", name, e)
            continue
        out = f"{name}.json"
        try:
            Path(out).write_text(text, encoding="utf-8")
        except OSError as e:
            lg.warning("could not write output file %s: %s", out, e)
            continue
        lg.info("processed %s -> %s", name, out)
    return 0


def main(
    vu: bool = False,
    input_path: str | None = None,
    output_path: str | None = None,
    input_list: str | None = None,
    pretty: bool = False,
    certificates: str | None = None,
    verify: bool = False,
) -> int:
    try:
        store = load_store(certificates) if certificates else default_store()
    except (CertificateError, OSError) as e:
        lg.error("could not load certificates: %s", e)
        return 1
    lg.info(
        "loaded certificates: %d %d",
        store.count(Generation.GEN1), store.count(Generation.GEN2_V1),
    )
    if not verify:
        store = None

    if input_list is not None:
        return process_batch(input_list, vu=vu, pretty=pretty, store=store)
    return process_single(input_path, output_path, vu=vu, pretty=pretty, store=store)
