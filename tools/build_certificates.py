#!/usr/bin/env python3
"""Build the embedded certificate dataset from published key files.

Gen1 needs the European root key (EC_PK, 144 bytes: CHR || n || e) and
the member state certificates (194 bytes each) signed with it. Gen2 needs
the European root certificate(s) and the member state CA certificates.
Every certificate is checked against a key already accepted; those that
do not chain are reported and left out.

Usage example:

    python build_certificates.py \\
      --gen1-root keys/EC_PK.bin \\
      --gen1 keys/gen1/*.bin \\
      --gen2-root keys/ERCA_Gen2_Root.bin \\
      --gen2 keys/gen2/*.bin \\
      --version 2026-02 \\
      -o src/tachoparse/core/pki/data/certificates.json
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from tachoparse.core.base.errors import CertificateError
from tachoparse.core.base.types import Generation
from tachoparse.core.pki import gen1, gen2
from tachoparse.core.pki.store import Certificate, CertificateStore, EcKey, RsaKey
from tachoparse.core.pki.verify import chain


def _hex(data: bytes) -> str:
    return data.hex().upper()


# ---------------------------------------------------------------------------
# Key collection
# ---------------------------------------------------------------------------


def _read(paths: list[str]) -> list[tuple[str, bytes]]:
    return [(p, Path(p).read_bytes()) for p in paths]


def _chain_all(
    store: CertificateStore,
    generation: Generation,
    files: list[tuple[str, bytes]],
) -> CertificateStore:
    """Chain files off the store, repeating while new keys turn up."""
    pending = list(files)
    while pending:
        store, opened = chain(store, generation, [data for _, data in pending])
        left = [f for f, cert in zip(pending, opened) if cert is None]
        for (name, _), cert in zip(pending, opened):
            if cert is not None:
                print(f"  {name}: {_hex(cert.key_id)}")
        if len(left) == len(pending):
            break
        pending = left
    for name, _ in pending:
        print(f"  {name}: does not chain, skipped")
    return store


def _gen2_roots(files: list[tuple[str, bytes]]) -> list[Certificate]:
    roots = []
    for name, data in files:
        try:
            parsed = gen2.parse_certificate(data)
        except CertificateError as e:
            print(f"  {name}: {e}", file=sys.stderr)
            continue
        cert = parsed.certificate
        if not gen2.verify_certificate(parsed, cert.key):
            print(f"  {name}: self-signature does not verify, skipped")
            continue
        print(f"  {name}: root {_hex(cert.key_id)} ({cert.key.curve.name})")
        roots.append(cert)
    return roots


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


def _entry(cert: Certificate) -> dict[str, str]:
    if isinstance(cert.key, RsaKey):
        return {
            "key_id": _hex(cert.key_id),
            "modulus": f"{cert.key.modulus:X}",
            "exponent": f"{cert.key.exponent:X}",
        }
    assert isinstance(cert.key, EcKey)
    return {
        "key_id": _hex(cert.key_id),
        "curve": cert.key.curve.name,
        "point": _hex(cert.key.point),
    }


def build(args: argparse.Namespace) -> dict:
    store = CertificateStore()

    print("--- Gen1 ---")
    if args.gen1_root:
        root = gen1.root_key(Path(args.gen1_root).read_bytes())
        print(f"  {args.gen1_root}: root {_hex(root.key_id)}")
        store = store.extended([root])
        store = _chain_all(store, Generation.GEN1, _read(args.gen1))
    elif args.gen1:
        print("  --gen1 given without --gen1-root, skipped")

    print("--- Gen2 ---")
    roots = _gen2_roots(_read(args.gen2_root))
    if roots:
        store = store.extended(roots)
        store = _chain_all(store, Generation.GEN2_V1, _read(args.gen2))
    elif args.gen2:
        print("  --gen2 given without a valid --gen2-root, skipped")

    certs = sorted(store, key=lambda c: c.key_id)
    return {
        "version": args.version,
        "gen1": [_entry(c) for c in certs if c.generation is Generation.GEN1],
        "gen2": [_entry(c) for c in certs if c.generation.is_gen2],
    }


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Build the tachograph certificate dataset",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--gen1-root", default=None, help="Gen1 European root key (144 bytes)")
    parser.add_argument("--gen1", nargs="*", default=[], help="Gen1 member state certificates")
    parser.add_argument("--gen2-root", nargs="*", default=[], help="Gen2 root certificates")
    parser.add_argument("--gen2", nargs="*", default=[], help="Gen2 member state CA certificates")
    parser.add_argument("--version", required=True, help="Dataset version string")
    parser.add_argument("-o", "--output", default="-", help="Output file (default stdout)")

    args = parser.parse_args()

    try:
        doc = build(args)
    except (OSError, CertificateError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)

    text = json.dumps(doc, indent=2) + "\n"
    if args.output == "-":
        sys.stdout.write(text)
    else:
        Path(args.output).write_text(text)
        print(f"wrote {len(doc['gen1'])} gen1 and {len(doc['gen2'])} gen2 keys to {args.output}")


if __name__ == "__main__":
    main()
