"""Synthesize the SHA3-256 circuit for a message and report its size.

Builds the preimage-knowledge circuit (private message bits, public digest),
checks the witness satisfies every gate, and compares the in-circuit digest
against hashlib.

Usage:
    python sha3_circuit.py abc
    python sha3_circuit.py --hex 616263 --public-digest
    python sha3_circuit.py --no-witness --length 200
"""

import argparse
import hashlib
import logging
import sys
import time

from constraints import ConstraintSystem, ConstraintSystemConfig, SynthesisError
from gadgets import alloc_bytes, digest_bytes, enforce_digest, sha3_256


def synthesize(message, length: int, public_digest: bool, config: ConstraintSystemConfig):
    """Build the circuit; message=None synthesizes without a witness."""
    cs = ConstraintSystem(config)
    with cs.namespace("preimage"):
        preimage = alloc_bytes(cs, message, n_bytes=length)
    digest = sha3_256(cs, preimage)
    if public_digest:
        expected = None if message is None else hashlib.sha3_256(message).digest()
        enforce_digest(cs, digest, expected)
    return cs, digest


def main():
    parser = argparse.ArgumentParser(
        description='Synthesize the SHA3-256 circuit for a message'
    )
    parser.add_argument(
        'message',
        nargs='?',
        default='',
        help='Message text (UTF-8); ignored with --hex'
    )
    parser.add_argument(
        '--hex',
        type=str,
        default=None,
        help='Message as a hex string'
    )
    parser.add_argument(
        '--no-witness',
        action='store_true',
        help='Synthesize the circuit shape only, without witness values'
    )
    parser.add_argument(
        '--length',
        type=int,
        default=None,
        help='Message length in bytes for --no-witness (default: length of the message)'
    )
    parser.add_argument(
        '--public-digest',
        action='store_true',
        help='Expose the digest as public inputs bound to the computed digest'
    )
    parser.add_argument(
        '--max-variables',
        type=int,
        default=ConstraintSystemConfig.max_variables,
        help='Variable budget of the constraint system'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Log synthesis progress'
    )

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(name)s %(levelname)s %(message)s',
    )

    if args.hex is not None:
        try:
            message = bytes.fromhex(args.hex)
        except ValueError as e:
            print(f"Error: invalid hex message: {e}", file=sys.stderr)
            sys.exit(2)
    else:
        message = args.message.encode('utf-8')

    length = args.length if args.length is not None else len(message)
    config = ConstraintSystemConfig(max_variables=args.max_variables)

    t0 = time.time()
    try:
        cs, digest = synthesize(
            None if args.no_witness else message, length, args.public_digest, config,
        )
    except SynthesisError as e:
        print(f"Error: synthesis failed: {e}", file=sys.stderr)
        sys.exit(1)
    elapsed = time.time() - t0

    print(f"Synthesized in {elapsed:.2f}s")
    print(f"  Message length: {length} bytes")
    print(f"  Gates: {cs.num_constraints}")
    print(f"  Variables: {cs.num_variables}")
    print(f"  Public inputs: {cs.num_inputs}")

    if args.no_witness:
        return

    computed = digest_bytes(digest)
    expected = hashlib.sha3_256(message).digest()
    print(f"  Digest: {computed.hex()}")

    failing = cs.which_is_unsatisfied()
    if failing is not None:
        print(f"Error: unsatisfied gate: {failing}", file=sys.stderr)
        sys.exit(1)
    if computed != expected:
        print(f"Error: digest mismatch, hashlib gives {expected.hex()}", file=sys.stderr)
        sys.exit(1)
    print("  Witness satisfies all gates and matches hashlib")


if __name__ == '__main__':
    main()
