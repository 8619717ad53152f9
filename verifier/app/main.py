"""
Command-line entry point for the signature verifier.

    verify-signature <path-to-signed-document> [options]

This is the single place where process exit status is decided. Every
component below it reports failures by raising a VerifierError.

Exit status:
    0   every signature is TOTAL_PASSED
    1   the invocation failed (file, connection, service, transport,
        report shape, or configuration error)
    2   usage error; nothing was read and nothing was sent
    3   at least one signature did not pass
    4   the service found no signatures in the document
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

import anyio
import httpx
from pydantic import ValidationError

from verifier.app.core.config import get_settings
from verifier.app.core.errors import UsageError, VerifierError
from verifier.app.pipeline import SignatureVerificationPipeline
from verifier.app.presentation import render_error, render_outcome
from verifier.app.schemas.verdict import ValidationOutcome
from verifier.app.services.validation_client import DssValidationClient

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_INVALID_SIGNATURE = 3
EXIT_NO_SIGNATURES = 4


class _Parser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting."""

    def error(self, message: str):
        raise UsageError(message)


def _positive_float(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {raw!r}")
    if value <= 0:
        raise argparse.ArgumentTypeError("must be greater than zero")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(
        prog="verify-signature",
        description=(
            "Validate the signatures of a signed document against a "
            "remote DSS validation service."
        ),
    )
    parser.add_argument(
        "document",
        help="Path to the signed document (e.g. a signed PDF)",
    )
    parser.add_argument(
        "--original",
        action="append",
        default=[],
        metavar="PATH",
        help="Original content for a detached signature (repeatable)",
    )
    parser.add_argument(
        "--policy",
        metavar="PATH",
        help="Custom validation policy file (service default if omitted)",
    )
    parser.add_argument(
        "--signature-id",
        help="Validate only the signature with this identifier",
    )
    parser.add_argument(
        "--level",
        help="Validation level, passed through to the service",
    )
    parser.add_argument(
        "--endpoint",
        help="validateSignature URL (overrides VERIFIER_DSS_VALIDATION_URL)",
    )
    parser.add_argument(
        "--timeout",
        type=_positive_float,
        metavar="SECONDS",
        help="HTTP timeout (default: none)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the outcome as JSON",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log progress to stderr",
    )
    return parser


async def _verify(
    args: argparse.Namespace,
    endpoint: str,
    timeout: Optional[float],
    transport: Optional[httpx.AsyncBaseTransport],
) -> ValidationOutcome:
    async with httpx.AsyncClient(
        timeout=timeout, transport=transport
    ) as http_client:
        client = DssValidationClient(
            endpoint=endpoint,
            http_client=http_client,
            timeout=timeout,
        )
        pipeline = SignatureVerificationPipeline(client)
        return await pipeline.run(
            args.document,
            original_paths=args.original,
            policy_path=args.policy,
            signature_id=args.signature_id,
            level=args.level,
        )


def _exit_status(outcome: ValidationOutcome) -> int:
    if not outcome.signatures_found:
        return EXIT_NO_SIGNATURES
    if outcome.all_valid:
        return EXIT_OK
    return EXIT_INVALID_SIGNATURE


def main(
    argv: Optional[List[str]] = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> int:
    """
    Run one verification and return the process exit status.

    ``transport`` lets tests substitute the HTTP layer.
    """
    parser = build_parser()

    try:
        args = parser.parse_args(argv)
    except UsageError as exc:
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: error: {exc.message}", file=sys.stderr)
        return EXIT_USAGE

    try:
        settings = get_settings()
    except ValidationError as exc:
        print(f"Invalid configuration:\n{exc}", file=sys.stderr)
        return EXIT_FAILURE

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    endpoint = args.endpoint or str(settings.dss_validation_url)
    timeout = (
        args.timeout
        if args.timeout is not None
        else settings.request_timeout_seconds
    )

    if not args.json:
        print(f"Reading file: {args.document}")
        print(f"Sending request to {endpoint}...")

    try:
        outcome = anyio.run(_verify, args, endpoint, timeout, transport)
    except VerifierError as exc:
        print(render_error(exc), file=sys.stderr)
        return EXIT_FAILURE

    if args.json:
        print(outcome.model_dump_json(indent=2))
    else:
        print()
        print(render_outcome(outcome))

    return _exit_status(outcome)


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
