#!/usr/bin/env python
"""
Evidence Integrity - Command Line Interface
Collect, verify and compare evidence against the configured database.
"""
import argparse
import asyncio
import json
import sys
from uuid import UUID

from loguru import logger

from core.errors import IntegrityError, ValidationError


def configure_logging(verbose: bool = False):
    """Configure logging output."""
    level = "DEBUG" if verbose else "INFO"
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <7}</level> | {message}",
        level=level,
    )


def emit(data: dict):
    print(json.dumps(data, indent=2, default=str))


async def collect(args) -> dict:
    from core.database import get_async_session, get_ledger, init_db_async
    from core.integrity import collect_evidence

    await init_db_async()
    async with get_async_session() as db:
        result = await collect_evidence(
            get_ledger(db),
            platform=args.platform,
            evidence_type=args.evidence_type,
            url=args.url,
            case_id=args.case_id,
            collector=args.actor,
        )
    return result.model_dump(mode="json")


def parse_evidence_id(value: str) -> UUID:
    try:
        return UUID(value)
    except ValueError:
        raise ValidationError(
            "Malformed evidence id", details={"field": "evidence_id", "value": value}
        ) from None


async def verify(args) -> dict:
    from core.database import get_async_session, get_ledger
    from core.integrity import verify_evidence

    evidence_id = parse_evidence_id(args.evidence_id)
    async with get_async_session() as db:
        result = await verify_evidence(get_ledger(db), evidence_id, args.actor)
    return result.model_dump(mode="json")


async def compare(args) -> dict:
    from core.database import get_async_session, get_ledger, init_db_async
    from core.integrity import compare_references

    await init_db_async()
    async with get_async_session() as db:
        result = await compare_references(get_ledger(db), args.name, args.urls, args.actor)
    return result.model_dump(mode="json")


async def init_database():
    """Initialize database tables."""
    from core.database import init_db_async

    await init_db_async()
    logger.info("Database initialized successfully")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Evidence Integrity CLI - tamper-evident social-media evidence"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    canon_parser = subparsers.add_parser("canonicalize", help="Print canonical form and digest")
    canon_parser.add_argument("--platform", required=True)
    canon_parser.add_argument("--evidence-type", required=True)
    canon_parser.add_argument("--url", required=True)
    canon_parser.add_argument("--case-id", required=True)
    canon_parser.add_argument("--algorithm", default=None, help="Digest algorithm")

    digest_parser = subparsers.add_parser("digest", help="Digest a string or file")
    digest_parser.add_argument("--text", "-t", help="Text to digest")
    digest_parser.add_argument("--file", "-f", help="File to digest")
    digest_parser.add_argument("--algorithm", default="SHA-256", help="Digest algorithm")

    collect_parser = subparsers.add_parser("collect", help="Collect evidence")
    collect_parser.add_argument("--platform", required=True)
    collect_parser.add_argument("--evidence-type", required=True)
    collect_parser.add_argument("--url", required=True)
    collect_parser.add_argument("--case-id", required=True)
    collect_parser.add_argument("--actor", default="cli", help="Collector identity")

    verify_parser = subparsers.add_parser("verify", help="Verify evidence integrity")
    verify_parser.add_argument("evidence_id", help="Evidence identifier")
    verify_parser.add_argument("--actor", default="cli", help="Verifier identity")

    compare_parser = subparsers.add_parser("compare", help="Compare YouTube videos")
    compare_parser.add_argument("urls", nargs="+", help="Video URLs")
    compare_parser.add_argument("--name", required=True, help="Comparison name")
    compare_parser.add_argument("--actor", default="cli", help="Creator identity")

    server_parser = subparsers.add_parser("server", help="Start API server")
    server_parser.add_argument("--host", default="0.0.0.0", help="Host to bind")
    server_parser.add_argument("--port", type=int, default=8000, help="Port to bind")
    server_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")

    db_parser = subparsers.add_parser("db", help="Database operations")
    db_parser.add_argument("action", choices=["init"], help="Database action")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    configure_logging(args.verbose)

    try:
        if args.command == "canonicalize":
            from core.integrity import FingerprintEngine, canonicalize

            canonical = canonicalize(args.platform, args.evidence_type, args.url, args.case_id)
            engine = FingerprintEngine(args.algorithm)
            emit({
                "canonical": canonical.text,
                "algorithm": engine.algorithm,
                "hash": engine.hash_canonical(canonical),
            })

        elif args.command == "digest":
            from core.integrity import digest

            if args.file:
                with open(args.file, "rb") as f:
                    data = f.read()
            elif args.text is not None:
                data = args.text.encode("utf-8")
            else:
                print("Error: Provide --text or --file")
                return 1
            emit({"algorithm": args.algorithm, "hash": digest(data, args.algorithm)})

        elif args.command == "collect":
            emit(asyncio.run(collect(args)))

        elif args.command == "verify":
            emit(asyncio.run(verify(args)))

        elif args.command == "compare":
            emit(asyncio.run(compare(args)))

        elif args.command == "server":
            import uvicorn

            uvicorn.run("api.main:app", host=args.host, port=args.port, reload=args.reload)

        elif args.command == "db":
            asyncio.run(init_database())

    except IntegrityError as e:
        logger.error(f"{e.kind}: {e.message}")
        emit({"error": e.to_dict()})
        return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())
