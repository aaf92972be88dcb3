"""Command line access to an auditable item graph service."""

import argparse
import asyncio
import json
import logging
import sys
from typing import Any

from .config import ClientConfig
from .graph import AuditableItemGraphClient
from .models import IdMode, OrderBy, ProtocolVersion, QueryOptions, SortDirection, VerifyDepth
from .rest.parameters import array_from_string, object_from_string

logger = logging.getLogger("aig_client")


def _read_json(path: str) -> Any:
    if path == "-":
        return json.load(sys.stdin)
    with open(path, encoding="utf-8") as handle:
        return json.load(handle)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="aig-client", description=__doc__)
    parser.add_argument("--endpoint", help="Service endpoint, defaults to $AIG_ENDPOINT")
    parser.add_argument("--path-prefix", help="Resource path prefix, defaults to $AIG_PATH_PREFIX")
    parser.add_argument(
        "--protocol",
        choices=[v.value for v in ProtocolVersion],
        help="Wire protocol version, defaults to $AIG_PROTOCOL or annotation",
    )
    parser.add_argument("--timeout", type=float, help="Request timeout in seconds")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    commands = parser.add_subparsers(dest="command", required=True)

    get = commands.add_parser("get", help="Get a vertex")
    get.add_argument("id")
    get.add_argument("--include-deleted", action="store_true", default=None)
    get.add_argument("--include-changesets", action="store_true", default=None)
    get.add_argument("--verify", choices=[v.value for v in VerifyDepth])

    create = commands.add_parser("create", help="Create a vertex from a JSON payload")
    create.add_argument("file", nargs="?", default="-", help="Payload file, '-' for stdin")

    update = commands.add_parser("update", help="Update a vertex from a JSON payload")
    update.add_argument("id")
    update.add_argument("file", nargs="?", default="-", help="Payload file, '-' for stdin")

    query = commands.add_parser("query", help="Query vertices")
    query.add_argument("--id")
    query.add_argument("--id-mode", choices=[v.value for v in IdMode])
    query.add_argument("--conditions", help="Filter conditions as JSON")
    query.add_argument("--order-by", choices=[v.value for v in OrderBy])
    query.add_argument("--direction", choices=[v.value for v in SortDirection])
    query.add_argument("--properties", help="Comma separated vertex fields")
    query.add_argument("--cursor")
    query.add_argument("--page-size", type=int)

    return parser


def build_config(args: argparse.Namespace) -> ClientConfig:
    """Environment settings overridden by command line options."""
    if args.endpoint:
        config = ClientConfig(endpoint=args.endpoint)
    else:
        config = ClientConfig.from_env()
    if args.path_prefix is not None:
        config.path_prefix = args.path_prefix
    if args.protocol:
        config.protocol = ProtocolVersion(args.protocol)
    if args.timeout is not None:
        config.timeout = args.timeout
    return config


async def run(args: argparse.Namespace, client: AuditableItemGraphClient) -> dict[str, Any]:
    """Execute one command.

    Returns:
        JSON-ready result
    """
    if args.command == "get":
        vertex = await client.get(
            args.id,
            include_deleted=args.include_deleted,
            include_changesets=args.include_changesets,
            verify_signature_depth=args.verify,
        )
        return vertex.document

    if args.command == "create":
        vertex_id = await client.create(_read_json(args.file))
        return {"id": vertex_id}

    if args.command == "update":
        payload = dict(_read_json(args.file))
        payload["id"] = args.id
        await client.update(payload)
        return {"success": True, "id": args.id}

    if args.command == "query":
        options = None
        if args.id or args.id_mode:
            options = QueryOptions(id=args.id, id_mode=args.id_mode)
        page = await client.query(
            options=options,
            conditions=object_from_string(args.conditions),
            order_by=args.order_by,
            order_by_direction=args.direction,
            properties=array_from_string(args.properties),
            cursor=args.cursor,
            page_size=args.page_size,
        )
        return {"vertices": [v.document for v in page.vertices], "cursor": page.cursor}

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        client = AuditableItemGraphClient(build_config(args))
        result = asyncio.run(run(args, client))
    except Exception as e:
        logger.exception(f"Error handling command {args.command}")
        print(json.dumps({"error": str(e) or type(e).__name__}, indent=2))
        return 1

    print(json.dumps(result, indent=2, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
