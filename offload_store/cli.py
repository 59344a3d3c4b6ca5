# ==============================================
# CLI — Command Line Entry Point
# ==============================================
#
# PURPOSE:
#   Read, write and delete documents from a shell. Configuration
#   comes from the environment / .env (see config.py).
#
# COMMANDS:
# ---------
# 1. Fetch a document (content reassembled from S3 if offloaded):
#    python -m offload_store.cli get path/to/doc
#
# 2. Store a document:
#    python -m offload_store.cli put path/to/doc --content "hello"
#    python -m offload_store.cli put path/to/doc --content-file big.json
#
# 3. Delete a document from both backends:
#    python -m offload_store.cli delete path/to/doc
#
# Results are printed as JSON. Exit code 1 on a known failure.
#
# ==============================================

import argparse
import json
import logging
import sys
from typing import List, Optional

from .config import get_config
from .document_client import DocumentClient
from .errors import OffloadStoreError
from .transform.content_codec import decode_content, encode_content
from .transform.field_paths import set_path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="offload-store",
        description="DynamoDB documents with large content offloaded to S3",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    get_parser = subparsers.add_parser("get", help="Fetch a document")
    get_parser.add_argument("path")

    put_parser = subparsers.add_parser("put", help="Store a document")
    put_parser.add_argument("path")
    source = put_parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--content", help="Content as a string")
    source.add_argument("--content-file", help="File whose contents (JSON if parseable) become the content")

    delete_parser = subparsers.add_parser("delete", help="Delete a document")
    delete_parser.add_argument("path")

    return parser


def _read_content(args: argparse.Namespace):
    if args.content is not None:
        return args.content
    with open(args.content_file, "rb") as f:
        return decode_content(f.read())


def run(args: argparse.Namespace, client: DocumentClient) -> dict:
    if args.command == "get":
        return client.get(args.path)
    if args.command == "put":
        item: dict = {}
        set_path(item, client.config.path_path, args.path)
        set_path(item, client.config.content_path, _read_content(args))
        return client.put(item)
    if args.command == "delete":
        return client.delete(args.path)
    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None, client: Optional[DocumentClient] = None) -> int:
    args = build_parser().parse_args(argv)

    if client is None:
        config = get_config()
        logging.basicConfig(level=config.log_level.upper(),
                            format="%(asctime)s %(levelname)s %(name)s: %(message)s")
        client = DocumentClient.from_config(config)
    try:
        result = run(args, client)
    except OffloadStoreError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(json.loads(encode_content(result)), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
