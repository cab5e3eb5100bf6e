"""kvdocs command-line launcher. Serves a storage root over HTTP with uvicorn."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

VERSION = "0.1.0"

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    # -h is the host switch, so help is only available as --help.
    parser = argparse.ArgumentParser(prog="kvdocs", description="JSON document store over HTTP", add_help=False)
    parser.add_argument("root", nargs="?", type=Path, default=None,
                        help="Storage root directory (default: $KVDOCS_ROOT or ./data)")
    parser.add_argument("-h", "-H", "--host", dest="host", default=None,
                        help="Hostname to listen to (default: localhost)")
    parser.add_argument("-p", "--port", type=int, default=None,
                        help="Port to listen to (default: 8080)")
    parser.add_argument("--create-root", action="store_true",
                        help="Create the root directory if it does not exist")
    parser.add_argument("--version", action="version", version=f"kvdocs {VERSION}")
    parser.add_argument("--help", action="help", help="Display this message and exit")
    return parser


def prepare_root(root: Path, *, create: bool) -> Path:
    """Return the resolved root, creating it when asked. Raises FileNotFoundError otherwise."""
    if root.is_dir():
        return root.resolve()
    if not create:
        raise FileNotFoundError(f"Root directory {root} does not exist.")
    root.mkdir(parents=True, exist_ok=True)
    return root.resolve()


def main(argv: list[str] | None = None) -> int:
    load_dotenv("local.env")

    import uvicorn

    from app import create_app
    from persistence import FilesystemStorage
    from settings import get_settings

    settings = get_settings()
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        root = prepare_root(args.root or settings.root, create=args.create_root or settings.create_root)
    except FileNotFoundError as e:
        print(e, file=sys.stderr)
        return 1

    host = args.host or settings.host
    port = args.port if args.port is not None else settings.port

    logger.info("Listening on http://%s:%d", host, port)
    uvicorn.run(create_app(FilesystemStorage(root)), host=host, port=port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
