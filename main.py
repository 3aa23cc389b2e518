"""
main.py — Server launcher and entry point.

Run this file to start the room splitter API:

    python main.py

This file does NOT contain application logic. See app.py for the FastAPI
application and service wiring.

Direct uvicorn usage:
    uvicorn app:app --reload
"""

from __future__ import annotations

import argparse

import uvicorn

from backend.utils.logger import configure_logging


HOST = "127.0.0.1"
PORT = 8000


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the guest room splitter API.")
    parser.add_argument("--host", default=HOST)
    parser.add_argument("--port", type=int, default=PORT)
    parser.add_argument("--reload", action="store_true", help="hot-reload on file changes")
    parser.add_argument("--log-level", default=None)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Start the API server."""
    args = _parse_args(argv)
    if args.log_level:
        configure_logging(args.log_level, force=True)

    print("=" * 60)
    print("  Guest Room Splitter")
    print("=" * 60)
    print(f"  Server  : http://{args.host}:{args.port}")
    print(f"  API docs: http://{args.host}:{args.port}/docs")
    print("=" * 60)
    print("  Press CTRL+C to stop\n")

    uvicorn.run(
        "app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=(args.log_level or "info").lower(),
    )


if __name__ == "__main__":
    main()
