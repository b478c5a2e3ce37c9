"""Entry point: python -m mac_agent

Usage:
    python -m mac_agent serve                       # local command server for the GUI
    python -m mac_agent invoke jobs_list            # run one command, print JSON
    python -m mac_agent invoke jobs_detail --args '{"id": "j1"}'
    python -m mac_agent commands                    # list command names
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from mac_agent.commands import CommandError, build_context, build_registry
from mac_agent.config import settings


async def _invoke(command: str, args: dict) -> int:
    registry = build_registry()
    ctx = build_context(settings)
    try:
        result = await registry.invoke(command, ctx, args)
    except CommandError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    finally:
        await ctx.close()
    print(json.dumps(result, indent=2))
    return 0


def _serve(host: str, port: int) -> int:
    import uvicorn

    from mac_agent.main import create_app

    uvicorn.run(create_app(settings), host=host, port=port, log_level=settings.log_level.lower())
    return 0


def cli(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="mac-agent",
        description="mac-agent desktop shell commands",
    )
    sub = parser.add_subparsers(dest="action", required=True)

    serve = sub.add_parser("serve", help="Run the local command server for the GUI front-end")
    serve.add_argument("--host", default=settings.host)
    serve.add_argument("--port", type=int, default=settings.port)

    invoke = sub.add_parser("invoke", help="Run a single command and print its JSON result")
    invoke.add_argument("command")
    invoke.add_argument(
        "--args",
        default="{}",
        help="JSON object of command arguments",
    )

    sub.add_parser("commands", help="List the registered commands")

    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))

    if args.action == "serve":
        return _serve(args.host, args.port)

    if args.action == "commands":
        for name in build_registry().names():
            print(name)
        return 0

    try:
        command_args = json.loads(args.args)
    except json.JSONDecodeError as e:
        parser.error(f"--args is not valid JSON: {e}")
    if not isinstance(command_args, dict):
        parser.error("--args must be a JSON object")
    return asyncio.run(_invoke(args.command, command_args))


def main() -> None:
    sys.exit(cli())


if __name__ == "__main__":
    main()
