from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any

from pydantic import BaseModel

from .api_session import ApiSession
from .config import ConfigError, load_config
from .error_presenter import event_to_text
from .events import ErrorEvent
from .exceptions import ApiError
from .listings import LISTINGS
from .models import NotFound, Resolved, TransportFailure, ValidationStatus
from .routes import load_route_table
from .validator import report_to_text, summarize


def _print(payload: Any) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False, default=str))


def _build_session(args: argparse.Namespace) -> ApiSession:
    config = load_config(args.env_file)

    def _on_error(event: ErrorEvent) -> None:
        print(f"error: {event_to_text(event)}", file=sys.stderr)

    def _navigate(route: str) -> None:
        print(f"session ended, sign in again ({route})", file=sys.stderr)

    session = ApiSession(config, navigate=_navigate)
    session.errors.subscribe(_on_error)
    return session


async def cmd_login(args: argparse.Namespace) -> int:
    async with _build_session(args) as session:
        established = await session.auth_client().login(args.password, numero=args.numero, email=args.email)
        _print({"user": established.identity.model_dump()})
    return 0


async def cmd_logout(args: argparse.Namespace) -> int:
    async with _build_session(args) as session:
        session.auth_client().logout()
        _print({"logged_out": True})
    return 0


async def cmd_me(args: argparse.Namespace) -> int:
    async with _build_session(args) as session:
        identity = await session.auth_client().me()
        _print(identity.model_dump())
    return 0


async def cmd_resolve(args: argparse.Namespace) -> int:
    async with _build_session(args) as session:
        outcome = await session.group_resolver().resolve(args.group_id)
    if isinstance(outcome, Resolved):
        value = outcome.value.model_dump() if isinstance(outcome.value, BaseModel) else outcome.value
        _print({"outcome": "resolved", "via": outcome.via, "value": value})
        return 0
    if isinstance(outcome, NotFound):
        _print({"outcome": "not_found", "id": outcome.entity_id})
        return 0
    if isinstance(outcome, TransportFailure):
        _print({"outcome": "transport_failure", "cause": str(outcome.cause)})
    return 1


async def cmd_list(args: argparse.Namespace) -> int:
    async with _build_session(args) as session:
        controller = session.listing(LISTINGS[args.kind], page_size=args.page_size)
        if args.status:
            controller.set_filters(status=args.status)
        if args.search:
            controller.on_search_text_changed(args.search)
        if args.page:
            await controller.wait_idle()
            controller.on_page_changed(args.page - 1)
        if not (args.status or args.search or args.page):
            controller.refresh()
        await controller.wait_idle()
        result = controller.result
        _print(
            {
                "state": controller.state.value,
                "synthetic": controller.is_synthetic,
                "result": result.model_dump() if result is not None else None,
            }
        )
    return 0


async def cmd_validate(args: argparse.Namespace) -> int:
    async with _build_session(args) as session:
        routes = load_route_table(args.routes) if args.routes else None
        validator = session.endpoint_validator(routes)

        def _progress(current: int, total: int) -> None:
            print(f"[{current}/{total}]", file=sys.stderr)

        results = await validator.collect(_progress)
    report = summarize(results)
    if args.json:
        _print(report.model_dump(mode="json"))
    else:
        print(report_to_text(report))
    return 1 if any(item.status is ValidationStatus.ERROR for item in results) else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="toona-admin", description="Toona admin data-access diagnostics")
    parser.add_argument("--env-file", default=None)
    subparsers = parser.add_subparsers(dest="command", required=True)

    login_parser = subparsers.add_parser("login")
    login_parser.add_argument("--password", required=True)
    login_parser.add_argument("--numero")
    login_parser.add_argument("--email")
    login_parser.set_defaults(func=cmd_login)

    logout_parser = subparsers.add_parser("logout")
    logout_parser.set_defaults(func=cmd_logout)

    me_parser = subparsers.add_parser("me")
    me_parser.set_defaults(func=cmd_me)

    resolve_parser = subparsers.add_parser("resolve")
    resolve_parser.add_argument("group_id")
    resolve_parser.set_defaults(func=cmd_resolve)

    list_parser = subparsers.add_parser("list")
    list_parser.add_argument("kind", choices=sorted(LISTINGS))
    list_parser.add_argument("--search")
    list_parser.add_argument("--status")
    list_parser.add_argument("--page", type=int, default=0, help="1-based page number")
    list_parser.add_argument("--page-size", type=int, default=10)
    list_parser.set_defaults(func=cmd_list)

    validate_parser = subparsers.add_parser("validate")
    validate_parser.add_argument("--routes", help="JSON route table; defaults to the built-in one")
    validate_parser.add_argument("--json", action="store_true")
    validate_parser.set_defaults(func=cmd_validate)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return asyncio.run(args.func(args))
    except ConfigError as exc:
        _print({"error": "CONFIG_ERROR", "message": str(exc)})
        return 2
    except ApiError as exc:
        _print({"error": exc.code, "message": exc.message, "status": exc.status_code})
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
