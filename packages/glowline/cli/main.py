"""Command-line interface for Glowline."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
import sys
from typing import Any

from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from glowline.core.config.loader import configure_logging, load_app_config, load_roofline
from glowline.core.models import ClarificationOption, ClarificationQuestion, DesignIntent
from glowline.core.persistence import FileDesignRepository
from glowline.core.session import DesignSession, PayloadFormat
from glowline.core.transport import HttpDeviceTransport

console = Console()
logger = logging.getLogger(__name__)

# Rounds of automatic answering before giving up on --accept-recommended
MAX_AUTO_ROUNDS = 5


def _recommended(question: ClarificationQuestion) -> ClarificationOption:
    return next((o for o in question.options if o.is_recommended), question.options[0])


def _parse_answers(values: list[str]) -> dict[str, str]:
    """``question_id=option_id`` pairs from repeated ``--answer`` flags."""
    answers: dict[str, str] = {}
    for value in values:
        question_id, sep, option_id = value.partition("=")
        if not sep or not question_id or not option_id:
            raise ValueError(f"Expected QUESTION=OPTION, got {value!r}")
        answers[question_id.strip()] = option_id.strip()
    return answers


def _print_intent(intent: DesignIntent) -> None:
    table = Table(title=f"Design ({intent.confidence:.0%} confidence)")
    table.add_column("Layer")
    table.add_column("Zone")
    table.add_column("Colour")
    table.add_column("Spacing")
    table.add_column("Motion")
    for layer in intent.layers:
        spacing = layer.colors.spacing
        motion = layer.motion
        table.add_row(
            layer.name,
            layer.zone.description,
            f"{layer.colors.primary_name} ({layer.colors.primary.to_hex()})",
            spacing.description if spacing is not None else "-",
            f"{motion.motion_type.value} {motion.direction.value}" if motion else "-",
        )
    console.print(table)


def _print_questions(questions: list[ClarificationQuestion]) -> None:
    for question in questions:
        console.print(f"\n[bold]{question.id}[/bold]: {question.question}")
        for option in question.options:
            marker = "[green]*[/green]" if option.is_recommended else " "
            console.print(f"  {marker} {option.id}: {option.label}")


def _write_payload(payload: dict[str, Any], out: str | None) -> None:
    if out is None:
        console.print_json(data=payload)
        return
    path = Path(out)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    console.print(f"[green]Payload written to[/green] {path}")


def _open_session(args: argparse.Namespace) -> DesignSession:
    """Load config and roofline, configure logging, start a session.

    Raises:
        FileNotFoundError: If the roofline file does not exist.
        ValueError: If a file cannot be parsed.
        ValidationError: If a file's content is invalid.
    """
    app_config = load_app_config(args.config)
    if args.verbose:
        app_config = app_config.model_copy(
            update={"logging": app_config.logging.model_copy(update={"level": "DEBUG"})}
        )
    configure_logging(app_config)
    return DesignSession(
        load_roofline(args.roofline),
        app_config=app_config,
        repository=FileDesignRepository(args.store),
    )


def _resolve(session: DesignSession, args: argparse.Namespace) -> bool:
    """Parse the prompt and answer questions; True once nothing is open."""
    session.parse(args.prompt)
    answers = _parse_answers(args.answer)
    if answers:
        session.answer(answers)

    rounds = 0
    while args.accept_recommended and session.questions and rounds < MAX_AUTO_ROUNDS:
        session.answer({q.id: _recommended(q) for q in session.questions})
        rounds += 1

    if session.questions:
        console.print("[yellow]The design needs clarification:[/yellow]")
        _print_questions(session.questions)
        console.print("\nAnswer with --answer QUESTION=OPTION or use --accept-recommended")
        return False
    return True


def _compile(session: DesignSession, args: argparse.Namespace) -> dict[str, Any] | None:
    if not _resolve(session, args):
        return None
    result = session.compile(args.format)
    for warning in result.warnings:
        console.print(f"[yellow]Warning:[/yellow] {warning}")
    if not result.success or result.payload is None:
        console.print(f"[red]ERROR: {result.error}[/red]")
        for suggestion in result.suggestions:
            console.print(f"  - {suggestion}")
        return None
    console.print(f"[green]Compiled[/green] {len(result.groups)} LED group(s)")
    return result.payload


def cmd_parse(args: argparse.Namespace) -> int:
    session = _open_session(args)
    intent = session.parse(args.prompt)
    if args.json:
        console.print_json(data=intent.model_dump(mode="json"))
        return 0
    _print_intent(intent)
    if session.questions:
        _print_questions(session.questions)
    else:
        console.print("[green]No clarification needed[/green]")
    return 0


def cmd_compile(args: argparse.Namespace) -> int:
    session = _open_session(args)
    payload = _compile(session, args)
    if payload is None:
        return 2
    _write_payload(payload, args.out)
    if args.save:
        session.save(args.save)
        console.print(f"[green]Saved design[/green] {args.save}")
    return 0


def cmd_send(args: argparse.Namespace) -> int:
    session = _open_session(args)
    device = session.app_config.device
    base_url = args.host or device.base_url
    if base_url is None:
        console.print("[red]ERROR: No device host; pass --host or set device.host[/red]")
        return 1
    if not base_url.startswith(("http://", "https://")):
        base_url = f"http://{base_url}"

    payload = _compile(session, args)
    if payload is None:
        return 2
    with HttpDeviceTransport(
        base_url, timeout_s=device.timeout_s, retry_policy=device.retry
    ) as transport:
        if not transport.send(payload):
            console.print(f"[red]ERROR: Device at {base_url} did not accept the payload[/red]")
            return 1
    console.print(f"[green]Sent to[/green] {base_url}")
    return 0


def _add_design_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("prompt", help="Design instruction, e.g. 'red on peaks, 1 on 2 off'")
    p.add_argument(
        "--answer",
        action="append",
        default=[],
        metavar="QUESTION=OPTION",
        help="Answer a clarification question (repeatable)",
    )
    p.add_argument(
        "--accept-recommended",
        action="store_true",
        help="Answer every open question with its recommended option",
    )
    p.add_argument(
        "--format",
        choices=[f.value for f in PayloadFormat],
        default=PayloadFormat.AUTO.value,
        help="Payload form (default: auto)",
    )


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for CLI."""
    p = argparse.ArgumentParser(
        prog="glowline",
        description="Glowline - design-intent compiler for addressable LED rooflines",
    )
    p.add_argument("--roofline", required=True, help="Path to roofline JSON/YAML")
    p.add_argument("--config", default=None, help="Path to app config JSON/YAML")
    p.add_argument(
        "--store",
        default="designs",
        help="Directory for saved designs (default: designs)",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    parse = sub.add_parser("parse", help="Parse a prompt and show open questions")
    parse.add_argument("prompt", help="Design instruction")
    parse.add_argument("--json", action="store_true", help="Print the intent as JSON")
    parse.set_defaults(func=cmd_parse)

    compile_ = sub.add_parser("compile", help="Compile a prompt to a device payload")
    _add_design_args(compile_)
    compile_.add_argument("--out", default=None, help="Write payload JSON to this file")
    compile_.add_argument("--save", default=None, metavar="DESIGN_ID", help="Save the design")
    compile_.set_defaults(func=cmd_compile)

    send = sub.add_parser("send", help="Compile a prompt and send it to a controller")
    _add_design_args(send)
    send.add_argument("--host", default=None, help="Controller host (overrides config)")
    send.set_defaults(func=cmd_send)

    return p


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    p = build_arg_parser()
    args = p.parse_args(argv)
    try:
        return args.func(args)
    except (FileNotFoundError, ValueError, ValidationError) as e:
        console.print(f"[red]ERROR: {e}[/red]")
        return 1


if __name__ == "__main__":
    sys.exit(main())
