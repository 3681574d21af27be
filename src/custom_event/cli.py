"""CLI entry point for exercising custom events from a shell."""

from __future__ import annotations

from typing import Any

import click

from .core.enums import Signature
from .core.errors import ChainedError, ConfigError


@click.group()
def main() -> None:
    """Custom event toolkit."""


@main.command()
@click.option("--config", default=None, help="Config file path")
@click.option(
    "--signature",
    type=click.Choice([s.value for s in Signature]),
    default=None,
    help="Subscriber signature override",
)
@click.option("--fire-once", is_flag=True, help="Replay the fire to a late subscriber")
@click.option("--veto", is_flag=True, help="Second listener returns False")
@click.option("--fail", default=0, type=int, help="Number of listeners that raise")
@click.option(
    "--log-format",
    type=click.Choice(["json", "console"]),
    default=None,
    help="Log renderer override",
)
def demo(
    config: str | None,
    signature: str | None,
    fire_once: bool,
    veto: bool,
    fail: int,
    log_format: str | None,
) -> None:
    """Fire a demo event at three listeners and report the outcome."""
    from .core.config import load_settings
    from .event.factory import create_event
    from .observability.logger import setup_logging

    overrides: dict[str, Any] = {}
    if signature:
        overrides["default_signature"] = signature
    if fire_once:
        overrides["fire_once"] = True

    try:
        settings = load_settings(config, overrides)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    if log_format:
        settings.observability.log_format = log_format
    setup_logging(settings.observability.log_level, settings.observability.log_format)

    event = create_event("demo", settings=settings)
    calls: list[str] = []

    def make_listener(name: str, index: int):
        def listener(context: Any, *args: Any) -> Any:
            calls.append(name)
            if index < fail:
                raise RuntimeError(f"{name} failed")
            if veto and index == 1:
                return False
            return True

        return listener

    for i, name in enumerate(("first", "second", "third")):
        event.subscribe(make_listener(name, i))

    try:
        result = event.fire("payload")
    except ChainedError as exc:
        click.echo(f"called: {', '.join(calls)}")
        click.echo(exc.to_string())
        for err in exc:
            click.echo(f"  - {err!r}")
        raise SystemExit(1) from exc
    except Exception as exc:
        click.echo(f"called: {', '.join(calls)}")
        click.echo(f"aborted: {exc!r}")
        raise SystemExit(1) from exc

    click.echo(f"called: {', '.join(calls)}")
    click.echo(f"result: {result}")

    if event.fire_once:
        late: list[tuple[Any, ...]] = []
        event.subscribe(lambda context, *args: late.append(args))
        click.echo(f"late subscriber replayed with: {late[0] if late else ()!r}")


if __name__ == "__main__":
    main()
