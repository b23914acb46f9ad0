"""Interactive terminal front-end for the task list.

Commands:
  add <title>   create a task
  toggle <id>   flip a task between done and not done
  refresh       reload health and tasks from the backend
  help          show this list
  quit          leave
"""

import argparse
import asyncio
import logging
import sys
from collections.abc import Awaitable, Callable
from dataclasses import replace

from tasklist.client import TaskApiClient
from tasklist.config import Settings
from tasklist.logging_setup import setup_logging
from tasklist.ui import TaskClientUI

logger = logging.getLogger(__name__)

HELP = "Commands: add <title> | toggle <id> | refresh | help | quit"


def parse_command(line: str) -> tuple[str, str]:
    """Split an input line into a lower-cased command and its argument."""
    command, _, arg = line.strip().partition(" ")
    return command.lower(), arg.strip()


def terminal_alert(message: str) -> None:
    """Show a message and block until the user acknowledges it."""
    print(f"\n!! {message}", file=sys.stderr)
    try:
        input("Press Enter to continue...")
    except EOFError:
        pass


async def _read_line() -> str:
    return await asyncio.to_thread(input, "> ")


async def interact(
    ui: TaskClientUI,
    read_line: Callable[[], Awaitable[str]] = _read_line,
    write: Callable[[str], None] = print,
) -> None:
    """Run the command loop until ``quit`` or end of input."""
    await ui.mount()
    write(ui.render())
    write(HELP)

    while True:
        try:
            line = await read_line()
        except EOFError:
            break

        command, arg = parse_command(line)
        if not command:
            continue
        if command in ("quit", "exit", "q"):
            break
        if command == "help":
            write(HELP)
            continue

        if command == "add":
            await ui.add_task(arg)
        elif command == "toggle":
            try:
                task_id = int(arg)
            except ValueError:
                write(f"Not a task id: {arg!r}")
                continue
            await ui.toggle_task(task_id)
        elif command == "refresh":
            await ui.mount()
        else:
            write(f"Unknown command: {command}")
            write(HELP)
            continue
        write(ui.render())


async def _run(settings: Settings) -> None:
    async with TaskApiClient(settings.api_url) as api:
        await interact(TaskClientUI(api, alert=terminal_alert))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="tasklist-ui", description="Terminal client for the task list API.")
    parser.add_argument("--api-url", help="Backend base URL (default: TASKLIST_API_URL or http://localhost:3001)")
    args = parser.parse_args(argv)

    settings = Settings.from_env()
    setup_logging(settings.log_level)
    api_url = (args.api_url or settings.api_url).rstrip("/")
    logger.debug("Using backend at %s", api_url)

    try:
        asyncio.run(_run(replace(settings, api_url=api_url)))
    except KeyboardInterrupt:
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
