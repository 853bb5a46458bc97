# SPDX-License-Identifier: MIT

from rich.console import Console
from rich.markup import escape

from stint.cleanup import register_cleanup
from stint.configuration import ConfigurationError
from stint.initialize import initialize
from stint.repository.lock import EntriesLockError
from stint.terminal.app import run


def main() -> None:
    try:
        initialize()
    except (ConfigurationError, EntriesLockError) as e:
        Console(stderr=True).print(f"[red]Error: {escape(str(e))}[/red]")
        raise SystemExit(1)
    register_cleanup()
    run()


if __name__ == "__main__":
    main()
