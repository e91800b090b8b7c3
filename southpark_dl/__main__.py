"""
Main entry point for the southpark-dl application.
This module handles top-level setup, exception handling, and CLI invocation.
"""

import logging
import os
import sys

import typer
from rich.console import Console

from southpark_dl.cli.app import app
from southpark_dl.cli.formatters import format_error_with_suggestions
from southpark_dl.exceptions import SouthParkDlError


def main() -> None:
    """Main entry point function."""
    if os.name == "nt":
        try:
            sys.stdout.reconfigure(encoding="utf-8")
            sys.stderr.reconfigure(encoding="utf-8")
        except (TypeError, AttributeError):
            pass

    log = logging.getLogger("southpark_dl")
    console = Console()

    try:
        app()
    except (typer.Exit, typer.Abort):
        pass
    except KeyboardInterrupt:
        console.print("\n[yellow]⚠️  Operation cancelled by user.[/yellow]")
        sys.exit(0)
    except SouthParkDlError as e:
        console.print(f"\n{format_error_with_suggestions(e)}")
        sys.exit(1)
    except Exception as e:
        console.print(f"\n{format_error_with_suggestions(e, {'type': 'Unexpected'})}")
        log.debug("Full traceback:", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
