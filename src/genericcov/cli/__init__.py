from genericcov.cli.exit_codes import EXIT_DATAERR, EXIT_GENERIC, EXIT_NOINPUT, EXIT_OK
from genericcov.cli.root import cli, create_app, main

__all__ = ["EXIT_DATAERR", "EXIT_GENERIC", "EXIT_NOINPUT", "EXIT_OK", "cli", "create_app", "main"]
