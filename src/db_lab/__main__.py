"""Entry point for running db_lab as a module."""

from db_lab.server import cli_entry

if __name__ == "__main__":
    cli_entry()
