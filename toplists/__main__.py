"""Allow ``python -m toplists``."""

from toplists.cli.main import cli


if __name__ == "__main__":
    cli()
