"""Entry point for running hemo_visits as a module.

This allows the package to be executed as:
    python -m hemo_visits
"""

from hemo_visits.cli.main import cli

if __name__ == "__main__":
    cli()
