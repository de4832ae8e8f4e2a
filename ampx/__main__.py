"""
Invokable Module for CLI

python -m ampx
"""

from ampx.cli.main import cli  # pragma: no cover

if __name__ == "__main__":  # pragma: no cover
    # prog_name is always set to "ampx" so the generated help text does not say "__main__"
    cli(prog_name="ampx")
