
"""
Compatibility entrypoint.

Prefer running:
  - `music-perception serve`
"""

from music_perception.cli import main as cli_main


def cli() -> None:
    cli_main()


if __name__ == "__main__":
    cli()
