"""Entry point for python -m par_cc_status."""

from .main import app


def main() -> None:
    """Run the CLI application."""
    app()


if __name__ == "__main__":
    main()
