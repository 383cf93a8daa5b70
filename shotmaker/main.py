"""Main entry point for Shotmaker."""

import argparse
import subprocess
import sys
from pathlib import Path


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Shotmaker - AI filmmaking storyboard wizard"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # UI command
    subparsers.add_parser("ui", help="Launch the Streamlit UI")

    args = parser.parse_args()

    if args.command == "ui":
        run_ui()
    else:
        parser.print_help()


def run_ui():
    """Launch the Streamlit UI."""
    app_path = Path(__file__).parent / "ui" / "app.py"
    subprocess.run([sys.executable, "-m", "streamlit", "run", str(app_path)])


if __name__ == "__main__":
    main()
