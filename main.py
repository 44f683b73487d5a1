"""Main orchestration script for extracting JSDoc doclets and generating HTML docs."""

import argparse
import subprocess
import sys
from collections.abc import Sequence
from pathlib import Path


def run_command(
    cmd_list: Sequence[str | Path],
    cwd: Path | str | None = None,
    stdout_path: Path | None = None,
) -> None:
    """Run a command and exit if it fails, optionally capturing stdout to a file."""
    cmd_str = " ".join(str(x) for x in cmd_list)
    print(f"Running: {cmd_str}")
    try:
        if stdout_path is None:
            subprocess.run(cmd_list, check=True, cwd=cwd)
        else:
            with stdout_path.open("w", encoding="utf-8") as out:
                subprocess.run(cmd_list, check=True, cwd=cwd, stdout=out)
    except subprocess.CalledProcessError as e:
        print(f"Error executing command: {cmd_str}")
        sys.exit(e.returncode)


def main() -> None:
    """Run the full documentation generation pipeline."""
    parser = argparse.ArgumentParser(
        description="Extract JSDoc doclets and generate the HTML documentation."
    )
    parser.add_argument(
        "sources",
        nargs="+",
        help="JavaScript files or directories passed to jsdoc",
    )
    parser.add_argument(
        "--out-dir",
        type=Path,
        default=Path("docs"),
        help="Output directory for the generated site (default: docs)",
    )
    parser.add_argument(
        "--jsdoc",
        default="jsdoc",
        help="jsdoc executable (default: jsdoc)",
    )
    parser.add_argument(
        "--config",
        action="append",
        default=[],
        help="Path to configuration file; repeat to layer several",
    )
    parser.add_argument(
        "--tutorials",
        help="Directory of tutorials",
    )
    parser.add_argument(
        "--readme",
        help="Markdown file shown on the home page",
    )
    args = parser.parse_args()

    root_dir = Path(__file__).parent
    doclets_path = root_dir / "doclets.json"

    # 1. Dump doclets as JSON
    print("--- Step 1: Extracting doclets with jsdoc -X ---")
    run_command([args.jsdoc, "-X", "-r", *args.sources], stdout_path=doclets_path)

    # 2. Render the doclets as HTML
    print("\n--- Step 2: Rendering HTML documentation ---")
    # Using the current python interpreter
    cmd: list[str | Path] = [
        sys.executable,
        "-m",
        "doclet_html.cli",
        doclets_path,
        args.out_dir,
    ]
    for config in args.config:
        cmd.extend(["--config", config])
    if args.tutorials:
        cmd.extend(["--tutorials", args.tutorials])
    if args.readme:
        cmd.extend(["--readme", args.readme])

    run_command(cmd)

    print(f"\nSUCCESS: Documentation generated in {args.out_dir}")


if __name__ == "__main__":
    main()
