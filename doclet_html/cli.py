"""Generate a static HTML documentation site from a JSDoc doclet dump.

The input is the JSON written by ``jsdoc -X``. Pages, source listings and
tutorials are written under the output directory, with a sidebar navigation
shared by every page.
"""

import argparse
import logging
import sys
from pathlib import Path

import markdown

from doclet_html.config_error import ConfigError
from doclet_html.doclet_store import DocletStore
from doclet_html.load_config import load_config
from doclet_html.load_doclets import load_doclets
from doclet_html.load_tutorials import load_tutorials
from doclet_html.publish import publish
from doclet_html.site_config import SiteConfig

logger = logging.getLogger(__name__)


def render_readme(path: Path | None, encoding: str = "utf-8") -> str | None:
    """Render a Markdown README to HTML for the home page."""
    if path is None:
        return None
    if not path.exists():
        logger.warning("README %s not found, home page will have no readme", path)
        return None
    return markdown.markdown(
        path.read_text(encoding=encoding), extensions=["fenced_code", "tables"]
    )


def build_parser() -> argparse.ArgumentParser:
    """Create the command line parser."""
    ap = argparse.ArgumentParser(
        description="Render JSDoc doclets (jsdoc -X output) as a static HTML site.",
    )
    ap.add_argument(
        "doclets",
        type=Path,
        help="Doclet dump written by `jsdoc -X` (JSON, or YAML with .yml)",
    )
    ap.add_argument(
        "out_dir",
        type=Path,
        help="Output directory for the generated site",
    )
    ap.add_argument(
        "--config",
        action="append",
        default=[],
        help="Path to a YAML configuration file; repeat to layer several",
    )
    ap.add_argument(
        "--tutorials",
        type=Path,
        help="Directory of Markdown/HTML tutorials",
    )
    ap.add_argument(
        "--readme",
        type=Path,
        help="Markdown file shown on the home page (overrides output.readme)",
    )
    ap.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug messages",
    )
    return ap


def main(argv: list[str] | None = None) -> int:
    """Run the site generator."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = SiteConfig.from_mapping(load_config(*args.config))
    except ConfigError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    store = DocletStore(load_doclets(args.doclets))
    tutorials = load_tutorials(args.tutorials)
    readme = args.readme or (Path(config.readme) if config.readme else None)

    result = publish(
        store,
        tutorials,
        config,
        args.out_dir,
        readme_html=render_readme(readme, config.encoding),
    )
    if result.failed:
        print(f"{len(result.failed)} pages could not be written", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
