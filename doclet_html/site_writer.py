"""Writing pages and static assets into the output directory."""

import logging
import shutil
from pathlib import Path

from pygments.formatters import HtmlFormatter

logger = logging.getLogger(__name__)

BUILTIN_STATIC = Path(__file__).parent / "static"


def output_file_for_page(out_root: Path, filename: str) -> Path:
    """Determine the output file path for a page filename."""
    # A fragment never names a file: global.html#foo -> out_root/global.html
    rel = filename.split("#", 1)[0]
    p = out_root / rel
    p.parent.mkdir(parents=True, exist_ok=True)
    return p


def write_page(out_root: Path, filename: str, html: str) -> Path:
    """Write one page; OSError propagates to the caller."""
    out_file = output_file_for_page(out_root, filename)
    out_file.write_text(html, encoding="utf-8")
    return out_file


def copy_static_files(source_dir: Path, out_root: Path) -> int:
    """Copy a directory of static files into the output, keeping its layout."""
    if not source_dir.is_dir():
        logger.warning("Static files directory %s does not exist", source_dir)
        return 0
    copied = 0
    for path in sorted(source_dir.rglob("*")):
        if not path.is_file():
            continue
        dest = out_root / path.relative_to(source_dir)
        dest.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(path, dest)
        copied += 1
    return copied


def write_source_css(out_root: Path) -> Path:
    """Write the Pygments stylesheet used by the source listings."""
    css = HtmlFormatter().get_style_defs(".source")
    return write_page(out_root, "styles/source.css", css)
