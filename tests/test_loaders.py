"""Tests for loading doclet dumps and tutorial directories."""

import json
import logging
from pathlib import Path

import pytest

from doclet_html.load_doclets import doclet_from_mapping, load_doclets
from doclet_html.load_tutorials import load_tutorials
from doclet_html.tutorial import Tutorial

RAW_FUNCTION = {
    "kind": "function",
    "name": "area",
    "longname": "module:geo~area",
    "memberof": "module:geo",
    "scope": "inner",
    "async": True,
    "params": [
        {"name": "shape", "type": {"names": ["Shape"]}, "optional": True},
    ],
    "returns": [{"type": {"names": ["number"]}, "description": "The area."}],
    "meta": {"filename": "geo.js", "path": "/src", "lineno": 12},
    "examples": ["<caption>Usage</caption>\narea(s)"],
    "see": ["#perimeter"],
}


def test_doclet_from_mapping() -> None:
    """Verify a raw jsdoc record converts into a Doclet."""
    d = doclet_from_mapping(RAW_FUNCTION)
    assert d.kind == "function"
    assert d.longname == "module:geo~area"
    assert d.is_async
    assert d.get("async") is True
    assert d.params[0].name == "shape"
    assert d.params[0].optional
    assert d.params[0].type is not None
    assert d.params[0].type.names == ["Shape"]
    assert d.returns[0].description == "The area."
    assert d.meta is not None
    assert d.meta.lineno == 12
    assert d.see == ["#perimeter"]
    assert d.raw is RAW_FUNCTION


def test_doclet_from_sparse_mapping() -> None:
    """Verify missing fields get empty defaults."""
    d = doclet_from_mapping({"kind": "package"})
    assert d.name == ""
    assert d.longname is None
    assert d.params == []
    assert d.meta is None
    assert d.type is None


def test_load_doclets_json(tmp_path: Path) -> None:
    """Verify a JSON dump is loaded and non-mapping entries are skipped."""
    p = tmp_path / "doclets.json"
    p.write_text(json.dumps([RAW_FUNCTION, "junk"]), encoding="utf-8")
    doclets = load_doclets(p)
    assert [d.name for d in doclets] == ["area"]


def test_load_doclets_yaml(tmp_path: Path) -> None:
    """Verify the same list can be given as YAML."""
    p = tmp_path / "doclets.yml"
    p.write_text("- kind: class\n  name: Foo\n  longname: Foo\n", encoding="utf-8")
    assert [d.longname for d in load_doclets(p)] == ["Foo"]


def test_load_doclets_missing(tmp_path: Path) -> None:
    """Verify a missing dump stops the run with a message."""
    with pytest.raises(SystemExit, match="not found"):
        load_doclets(tmp_path / "nope.json")


def test_load_doclets_not_a_list(tmp_path: Path) -> None:
    """Verify a dump that is not a list stops the run."""
    p = tmp_path / "doclets.json"
    p.write_text('{"kind": "class"}', encoding="utf-8")
    with pytest.raises(SystemExit, match="Expected a list"):
        load_doclets(p)


def test_load_tutorials_flat(tmp_path: Path) -> None:
    """Verify every tutorial file becomes a top-level tutorial."""
    (tmp_path / "intro.md").write_text("# Intro", encoding="utf-8")
    (tmp_path / "advanced.html").write_text("<p>Adv</p>", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")

    root = load_tutorials(tmp_path)
    assert [t.name for t in root.children] == ["advanced", "intro"]
    assert root.children[0].content_type == "html"
    assert root.children[1].title == "intro"


def test_load_tutorials_structure(tmp_path: Path) -> None:
    """Verify titles and nesting come from tutorials.json."""
    for name in ("intro", "setup", "deploy"):
        (tmp_path / f"{name}.md").write_text(f"# {name}", encoding="utf-8")
    structure = {
        "intro": {"title": "Introduction", "children": ["setup"]},
        "setup": {"title": "Setup", "children": {"deploy": {"title": "Deploy"}}},
        "ghost": {"title": "Not there"},
    }
    (tmp_path / "tutorials.json").write_text(json.dumps(structure), encoding="utf-8")

    root = load_tutorials(tmp_path)
    assert [t.name for t in root.children] == ["intro"]
    intro = root.children[0]
    assert intro.title == "Introduction"
    assert [c.name for c in intro.children] == ["setup"]
    assert [c.title for c in intro.children[0].children] == ["Deploy"]


def test_tutorial_has_one_parent(tmp_path: Path) -> None:
    """Verify a tutorial listed under two parents stays with the first."""
    for name in ("a", "b", "shared"):
        (tmp_path / f"{name}.md").write_text(name, encoding="utf-8")
    (tmp_path / "tutorials.yml").write_text(
        "a:\n  children: [shared]\nb:\n  children: [shared]\n", encoding="utf-8"
    )
    root = load_tutorials(tmp_path)
    by_name = {t.name: t for t in root.children}
    assert [c.name for c in by_name["a"].children] == ["shared"]
    assert by_name["b"].children == []


def test_load_tutorials_missing_dir(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """Verify a missing directory gives an empty tree and a warning."""
    with caplog.at_level(logging.WARNING):
        root = load_tutorials(tmp_path / "nope")
    assert root.children == []
    assert "does not exist" in caplog.text
    assert load_tutorials(None).children == []


def test_tutorial_parse() -> None:
    """Verify Markdown tutorials are rendered and HTML ones kept."""
    md = Tutorial(name="t", content="# Title\n\nSome *text*.")
    html = md.parse()
    assert "<h1" in html
    assert "<em>text</em>" in html

    raw = Tutorial(name="t", content="<p>raw</p>", content_type="html")
    assert raw.parse() == "<p>raw</p>"
