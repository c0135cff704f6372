"""
Global test fixtures for packnga tests.

Provides a package descriptor and a small documentation tree laid out the
way the task definitions expect it:

    doc/reference/<lang>/...      generated references
    doc/templates/{head,header,footer}.<lang>.html
"""

from __future__ import annotations

from pathlib import Path

import pytest

from packnga.package import PackageSpec

LANGUAGES = ("en", "ja")

PAGE_TEMPLATE = """<!doctype html>
<html lang="en">
<head>
    <meta charset="utf-8">
    <meta name="generator" content="pdoc 14.5.0"/>
    <title>{title}</title>
</head>
<body>
    <nav class="pdoc">
        <a href="{top}index.html">Module List</a>
    </nav>
    <main class="pdoc">
        <section id="{title}">{title}</section>
    </main>
    <script>window.pdocSearch = "{top}search.js";</script>
</body>
</html>
"""


@pytest.fixture
def package_spec() -> PackageSpec:
    """
    Create a package descriptor for testing.

    Returns:
        PackageSpec: Descriptor of a package named "mylib"
    """
    return PackageSpec(
        name="mylib",
        version="1.2.3",
        homepage="https://mylib.example.org",
        files=["src/mylib/__init__.py", "src/mylib/core.py", "README.md"],
        readme="README.md",
    )


def write_reference(reference_dir: Path) -> None:
    """Write a reference tree laid out the way pdoc writes one."""
    (reference_dir / "mylib").mkdir(parents=True)
    _ = (reference_dir / "index.html").write_text(
        PAGE_TEMPLATE.format(title="Module List", top=""), encoding="utf-8"
    )
    _ = (reference_dir / "mylib.html").write_text(
        PAGE_TEMPLATE.format(title="mylib API documentation", top=""), encoding="utf-8"
    )
    _ = (reference_dir / "mylib" / "core.html").write_text(
        PAGE_TEMPLATE.format(title="mylib.core API documentation", top="../"),
        encoding="utf-8",
    )
    _ = (reference_dir / "search.js").write_text(
        'window.pdocSearch = (function(){ return {"mylib.core": 1}; })();\n',
        encoding="utf-8",
    )


@pytest.fixture
def doc_dir(tmp_path: Path) -> Path:
    """
    Create a documentation base directory with references and templates.

    Returns:
        Path: The ``doc`` directory
    """
    doc_dir = tmp_path / "doc"
    templates_dir = doc_dir / "templates"
    templates_dir.mkdir(parents=True)

    for language in LANGUAGES:
        write_reference(doc_dir / "reference" / language)
        _ = (templates_dir / f"head.{language}.html").write_text(
            '<link rel="stylesheet" href="{{ paths.top }}/css/site.css">',
            encoding="utf-8",
        )
        _ = (templates_dir / f"header.{language}.html").write_text(
            '<div id="header" data-lang="{{ language }}">{{ package.name }}: {{ title }}</div>',
            encoding="utf-8",
        )
        _ = (templates_dir / f"footer.{language}.html").write_text(
            '<div id="site-footer">{{ paths.current }}</div>',
            encoding="utf-8",
        )

    return doc_dir
