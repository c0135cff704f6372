"""
Gettext catalog utilities for translating HTML references.

This module drives the external gettext tools: xml2po extracts messages from
generated HTML files into a .pot template, merges them into per-language .po
files and writes translated HTML; msginit creates new .po files. polib is used
to read catalogs back for statistics.

Usage Examples:
    Generate .pot file:
        >>> from packnga.utils.i18n.catalog import generate_pot
        >>> generate_pot(Path("doc/po/mylib.pot"), html_files)

    Update .po file:
        >>> update_po(Path("doc/po/ja.po"), Path("doc/po/mylib.pot"), html_files, "ja")

    Translate a page:
        >>> translate_html(source, target, Path("doc/po/ja.po"), "ja")
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import NamedTuple

import polib

from ..core.exceptions import MissingFileError
from ..core.shell import run_command

logger = logging.getLogger(__name__)

XML2PO_COMMAND = "xml2po"
MSGINIT_COMMAND = "msginit"


class CatalogStatistics(NamedTuple):
    """Translation progress of a .po file."""

    total: int
    translated: int
    fuzzy: int
    untranslated: int
    percent_translated: int


def generate_pot(pot_file: Path, html_files: list[Path]) -> None:
    """
    Extract translatable messages of HTML files into a .pot template.

    Args:
        pot_file: Path where the .pot file should be written
        html_files: Generated HTML files of the original language
    """
    _ = pot_file.parent.mkdir(parents=True, exist_ok=True)
    run_command(
        [
            XML2PO_COMMAND,
            "--keep-entities",
            "--output",
            str(pot_file),
            *(str(html_file) for html_file in html_files),
        ]
    )
    logger.info(f"Generated .pot file: {pot_file}")


def update_po(
    po_file: Path, pot_file: Path, html_files: list[Path], language: str
) -> None:
    """
    Update an existing .po file, or create it from the .pot template.

    Args:
        po_file: Path to the .po file to update
        pot_file: Path to the .pot template file
        html_files: Generated HTML files of the original language
        language: Language code of the .po file

    Raises:
        MissingFileError: If a new .po file is needed but the template doesn't exist
    """
    if po_file.exists():
        run_command(
            [
                XML2PO_COMMAND,
                "--keep-entities",
                "--update",
                str(po_file),
                *(str(html_file) for html_file in html_files),
            ]
        )
        logger.info(f"Updated .po file: {po_file}")
        return

    if not pot_file.exists():
        raise MissingFileError(pot_file, f"POT template file not found: {pot_file}")

    _ = po_file.parent.mkdir(parents=True, exist_ok=True)
    run_command(
        [
            MSGINIT_COMMAND,
            f"--input={pot_file}",
            f"--output={po_file}",
            f"--locale={language}",
            "--no-translator",
        ]
    )
    logger.info(f"Created .po file for {language}: {po_file}")


def translate_html(source: Path, target: Path, po_file: Path, language: str) -> None:
    """
    Write the translated version of one HTML file.

    Output goes to a temporary file next to ``target`` that replaces it only
    once xml2po succeeds.

    Args:
        source: HTML file in the original language
        target: Path of the translated HTML file
        po_file: Translations to apply
        language: Language code of the translation

    Raises:
        MissingFileError: If the .po file doesn't exist
        CommandError: If xml2po fails; ``target`` is left as it was
    """
    if not po_file.exists():
        raise MissingFileError(po_file, f"PO file not found: {po_file}")

    _ = target.parent.mkdir(parents=True, exist_ok=True)
    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=target.parent,
            prefix=f".{target.name}.",
            suffix=".tmp",
            delete=False,
        ) as output:
            temp_path = Path(output.name)
            run_command(
                [
                    XML2PO_COMMAND,
                    "--keep-entities",
                    "--po-file",
                    str(po_file),
                    "--language",
                    language,
                    str(source),
                ],
                stdout=output,
            )
        _ = temp_path.replace(target)
    except Exception:
        if temp_path is not None:
            temp_path.unlink(missing_ok=True)
        raise
    logger.debug(f"Translated {source} -> {target}")


def catalog_statistics(po_file: Path) -> CatalogStatistics:
    """
    Count translated, fuzzy and untranslated messages of a .po file.

    Obsolete entries are not counted.

    Args:
        po_file: Path to the .po file

    Returns:
        CatalogStatistics for the file

    Raises:
        MissingFileError: If the file doesn't exist
    """
    if not po_file.exists():
        raise MissingFileError(po_file, f"PO file not found: {po_file}")

    catalog = polib.pofile(str(po_file))
    translated = len(catalog.translated_entries())
    fuzzy = len(catalog.fuzzy_entries())
    untranslated = len(catalog.untranslated_entries())
    total = translated + fuzzy + untranslated

    return CatalogStatistics(
        total=total,
        translated=translated,
        fuzzy=fuzzy,
        untranslated=untranslated,
        percent_translated=catalog.percent_translated(),
    )
