"""
Publication of translated references to the project web site.

The generated reference tree (``<base>/reference/<lang>``) is copied into the
web site tree (``<base>/html/<package>/<lang>``) language by language. HTML
pages get the site's head, header and footer fragments; everything else is
copied unchanged.
"""

from __future__ import annotations

import logging
import os
import re
import shutil
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    Template,
    TemplateError as Jinja2TemplateError,
    TemplateNotFound,
)

from ..package import PackageSpec
from ..utils.core.exceptions import MissingFileError, TemplateError

logger = logging.getLogger(__name__)

ALPHABETICAL_INDEX_FILE_NAME = "alphabetical_index.html"
REDIRECT_FILE_NAME = ".htaccess"
TEMPLATE_NAMES = ("head", "header", "footer")

TITLE_PATTERN = re.compile(r"<title>(.*?)</title>", re.DOTALL)
BODY_START_PATTERN = re.compile(r"<body(?:.*?)>", re.DOTALL)


@dataclass(frozen=True)
class PagePaths:
    """Relative paths available to templates while rendering one page."""

    top: str
    current: str
    package: str


@dataclass(frozen=True)
class PageTemplates:
    """Head, header and footer fragments of one language."""

    head: Template
    header: Template
    footer: Template


def build_environment(templates_dir: Path) -> Environment:
    """
    Build the Jinja2 environment for the site fragments.

    Args:
        templates_dir: Directory holding ``{head,header,footer}.<lang>.html``

    Returns:
        Environment with strict undefined handling
    """
    return Environment(
        loader=FileSystemLoader(str(templates_dir)),
        undefined=StrictUndefined,
        autoescape=False,
        keep_trailing_newline=False,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def load_templates(environment: Environment, language: str) -> PageTemplates:
    """
    Load the fragments of one language.

    Raises:
        TemplateError: If a fragment is missing or doesn't parse
    """
    loaded: dict[str, Template] = {}
    for name in TEMPLATE_NAMES:
        file_name = f"{name}.{language}.html"
        try:
            loaded[name] = environment.get_template(file_name)
        except TemplateNotFound as e:
            raise TemplateError(f"Template not found: {file_name}", context=file_name) from e
        except Jinja2TemplateError as e:
            raise TemplateError(f"Invalid template {file_name}: {e}", context=file_name) from e

    return PageTemplates(
        head=loaded["head"],
        header=loaded["header"],
        footer=loaded["footer"],
    )


def apply_templates(
    content: str,
    templates: PageTemplates,
    paths: PagePaths,
    package: PackageSpec,
    language: str,
    original_language: str,
) -> str:
    """
    Inject the site fragments into one HTML page.

    The page's ``lang`` attribute is switched to ``language``, the head
    fragment goes right after ``</title>``, the header right after the
    opening ``<body>`` tag and the footer right before ``</body>``.

    Raises:
        TemplateError: If a fragment fails to render
    """
    content = content.replace(f'lang="{original_language}"', f'lang="{language}"', 1)

    title_match = TITLE_PATTERN.search(content)
    title = title_match.group(1) if title_match else ""

    variables = {
        "title": title,
        "language": language,
        "package": package,
        "paths": paths,
    }
    try:
        head = templates.head.render(variables)
        header = templates.header.render(variables)
        footer = templates.footer.render(variables)
    except Jinja2TemplateError as e:
        raise TemplateError(f"Failed to render templates for {paths.current}: {e}") from e

    content = content.replace("</title>", "</title>\n" + head, 1)
    content = BODY_START_PATTERN.sub(lambda match: match.group(0) + "\n" + header, content, count=1)
    content = content.replace("</body", footer + "\n</body", 1)
    return content


def page_paths(
    relative_path: PurePosixPath,
    prepared_path: Path,
    html_base_dir: Path,
    package_name: str,
) -> PagePaths:
    """
    Compute the template paths of one published page.

    Args:
        relative_path: Path of the page inside the language directory
        prepared_path: Path the page is written to
        html_base_dir: Root of the web site tree
        package_name: Name of the package directory under the root
    """
    current = relative_path
    if current.name == "index.html":
        current = current.parent

    top = PurePosixPath(Path(os.path.relpath(html_base_dir, prepared_path.parent)).as_posix())
    return PagePaths(
        top=str(top),
        current=str(current),
        package=str(top / package_name),
    )


class ReferencePublisher:
    """
    Copies per-language references into the web site tree.

    Output directories are removed before they are filled again, so every run
    produces the same tree from the same inputs.

    Generators differ in their navigation files. pdoc writes neither an
    alphabetical index nor list frames, so both rules are off by default:

    - ``index_file_name``: alphabetical index written by the generator; it is
      published as ``published_index_name`` and links to it are rewritten
    - ``list_file_pattern``: list navigation pages, copied without templates
    """

    def __init__(
        self,
        package: PackageSpec,
        base_dir: Path,
        original_language: str,
        translate_languages: list[str],
        index_file_name: str | None = None,
        published_index_name: str = ALPHABETICAL_INDEX_FILE_NAME,
        list_file_pattern: str | None = None,
    ) -> None:
        self.package: PackageSpec = package
        self.base_dir: Path = base_dir
        self.original_language: str = original_language
        self.translate_languages: list[str] = translate_languages
        self.index_file_name: str | None = index_file_name
        self.published_index_name: str = published_index_name
        self.list_file_pattern: str | None = list_file_pattern

    def published_name(self, name: str) -> str:
        """Name of a file in the published tree."""
        if self.index_file_name is not None and name == self.index_file_name:
            return self.published_index_name
        return name

    def rewrite_index_links(self, content: str) -> str:
        """Point links to the alphabetical index at its published name."""
        if self.index_file_name is None:
            return content
        pattern = re.compile(r"(?<=[\"'/])" + re.escape(self.index_file_name) + r"(?=[\"'#?])")
        return pattern.sub(self.published_index_name, content)

    def is_list_file(self, name: str) -> bool:
        if self.list_file_pattern is None:
            return False
        return re.fullmatch(self.list_file_pattern, name) is not None

    @property
    def languages(self) -> list[str]:
        """Original language first, then each target language once."""
        languages = [self.original_language]
        for language in self.translate_languages:
            if language not in languages:
                languages.append(language)
        return languages

    @property
    def reference_base_dir(self) -> Path:
        return self.base_dir / "reference"

    @property
    def html_base_dir(self) -> Path:
        return self.base_dir / "html"

    @property
    def html_reference_dir(self) -> Path:
        return self.html_base_dir / self.package.name

    @property
    def templates_dir(self) -> Path:
        return self.base_dir / "templates"

    def publish(self) -> None:
        """
        Publish every language and write the redirect file.

        Raises:
            MissingFileError: If a reference directory or the templates directory is missing
            TemplateError: If a template is missing or fails to render
        """
        for language in self.languages:
            raw_dir = self.reference_base_dir / language
            if not raw_dir.is_dir():
                raise MissingFileError(raw_dir, f"Reference directory does not exist: {raw_dir}")
        if not self.templates_dir.is_dir():
            raise MissingFileError(
                self.templates_dir,
                f"Templates directory does not exist: {self.templates_dir}",
            )

        environment = build_environment(self.templates_dir)
        for language in self.languages:
            self.publish_language(environment, language)

        self.write_redirect()

    def publish_language(self, environment: Environment, language: str) -> None:
        """Copy the reference of one language into the web site tree."""
        raw_dir = self.reference_base_dir / language
        prepared_dir = self.html_reference_dir / language
        templates = load_templates(environment, language)

        if prepared_dir.exists():
            shutil.rmtree(prepared_dir)
        _ = prepared_dir.mkdir(parents=True)

        page_count = 0
        for dirpath, dirnames, filenames in os.walk(raw_dir):
            dirnames.sort()
            current_dir = Path(dirpath)
            relative_dir = current_dir.relative_to(raw_dir)
            _ = (prepared_dir / relative_dir).mkdir(parents=True, exist_ok=True)

            for filename in sorted(filenames):
                path = current_dir / filename
                relative_path = PurePosixPath(
                    (relative_dir / self.published_name(filename)).as_posix()
                )
                prepared_path = prepared_dir / relative_path

                if self.is_list_file(filename):
                    _ = shutil.copy2(path, prepared_path)
                elif filename.endswith(".html"):
                    paths = page_paths(
                        relative_path, prepared_path, self.html_base_dir, self.package.name
                    )
                    content = apply_templates(
                        path.read_text(encoding="utf-8"),
                        templates,
                        paths,
                        self.package,
                        language,
                        self.original_language,
                    )
                    _ = prepared_path.write_text(
                        self.rewrite_index_links(content), encoding="utf-8"
                    )
                    page_count += 1
                else:
                    _ = shutil.copy2(path, prepared_path)

        logger.info(f"Published {page_count} page(s) for {language}: {prepared_dir}")

    def write_redirect(self) -> Path:
        """Redirect the package root to the original language reference."""
        redirect_file = self.html_reference_dir / REDIRECT_FILE_NAME
        name = self.package.name
        target = f"{self.package.homepage}{name}/{self.original_language}/"
        _ = redirect_file.write_text(
            f"RedirectMatch permanent ^/{name}/$ {target}\n", encoding="utf-8"
        )
        logger.info(f"Wrote {redirect_file}")
        return redirect_file
