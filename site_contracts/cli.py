"""Cyclopts CLI entrypoint for validating, describing, and building site pages.

The ``site-contracts`` console script defined here validates page documents
against their layout and component contracts, writes the composite
``SitePage@v1`` schema for editor diagnostics, and renders validated pages
into static HTML. Typical usage involves running ``site-contracts validate``
in CI and ``site-contracts build`` to produce the deployable bundle.

Examples
--------
Validate every configured page with renderer smoke tests:

>>> from site_contracts.cli import app
>>> app(["validate", "--smoke"])  # doctest: +SKIP

Write the editor schema to stdout:

>>> app(["schema", "--output", "-"])  # doctest: +SKIP
"""

from __future__ import annotations

import sys
import typing as typ
from pathlib import Path

import cyclopts
import msgspec.json
from cyclopts import App, Parameter

from .config import PageConfig, SiteConfig, SiteConfigError, load_site_config
from .contracts import ContractLoadError, SiteContracts, load_document
from .errors import SiteValidationError, describe_validation_error
from .rendering import SitePageBuilder

DEFAULT_CONFIG = Path("config/site.yaml")
STDOUT_MARKER = "-"
# Non-mapping documents surface as TypeError from load_document.
DOCUMENT_ERRORS = (
    SiteValidationError,
    ContractLoadError,
    FileNotFoundError,
    TypeError,
)

app = App(
    name="site-contracts",
    config=cyclopts.config.Env("INPUT_", command=False),  # type: ignore[unknown-argument]
)

ConfigOption = typ.Annotated[
    Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
]
PageOption = typ.Annotated[
    str | None, Parameter(help="Page identifier", env_var="INPUT_PAGE")
]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:
            return str(path)
    return str(path)


def _fail(message: str, *, code: int = 1) -> typ.NoReturn:
    print(message, file=sys.stderr)
    raise SystemExit(code)


def _load_config(config: Path) -> SiteConfig:
    try:
        return load_site_config(config)
    except (FileNotFoundError, TypeError, SiteConfigError) as exc:
        _fail(f"error: {exc}", code=2)


def _select_pages(site_config: SiteConfig, page: str | None) -> list[PageConfig]:
    try:
        if page:
            return [site_config.get_page(page)]
    except SiteConfigError as exc:
        _fail(f"error: {exc}", code=2)
    return list(site_config.pages.values())


def _report_failure(key: str, exc: Exception) -> None:
    print(f"error {key}: {describe_validation_error(exc)}", file=sys.stderr)
    for issue in getattr(exc, "errors", ())[1:]:
        print(f"  {issue}", file=sys.stderr)


class _ContractCache:
    """Share one :class:`SiteContracts` per contracts root within a command."""

    def __init__(self) -> None:
        self._by_root: dict[Path, SiteContracts] = {}

    def get(self, root: Path) -> SiteContracts:
        key = root.resolve()
        if key not in self._by_root:
            self._by_root[key] = SiteContracts(root)
        return self._by_root[key]


def _validate_page(
    page_config: PageConfig, contracts: SiteContracts, *, render_smoke: bool
) -> tuple[dict[str, typ.Any], dict[str, typ.Any]]:
    """Load and validate one page, returning the page and layout documents."""
    page_doc = load_document(page_config.source)
    layout_doc = load_document(page_config.layout)
    contracts.validate_site(page=page_doc, layout=layout_doc, render_smoke=render_smoke)
    return page_doc, layout_doc


@app.command(help="Validate page documents against their layout and contracts.")
def validate(
    *,
    page: PageOption = None,
    config: ConfigOption = DEFAULT_CONFIG,
    smoke: typ.Annotated[
        bool, Parameter(help="Invoke renderers during validation")
    ] = False,
) -> None:
    """Validate one or all configured pages.

    Parameters
    ----------
    page : str or None, optional
        Specific page key to validate; when ``None`` (default) all pages are
        validated.
    config : Path, optional
        Path to the ``site.yaml`` configuration file (overridable via
        ``INPUT_CONFIG``).
    smoke : bool, optional
        Force renderer smoke tests even for pages that do not enable them.

    Returns
    -------
    None
        Prints ``ok <page>`` for each accepted page.

    Raises
    ------
    SystemExit
        With status 1 when any page fails validation, 2 for configuration
        errors.
    """
    site_config = _load_config(config)
    cache = _ContractCache()
    failures = 0
    for page_config in _select_pages(site_config, page):
        try:
            _validate_page(
                page_config,
                cache.get(page_config.contracts_root),
                render_smoke=smoke or page_config.render_smoke,
            )
        except DOCUMENT_ERRORS as exc:
            failures += 1
            _report_failure(page_config.key, exc)
            continue
        print(f"ok {page_config.key}")
    if failures:
        raise SystemExit(1)


@app.command(help="Write the composite SitePage@v1 schema for editor diagnostics.")
def schema(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    output: typ.Annotated[
        Path | None,
        Parameter(help="Destination file, '-' for stdout", env_var="INPUT_OUTPUT"),
    ] = None,
) -> None:
    """Build the page schema for the configured layout and component set.

    Parameters
    ----------
    config : Path, optional
        Path to the ``site.yaml`` configuration file.
    output : Path or None, optional
        Where to write the schema; defaults to ``schema_output`` from the
        configuration. ``-`` prints the schema instead.
    """
    site_config = _load_config(config)
    try:
        layout_doc = load_document(site_config.layout)
        page_schema = SiteContracts(site_config.contracts_root).page_schema(layout_doc)
    except DOCUMENT_ERRORS as exc:
        _fail(f"error: {describe_validation_error(exc)}")
    text = msgspec.json.format(msgspec.json.encode(page_schema), indent=2).decode()
    if output is not None and str(output) == STDOUT_MARKER:
        print(text)
        return
    target = output or site_config.schema_output
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(text + "\n", encoding="utf-8")
    print(f"wrote {_format_path(target)}")


@app.command(help="Validate and render pages into static HTML bundles.")
def build(
    *,
    page: PageOption = None,
    config: ConfigOption = DEFAULT_CONFIG,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="INPUT_OUTPUT_DIR"),
    ] = None,
) -> None:
    """Render validated pages into ``index.html`` and ``styles.css``.

    Parameters
    ----------
    page : str or None, optional
        Specific page key to build; all pages are built when ``None``.
    config : Path, optional
        Path to the ``site.yaml`` configuration file.
    output_dir : Path or None, optional
        Override output directory for single-page builds.

    Raises
    ------
    ValueError
        If ``output_dir`` is supplied when more than one page is selected.
    SystemExit
        With status 1 when a page fails validation; nothing is written for
        that page.
    """
    site_config = _load_config(config)
    target_pages = _select_pages(site_config, page)
    if len(target_pages) > 1 and output_dir:
        msg = "Cannot override output_dir when building multiple pages."
        raise ValueError(msg)

    cache = _ContractCache()
    failures = 0
    for page_config in target_pages:
        contracts = cache.get(page_config.contracts_root)
        try:
            page_doc, layout_doc = _validate_page(
                page_config, contracts, render_smoke=page_config.render_smoke
            )
        except DOCUMENT_ERRORS as exc:
            failures += 1
            _report_failure(page_config.key, exc)
            continue
        builder = SitePageBuilder(
            page_doc,
            layout_doc,
            renderers=contracts.renderers,
            output_dir=output_dir or page_config.output_dir,
            stylesheets=page_config.stylesheets,
            title=page_config.title,
        )
        for path in builder.run():
            print(f"wrote {_format_path(path)}")
    if failures:
        raise SystemExit(1)


def main() -> None:
    """Invoke the Cyclopts application behind the ``site-contracts`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
