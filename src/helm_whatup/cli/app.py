"""Typer application: helm-whatup."""

from __future__ import annotations

import logging
import os
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from helm_whatup import __version__
from helm_whatup.cli.options import (
    ContextOption,
    DebugOption,
    DevelOption,
    OutputOption,
    SemverOption,
    TLSCACertOption,
    TLSCertOption,
    TLSHostnameOption,
    TLSKeyOption,
    TLSOption,
    TLSVerifyOption,
    VerifyOrderOption,
)
from helm_whatup.config.settings import Settings, TLSOptions
from helm_whatup.core.index_loader import load_indices, load_repositories
from helm_whatup.core.k8s_client import K8sClient
from helm_whatup.core.reconciler import reconcile
from helm_whatup.core.release_store import ReleaseStore
from helm_whatup.errors import WhatupError
from helm_whatup.output.formatters import (
    NO_RELEASES_MESSAGE,
    NO_REPOSITORIES_MESSAGE,
    output_notice,
    output_report,
)

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="helm-whatup",
    help=f"Check if installed charts are out of date (helm-whatup {__version__}).",
    add_completion=False,
)


def _setup_logging(debug: bool) -> None:
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_time=False, show_path=False)],
    )


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"helm-whatup {__version__}")
        raise typer.Exit()


def run(settings: Settings) -> None:
    """Fetch releases and indices, reconcile them and print the report."""
    logger.debug("Repositories file: %s, index cache: %s", settings.repositories_file, settings.index_cache_dir)
    store = ReleaseStore(K8sClient(settings))
    releases = store.list_releases()

    repositories = load_repositories(settings.repositories_file)
    indices = load_indices(repositories, settings.index_cache_dir, settings.verify_index_order)

    if not releases:
        output_notice(NO_RELEASES_MESSAGE, settings.output)
        return
    if not indices:
        output_notice(NO_REPOSITORIES_MESSAGE, settings.output)
        return

    report = reconcile(releases, indices, repositories, settings)
    output_report(report, settings.output)


@app.command()
def whatup(
    output: str = OutputOption,
    devel: bool = DevelOption,
    semver: bool = SemverOption,
    verify_index_order: bool = VerifyOrderOption,
    context: Optional[str] = ContextOption,
    tls: bool = TLSOption,
    tls_ca_cert: str = TLSCACertOption,
    tls_cert: str = TLSCertOption,
    tls_key: str = TLSKeyOption,
    tls_hostname: str = TLSHostnameOption,
    tls_verify: bool = TLSVerifyOption,
    debug: bool = DebugOption,
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit",
    ),
) -> None:
    """Check if installed charts are out of date."""
    _setup_logging(debug or bool(os.environ.get("HELM_DEBUG")))
    settings = Settings(
        output=output,
        include_prereleases=devel,
        semver=semver,
        verify_index_order=verify_index_order,
        context=context,
        tls=TLSOptions(
            enabled=tls or tls_verify,
            ca_cert=tls_ca_cert,
            cert=tls_cert,
            key=tls_key,
            hostname=tls_hostname,
            verify=tls_verify,
        ),
    )
    try:
        run(settings)
    except WhatupError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


def main() -> None:
    app()
