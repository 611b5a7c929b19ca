"""Shared CLI options."""

from __future__ import annotations

import typer

OutputOption = typer.Option(
    "table", "--output", "-o", help="Output format: plain, short, json, yaml, table",
)
DevelOption = typer.Option(False, "--devel", "-d", help="Include pre-release chart versions")
SemverOption = typer.Option(
    False, "--semver", help="Treat installed versions at or above the latest as up to date",
)
VerifyOrderOption = typer.Option(
    False, "--verify-index-order", help="Re-sort cached index entries by version before use",
)
ContextOption = typer.Option(None, "--context", help="Kubernetes context name")
DebugOption = typer.Option(False, "--debug", help="Enable debug logging (also HELM_DEBUG)")

TLSOption = typer.Option(False, "--tls", help="Enable TLS for requests to the cluster")
TLSCACertOption = typer.Option("", "--tls-ca-cert", help="Path to TLS CA certificate file")
TLSCertOption = typer.Option("", "--tls-cert", help="Path to TLS certificate file")
TLSKeyOption = typer.Option("", "--tls-key", help="Path to TLS key file")
TLSHostnameOption = typer.Option(
    "", "--tls-hostname", help="Server name used to verify the hostname on the server certificate",
)
TLSVerifyOption = typer.Option(
    False, "--tls-verify", help="Verify the server's certificate chain and host name",
)
