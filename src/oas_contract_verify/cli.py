"""CLI entry point for oas-contract-verify."""

from pathlib import Path

import click

from oas_contract_verify.errors import OasVerifyError
from oas_contract_verify.logging_config import configure_logging
from oas_contract_verify.model import Document
from oas_contract_verify.parser.detect import detect_format
from oas_contract_verify.parser.openapi import load_document
from oas_contract_verify.policy import POLICIES
from oas_contract_verify.report import RENDERERS, sort_failures
from oas_contract_verify.settings import get_settings
from oas_contract_verify.verifier import Verifier


class LoadError(click.ClickException):
    """Document or configuration problem; exits with status 2."""

    exit_code = 2


def _load(file_path: Path) -> Document:
    try:
        return load_document(file_path)
    except OasVerifyError as e:
        raise LoadError(str(e)) from e


@click.group()
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    help="Override OAS_VERIFY_LOG_LEVEL.",
)
def main(log_level: str | None):
    """OAS Contract Verify: check an OpenAPI document for breaking changes."""
    try:
        configure_logging(log_level)
    except OasVerifyError as e:
        raise LoadError(str(e)) from e


@main.command()
@click.argument("candidate_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("contract_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--format", "fmt", default=None, type=click.Choice(["text", "json"]), help="Report format.")
@click.option("--relaxed-bounds/--exact", "relaxed", default=None, help="Accept candidates that loosen parameter bounds.")
@click.option("--sort", "sort_report", is_flag=True, help="Sort failures instead of using contract order.")
@click.option("-o", "--output", default=None, type=click.Path(dir_okay=False, path_type=Path), help="Write the report to a file.")
def check(
    candidate_path: Path,
    contract_path: Path,
    fmt: str | None,
    relaxed: bool | None,
    sort_report: bool,
    output: Path | None,
):
    """Verify CANDIDATE_PATH stays backward-compatible with CONTRACT_PATH."""
    try:
        settings = get_settings()
    except OasVerifyError as e:
        raise LoadError(str(e)) from e

    if relaxed is None:
        relaxed = settings.RELAXED_BOUNDS
    fmt = fmt or settings.FORMAT

    click.echo(f"Loading contract {contract_path}...", err=True)
    contract = _load(contract_path)
    click.echo(f"Loading candidate {candidate_path}...", err=True)
    candidate = _load(candidate_path)

    verifier = Verifier(POLICIES["relaxed" if relaxed else "exact"])
    failures = list(verifier.verify(candidate, contract))
    if sort_report:
        failures = sort_failures(failures)

    report = RENDERERS[fmt](failures)
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(report + "\n", encoding="utf-8")
        click.echo(f"Report saved to {output}", err=True)
    else:
        click.echo(report)

    if failures:
        click.get_current_context().exit(1)


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def detect(doc_path: Path):
    """Print the OpenAPI dialect of DOC_PATH."""
    try:
        click.echo(detect_format(doc_path))
    except OasVerifyError as e:
        raise LoadError(str(e)) from e
