"""
EligEX CLI commands

This module provides command-line interface for EligEX eligibility checks.
"""

import asyncio
import json
from typing import Any, Dict, List

import click
import yaml
from pydantic import ValidationError

from eligex.catalog import ExamCatalog, load_exam_document
from eligex.config.eligex_config import EligEXConfig
from eligex.exceptions import CatalogError, ConfigurationError
from eligex.jobs.sweep import BatchSweep, SweepConfig
from eligex.models.eligibility import CandidateProfile, EligibilityReport
from eligex.orchestrator import detect_divisions, get_division_data, evaluate_exam, is_eligible_for_exam
from eligex.rules.dates import parse_date
from eligex.rules.session import get_exam_sessions

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


def _load_profile(path: str) -> CandidateProfile:
    """Read a candidate profile from a YAML or JSON file"""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise click.ClickException(f"Invalid profile file {path}: {str(e)}")
    if not isinstance(data, dict):
        raise click.ClickException(f"Profile file {path} must contain a mapping")
    try:
        return CandidateProfile.model_validate(data)
    except ValidationError as e:
        raise click.ClickException(f"Invalid candidate profile: {str(e)}")


def _load_exam(path: str) -> Dict[str, Any]:
    try:
        return load_exam_document(path)
    except CatalogError as e:
        raise click.ClickException(str(e))


def _echo_report(report: EligibilityReport) -> None:
    header = []
    if report.exam_name:
        header.append(f"Exam: {report.exam_name}")
    if report.division:
        header.append(f"Division: {report.division}")
    if report.session:
        header.append(f"Session: {report.session_label or report.session}")
    header.append(report.summary)
    click.echo(' | '.join(header))
    for result in report.results:
        status = 'PASS' if result.eligible else 'FAIL'
        click.echo(f"  [{status}] {result.field}: {result.reason}")


def _reports_json(reports: List[EligibilityReport]) -> List[Dict[str, Any]]:
    return [{**report.model_dump(), 'summary': report.summary} for report in reports]


@click.group()
@click.option('--config', 'config_path', type=click.Path(exists=True, dir_okay=False), help='Path to configuration file')
@click.option('--log-level', type=click.Choice(LOG_LEVELS, case_sensitive=False), help='Logging level')
def cli(config_path, log_level):
    """EligEX command-line interface"""
    try:
        config = EligEXConfig.from_file(config_path) if config_path else EligEXConfig()
    except ConfigurationError as e:
        raise click.ClickException(str(e))
    config.configure_logging(log_level)


@cli.command()
@click.argument('profile', type=click.Path(exists=True, dir_okay=False))
@click.argument('exam', type=click.Path(exists=True, dir_okay=False))
@click.option('--session', help='Evaluate a single session token (e.g. 2026-I)')
@click.option('--reference-date', help='DD-MM-YYYY date used when a session carries no year')
@click.option('--json', 'as_json', is_flag=True, help='Print reports as JSON')
def check(profile, exam, session, reference_date, as_json):
    """Check a candidate profile against one exam document"""
    today = None
    if reference_date:
        today = parse_date(reference_date)
        if today is None:
            raise click.BadParameter('Use DD-MM-YYYY', param_hint='--reference-date')

    candidate = _load_profile(profile)
    document = _load_exam(exam)
    reports = evaluate_exam(document, candidate, today=today, session=session)

    if as_json:
        click.echo(json.dumps(_reports_json(reports), indent=2))
        return

    for report in reports:
        _echo_report(report)
        click.echo('')
    verdict = 'Eligible' if is_eligible_for_exam(reports) else 'Not Eligible'
    click.echo(f"Overall: {verdict}")


@cli.command()
@click.argument('profile', type=click.Path(exists=True, dir_okay=False))
@click.argument('catalog_dir', type=click.Path(exists=True, file_okay=False))
@click.option('--max-concurrent', type=int, help='Documents evaluated at once')
@click.option('--eligible-only', is_flag=True, help='Only list exams the candidate is eligible for')
@click.option('--json', 'as_json', is_flag=True, help='Print results as JSON')
def sweep(profile, catalog_dir, max_concurrent, eligible_only, as_json):
    """Check a candidate profile against every exam in a directory"""
    candidate = _load_profile(profile)
    try:
        documents = ExamCatalog(catalog_dir).load()
    except CatalogError as e:
        raise click.ClickException(str(e))

    config = SweepConfig.from_config()
    if max_concurrent:
        if max_concurrent < 1:
            raise click.BadParameter('Must be at least 1', param_hint='--max-concurrent')
        config.max_concurrent = max_concurrent

    result = asyncio.run(BatchSweep(config).run(candidate, documents))
    groups = [('Eligible', result.eligible)]
    if not eligible_only:
        groups += [('Not Eligible', result.ineligible), ('Failed', result.failed)]

    if as_json:
        click.echo(json.dumps({
            label.lower().replace(' ', '_'): [
                {'exam': entry.name, 'error': entry.error, 'reports': _reports_json(entry.reports)}
                for entry in entries
            ]
            for label, entries in groups
        }, indent=2))
        return

    for label, entries in groups:
        click.echo(f"{label} ({len(entries)}):")
        for entry in entries:
            suffix = f" - {entry.error}" if entry.error else ''
            click.echo(f"  {entry.name}{suffix}")


@cli.command()
@click.argument('exam', type=click.Path(exists=True, dir_okay=False))
def sessions(exam):
    """List the divisions and sessions an exam document declares"""
    document = _load_exam(exam)
    detected = detect_divisions(document, EligEXConfig().get('engine.division_keys', []))

    if detected:
        container_key, names = detected
        divisions = [(name, get_division_data(document, container_key, name)) for name in names]
        click.echo(f"Divisions ({container_key}): {', '.join(names)}")
    else:
        divisions = [(None, document)]

    for division, data in divisions:
        options = get_exam_sessions(data)
        prefix = f"{division}: " if division else ''
        if options:
            click.echo(prefix + ', '.join(f"{option.label} ({option.value})" for option in options))
        else:
            click.echo(prefix + 'No sessions')


if __name__ == '__main__':
    cli()
