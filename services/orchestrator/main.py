"""Main audit service and command line for lighthouse-batch."""

import asyncio
import logging
import sys
from typing import List, Optional

import click
from pydantic import ValidationError

from config.models import Report
from config.settings import VERSION, AuditConfig, get_audit_config, get_logging_config
from engines.base import AuditEngine, EngineFactory
from services.aggregator.csv_exporter import CSVExporter
from services.ingestion.input_reader import InputReader
from .audit_orchestrator import AuditOrchestrator
from .error_log import ErrorLog

logger = logging.getLogger(__name__)


class AuditService:
    """Reads the input, runs the orchestrator and writes the CSV report."""

    def __init__(self, config: Optional[AuditConfig] = None, engine: Optional[AuditEngine] = None):
        self.config = config or get_audit_config()
        self.engine = engine or EngineFactory.create(self.config)
        self.reader = InputReader(
            delimiter=self.config.delimiter,
            comment_marker=self.config.comment_marker,
            url_field=self.config.resolve_url_field(),
        )
        self.exporter = CSVExporter(delimiter=self.config.delimiter)
        self.orchestrator: Optional[AuditOrchestrator] = None

    # -------------------------------------------------------------------------
    # MAIN LOGIC
    # -------------------------------------------------------------------------

    async def run_async(self) -> Report:
        """Audit every input page and write the aggregated report."""
        cfg = self.config

        # Step 1: Read pages
        pages = self.reader.read_file(cfg.input_file)
        if not pages:
            logger.warning(f"No pages to audit in {cfg.input_file}")

        # Step 2: Audit every page num_runs times
        error_log = ErrorLog(cfg.error_log_file)
        self.orchestrator = AuditOrchestrator(pages, cfg.num_runs, self.engine, cfg, error_log)
        report = await self.orchestrator.run()

        # Step 3: Write the report
        self.exporter.write_report(report, cfg.output_file, append=cfg.append_output)
        return report

    def run(self) -> Report:
        return asyncio.run(self.run_async())


# -------------------------------------------------------------------------
# CLI
# -------------------------------------------------------------------------

def _split(value: Optional[str]) -> Optional[List[str]]:
    if value is None:
        return None
    return [item.strip() for item in value.split(",") if item.strip()]


def _positive_int(ctx, param, value):
    if value is not None and value < 1:
        raise click.BadParameter(f"must be a positive integer: {value} is not valid")
    return value


@click.command()
@click.option("-a", "--append", "append_output", is_flag=True, default=False,
              help="Append output to existing data in output file.")
@click.option("-c", "--categories", help="Categories to audit, comma-separated.")
@click.option("-f", "--flags", help="Comma-separated Chrome flags, dashes optional.")
@click.option("-i", "--input", "input_file", help="Input file.")
@click.option("-m", "--metadata", "metadata_headings", help="Headings for page metadata.")
@click.option("-o", "--output", "output_file", help="Output file.")
@click.option("-r", "--runs", "num_runs", type=int, callback=_positive_int,
              help="Number of times each URL is audited.")
@click.option("-s", "--score-method", type=click.Choice(["median", "average"]),
              help="Method of score aggregation.")
@click.option("--audits", help="Audit ids whose numeric values are reported, comma-separated.")
@click.option("--url-field", type=int, help="Column where the URL starts (0-based).")
@click.option("--error-log", "error_log_file", help="Error log file.")
@click.option("--no-error-log", is_flag=True, default=False,
              help="Do not write the error log file; errors are still logged.")
@click.option("--keep-zero-scores", is_flag=True, default=False,
              help="Record zero scores instead of discarding them.")
@click.option("--log-level", default=None,
              type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
              help="Logging level.")
@click.version_option(VERSION, "-v", "--version")
def cli(append_output, categories, flags, audits, keep_zero_scores, no_error_log, log_level, **options):
    """Run Lighthouse audits for every URL in the input file and write aggregated scores."""
    logging_config = get_logging_config()
    logging.basicConfig(level=(log_level or logging_config.level).upper(), format=logging_config.format)

    overrides = {key: value for key, value in options.items() if value is not None}
    if categories is not None:
        overrides["categories"] = _split(categories)
    if flags is not None:
        overrides["chrome_flags"] = _split(flags)
    if audits is not None:
        overrides["audits"] = _split(audits)
    if append_output:
        overrides["append_output"] = True
    if keep_zero_scores:
        overrides["discard_zero_scores"] = False
    if no_error_log:
        overrides["error_log_file"] = None

    try:
        config = AuditConfig.model_validate({**get_audit_config().model_dump(), **overrides})
    except ValidationError as e:
        click.echo(f"❌ Invalid options: {e}", err=True)
        sys.exit(1)

    logger.info(f"Auditing categories: {','.join(config.categories)}")
    service = AuditService(config)
    try:
        report = service.run()
    except Exception as e:
        click.echo(f"❌ Audit failed: {e}", err=True)
        sys.exit(1)

    click.echo(
        f"\nCompleted {config.num_runs} run(s) for {report.num_pages} URL(s): "
        f"{report.num_errors} error(s)\nView output: {config.output_file}\n"
    )


if __name__ == "__main__":
    cli()
