"""
pagescrape CLI - scrape one or many URLs and inspect presets

Usage:
    pagescrape scrape https://example.com --structured
    pagescrape scrape --file urls.txt --output results.csv --batch-size 3
    pagescrape scrape --preset news https://news-site.com
    pagescrape presets list
"""

import asyncio
import json
from pathlib import Path
from typing import List, Optional

import typer

from .batch import BatchCoordinator, BatchJob, BatchReport
from .config import ScraperConfig, validate_url
from .errors import OutcomeKind, ValidationError
from .monitoring import LogManager
from .presets import load_presets, resolve_config
from .scraper import ScraperBuilder, WebScraper
from .scraper.result import Outcome
from .storage import OutputFormat, ResultWriter

app = typer.Typer(
    name="pagescrape",
    help="Scrape rendered web pages into structured or plain-text records.",
    no_args_is_help=True,
)

presets_app = typer.Typer(help="Inspect configuration presets.", no_args_is_help=True)
app.add_typer(presets_app, name="presets")


def create_scraper(config: ScraperConfig, log_manager: LogManager) -> WebScraper:
    return ScraperBuilder(config).with_log_manager(log_manager).build()


def read_url_file(path: Path) -> List[str]:
    """Return trimmed lines of path that look like http(s) URLs"""
    try:
        content = path.read_text(encoding='utf-8')
    except OSError as e:
        raise ValidationError(f'Failed to read file "{path}": {e}') from e

    urls = [line.strip() for line in content.splitlines()]
    urls = [url for url in urls if url and url.startswith('http')]
    if not urls:
        raise ValidationError(f'No valid URLs found in file "{path}"')
    return urls


def _fail(message: str) -> None:
    typer.echo(f"❌ Error: {message}", err=True)
    raise typer.Exit(1)


@app.command("scrape")
def scrape(
    urls: Optional[List[str]] = typer.Argument(None, help="URLs to scrape."),
    file: Optional[Path] = typer.Option(None, "--file", help="Read URLs from a file (one per line)."),
    browser: Optional[str] = typer.Option(None, "--browser", help="chromium | firefox | webkit"),
    timeout: Optional[int] = typer.Option(None, "--timeout", help="Timeout in milliseconds."),
    headless: Optional[bool] = typer.Option(None, "--headless/--no-headless", help="Run without a browser window."),
    structured: bool = typer.Option(False, "--structured", "-s", help="Extract headings, links, lists and more."),
    group_by: Optional[List[str]] = typer.Option(None, "--group-by", help="Section selector (repeatable)."),
    exclude: Optional[List[str]] = typer.Option(None, "--exclude", help="Selector to remove first (repeatable)."),
    wait_for: Optional[str] = typer.Option(None, "--wait-for", help="Selector to wait for before extracting."),
    no_follow_redirects: bool = typer.Option(False, "--no-follow-redirects", help="Report redirects instead of following them."),
    preset: Optional[str] = typer.Option(None, "--preset", help="Named preset from the config file."),
    config_path: Optional[Path] = typer.Option(None, "--config", help="Preset config file."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Save results to this file."),
    fmt: Optional[str] = typer.Option(None, "--format", help="json | txt | csv (default: from extension, else json)."),
    batch_size: int = typer.Option(5, "--batch-size", help="URLs per batch."),
    delay: float = typer.Option(1000, "--delay", help="Delay between batches in milliseconds."),
    concurrent: bool = typer.Option(False, "--concurrent", help="Scrape the URLs of a batch concurrently."),
    log_level: str = typer.Option("INFO", "--log-level", help="Logging level."),
    log_dir: Optional[Path] = typer.Option(None, "--log-dir", help="Also write log files here."),
) -> None:
    """Scrape one URL, several URLs, or a file of URLs."""
    try:
        log_manager = LogManager(log_dir=str(log_dir) if log_dir else None, log_level=log_level)
    except ValueError as e:
        _fail(str(e))

    try:
        targets = list(urls or [])
        if file:
            targets.extend(read_url_file(file))
        if not targets:
            raise ValidationError("At least one URL is required")
        targets = [validate_url(url) for url in targets]

        overrides = {}
        if browser is not None:
            overrides['browser'] = browser
        if timeout is not None:
            overrides['timeout'] = timeout
        if headless is not None:
            overrides['headless'] = headless
        if structured:
            overrides['structured'] = True
        if group_by:
            overrides['section_selectors'] = list(group_by)
        if exclude:
            overrides['exclude_selectors'] = list(exclude)
        if wait_for:
            overrides['wait_for_selector'] = wait_for
        if no_follow_redirects:
            overrides['follow_redirects'] = False

        config = resolve_config(load_presets(config_path), preset, overrides)
        output_format = OutputFormat.parse(fmt, str(output) if output else None)
        job = BatchJob.from_urls(targets, config, batch_size=batch_size,
                                 inter_chunk_delay=delay, concurrent=concurrent)
    except ValidationError as e:
        _fail(str(e))

    bulk = len(job.requests) > 1 or file is not None
    typer.echo(f"🚀 Scraping {len(job.requests)} URL(s)")
    typer.echo(f"🔧 Browser: {config.browser}, Headless: {config.headless}, "
               f"Structured: {config.structured}, Follow Redirects: {config.follow_redirects}")
    if preset:
        typer.echo(f"🎨 Using preset: {preset}")
    if config.section_selectors:
        typer.echo(f"📦 Grouping by selector: {', '.join(config.section_selectors)}")

    try:
        if bulk:
            ok = asyncio.run(_run_bulk(job, config, log_manager, output, output_format))
        else:
            ok = asyncio.run(_run_single(job.requests[0].url, config, log_manager, output, output_format))
    except Exception as e:
        typer.echo(f"❌ Scraping failed: {e}", err=True)
        raise typer.Exit(1)

    if not ok:
        raise typer.Exit(1)


async def _run_single(url: str, config: ScraperConfig, log_manager: LogManager,
                      output: Optional[Path], output_format: OutputFormat) -> bool:
    async with create_scraper(config, log_manager) as scraper:
        outcome = await scraper.scrape(url)

    _print_outcome(outcome)

    if output:
        path = await ResultWriter().save([outcome], output, output_format)
        typer.echo(f"💾 Results saved to: {path}")
    else:
        typer.echo("\n📄 Full output:")
        typer.echo(json.dumps(outcome.to_dict(), indent=2, ensure_ascii=False))

    # a reported redirect is a completed run, not an error
    return outcome.ok or outcome.kind is OutcomeKind.REDIRECT_DETECTED


async def _run_bulk(job: BatchJob, config: ScraperConfig, log_manager: LogManager,
                    output: Optional[Path], output_format: OutputFormat) -> bool:
    async with create_scraper(config, log_manager) as scraper:
        report = await BatchCoordinator(scraper).run(job)

    _print_report(report, show_items=output is None)
    log_manager.export_report_json(report)

    if output:
        path = await ResultWriter().save(report.outcomes, output, output_format)
        typer.echo(f"💾 Results saved to: {path}")
    return True


def _print_outcome(outcome: Outcome) -> None:
    if outcome.kind is OutcomeKind.REDIRECT_DETECTED:
        typer.echo("\n🔄 Redirect detected!")
        typer.echo(f"   Status: {outcome.status}")
        typer.echo(f"   Original URL: {outcome.original_url}")
        typer.echo(f"   Redirects to: {outcome.location}")
        typer.echo(f"   Message: {outcome.message}")
        return

    if not outcome.ok:
        typer.echo(f"\n❌ {outcome.kind.value}: {outcome.message}")
        return

    result = outcome.result
    typer.echo("\n📊 Results:")
    if not outcome.structured:
        typer.echo(f"📝 Text length: {result.length} characters")
        typer.echo(f"📄 Preview: {result.text[:150]}...")
        return

    typer.echo(f"📄 Title: {result.title or 'N/A'}")
    if result.is_sectioned:
        typer.echo(f"📦 Sections: {len(result.sections)}")
        for i, section in enumerate(result.sections, 1):
            label = f" - {section.title}" if section.title else ''
            typer.echo(f"   {i}. {section.id}{label}: {len(section.paragraphs)} paragraphs, "
                       f"{len(section.links)} links")
    else:
        typer.echo(f"📝 Paragraphs: {len(result.paragraphs)}")
        typer.echo(f"🔗 Links: {len(result.links)}")
        typer.echo(f"📑 Headings: {len(result.heading_texts())}")
        typer.echo(f"📋 Lists: {len(result.lists)}")


def _print_report(report: BatchReport, show_items: bool) -> None:
    typer.echo("\n🎉 Bulk scraping completed!")
    typer.echo("📊 Statistics:")
    typer.echo(f"   Total URLs: {report.total}")
    typer.echo(f"   Successful: {report.success_count}")
    typer.echo(f"   Failed: {report.failure_count}")
    typer.echo(f"   Success rate: {report.success_rate * 100:.1f}%")
    for kind, count in report.counts.items():
        if count and kind is not OutcomeKind.SUCCESS:
            typer.echo(f"   {kind.value}: {count}")

    if not show_items:
        return

    typer.echo("\n📋 Results summary:")
    for index, outcome in enumerate(report.outcomes, 1):
        if outcome.ok:
            typer.echo(f"{index}. {outcome.url} - ✅ Success ({outcome.content_length} chars)")
        else:
            typer.echo(f"{index}. {outcome.url} - ❌ {outcome.kind.value}")
            typer.echo(f"   └─ {outcome.message}")
    typer.echo("\n💡 Tip: Use --output <filename> to save results to a file")


@presets_app.command("list")
def presets_list(
    config_path: Optional[Path] = typer.Option(None, "--config", help="Preset config file."),
) -> None:
    """List available configuration presets."""
    names = load_presets(config_path).list_presets()
    if not names:
        typer.echo("No presets found. Check your config.json file.")
        return
    typer.echo("📋 Available configuration presets:")
    for name in names:
        typer.echo(f"  - {name}")
    typer.echo(f"\n📊 Total presets: {len(names)}")


@presets_app.command("show")
def presets_show(
    name: str = typer.Argument(..., help="Preset name."),
    config_path: Optional[Path] = typer.Option(None, "--config", help="Preset config file."),
) -> None:
    """Show the options stored in one preset."""
    preset_config = load_presets(config_path)
    options = preset_config.get_preset(name)
    if options is None:
        available = ', '.join(preset_config.list_presets()) or 'none'
        _fail(f'Preset "{name}" not found (available: {available})')

    typer.echo(f'⚙️  Configuration for preset "{name}":')
    typer.echo(json.dumps(options, indent=2, ensure_ascii=False))
    typer.echo(f"\n💡 Use this preset with: pagescrape scrape --preset {name} <url>")


def main() -> None:
    app()
