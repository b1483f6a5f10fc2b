"""CLI entry point for disaster intel."""

import asyncio
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import typer

from disaster_intel.adapters.feeds import FixtureReportProvider
from disaster_intel.adapters.inference import HttpImageProbe, HuggingFaceClient
from disaster_intel.adapters.location import NERLocationStrategy, PatternLocationStrategy
from disaster_intel.config import Settings, get_settings
from disaster_intel.core import TTLCache, analyze_sentiment, detect_priority_alerts
from disaster_intel.use_cases import ImageAuthenticator, LocationResolver, SocialMediaService

app = typer.Typer(help="Structured signals from disaster reports.", no_args_is_help=True)

ConfigOption = typer.Option(Path("config.yaml"), "--config", help="Path to YAML config")
LogLevelOption = typer.Option(None, "--log-level", help="Override configured log level")


@dataclass
class Services:
    """Services sharing one cache for the lifetime of the process."""

    cache: TTLCache
    location_resolver: LocationResolver
    image_authenticator: ImageAuthenticator
    social_media: SocialMediaService


def build_services(settings: Settings, cache: Optional[TTLCache] = None) -> Services:
    """Wire adapters and services together around a single cache."""
    if cache is None:
        cache = TTLCache(default_ttl_hours=settings.cache.location_ttl_hours)
    inference = HuggingFaceClient(settings)
    probe = HttpImageProbe(settings)

    return Services(
        cache=cache,
        location_resolver=LocationResolver(
            cache,
            strategies=[NERLocationStrategy(inference), PatternLocationStrategy()],
            ttl_hours=settings.cache.location_ttl_hours,
        ),
        image_authenticator=ImageAuthenticator(
            cache,
            classifier=inference,
            probe=probe,
            ttl_hours=settings.cache.image_ttl_hours,
        ),
        social_media=SocialMediaService(
            cache,
            provider=FixtureReportProvider(),
            ttl_hours=settings.cache.social_media_ttl_hours,
        ),
    )


def setup_logging(settings: Settings, level: Optional[str] = None) -> None:
    level_name = level or settings.logging.level
    logging.basicConfig(
        level=getattr(logging, str(level_name).upper(), logging.INFO),
        format=settings.logging.format,
        force=True,
    )


def _load(config: Path, log_level: Optional[str]) -> Services:
    settings = get_settings(config)
    setup_logging(settings, log_level)

    if not settings.has_inference_credentials:
        logging.getLogger(__name__).warning(
            "HUGGINGFACE_API_KEY not set, using pattern matching and basic image checks only"
        )
    return build_services(settings)


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


@app.command()
def locate(
    text: str = typer.Argument(..., help="Free-text disaster description"),
    config: Path = ConfigOption,
    log_level: Optional[str] = LogLevelOption,
) -> None:
    """Extract a location from a description."""
    services = _load(config, log_level)
    result = asyncio.run(services.location_resolver.extract_location(text))
    _print_json(result.to_dict())


@app.command("verify-image")
def verify_image(
    url: str = typer.Argument(..., help="Image URL to verify"),
    config: Path = ConfigOption,
    log_level: Optional[str] = LogLevelOption,
) -> None:
    """Check whether an image URL looks authentic."""
    services = _load(config, log_level)
    result = asyncio.run(services.image_authenticator.verify_image(url))
    _print_json(result.to_dict())


@app.command()
def feed(
    disaster_id: str = typer.Argument(..., help="Disaster identifier"),
    tag: Optional[list[str]] = typer.Option(None, "--tag", "-t", help="Keep reports matching a tag"),
    alerts: bool = typer.Option(False, "--alerts", help="Only priority alerts, most urgent first"),
    sentiment: bool = typer.Option(False, "--sentiment", help="Annotate reports with sentiment"),
    config: Path = ConfigOption,
    log_level: Optional[str] = LogLevelOption,
) -> None:
    """Fetch social media reports and triage them."""
    services = _load(config, log_level)
    reports = asyncio.run(
        services.social_media.fetch_social_media_reports(disaster_id, tag or [])
    )

    if alerts:
        reports = detect_priority_alerts(reports)
    if sentiment:
        reports = analyze_sentiment(reports)

    _print_json([report.to_dict() for report in reports])


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
