"""Command line interface for the lighting analyzer."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from plantlight.apps.plant_recommender.core import (
    PlantRecommender,
    RecommendationServiceError,
    plant_types_for,
)
from plantlight.libs.vision import LightingAnalysisError, LightLevel, load_image
from plantlight.logging_utils import configure_logging

from ..core.analyzer import analyze_lighting
from ..core.config import LightingConfig, load_config
from ..core.models import LightingAnalysis
from ..core.overlay import render_overlay, save_overlay

LOG_PATH = configure_logging("lighting_analyzer")
logger = logging.getLogger(__name__)
logger.info("Lighting analyzer logging initialised: %s", LOG_PATH)

app = typer.Typer(help="Map room lighting into zones for plant placement.")
console = Console()

_LEVEL_STYLES = {
    LightLevel.LOW: "blue",
    LightLevel.MEDIUM: "yellow",
    LightLevel.HIGH: "dark_orange",
}


def _run_analysis(image_path: Path, config: LightingConfig):
    try:
        image = load_image(image_path)
        analysis = analyze_lighting(image, config.grid_size, config.thresholds)
    except FileNotFoundError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1)
    except LightingAnalysisError as exc:
        logger.error("Analysis of %s failed: %s", image_path, exc)
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(2)
    return image, analysis


def _print_analysis(analysis: LightingAnalysis) -> None:
    level = analysis.overall_level
    console.print(
        f"[bold]Overall:[/bold] [{_LEVEL_STYLES[level]}]{level.label}[/] "
        f"(brightness {analysis.overall_brightness}/255)"
    )
    console.print(level.description)

    table = Table(title="Light distribution")
    table.add_column("Level")
    table.add_column("Share", justify="right")
    for lvl, pct in analysis.summary.items():
        table.add_row(f"[{_LEVEL_STYLES[lvl]}]{lvl.label}[/]", f"{pct:.1f}%")
    console.print(table)

    n = analysis.grid_size
    console.print(f"Zone map ({n}x{n}):")
    for row in range(n):
        cells = analysis.zones[row * n : (row + 1) * n]
        console.print(
            "  "
            + " ".join(
                f"[{_LEVEL_STYLES[zone.level]}]{zone.level.value[0].upper()}[/]"
                for zone in cells
            )
        )

    dominant = analysis.dominant_level
    if dominant != level:
        console.print(
            f"Most of the room is {dominant.label.lower()}, although the overall "
            f"reading is {level.label.lower()}.",
            soft_wrap=True,
        )


def _write_json(payload: dict, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    typer.echo(f"JSON written to {path}")


@app.command()
def analyze(
    image_path: Path = typer.Argument(..., help="Room photo to analyse."),
    grid_size: Optional[int] = typer.Option(
        None, "--grid-size", "-g", help="Rows and columns of the zone grid."
    ),
    low: Optional[float] = typer.Option(
        None, "--low", help="Brightness below this value is low light."
    ),
    high: Optional[float] = typer.Option(
        None, "--high", help="Brightness at or above this value is high light."
    ),
    overlay: Optional[Path] = typer.Option(
        None, "--overlay", help="Write a PNG with the zones drawn over the photo."
    ),
    alpha: Optional[float] = typer.Option(
        None, "--alpha", help="Translucency of the zone fill in the overlay (0-1)."
    ),
    json_out: Optional[Path] = typer.Option(
        None, "--json", help="Write the analysis as JSON to this path."
    ),
) -> None:
    """Analyse the lighting of IMAGE_PATH."""
    config = load_config(
        grid_size=grid_size,
        low_threshold=low,
        high_threshold=high,
        overlay_alpha=alpha,
    )
    image, analysis = _run_analysis(image_path, config)
    logger.info(
        "Analysed %s: overall=%s grid=%d",
        image_path,
        analysis.overall_level.value,
        analysis.grid_size,
    )
    _print_analysis(analysis)

    if overlay is not None:
        try:
            rendered = render_overlay(image, analysis.zones, config.overlay_alpha)
        except ValueError as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(2)
        save_overlay(rendered, overlay)
        typer.echo(f"Overlay written to {overlay}")

    if json_out is not None:
        _write_json(analysis.to_dict(), json_out)


@app.command()
def recommend(
    image_path: Path = typer.Argument(..., help="Room photo to analyse."),
    grid_size: Optional[int] = typer.Option(
        None, "--grid-size", "-g", help="Rows and columns of the zone grid."
    ),
    base_url: Optional[str] = typer.Option(
        None, "--base-url", help="Base URL of the OpenAI-compatible endpoint."
    ),
    model: Optional[str] = typer.Option(None, "--model", help="Vision model name."),
    api_key: Optional[str] = typer.Option(
        None, "--api-key", help="API key (defaults to OPENAI_API_KEY)."
    ),
    timeout: Optional[int] = typer.Option(
        None, "--timeout", help="Request timeout in seconds."
    ),
    json_out: Optional[Path] = typer.Option(
        None, "--json", help="Write analysis and recommendations as JSON."
    ),
) -> None:
    """Analyse IMAGE_PATH and ask the configured model for suitable plants."""
    config = load_config(
        grid_size=grid_size,
        base_url=base_url,
        model=model,
        api_key=api_key,
        timeout=timeout,
    )
    image, analysis = _run_analysis(image_path, config)
    _print_analysis(analysis)

    level = analysis.overall_level
    recommender = PlantRecommender.from_config(config)
    try:
        result = recommender.recommend(image, level)
    except RecommendationServiceError as exc:
        logger.error("Recommendation request failed: %s", exc)
        typer.echo(f"Recommendation request failed: {exc}", err=True)
        raise typer.Exit(1)
    finally:
        recommender.close()

    heading = "Suggested plants"
    if result.is_fallback:
        heading += " (default list)"
    console.print(f"\n[bold]{heading} for {level.label.lower()}:[/bold]")
    for rec in result.recommendations:
        console.print(
            f"• [green]{rec.common_name}[/green] ({rec.scientific_name})",
            soft_wrap=True,
        )
        console.print(f"    Care: {rec.care_instructions}", soft_wrap=True)
        console.print(f"    Why: {rec.suitability_reason}", soft_wrap=True)

    placeable = ", ".join(plant.value for plant in plant_types_for(level))
    console.print(f"\nPlant types suited to this room: {placeable}", soft_wrap=True)

    if json_out is not None:
        payload = analysis.to_dict()
        payload.update(result.to_json())
        payload["fallback"] = result.is_fallback
        _write_json(payload, json_out)


if __name__ == "__main__":
    app()
