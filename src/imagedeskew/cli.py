"""Typer-based CLI entry point."""

from __future__ import annotations

import functools
import logging
from pathlib import Path
from typing import Optional

import typer
from rich import print

from .core.bounds import OutOfBoundsPolicy, resolve_pixel_rect
from .core.crop_engine import default_crop_rect
from .core.geometry import Rect, Size
from .core.mapping import normalise_rect
from .core.orientation import image_orientation, upright_size
from .core.process import CropRequest, process_crop
from .core.viewport import display_frame
from .detection import NullPerspectiveCorrector, NullRectangleDetector
from .errors import (
    DegenerateFrameError,
    GeometryError,
    ImageDeskewError,
    ImageLoadError,
    SettingsError,
)
from .settings import load_settings
from .utils.console_logger import ensure_console_logger
from .utils.image_loader import load_image, save_image

app = typer.Typer(help="Crop photographed documents and straighten their perspective")

_CONSOLE_HANDLER = "imagedeskew-console"


def _handle_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (GeometryError, ImageLoadError, SettingsError) as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1) from exc
        except ImageDeskewError as exc:
            typer.echo(f"Unexpected error: {exc}", err=True)
            raise typer.Exit(1) from exc

    return wrapper


def _parse_numbers(text: str, count: int, label: str, separator: str = ",") -> list[float]:
    parts = [part.strip() for part in text.lower().split(separator)]
    if len(parts) != count:
        raise typer.BadParameter(f"{label} needs {count} values separated by '{separator}'")
    try:
        return [float(part) for part in parts]
    except ValueError as exc:
        raise typer.BadParameter(f"{label} must be numeric: {text!r}") from exc


def _parse_size(text: str) -> Size:
    width, height = _parse_numbers(text, 2, "--display", separator="x")
    size = Size(width, height)
    if size.is_empty:
        raise typer.BadParameter("--display must have a positive width and height")
    return size


def _parse_offset(text: str) -> Size:
    dx, dy = _parse_numbers(text, 2, "--offset")
    return Size(dx, dy)


def _parse_rect(text: str) -> Rect:
    return Rect(*_parse_numbers(text, 4, "--crop"))


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log pipeline diagnostics"),
) -> None:
    """Configure console logging for every command."""

    level = logging.DEBUG if verbose else logging.WARNING
    ensure_console_logger(logging.getLogger("imagedeskew"), _CONSOLE_HANDLER, level=level)


@app.command()
@_handle_errors
def process(
    input_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Source image"),
    output_path: Path = typer.Argument(..., dir_okay=False, help="Where to write the result"),
    display: str = typer.Option(..., "--display", help="Container size as WxH"),
    crop: str = typer.Option(..., "--crop", help="Crop rectangle in display points as X,Y,W,H"),
    scale: float = typer.Option(1.0, "--scale", help="Viewport zoom factor"),
    offset: str = typer.Option("0,0", "--offset", help="Viewport pan offset as DX,DY"),
    policy: Optional[OutOfBoundsPolicy] = typer.Option(
        None, "--policy", case_sensitive=False, help="Out-of-bounds policy"
    ),
    no_detect: bool = typer.Option(False, "--no-detect", help="Skip perspective correction"),
    settings_path: Optional[Path] = typer.Option(
        None, "--settings", exists=True, dir_okay=False, help="Settings JSON file"
    ),
) -> None:
    """Crop INPUT as selected on screen and write the deskewed result to OUTPUT."""

    settings = load_settings(settings_path)
    request = CropRequest(
        _parse_size(display),
        _parse_rect(crop),
        scale,
        _parse_offset(offset),
        policy or settings.policy,
    )
    detector = corrector = None
    if no_detect or not settings.detect:
        detector, corrector = NullRectangleDetector(), NullPerspectiveCorrector()

    image = load_image(input_path)
    outcome = process_crop(
        image,
        request,
        detector=detector,
        corrector=corrector,
        options=settings.detector_options,
    )
    save_image(outcome.image, output_path)
    width, height = outcome.image.size
    note = "perspective corrected" if outcome.corrected else "plain crop"
    print(f"[green]Saved {output_path} ({width}x{height}, {note})")


@app.command()
@_handle_errors
def frame(
    input_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Source image"),
    display: str = typer.Option(..., "--display", help="Container size as WxH"),
    scale: float = typer.Option(1.0, "--scale", help="Viewport zoom factor"),
    offset: str = typer.Option("0,0", "--offset", help="Viewport pan offset as DX,DY"),
    crop: Optional[str] = typer.Option(
        None, "--crop", help="Crop rectangle as X,Y,W,H (defaults to the initial crop)"
    ),
    policy: Optional[OutOfBoundsPolicy] = typer.Option(
        None, "--policy", case_sensitive=False, help="Out-of-bounds policy"
    ),
    settings_path: Optional[Path] = typer.Option(
        None, "--settings", exists=True, dir_okay=False, help="Settings JSON file"
    ),
) -> None:
    """Show where INPUT is displayed and which pixels a crop selects."""

    settings = load_settings(settings_path)
    image = load_image(input_path)
    width, height = upright_size(image)
    container = _parse_size(display)
    image_frame = display_frame(
        Size(float(width), float(height)), container, scale, _parse_offset(offset)
    )
    if crop is None:
        rect = default_crop_rect(image_frame, settings.min_side)
    else:
        rect = _parse_rect(crop)

    print(f"Image: {width}x{height} ({image_orientation(image).name})")
    print(f"Frame: x={image_frame.x:g} y={image_frame.y:g} "
          f"w={image_frame.width:g} h={image_frame.height:g}")
    print(f"Crop:  x={rect.x:g} y={rect.y:g} w={rect.width:g} h={rect.height:g}")

    norm = normalise_rect(rect, image_frame)
    if norm is None:
        raise DegenerateFrameError("Display frame has no extent")
    resolved = resolve_pixel_rect(norm, (width, height), policy or settings.policy)
    left, top, right, bottom = resolved.target.as_box()
    print(f"Normalised: x={norm.x:.4f} y={norm.y:.4f} w={norm.width:.4f} h={norm.height:.4f}")
    print(f"[cyan]Pixels ({resolved.policy.value}): {left},{top} -> {right},{bottom}")


if __name__ == "__main__":
    app()
