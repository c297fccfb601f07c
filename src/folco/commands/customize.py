"""Command: apply a customization profile to folder icons."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click
from pydantic import ValidationError

from folco.commands._base import FolcoCommand
from folco.domain.types import AnchorPosition, FolderColor

if TYPE_CHECKING:
    from folco.commands._context import AppContext
    from folco.config.models import DefaultsConfig
    from folco.domain.profile import CustomizationProfile

_SCALE = click.FloatRange(min=0.0, max=1.0, min_open=True)


@click.command(
    cls=FolcoCommand,
    examples=(
        "folco customize ~/Projects --color green",
        "folco customize ~/Music --overlay 🎵 --overlay-position bottom-right",
        "folco customize ~/Code --decal ./logo.svg --decal-scale 0.5",
        "folco customize ~/Games --overlay joystick --overlay-scale 0.4",
        "folco -j 1 customize a b c --profile-file profile.json",
    ),
)
@click.argument("directories", nargs=-1, required=True, type=click.Path(path_type=Path))
@click.option("--profile", "profile_json", metavar="JSON", help="Serialized profile.")
@click.option(
    "--profile-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="File holding a serialized profile.",
)
@click.option(
    "--color",
    type=click.Choice([c.value for c in FolderColor]),
    help="Folder color preset.",
)
@click.option("--decal", "decal_source", metavar="SOURCE", help="SVG markup or SVG file path.")
@click.option("--decal-scale", type=_SCALE, help="Decal size relative to the folder (0-1].")
@click.option(
    "--overlay",
    "overlay_source",
    metavar="SOURCE",
    help="SVG markup, .svg file, emoji, or emoji name.",
)
@click.option(
    "--overlay-position",
    type=click.Choice([p.value for p in AnchorPosition]),
    help="Overlay anchor.",
)
@click.option("--overlay-scale", type=_SCALE, help="Overlay size relative to the folder (0-1].")
@click.pass_obj
def customize(
    app: AppContext,
    directories: tuple[Path, ...],
    profile_json: str | None,
    profile_file: Path | None,
    color: str | None,
    decal_source: str | None,
    decal_scale: float | None,
    overlay_source: str | None,
    overlay_position: str | None,
    overlay_scale: float | None,
) -> None:
    """Customize folder icons with a profile."""
    from folco.domain.errors import FolcoError, ProfileDecodeError
    from folco.services.result import ServiceError, ServiceResult

    individual = (color, decal_source, decal_scale, overlay_source, overlay_position, overlay_scale)
    if profile_json is not None and profile_file is not None:
        raise click.UsageError("--profile and --profile-file are mutually exclusive.")
    serialized: str | bytes | None = profile_json
    if profile_file is not None:
        serialized = profile_file.read_bytes()
    if serialized is not None and any(opt is not None for opt in individual):
        raise click.UsageError("A serialized profile cannot be combined with individual options.")
    if decal_source is None and decal_scale is not None:
        raise click.UsageError("--decal-scale requires --decal.")
    if overlay_source is None and (overlay_position is not None or overlay_scale is not None):
        raise click.UsageError("--overlay-position and --overlay-scale require --overlay.")

    try:
        if serialized is not None:
            from folco.domain.profile import CustomizationProfile

            profile = CustomizationProfile.from_json(serialized)
        else:
            profile = _build_profile(
                app.settings.defaults,
                color=color,
                decal_source=decal_source,
                decal_scale=decal_scale,
                overlay_source=overlay_source,
                overlay_position=overlay_position,
                overlay_scale=overlay_scale,
            )
    except ValidationError as exc:
        error = ProfileDecodeError("Invalid customization options")
        error.__cause__ = exc
        app.emit(ServiceResult(ok=False, op="customize", error=ServiceError.from_exception(error)))
        return
    except FolcoError as exc:
        app.emit(ServiceResult(ok=False, op="customize", error=ServiceError.from_exception(exc)))
        return

    result = app.run_batch(
        "customize",
        lambda service: service.start_customize(directories, profile),
        action="Processing",
    )
    if profile.is_noop:
        warning = "Profile is empty; the default icon shape was applied"
        result = result.model_copy(update={"warnings": [*result.warnings, warning]})
    app.emit(result)


def _build_profile(
    defaults: DefaultsConfig,
    *,
    color: str | None,
    decal_source: str | None,
    decal_scale: float | None,
    overlay_source: str | None,
    overlay_position: str | None,
    overlay_scale: float | None,
) -> CustomizationProfile:
    """Assemble a profile from individual CLI options."""
    from folco.domain.color import mutation_for
    from folco.domain.profile import CustomizationProfile, DecalSettings, OverlaySettings
    from folco.domain.sources import resolve_decal_source, resolve_overlay_source

    profile = CustomizationProfile()
    if color is not None:
        profile = profile.with_hsl_mutation(mutation_for(FolderColor(color)))
    if decal_source is not None:
        profile = profile.with_decal(
            DecalSettings(
                source=resolve_decal_source(decal_source),
                scale=decal_scale if decal_scale is not None else defaults.decal_scale,
            )
        )
    if overlay_source is not None:
        profile = profile.with_overlay(
            OverlaySettings(
                source=resolve_overlay_source(overlay_source),
                position=(
                    AnchorPosition(overlay_position)
                    if overlay_position is not None
                    else defaults.overlay_position
                ),
                scale=overlay_scale if overlay_scale is not None else defaults.overlay_scale,
            )
        )
    return profile
