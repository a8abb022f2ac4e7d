"""
ImageAnimator: a still image covering the frame, zoomed and panned by one of
the named presets (see `fuiframes.presets`).
"""

from __future__ import annotations

from dataclasses import dataclass

from ..config import FrameContext, ParamsMixin
from ..errors import ConfigurationError
from ..presets import get_preset, preset_state
from ..scene import ImageLayer, Scene, group

BACKGROUND = "#000000"
REMOTE_PREFIXES = ("http://", "https://", "ftp://", "data:")


@dataclass(frozen=True)
class ImageAnimatorConfig(ParamsMixin):
    image_src: str = ""
    preset: str = "ken-burns"

    def __post_init__(self) -> None:
        get_preset(self.preset)
        if self.image_src.lower().startswith(REMOTE_PREFIXES):
            raise ConfigurationError(f"only local image files are supported, got {self.image_src!r}")


def render(ctx: FrameContext, config: ImageAnimatorConfig) -> Scene:
    if not config.image_src:
        raise ConfigurationError("ImageAnimator needs an image_src")
    state = preset_state(config.preset, ctx.frame_index, ctx.total_frames)
    layer = ImageLayer(
        src=config.image_src,
        width=ctx.width,
        height=ctx.height,
        scale=state.scale,
        translate_x_pct=state.offset_x_pct,
        translate_y_pct=state.offset_y_pct,
    )
    return Scene(width=ctx.width, height=ctx.height, background=BACKGROUND, root=group(layer))
