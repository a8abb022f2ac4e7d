"""
Composition table and the single frame entry point.

    from fuiframes.engine import render_frame, default_context

    ctx = default_context("KnowledgeGraph")
    scene = render_frame("KnowledgeGraph", 120, ctx, {"nodeCount": 250})

`render_frame` is a pure function of its arguments: frames may be rendered
in any order, in parallel, or repeatedly, with identical results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional, Union

from .compositions import fui_clock, fui_panorama, image_animator, knowledge_graph
from .config import FrameContext
from .errors import ConfigurationError
from .scene import Scene


@dataclass(frozen=True)
class Composition:
    id: str
    config_cls: type
    render: Callable[[FrameContext, Any], Scene]
    total_frames: int
    fps: float = 30.0
    width: int = 1920
    height: int = 1080
    # merged under the caller's parameters
    default_params: Mapping[str, Any] = field(default_factory=dict)

    def context(self, frame_index: int = 0) -> FrameContext:
        return FrameContext(frame_index, self.total_frames, self.fps, self.width, self.height)

    def config(self, params: Union[None, Mapping[str, Any], Any] = None) -> Any:
        if isinstance(params, self.config_cls):
            return params
        if params is not None and not isinstance(params, Mapping):
            raise ConfigurationError(
                f"{self.id} expects a parameter mapping or {self.config_cls.__name__}, "
                f"got {type(params).__name__}"
            )
        merged = dict(self.default_params)
        merged.update(params or {})
        return self.config_cls.from_params(merged)


# the registered KnowledgeGraph ships denser than the config dataclass defaults
KNOWLEDGE_GRAPH_SHOWCASE = {
    "node_count": 250,
    "connection_distance": 300,
    "node_size": 2,
    "accent_color": "#4169E1",
    "secondary_color": "#1E90FF",
}

COMPOSITIONS: Dict[str, Composition] = {
    c.id: c
    for c in (
        Composition("ImageAnimator", image_animator.ImageAnimatorConfig, image_animator.render, 150),
        Composition("FuiClock", fui_clock.FuiClockConfig, fui_clock.render, 150),
        Composition("FuiPanorama", fui_panorama.FuiPanoramaConfig, fui_panorama.render, 300),
        Composition("KnowledgeGraph", knowledge_graph.KnowledgeGraphConfig, knowledge_graph.render, 2100,
                    default_params=KNOWLEDGE_GRAPH_SHOWCASE),
    )
}


def get_composition(composition_id: str) -> Composition:
    comp = COMPOSITIONS.get(composition_id)
    if comp is None:
        raise ConfigurationError(
            f'Unknown composition "{composition_id}". Valid compositions: {", ".join(COMPOSITIONS)}'
        )
    return comp


def default_context(composition_id: str, frame_index: int = 0) -> FrameContext:
    return get_composition(composition_id).context(frame_index)


def render_frame(
    composition_id: str,
    frame_index: int,
    frame_context: Optional[FrameContext] = None,
    params: Union[None, Mapping[str, Any], Any] = None,
) -> Scene:
    """Scene for one frame. `frame_index` overrides the context's own index."""
    comp = get_composition(composition_id)
    ctx = frame_context if frame_context is not None else comp.context()
    if ctx.frame_index != frame_index:
        ctx = ctx.at(frame_index)
    return comp.render(ctx, comp.config(params))
