from .fui_clock import FuiClockConfig
from .fui_panorama import FuiPanoramaConfig
from .image_animator import ImageAnimatorConfig
from .knowledge_graph import KnowledgeGraphConfig

__all__ = [
    "FuiClockConfig",
    "FuiPanoramaConfig",
    "ImageAnimatorConfig",
    "KnowledgeGraphConfig",
]
