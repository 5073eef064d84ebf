"""robotourney — results viewer for robot-combat competitions."""

__version__ = "0.1.0"
