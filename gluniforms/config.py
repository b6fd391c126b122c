"""Application settings for the window and the render loop."""

import pathlib
from dataclasses import dataclass
from typing import Optional, Tuple

from . import resources

WINDOW_CLASS = "moderngl_window.context.pygame2.Window"
HEADLESS_WINDOW_CLASS = "moderngl_window.context.headless.Window"


@dataclass
class Config:
    """Window and render loop settings.

    ticks per second >= frames per second
    or frames are rendered with no update in between
    """

    size: Tuple[int, int] = (800, 600)
    title: str = "Shaders: Uniforms"
    window_class: str = WINDOW_CLASS
    gl_version: Tuple[int, int] = (3, 3)
    vsync: bool = True
    resizable: bool = True
    vertex_shader: pathlib.Path = resources.DEFAULT_VERTEX_SHADER
    fragment_shader: pathlib.Path = resources.DEFAULT_FRAGMENT_SHADER
    clear_color: Tuple[float, float, float, float] = (0.2, 0.3, 0.3, 1.0)
    exit_key: str = "escape"
    max_frames: Optional[int] = None
    _fps: int = 60
    _tps: int = 60

    @property
    def fps(self):
        return self._fps

    @fps.setter
    def fps(self, new_fps):
        assert new_fps <= self.tps
        self._fps = new_fps

    @property
    def tps(self):
        return self._tps

    @tps.setter
    def tps(self, new_tps):
        assert new_tps >= self.fps
        self._tps = new_tps

    @property
    def headless(self):
        return self.window_class == HEADLESS_WINDOW_CLASS

    def set_rates(self, fps, tps=None):
        """Set both rates at once, keeping tps >= fps."""

        tps = tps or fps
        assert tps >= fps
        self._tps = tps
        self._fps = fps

    def window_settings(self):
        """Values for moderngl_window.conf.settings.WINDOW."""

        return {
            "class": self.window_class,
            "gl_version": self.gl_version,
            "size": self.size,
            "title": self.title,
            "vsync": self.vsync,
            "resizable": self.resizable,
            "aspect_ratio": None,
        }
