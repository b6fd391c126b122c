"""The windowing side of the application.

moderngl_window provides the native window, the OpenGL context and keyboard
state. This module drives the main loop and hands control to whichever
lifecycle callbacks have been registered.
"""

import logging
from dataclasses import dataclass
from typing import Callable

import moderngl_window as mglw
from moderngl_window.conf import settings

from . import gl
from . import input
from .config import Config
from .time import Timer


def _dummy_func(*args):
    pass


def _poll_glfw(window):
    import glfw

    glfw.poll_events()


def _poll_tk(window):
    window._tk.update_idletasks()
    window._tk.update()


# moderngl_window BaseWindow doesn't have an event polling function, the
# events are polled when the buffers are swapped. Polling explicitly once per
# update tick means key state is fresh even when no frame was presented.
_polling_function_lookup = {
    "moderngl_window.context.headless.Window": _dummy_func,
    "moderngl_window.context.glfw.Window": _poll_glfw,
    "moderngl_window.context.pygame2.Window": lambda w: w.process_events(),
    "moderngl_window.context.pyglet.Window": (
        lambda w: w._window.dispatch_events()
    ),
    "moderngl_window.context.pyqt5.Window": lambda w: w._app.processEvents(),
    "moderngl_window.context.pyside2.Window": (
        lambda w: w._app.processEvents()
    ),
    "moderngl_window.context.sdl2.Window": lambda w: w.process_events(),
    "moderngl_window.context.tk.Window": _poll_tk,
}


@dataclass
class Callbacks:
    on_load: Callable[[], None] = _dummy_func
    on_update_frame: Callable[[float], None] = _dummy_func
    on_render_frame: Callable[[float], None] = _dummy_func
    on_resize: Callable[[int, int], None] = _dummy_func
    on_unload: Callable[[], None] = _dummy_func


class Window:
    """Owns a moderngl_window window and runs the main loop."""

    def __init__(self, window, config=None):
        """Wrap an already created moderngl_window window.

        Parameters
        ----------
        window : moderngl_window.BaseWindow
        config : Config, optional
        """

        self.config = config or Config()
        self.callbacks = Callbacks()
        self.frames = 0
        self._window = window
        self._poll = _polling_function_lookup.get(
            self.config.window_class, _dummy_func
        )
        self.context = gl.use_context(window.ctx)

    @classmethod
    def create(cls, config=None):
        """Creates the native window described by `config`.

        Notes
        -----
        https://moderngl-window.readthedocs.io/en/latest/guide/window_guide.html
        """

        config = config or Config()
        if config.window_class == "moderngl_window.context.glfw.Window":
            # fail early rather than on the first poll
            import glfw  # noqa: F401

        for k, v in config.window_settings().items():
            settings.WINDOW[k] = v
        window = mglw.create_window_from_settings()
        logging.info(f"Created {config.window_class} of size {config.size}.")
        return cls(window, config)

    def __repr__(self):
        return (
            f"<{self.__class__.__name__}(size={self.size}, "
            f"frames={self.frames})>"
        )

    @property
    def size(self):
        return self._window.size

    @property
    def is_closing(self):
        return self._window.is_closing

    def register(self, **callbacks):
        """Register lifecycle callbacks by name.

        Parameters
        ----------
        **callbacks : Callable
            Any of: on_load, on_update_frame, on_render_frame, on_resize,
            on_unload.
        """

        for name, callback in callbacks.items():
            if not hasattr(self.callbacks, name):
                raise TypeError(f"Unknown window callback {name!r}.")
            setattr(self.callbacks, name, callback)

    def is_key_down(self, key):
        """Is the given key currently held down?

        Parameters
        ----------
        key : input.Keyboard | str
        """

        key = input.as_key(key)
        mglw_key = getattr(self._window.keys, key.name, None)
        if mglw_key is None:
            logging.debug(f"Key mapping not found for {key!r}.")
            return False
        return bool(self._window.is_key_pressed(mglw_key))

    def swap_buffers(self):
        self._window.swap_buffers()

    def close(self):
        self._window.close()

    def run(self):
        """The main loop.

        Calls on_load once, then interleaves update ticks and rendered frames
        at the configured rates until close is requested, then on_unload once.
        A close requested from an update tick ends the loop before another
        frame is rendered.

        An exception from any callback skips on_unload. The native window
        is still destroyed, which releases every handle its context owns.
        """

        try:
            self.callbacks.on_load()
            self._window.resize_func = self._dispatch_resize

            update_timer = Timer(self.config.tps)
            render_timer = Timer(self.config.fps)
            while not self.is_closing:
                now = Timer.now()
                next_frame = render_timer.remaining(now=now)
                next_update = update_timer.remaining(now=now)

                if next_frame < next_update:
                    dt = render_timer.tick(self.config.fps)
                    self.callbacks.on_render_frame(dt)
                    self._count_frame()
                else:
                    dt = update_timer.tick(self.config.tps)
                    self._poll(self._window)
                    self.callbacks.on_update_frame(dt)

            self.callbacks.on_unload()
        finally:
            self._window.destroy()

    def _count_frame(self):
        self.frames += 1
        max_frames = self.config.max_frames
        if max_frames is not None and self.frames >= max_frames:
            logging.debug(f"Rendered {self.frames} frames, closing.")
            self.close()

    def _dispatch_resize(self, width, height):
        self.callbacks.on_resize(width, height)
