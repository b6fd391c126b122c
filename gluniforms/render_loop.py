"""Animates a triangle's color by rewriting a shader uniform every frame."""

import enum
import logging
import math

import numpy as np

from . import gl
from .shaders import Shader
from .time import AnimationClock

# bottom-left, bottom-right, top
VERTICES = np.array(
    [
        (-0.5, -0.5, 0.0),
        (0.5, -0.5, 0.0),
        (0.0, 0.5, 0.0),
    ],
    dtype=gl.float,
)
POSITION = gl.AttributeLayout("aPosition", location=0, components=3)
COLOR_UNIFORM = "ourColor"


class LifecycleError(RuntimeError):
    """A RenderLoop operation was called out of order."""


class State(enum.Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    TORN_DOWN = "torn_down"


def green_value(elapsed):
    """The green channel at `elapsed` seconds.

    Not normalized into [0, 1]: this swings in [-0.4, 0.4] and negative
    values are clamped by OpenGL when the fragment is written.
    """

    return math.sin(elapsed) / (2.0 + 0.5)


class RenderLoop:
    """Owns the triangle's buffer, vertex array and shader program.

    The loop is driven by a window through the callbacks registered in
    `attach`. Every handle is created once in `initialize` and deleted once
    in `teardown`.
    """

    def __init__(
        self,
        window,
        ctx,
        vertex_shader,
        fragment_shader,
        *,
        clear_color=(0.2, 0.3, 0.3, 1.0),
        exit_key="escape",
        shader_factory=Shader,
        clock_factory=AnimationClock,
    ):
        """
        Parameters
        ----------
        window : gluniforms.window.Window
            Anything with is_key_down, close, swap_buffers and register.
        ctx : gl.GraphicsContext
        vertex_shader : pathlib.Path
        fragment_shader : pathlib.Path
        clear_color : tuple[float, float, float, float], optional
        exit_key : input.Keyboard | str, optional
        shader_factory : Callable, optional
            Called as shader_factory(vertex, fragment, ctx=ctx).
        clock_factory : Callable, optional
        """

        self.window = window
        self.ctx = ctx
        self.vertex_shader = vertex_shader
        self.fragment_shader = fragment_shader
        self.clear_color = clear_color
        self.exit_key = exit_key
        self.state = State.UNINITIALIZED

        self._shader_factory = shader_factory
        self._clock_factory = clock_factory
        self._vertex_buffer = None
        self._vertex_array = None
        self._shader = None
        self._clock = None

    @classmethod
    def from_config(cls, window, config):
        return cls(
            window,
            window.context,
            config.vertex_shader,
            config.fragment_shader,
            clear_color=config.clear_color,
            exit_key=config.exit_key,
        )

    def __repr__(self):
        return f"<{self.__class__.__name__}(state={self.state.value})>"

    def attach(self):
        """Register this loop's lifecycle callbacks with the window."""

        self.window.register(
            on_load=self.initialize,
            on_update_frame=self.update_frame,
            on_render_frame=self.render_frame,
            on_resize=self.resize,
            on_unload=self.teardown,
        )
        return self

    def initialize(self):
        """Create every handle and leave them bound."""

        self._require(State.UNINITIALIZED, "initialize")
        ctx = self.ctx
        ctx.set_clear_color(*self.clear_color)

        self._vertex_buffer = ctx.create_buffer(VERTICES, gl.STATIC_DRAW)
        ctx.bind_buffer(self._vertex_buffer)

        logging.info(
            f"Maximum number of vertex attributes supported: "
            f"{ctx.max_vertex_attributes}"
        )

        # moderngl resolves attributes against a linked program, so the
        # vertex array is described once the program exists.
        self._shader = self._shader_factory(
            self.vertex_shader, self.fragment_shader, ctx=ctx
        )
        self._vertex_array = ctx.create_vertex_array(
            self._shader, self._vertex_buffer, POSITION
        )
        ctx.bind_vertex_array(self._vertex_array)
        self._shader.use()

        self._clock = self._clock_factory()
        self._clock.start()
        self.state = State.INITIALIZED

    def render_frame(self, elapsed=None):
        """Draw one frame.

        Parameters
        ----------
        elapsed : float, optional
            Seconds since the previous frame. Unused, the animation follows
            the clock started in `initialize`.
        """

        self._require(State.INITIALIZED, "render_frame")
        ctx = self.ctx
        ctx.clear()
        self._shader.use()

        green = green_value(self._clock.elapsed)
        location = ctx.get_uniform_location(self._shader, COLOR_UNIFORM)
        ctx.uniform4f(location, 0.0, green, 0.0, 1.0)

        ctx.bind_vertex_array(self._vertex_array)
        ctx.draw_arrays(gl.TRIANGLES, 0, 3)
        self.window.swap_buffers()

    def update_frame(self, elapsed=None):
        """Request the window close when the exit key is held."""

        self._require(State.INITIALIZED, "update_frame")
        if self.window.is_key_down(self.exit_key):
            logging.debug(f"{self.exit_key!r} pressed, closing.")
            self.window.close()

    def resize(self, width, height):
        self._require(State.INITIALIZED, "resize")
        self.ctx.viewport = (0, 0, width, height)

    def teardown(self):
        """Unbind everything, then delete buffer, vertex array and program."""

        self._require(State.INITIALIZED, "teardown")
        ctx = self.ctx
        ctx.bind_buffer(None)
        ctx.bind_vertex_array(None)
        ctx.use_program(None)

        ctx.delete_buffer(self._vertex_buffer)
        ctx.delete_vertex_array(self._vertex_array)
        ctx.delete_program(self._shader)

        self._vertex_buffer = self._vertex_array = self._shader = None
        self.state = State.TORN_DOWN

    def _require(self, state, operation):
        if self.state is not state:
            raise LifecycleError(
                f"Can't {operation} while {self.state.value}, "
                f"expected {state.value}."
            )
