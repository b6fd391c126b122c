import logging
from dataclasses import dataclass
from typing import NamedTuple, Optional

import moderngl
import numpy as np

context: "GraphicsContext" = None

_int = int
_bool = bool

int = np.dtype("i4")
uint = np.dtype("u4")
float = np.dtype("f4")
double = np.dtype("f8")
bool = np.dtype("bool")
ivec2 = np.dtype((int, 2))
ivec3 = np.dtype((int, 3))
ivec4 = np.dtype((int, 4))
vec2 = np.dtype((float, 2))
vec3 = np.dtype((float, 3))
vec4 = np.dtype((float, 4))
mat2 = np.dtype((float, (2, 2)))
mat3 = np.dtype((float, (3, 3)))
mat4 = np.dtype((float, (4, 4)))

# buffer usage hints
STATIC_DRAW = "static_draw"
DYNAMIC_DRAW = "dynamic_draw"

# primitive modes
TRIANGLES = moderngl.TRIANGLES
LINES = moderngl.LINES
POINTS = moderngl.POINTS

# location returned for names the linked program doesn't expose
NOT_FOUND = -1


def coerce_array(array, dtype):
    """Casts and reshapes `array` so that it matches a glsl dtype.

    Parameters
    ----------
    array : np.ndarray
    dtype : np.dtype | str
        Either a dtype defined in this module, the name of one ("vec3"),
        or anything numpy will interpret as a dtype.

    Returns
    -------
    np.ndarray
    """

    if isinstance(dtype, str):
        found = globals().get(dtype)
        dtype = found if isinstance(found, np.dtype) else np.dtype(dtype)

    if array.dtype != dtype:
        if dtype.subdtype is not None:
            base_dtype, shape = dtype.subdtype
            array = array.astype(base_dtype).reshape((-1, *shape))
        else:
            array = array.astype(dtype)
    return array


class AttributeLayout(NamedTuple):
    """Describes how a buffer's bytes map to one vertex shader input."""

    name: str
    location: _int = 0
    components: _int = 3
    dtype: np.dtype = float
    offset: _int = 0
    stride: _int = 0
    normalized: _bool = False

    @property
    def format(self):
        """The moderngl buffer format string for this layout.

        A stride of 0 means tightly packed records. Normalized attributes
        must be integer typed and are written with moderngl's "n" kind.
        """

        if self.normalized and self.dtype.kind not in "iu":
            raise ValueError(f"Only integer attributes normalize: {self!r}.")
        record = self.components * self.dtype.itemsize
        stride = self.stride or record + self.offset
        trailing = stride - record - self.offset
        if trailing < 0:
            raise ValueError(f"{stride=} too small for {self!r}.")

        parts = []
        if self.offset:
            parts.append(f"{self.offset}x")
        kind, size = self.dtype.kind, self.dtype.itemsize
        if self.normalized:
            kind = f"n{kind}"
        parts.append(f"{self.components}{kind}{size}")
        if trailing:
            parts.append(f"{trailing}x")
        return " ".join(parts)


@dataclass
class Bindings:
    """The handles currently bound to each binding point."""

    buffer: Optional[moderngl.Buffer] = None
    vertex_array: Optional[moderngl.VertexArray] = None
    program: Optional[object] = None


class GraphicsContext:
    """A thin layer over moderngl.Context.

    moderngl is object oriented and tracks binding internally. This class
    presents the classic allocate / bind / draw / delete primitives and keeps
    track of what is currently bound so the rest of the package can be written
    (and tested) against those operations.
    """

    def __init__(self, ctx: moderngl.Context):
        self.gl = ctx
        self.bound = Bindings()
        self._clear_color = (0.0, 0.0, 0.0, 1.0)

    def __repr__(self):
        return (
            f"<{self.__class__.__name__}(gl={self.gl!r}, "
            f"bound={self.bound})>"
        )

    @property
    def clear_color(self):
        return self._clear_color

    def set_clear_color(self, r, g, b, a=1.0):
        self._clear_color = (r, g, b, a)

    def clear(self):
        """Clears the color buffer with the current clear color."""

        self.gl.clear(*self._clear_color)

    @property
    def viewport(self):
        return self.gl.viewport

    @viewport.setter
    def viewport(self, value):
        x, y, width, height = value
        self.gl.viewport = (x, y, width, height)

    @property
    def max_vertex_attributes(self):
        """How many vertex attributes the driver supports."""

        return self.gl.info["GL_MAX_VERTEX_ATTRIBS"]

    def create_buffer(self, data, usage=STATIC_DRAW, dtype=float):
        """Allocates a buffer and uploads `data` into it.

        Parameters
        ----------
        data : np.ndarray | Sequence
            Will be coerced into `dtype` before upload.
        usage : str
            STATIC_DRAW for data that won't change, DYNAMIC_DRAW otherwise.
        dtype : np.dtype | str, optional

        Returns
        -------
        moderngl.Buffer
        """

        if usage not in (STATIC_DRAW, DYNAMIC_DRAW):
            raise ValueError(f"Unknown buffer usage {usage!r}.")
        array = coerce_array(np.asarray(data), dtype)
        buffer = self.gl.buffer(array.tobytes(), dynamic=usage == DYNAMIC_DRAW)
        logging.debug(f"Created buffer of {array.nbytes} bytes ({usage}).")
        return buffer

    def bind_buffer(self, buffer):
        self.bound.buffer = buffer

    def create_vertex_array(self, program, buffer, layout: AttributeLayout):
        """Describes `buffer` as the source for a single vertex attribute.

        Parameters
        ----------
        program : gluniforms.shaders.Shader
            moderngl resolves attributes against a linked program.
        buffer : moderngl.Buffer
        layout : AttributeLayout

        Returns
        -------
        moderngl.VertexArray
        """

        location = program.get_attrib_location(layout.name)
        if location != layout.location:
            logging.warning(
                f"Attribute {layout.name!r} is at location {location}, "
                f"expected {layout.location}."
            )
        return self.gl.vertex_array(
            program.gl, [(buffer, layout.format, layout.name)]
        )

    def bind_vertex_array(self, vertex_array):
        self.bound.vertex_array = vertex_array

    def use_program(self, program):
        self.bound.program = program

    def get_uniform_location(self, program, name):
        return program.get_uniform_location(name)

    def uniform4f(self, location, x, y, z, w):
        """Writes a vec4 to the uniform at `location` on the active program.

        Writing to NOT_FOUND, or with no program active, does nothing.
        """

        if self.bound.program is None:
            return
        self.bound.program.write_uniform(location, (x, y, z, w))

    def draw_arrays(self, mode, first, count):
        """Renders `count` vertices from the bound vertex array."""

        if self.bound.vertex_array is None:
            raise RuntimeError("No vertex array is bound.")
        self.bound.vertex_array.render(mode, vertices=count, first=first)

    def delete_buffer(self, buffer):
        buffer.release()

    def delete_vertex_array(self, vertex_array):
        vertex_array.release()

    def delete_program(self, program):
        program.release()


def init_standalone():
    """Initialize and store global reference to a headless OpenGL context.

    Returns
    -------
    ctx : GraphicsContext
    """

    global context
    context = GraphicsContext(moderngl.create_standalone_context())
    return context


def use_context(ctx):
    """Wraps and stores a global reference to an existing moderngl context."""

    global context
    context = GraphicsContext(ctx)
    return context
