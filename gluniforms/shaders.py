import logging
import pathlib
from typing import Dict

import moderngl
import numpy as np

from . import gl
from . import resources


class ShaderCompileError(Exception):
    """Raised when the driver rejects shader source."""


class Shader:
    """A linked vertex + fragment shader program.

    Uniforms and attributes are addressed by location the same way raw
    OpenGL addresses them. A name the program doesn't expose resolves to
    `gl.NOT_FOUND` and writing to that location does nothing.
    """

    def __init__(
        self,
        vertex_path=None,
        fragment_path=None,
        *,
        vertex_shader=None,
        fragment_shader=None,
        ctx=None,
    ):
        """Compile the program from source files or source strings.

        Parameters
        ----------
        vertex_path : pathlib.Path | str, optional
        fragment_path : pathlib.Path | str, optional
        vertex_shader : str, optional
            Source string, takes precedence over `vertex_path`.
        fragment_shader : str, optional
            Source string, takes precedence over `fragment_path`.
        ctx : gl.GraphicsContext, optional
            Falls back to the global context in `gl.py`.

        Raises
        ------
        ShaderCompileError:
            If either stage fails to compile or the program fails to link.
        """

        self.vertex_path = vertex_path and pathlib.Path(vertex_path)
        self.fragment_path = fragment_path and pathlib.Path(fragment_path)
        if vertex_shader is None:
            assert self.vertex_path, "Vertex source or path required."
            vertex_shader = self.vertex_path.read_text()
        if fragment_shader is None:
            assert self.fragment_path, "Fragment source or path required."
            fragment_shader = self.fragment_path.read_text()

        self._ctx = ctx or gl.context
        self._names_by_location: Dict[int, str] = {}
        self.gl = self._compile(vertex_shader, fragment_shader)

    @classmethod
    def by_name(cls, name, *, ctx=None):
        """Load `name`.vert and `name`.frag from discovered shader dirs.

        Raises
        ------
        KeyError:
            When either source file can't be found.
        """

        sources = resources.find_shader(name)
        return cls(sources.vertex, sources.fragment, ctx=ctx)

    def __repr__(self):
        return (
            f"<{self.__class__.__name__}(vertex={self.vertex_path}, "
            f"fragment={self.fragment_path})>"
        )

    @property
    def handle(self):
        """The OpenGL name of the linked program."""

        return self.gl.glo

    def use(self):
        self._ctx.use_program(self)

    def get_uniform_location(self, name):
        member = self.gl.get(name, None)
        if not isinstance(member, moderngl.Uniform):
            logging.debug(f"Uniform {name!r} not found in {self!r}.")
            return gl.NOT_FOUND
        self._names_by_location[member.location] = name
        return member.location

    def get_attrib_location(self, name):
        member = self.gl.get(name, None)
        if not isinstance(member, moderngl.Attribute):
            return gl.NOT_FOUND
        return member.location

    def write_uniform(self, location, value):
        """Write `value` to the uniform previously resolved to `location`.

        Parameters
        ----------
        location : int
            As returned by `get_uniform_location`.
        value : Any
            Anything moderngl accepts for the uniform's type.
        """

        if location == gl.NOT_FOUND:
            return
        name = self._names_by_location.get(location)
        if name is None:
            logging.debug(f"No uniform at {location=} in {self!r}.")
            return
        self.gl[name].value = value

    def set_int(self, name, value):
        self.write_uniform(self.get_uniform_location(name), int(value))

    def set_float(self, name, value):
        self.write_uniform(self.get_uniform_location(name), float(value))

    def set_vector3(self, name, value):
        location = self.get_uniform_location(name)
        self.write_uniform(location, _as_tuple(value, 3))

    def set_vector4(self, name, value):
        location = self.get_uniform_location(name)
        self.write_uniform(location, _as_tuple(value, 4))

    def set_matrix4(self, name, value):
        """Matrices are given row major and written column major."""

        matrix = gl.coerce_array(np.asarray(value), gl.mat4).reshape(4, 4)
        values = tuple(matrix.T.flatten().tolist())
        self.write_uniform(self.get_uniform_location(name), values)

    def release(self):
        self.gl.release()

    def _compile(self, vertex_src, fragment_src):
        try:
            return self._ctx.gl.program(
                vertex_shader=vertex_src, fragment_shader=fragment_src
            )
        except moderngl.Error as exc:
            raise ShaderCompileError(str(exc)) from exc


def _as_tuple(value, length):
    values = tuple(float(v) for v in value)
    if len(values) != length:
        raise ValueError(f"Expected {length} components, got {len(values)}.")
    return values
