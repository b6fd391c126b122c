import moderngl
import numpy as np
import pytest

from gluniforms import gl


@pytest.fixture
def graphics(fake_ctx):
    return gl.GraphicsContext(fake_ctx)


@pytest.mark.parametrize(
    "dtype, data_in, data_out",
    [
        ("vec2", np.arange(4), np.array([[0, 1], [2, 3]], "f4")),
        ("vec3", np.arange(6), np.array([[0, 1, 2], [3, 4, 5]], "f4")),
        ("uint", np.arange(10), np.arange(10, dtype="u4")),
        ("f8", np.arange(3), np.arange(3, dtype="f8")),
        ("u2", np.arange(3), np.arange(3, dtype="u2")),
        ("i2", np.arange(3), np.arange(3, dtype="i2")),
    ],
)
def test_array_coercion(dtype, data_in, data_out):
    coerced = gl.coerce_array(data_in, dtype)

    assert coerced.dtype == data_out.dtype
    assert np.all(coerced == data_out)


class TestAttributeLayout:
    def test_tightly_packed(self):
        layout = gl.AttributeLayout("aPosition")

        assert layout.format == "3f4"

    def test_explicit_stride_matching_record(self):
        layout = gl.AttributeLayout("aPosition", stride=12)

        assert layout.format == "3f4"

    def test_offset_and_padding(self):
        layout = gl.AttributeLayout(
            "aColor", components=2, offset=4, stride=20
        )

        assert layout.format == "4x 2f4 8x"

    def test_stride_too_small(self):
        layout = gl.AttributeLayout("aPosition", stride=8)

        with pytest.raises(ValueError):
            layout.format

    def test_not_normalized_by_default(self):
        assert gl.AttributeLayout("aPosition").normalized is False

    def test_normalized_integer(self):
        layout = gl.AttributeLayout(
            "aColor", components=4, dtype=np.dtype("u1"), normalized=True
        )

        assert layout.format == "4nu1"

    def test_normalized_float_rejected(self):
        layout = gl.AttributeLayout("aPosition", normalized=True)

        with pytest.raises(ValueError):
            layout.format


class TestGraphicsContext:
    def test_clear_uses_clear_color(self, graphics, fake_ctx):
        graphics.set_clear_color(0.2, 0.3, 0.3, 1.0)

        graphics.clear()

        fake_ctx.clear.assert_called_once_with(0.2, 0.3, 0.3, 1.0)
        assert graphics.clear_color == (0.2, 0.3, 0.3, 1.0)

    def test_viewport(self, graphics, fake_ctx):
        graphics.viewport = (0, 0, 800, 600)

        assert fake_ctx.viewport == (0, 0, 800, 600)

    def test_max_vertex_attributes(self, graphics, fake_ctx):
        fake_ctx.info = {"GL_MAX_VERTEX_ATTRIBS": 16}

        assert graphics.max_vertex_attributes == 16

    def test_create_static_buffer(self, graphics, fake_ctx):
        data = [(0, 1, 2), (3, 4, 5)]

        buffer = graphics.create_buffer(data)

        assert buffer is fake_ctx.buffer.return_value
        args, kwargs = fake_ctx.buffer.call_args
        assert args[0] == np.arange(6, dtype="f4").tobytes()
        assert kwargs == {"dynamic": False}

    def test_create_buffer_with_dtype_name(self, graphics, fake_ctx):
        graphics.create_buffer([1, 2, 3], dtype="i2")

        data = fake_ctx.buffer.call_args[0][0]
        assert data == np.array([1, 2, 3], dtype="i2").tobytes()
        assert len(data) == 6

    def test_create_dynamic_buffer(self, graphics, fake_ctx):
        graphics.create_buffer(np.zeros(3), gl.DYNAMIC_DRAW)

        assert fake_ctx.buffer.call_args[1] == {"dynamic": True}

    def test_unknown_buffer_usage(self, graphics):
        with pytest.raises(ValueError):
            graphics.create_buffer(np.zeros(3), "stream_draw")

    def test_create_vertex_array(self, graphics, fake_ctx, mocker):
        program = mocker.Mock()
        program.get_attrib_location.return_value = 0
        buffer = mocker.Mock()
        layout = gl.AttributeLayout("aPosition")

        vao = graphics.create_vertex_array(program, buffer, layout)

        assert vao is fake_ctx.vertex_array.return_value
        fake_ctx.vertex_array.assert_called_once_with(
            program.gl, [(buffer, "3f4", "aPosition")]
        )

    def test_vertex_array_location_mismatch_warns(
        self, graphics, mocker, caplog
    ):
        program = mocker.Mock()
        program.get_attrib_location.return_value = 2

        graphics.create_vertex_array(
            program, mocker.Mock(), gl.AttributeLayout("aPosition")
        )

        assert "expected 0" in caplog.text

    def test_binding_points(self, graphics, mocker):
        buffer, vao, program = mocker.Mock(), mocker.Mock(), mocker.Mock()

        graphics.bind_buffer(buffer)
        graphics.bind_vertex_array(vao)
        graphics.use_program(program)
        assert graphics.bound == gl.Bindings(buffer, vao, program)

        graphics.bind_buffer(None)
        graphics.bind_vertex_array(None)
        graphics.use_program(None)
        assert graphics.bound == gl.Bindings()

    def test_uniform4f_writes_to_active_program(self, graphics, mocker):
        program = mocker.Mock()
        graphics.use_program(program)

        graphics.uniform4f(3, 0.0, 0.4, 0.0, 1.0)

        program.write_uniform.assert_called_once_with(3, (0.0, 0.4, 0.0, 1.0))

    def test_uniform4f_without_program(self, graphics):
        graphics.uniform4f(3, 0.0, 0.4, 0.0, 1.0)

    def test_get_uniform_location(self, graphics, mocker):
        program = mocker.Mock()
        program.get_uniform_location.return_value = 5

        assert graphics.get_uniform_location(program, "ourColor") == 5
        program.get_uniform_location.assert_called_once_with("ourColor")

    def test_draw_arrays(self, graphics, mocker):
        vao = mocker.Mock()
        graphics.bind_vertex_array(vao)

        graphics.draw_arrays(gl.TRIANGLES, 0, 3)

        vao.render.assert_called_once_with(
            moderngl.TRIANGLES, vertices=3, first=0
        )

    def test_draw_arrays_needs_vertex_array(self, graphics):
        with pytest.raises(RuntimeError):
            graphics.draw_arrays(gl.TRIANGLES, 0, 3)

    def test_delete(self, graphics, mocker):
        buffer, vao, program = mocker.Mock(), mocker.Mock(), mocker.Mock()

        graphics.delete_buffer(buffer)
        graphics.delete_vertex_array(vao)
        graphics.delete_program(program)

        buffer.release.assert_called_once()
        vao.release.assert_called_once()
        program.release.assert_called_once()


def test_use_context_sets_global(fake_ctx):
    ctx = gl.use_context(fake_ctx)

    assert gl.context is ctx
    assert ctx.gl is fake_ctx
