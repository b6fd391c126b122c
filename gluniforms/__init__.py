from gluniforms.config import Config

from gluniforms.gl import GraphicsContext
from gluniforms.gl import AttributeLayout

from gluniforms.shaders import Shader
from gluniforms.shaders import ShaderCompileError

from gluniforms.window import Window

from gluniforms.input import Keyboard

from gluniforms.time import Timer
from gluniforms.time import AnimationClock

from gluniforms.render_loop import RenderLoop
from gluniforms.render_loop import LifecycleError
from gluniforms.render_loop import green_value


def run(config=None):
    """Open a window and animate the triangle until it is closed."""

    config = config or Config()
    window = Window.create(config)
    RenderLoop.from_config(window, config).attach()
    window.run()
