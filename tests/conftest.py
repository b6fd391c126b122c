import itertools
import math
import pathlib
import shutil
import tempfile
import types

import pytest

from gluniforms import resources
from gluniforms.config import Config


_counter = itertools.count(0)
_tmp: pathlib.Path = None


@pytest.fixture(autouse=True, scope="session")
def setup_temp_directory():
    global _tmp
    with tempfile.TemporaryDirectory() as tmp:
        _tmp = pathlib.Path(tmp)
        yield
    _tmp = None


@pytest.fixture
def tempdir():
    new_dir = _tmp / str(next(_counter))
    new_dir.mkdir()
    yield new_dir
    shutil.rmtree(new_dir, ignore_errors=True)


class RecordedCallback:
    def __init__(self):
        self.called = 0
        self.args = []
        self.kwargs = []

    def __call__(self, *args, **kwargs):
        self.args.append(args)
        self.kwargs.append(kwargs)
        self.called += 1


class FakeMglwWindow:
    """Stands in for a moderngl_window.BaseWindow."""

    keys = types.SimpleNamespace(ESCAPE=256, SPACE=32, A=65, Q=81)

    def __init__(self, ctx, size=(800, 600)):
        self.ctx = ctx
        self.size = size
        self.is_closing = False
        self.resize_func = None
        self.pressed = set()
        self.swapped = 0
        self.destroyed = False

    def press(self, name):
        self.pressed.add(getattr(self.keys, name))

    def release(self, name):
        self.pressed.discard(getattr(self.keys, name))

    def is_key_pressed(self, key):
        return key in self.pressed

    def swap_buffers(self):
        self.swapped += 1

    def process_events(self):
        pass

    def close(self):
        self.is_closing = True

    def destroy(self):
        self.destroyed = True


class FakeClock:
    def __init__(self, elapsed=0.0):
        self.elapsed = elapsed
        self.started = 0

    def start(self):
        self.started += 1


@pytest.fixture
def recorded_callback() -> RecordedCallback:
    return RecordedCallback()


@pytest.fixture
def fake_ctx(mocker):
    return mocker.MagicMock()


@pytest.fixture
def fake_mglw_window(fake_ctx):
    return FakeMglwWindow(fake_ctx)


@pytest.fixture
def fast_config():
    conf = Config()
    conf.set_rates(fps=500, tps=1000)
    return conf


@pytest.fixture
def fake_clock():
    return FakeClock(elapsed=math.pi / 2)


@pytest.fixture
def tmpdir_maker(tempdir):
    def inner(*paths):
        fs_root = tempdir / str(next(_counter))
        paths = [fs_root / pathlib.Path(p) for p in paths]
        for path in paths:
            path.parent.mkdir(exist_ok=True, parents=True)
            path.touch()
        return fs_root

    yield inner


@pytest.fixture
def shaderdir(tempdir):
    directory = tempdir / "shaders"
    directory.mkdir()
    yield directory
    shutil.rmtree(directory, ignore_errors=True)


@pytest.fixture
def write_shader_to_disk(shaderdir):
    def writer(filename, src):
        path = shaderdir / filename
        path.write_text(src)
        # update resource module after writing new files
        resources.set_resource_roots(shaderdir.parent)
        return path

    return writer


@pytest.fixture(autouse=True)
def reset_resource_roots():
    yield
    resources.set_resource_roots(resources.PACKAGE_DATA)
