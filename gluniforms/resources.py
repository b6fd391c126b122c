"""Locates GLSL source files on disk.

Any directory named "shaders" below one of the resource roots is searched,
recursively, for `<name>.vert` and `<name>.frag` files.
"""

import pathlib
from collections import defaultdict
from typing import DefaultDict, List, NamedTuple


class ShaderSources(NamedTuple):
    vertex: pathlib.Path
    fragment: pathlib.Path


PACKAGE_DATA = pathlib.Path(__file__).parent / "data"
DEFAULT_VERTEX_SHADER = PACKAGE_DATA / "shaders" / "shader.vert"
DEFAULT_FRAGMENT_SHADER = PACKAGE_DATA / "shaders" / "shader.frag"

VERTEX_SUFFIX = ".vert"
FRAGMENT_SUFFIX = ".frag"

_roots = (PACKAGE_DATA, pathlib.Path.cwd())
_shader_dirs: List[pathlib.Path] = []
_sources_by_name: DefaultDict[str, List[pathlib.Path]] = defaultdict(list)


def clear_cache():
    _shader_dirs.clear()
    _sources_by_name.clear()


def set_resource_roots(*paths):
    """Replace the searched roots and forget everything found so far.

    Parameters
    ----------
    *paths : pathlib.Path | str
    """

    global _roots
    _roots = tuple(pathlib.Path(p) for p in paths)
    clear_cache()
    discover_directories()


def discover_directories(*paths):
    """Collect the "shaders" directories under `paths` or the current roots.

    Hidden directories are skipped and a "shaders" directory is not
    descended into further here.

    Returns
    -------
    list[pathlib.Path]
        Every shaders directory known so far.
    """

    def _visit(directory):
        if not directory.is_dir() or directory.name.startswith("."):
            return
        if directory.name != "shaders":
            for child in directory.iterdir():
                _visit(child)
        elif directory not in _shader_dirs:
            _shader_dirs.append(directory)

    for path in paths or _roots:
        _visit(pathlib.Path(path))
    return _shader_dirs


def discover_shader_sources(*paths):
    """Index shader source files by name.

    Parameters
    ----------
    *paths : pathlib.Path, optional
        Extra roots to search in addition to those already discovered.

    Returns
    -------
    dict[str, list[pathlib.Path]]
        "water" -> [.../shaders/water.frag, .../shaders/water.vert]
    """

    if paths or not _shader_dirs:
        discover_directories(*paths)

    suffixes = (VERTEX_SUFFIX, FRAGMENT_SUFFIX)
    for shader_dir in _shader_dirs:
        for path in sorted(shader_dir.rglob("*")):
            if path.suffix not in suffixes or not path.is_file():
                continue
            name = path.name.split(".")[0]
            if path not in _sources_by_name[name]:
                _sources_by_name[name].append(path)

    return dict(_sources_by_name)


def find_shader(name):
    """The vertex and fragment source files for the shader called `name`.

    Raises
    ------
    KeyError:
        If no file by that name exists, or only one of the two stages does.
    """

    if name not in _sources_by_name:
        discover_shader_sources()
    paths = _sources_by_name.get(name)
    if not paths:
        raise KeyError(
            f"Shader {name!r} not found in {sorted(_sources_by_name)}."
        )

    def _first(suffix):
        return next((p for p in paths if p.suffix == suffix), None)

    vertex, fragment = _first(VERTEX_SUFFIX), _first(FRAGMENT_SUFFIX)
    if vertex is None or fragment is None:
        raise KeyError(f"Shader {name!r} needs both stages, found {paths}.")
    return ShaderSources(vertex, fragment)
