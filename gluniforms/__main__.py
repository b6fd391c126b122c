import argparse
import logging
import pathlib

import gluniforms
from gluniforms import config


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="gluniforms",
        description="Animate a triangle's color through a shader uniform.",
    )
    parser.add_argument("--vertex", type=pathlib.Path, help="vertex shader")
    parser.add_argument(
        "--fragment", type=pathlib.Path, help="fragment shader"
    )
    parser.add_argument(
        "--size", type=int, nargs=2, metavar=("WIDTH", "HEIGHT")
    )
    parser.add_argument(
        "--headless", action="store_true", help="render without a window"
    )
    parser.add_argument(
        "--frames", type=int, help="close after rendering this many frames"
    )
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser.parse_args(argv)


def make_config(args):
    conf = config.Config()
    if args.vertex:
        conf.vertex_shader = args.vertex
    if args.fragment:
        conf.fragment_shader = args.fragment
    if args.size:
        conf.size = tuple(args.size)
    if args.headless:
        conf.window_class = config.HEADLESS_WINDOW_CLASS
    conf.max_frames = args.frames
    return conf


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )
    gluniforms.run(make_config(args))


if __name__ == "__main__":
    main()
