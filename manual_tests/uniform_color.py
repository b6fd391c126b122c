import logging

import gluniforms


def test_uniform_color():
    config = gluniforms.Config(title="escape to close")
    gluniforms.run(config)


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    test_uniform_color()
