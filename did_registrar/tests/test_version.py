import re

import did_registrar
from ..version import __version__


def test_version():
    assert did_registrar.__version__ == __version__
    assert re.match(r"^\d+\.\d+\.\d+", __version__)
