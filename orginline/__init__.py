# pylint: disable=wrong-import-position

from __future__ import annotations

import platform
import sys


def verify_python_version() -> None:
    if sys.version_info < (3, 10):
        print(
            """orginline requires Python 3.10 or higher; you are on {}.""".format(
                platform.python_version(),
            ),
        )
        sys.exit(1)


verify_python_version()

from . import (
    config,
    entities,
    inline,
    timestamp,
)
from .cli import main
from .inline import ParseConfig, Session, parseInline, textFromNodes
