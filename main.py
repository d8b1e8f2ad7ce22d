#!/usr/bin/env python3
# /lined/main.py
"""
lined checkout launcher
=======================

Runs the editor straight from a source checkout (``python main.py FILE``)
by putting ``src/`` on the import path. Installed copies use the ``lined``
console script instead.
"""

import os
import sys

# Ensure the 'lined' package is importable without installation.
project_src = os.path.join(os.path.dirname(os.path.abspath(__file__)), "src")
if project_src not in sys.path:
    sys.path.insert(0, project_src)

from lined.main import start  # noqa: E402


if __name__ == "__main__":
    sys.exit(start())
