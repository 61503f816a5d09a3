#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
lollint/__main__.py
===================

Entry point for ``python -m lollint``.  See :mod:`lollint.main` for the
commands and exit codes.
"""

import sys

from lollint.main import main

if __name__ == "__main__":
    sys.exit(main())
