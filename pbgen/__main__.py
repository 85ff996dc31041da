# Copyright 2025 Maida.AI
# SPDX-License-Identifier: Apache-2.0
"""Allow ``python -m pbgen``."""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
