"""Allow `python -m gitgate`."""

import sys

from .cli import main

sys.exit(main())
