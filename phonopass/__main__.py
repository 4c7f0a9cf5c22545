"""Allow ``python -m phonopass``."""

import sys

from phonopass.cli import main

sys.exit(main())
