"""Allow running as python -m podqos."""

import sys

from podqos.cli import main

sys.exit(main())
