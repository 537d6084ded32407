"""Allow ``python -m samm_exporter``."""

import sys

from samm_exporter.cli import main

sys.exit(main())
