"""Allow ``python -m next_starter``."""

import sys

from next_starter.pipeline import main

sys.exit(main())
