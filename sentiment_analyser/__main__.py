"""Allow ``python -m sentiment_analyser``."""

import sys

from .cli import main


sys.exit(main())
