"""Allow ``python -m markstrip``."""

import sys

from markstrip.cli.app import main

sys.exit(main())
