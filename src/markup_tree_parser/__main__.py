"""Allow ``python -m markup_tree_parser``."""

import sys

from markup_tree_parser.cli import main

sys.exit(main())
