import sys

from ask_core.cli import main

sys.exit(main())
