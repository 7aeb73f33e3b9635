import sys

from whereas.cli import main

sys.exit(main())
