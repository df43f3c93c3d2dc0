import sys

from mixbump.cli import main

sys.exit(main())
