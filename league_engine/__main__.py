import sys

from league_engine.cli import main

sys.exit(main())
