import sys

from mandelband.cli import main

sys.exit(main())
