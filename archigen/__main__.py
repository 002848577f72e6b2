import sys

from archigen.cli import main

sys.exit(main())
