import sys

from twkb.cli import main

sys.exit(main())
