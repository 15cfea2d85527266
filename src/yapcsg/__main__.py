import sys

from yapcsg.cli import main

sys.exit(main())
