import sys

from gsp.cli import main

sys.exit(main())
