import sys

from gl_lab.cli import main

sys.exit(main())
