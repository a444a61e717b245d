import sys

from gitclone.cli import main

sys.exit(main())
