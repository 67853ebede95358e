import sys

from autofeedback.cli import main

sys.exit(main())
