import sys

from xtemp.presentation.cli import main

sys.exit(main())
