import sys

from har_tidy.cli import main

sys.exit(main())
