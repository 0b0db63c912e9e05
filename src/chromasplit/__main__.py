import sys

from chromasplit.cli import main

sys.exit(main())
