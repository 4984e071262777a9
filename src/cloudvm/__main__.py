import sys

from cloudvm.cli import main

sys.exit(main())
