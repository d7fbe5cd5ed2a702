import sys

from monoview.cli import main

sys.exit(main())
