import sys

from weatherdesk.cli import main

sys.exit(main())
