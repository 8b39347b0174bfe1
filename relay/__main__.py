import sys

from relay.launcher import main

sys.exit(main())
