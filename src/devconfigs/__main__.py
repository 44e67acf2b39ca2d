import sys

from devconfigs.main import main

sys.exit(main())
