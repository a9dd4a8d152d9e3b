import sys

from seashell.main import main

sys.exit(main())
