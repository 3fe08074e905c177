import sys

from streettrees.main import main

sys.exit(main())
