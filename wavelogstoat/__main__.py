import sys

from wavelogstoat.main import main

sys.exit(main())
