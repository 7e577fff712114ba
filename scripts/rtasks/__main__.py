import sys

from rtasks.app import main

sys.exit(main())
