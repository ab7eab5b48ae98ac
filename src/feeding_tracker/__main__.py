import sys

from feeding_tracker.main import main

sys.exit(main())
