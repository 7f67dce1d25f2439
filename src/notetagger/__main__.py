import sys
from notetagger.cli import main

sys.exit(main())
