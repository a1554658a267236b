import sys
from geonft.cli import main

sys.exit(main())
