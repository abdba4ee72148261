import sys

from simpleweather.cli import main

sys.exit(main())
