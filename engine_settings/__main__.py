import sys

from engine_settings.cli import main

sys.exit(main())
