import sys

from aig_generator.cli.commands import main

sys.exit(main())
