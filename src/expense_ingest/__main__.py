import sys

from expense_ingest.cli import main

sys.exit(main())
