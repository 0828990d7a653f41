import sys

from spreadview.adapters.textual.app import main

sys.exit(main())
