import sys

from sendtemp.main import main

sys.exit(main())
