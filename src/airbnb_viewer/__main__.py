import sys

from airbnb_viewer.viewer import main

sys.exit(main())
