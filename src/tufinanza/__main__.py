# src/tufinanza/__main__.py
import sys

from tufinanza.app import main

sys.exit(main())
