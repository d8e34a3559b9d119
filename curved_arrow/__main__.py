"""
Entry point for curved_arrow CLI
"""
import sys

from draw_arrow import main

if __name__ == '__main__':
    sys.exit(main())
