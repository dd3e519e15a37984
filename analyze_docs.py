"""
Analyze a cached documentation bundle and print keyword analytics.

Usage:
    python analyze_docs.py path/to/docs/<library>/<version>
    python analyze_docs.py path/to/docs/<library>/<version> --mode all --output analysis.json

The bundle directory must contain a pages/ folder of .md/.txt files.
See `python analyze_docs.py --help` for all options.
"""

import sys

from docs_analyzer.cli import main

if __name__ == "__main__":
    sys.exit(main())
