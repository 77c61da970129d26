"""circadian-tools — CLI entry point."""

import logging
import sys

from circadian import analyze, generate_report

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    path = sys.argv[1] if len(sys.argv) > 1 else "sample_data.json"
    result = analyze(path)
    print(generate_report(result))
