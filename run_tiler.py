"""
run_tiler.py: CLI Entry Point

Runs the splash tiler command-line interface from a source checkout.
It forwards execution to the CLI logic defined in
`src/splash_tiler/cli.py`.

Usage:
    python run_tiler.py build a.jpg b.jpg c.jpg --container 3840x1600 --name tile

This wrapper allows you to run the tool directly without needing to
modify PYTHONPATH or install the project as a package.

For help on available options, run:
    python run_tiler.py --help
"""
import sys
# Source code in src/ subdirectory
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))

import splash_tiler.cli as st_cli

if __name__ == "__main__":
    raise SystemExit(st_cli.main())
