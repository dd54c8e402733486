"""
Entry Point Script (Bootstrap)
==============================
Runs the command-line tool straight from a source checkout, without installing
the package.

Usage:
    $ python run.py assets/single_circle.txt potential.txt
"""
import os
import sys

# Add the 'src' directory to the Python path
current_dir: str = os.path.dirname(os.path.abspath(__file__))
src_path: str = os.path.join(current_dir, 'src')
sys.path.insert(0, src_path)

from poissongrid.main import main

if __name__ == "__main__":
    sys.exit(main())
