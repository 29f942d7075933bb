import sys
import os
sys.path.append(os.path.abspath(os.path.dirname(__file__)))

from helioscope_node.cli import run

if __name__ == "__main__":
    run()
