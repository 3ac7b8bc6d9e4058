import os
import sys

# Ensure repo root (app, text_export) and tests dir (boards) are importable
HERE = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, os.path.abspath(os.path.join(HERE, '..')))
sys.path.insert(0, HERE)
