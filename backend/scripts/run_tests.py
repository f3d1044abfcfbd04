#!/usr/bin/env python3
"""Run the backend test suite without installing the package.

  python backend/scripts/run_tests.py            # everything
  python backend/scripts/run_tests.py sequencer  # tests/test_sequencer*.py
"""
from __future__ import annotations

import sys
from pathlib import Path
import unittest

BACKEND_DIR = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(BACKEND_DIR))

if __name__ == "__main__":
    pattern = f"test_{sys.argv[1]}*.py" if len(sys.argv) > 1 else "test*.py"
    suite = unittest.defaultTestLoader.discover(str(BACKEND_DIR / "tests"), pattern=pattern)
    runner = unittest.TextTestRunner(verbosity=2)
    res = runner.run(suite)
    raise SystemExit(0 if res.wasSuccessful() else 1)
