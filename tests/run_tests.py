#!/usr/bin/env python3
"""
SmartLight Core Test Runner

Run all tests:
  python run_tests.py

Run specific test file:
  python run_tests.py test_designer_commands.py

Run with verbose output:
  python run_tests.py -v

Run specific test:
  python run_tests.py test_designer_commands.py::TestPoliceEncoding::test_two_frames
"""

import sys
import os

# Project modules live one level up
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

def main():
    try:
        import pytest
    except ImportError:
        print("pytest not installed. Install with:")
        print("  pip install -e .[test]")
        sys.exit(1)

    args = ["--tb=short", "-v", "--timeout=30"]

    if len(sys.argv) > 1:
        args.extend(sys.argv[1:])
    else:
        args.append(os.path.dirname(os.path.abspath(__file__)))

    print("=" * 60)
    print("SmartLight Core - Test Suite")
    print("=" * 60)
    print()

    exit_code = pytest.main(args)

    print()
    print("=" * 60)
    if exit_code == 0:
        print("ALL TESTS PASSED")
    else:
        print(f"TESTS FAILED (exit code: {exit_code})")
    print("=" * 60)

    sys.exit(exit_code)

if __name__ == "__main__":
    main()
