"""
Test Suite for Metric Stream Simulator

This module contains tests for:
- Configuration validation (test_config.py)
- Random-walk step (test_random_walk.py)
- Window statistics (test_statistics.py)
- Series creation and advancing (test_series.py)
- Presets, chart datasets and the live feed
- API endpoints (test_api.py)

Run tests with:
    pytest tests/ -v
    pytest tests/ --cov=core --cov=engine --cov=api
"""

import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
