"""Test package for lineup-map.

This package contains:
- Engine tests (test_clustering.py, test_grid_index.py, test_expand.py)
- Adapter and boundary tests (test_frames.py, test_markers.py)
- Configuration tests (test_config_loader.py)
- Shared fixtures (conftest.py)
"""
