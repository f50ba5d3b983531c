"""Test package for markercluster.

This package contains:
- Unit tests (test_geo.py, test_cluster.py, test_clusterer.py, test_styles.py)
- Configuration and tabular I/O tests (test_config.py, test_frames.py)
- HTTP action tests (test_actions.py)
- Test configuration (conftest.py)
"""
