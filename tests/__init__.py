"""
Test package for decoreco.

Unit, regression and integration tests. External encoders are never run:
tests use FakeTranscoder (tests/fakes.py) or patch subprocess calls.
"""

# Test configuration
TEST_CONFIG = {
    'temp_cleanup': True,  # Whether to clean up temp files
    'mock_subprocess': True,  # Whether to mock subprocess calls by default
}

__version__ = "1.0.0"
