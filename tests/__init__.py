"""
Test suite for Stock Control.

Run all tests: pytest
Run unit tests only: pytest tests/unit/
Run specific file: pytest tests/unit/test_stock_batch_service.py -v
"""
