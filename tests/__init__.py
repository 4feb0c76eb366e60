# Photo Portfolio Test Suite
"""
Test suite for the photo portfolio backend.

Repository and service tests run against a temporary SQLite database;
API tests go through the FastAPI app with S3 mocked out.
"""
