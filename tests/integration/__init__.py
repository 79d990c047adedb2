"""
Integration Tests - Directory Sessions End to End.

These tests wire the DirectoryController with real collaborators. The
record source is either the MockRecordSource or the RandomUserClient on
top of an httpx.MockTransport, so no network access is needed.

Test Files:
    - test_directory_controller.py: Session lifecycle against the mock source
    - test_http_directory_session.py: Session over the HTTP client
"""
