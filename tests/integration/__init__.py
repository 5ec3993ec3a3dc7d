"""
Integration tests for the task page.

Tests use the Flask test client and demonstrate:
- Page flows across login, task CRUD and logout
- Session-cookie assertions
- Degradation when the remote API fails
"""
