"""
Test package for the task client.

- unit: components exercised directly, network replaced by a fake transport
- integration: the Flask page driven through its test client
"""
