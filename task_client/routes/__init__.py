"""
Routes package for the task client.

- views: the task page and the form endpoints that feed it page events
"""
