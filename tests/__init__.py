# __init__.py for pytest-cov
