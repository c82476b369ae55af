"""
Application Layer for the workout tracker.

This package contains:
- ports/: Abstract repository interfaces (what the application needs)
- use_cases/: Services coordinating use cases
- authorization.py: Principal and resource-ownership policy
- exceptions.py: Error taxonomy shared with the API layer
"""
