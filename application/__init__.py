"""
Application Layer for StrengthProfile.

This package contains:
- ports/: Abstract interfaces for storage, change notification, time,
  the exercise catalog and cloud sync (what the core needs)
- use_cases/: Workflows that coordinate the core services
"""
