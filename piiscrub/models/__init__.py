"""piiscrub models package.

Defines the result contracts returned by the public API:

  - results.py — AddPatternResult, RemovePatternResult, PatternInfo, StatsSnapshot,
                 ValidationResult, and the homoglyph finding types
"""
