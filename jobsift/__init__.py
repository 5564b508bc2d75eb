"""
JOBSIFT - Job Offer Breakdown: Structured Intake From Text

Turns a pasted, free-form job posting into a structured record (title,
company, skills, experience level, location mode, salary range) plus a
readable multi-section summary.

Architecture:
- Intake Context: Posting validation, normalization, heuristic and
  LLM-backed field extraction, summary building, result caching
- Utils: Logging setup, LLM provider abstraction, resilience policies
"""

__version__ = "0.1.0"
