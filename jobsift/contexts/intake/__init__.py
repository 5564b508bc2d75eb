"""
Intake Context

Responsibilities:
- Validates and normalizes pasted job posting text
- Extracts title, company, skills, experience, location and salary
  (remote text-generation service first, deterministic heuristics as fallback)
- Builds a sectioned, human-readable summary
- Caches results by content fingerprint

Owns: Job posting extraction pipeline
Never: Persists records or renders UI

Entry point: jobsift.contexts.intake.orchestrator.JobExtractionOrchestrator
"""
