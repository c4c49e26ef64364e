"""
Core Layer
- Entities: pose frames, grading results, GPS fixes, session results
- Interfaces: grader and scoring contracts
- Services: geometry, per-exercise graders, APFT scoring
- Use cases: grading sessions
"""
